"""Test suite for cffreader.

Unit tests cover the field validators, the subject discriminator and the
record models; integration tests read the CITATION.cff fixtures through the
reader. Run ``pytest`` from the project root.
"""
