"""Reading CFF documents from files and streams."""

from .reader import CitationReader, ReaderState, read_from_file, read_from_stream  # noqa: F401
