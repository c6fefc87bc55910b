"""CFF record models, field validators and lookup tables."""
