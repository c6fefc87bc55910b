"""
Reader and validator for Citation File Format (CFF) 1.0.3 documents.

A ``CITATION.cff`` file is parsed with PyYAML and built into immutable
pydantic records. Every field constraint of the format is checked while the
records are built; the first violation is raised as a
:class:`DataValidationError`.

Basic Usage:
    >>> from cffreader import read_from_file
    >>>
    >>> citation = read_from_file("CITATION.cff")
    >>> citation.title, citation.version
    >>> [p.family_names for p in citation.person_authors]

Error Handling:
    Reads raise exactly one of:
    - FileNameError when the file is not named CITATION.cff
    - DataValidationError when a field is missing or invalid
    - ReadFailureError for I/O errors, bad YAML and unexpected structure

    All three subclass CFFError and carry an ErrorKind in ``error.kind``.
"""

from .core.errors import (
    CFFError,
    DataValidationError,
    DateParseError,
    ErrorKind,
    FileNameError,
    MalformedUrlError,
    ReadFailureError,
)
from .core.models import CitationMetadata
from .core.reference import Reference
from .core.subjects import ContactInfo, Entity, Person, entities_of, persons_of, resolve_subject
from .core.validators import is_country_valid, is_language_valid
from .io.reader import CitationReader, ReaderState, read_from_file, read_from_stream

__all__ = [
    # Reading
    "CitationReader",
    "ReaderState",
    "read_from_file",
    "read_from_stream",

    # Records
    "CitationMetadata",
    "Reference",
    "ContactInfo",
    "Person",
    "Entity",
    "resolve_subject",
    "persons_of",
    "entities_of",

    # Lookups
    "is_country_valid",
    "is_language_valid",

    # Errors
    "CFFError",
    "ErrorKind",
    "DataValidationError",
    "FileNameError",
    "ReadFailureError",
    "DateParseError",
    "MalformedUrlError",
]

__version__ = "0.1.0"
