"""Error taxonomy for reading and validating CFF documents.

Every failure surfaces as a :class:`CFFError` carrying a :class:`ErrorKind`
tag, so callers can branch on ``error.kind`` instead of walking a chain of
causes. Three subclasses exist for ``except`` clauses:

- :class:`DataValidationError` for field-level failures (presence, format,
  enumeration membership),
- :class:`FileNameError` for a file that is not named ``CITATION.cff``,
- :class:`ReadFailureError` for I/O, YAML syntax and structural failures.

:class:`DateParseError` and :class:`MalformedUrlError` are the low-level
parse failures attached as ``source`` of a format error.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Classification of CFF read errors."""
    PRESENCE = "presence"                # required key absent or null
    FORMAT = "format"                    # date, URL or pattern parse failure
    ENUM_MEMBERSHIP = "enum_membership"  # value outside a fixed set
    FILE_NAME = "file_name"              # file is not named CITATION.cff
    READ_FAILURE = "read_failure"        # I/O, YAML syntax, structure


FIELD_KINDS = frozenset({ErrorKind.PRESENCE, ErrorKind.FORMAT, ErrorKind.ENUM_MEMBERSHIP})


class CFFError(Exception):
    """Base error for everything raised by :mod:`cffreader`."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        field: Optional[str] = None,
        value: Any = None,
        source: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.field = field
        self.value = value
        self.source = source

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class DataValidationError(CFFError):
    """A value in the document violates a field constraint."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        field: Optional[str] = None,
        value: Any = None,
        source: Optional[BaseException] = None,
    ) -> None:
        if kind not in FIELD_KINDS:
            raise ValueError(f"{kind} is not a field-level error kind")
        super().__init__(message, kind, field=field, value=value, source=source)


class FileNameError(CFFError):
    """The file being read is not named ``CITATION.cff``."""

    def __init__(self, message: str, value: Optional[str] = None) -> None:
        super().__init__(message, ErrorKind.FILE_NAME, value=value)


class ReadFailureError(CFFError):
    """The document could not be read or parsed into the expected shape."""

    def __init__(self, message: str, source: Optional[BaseException] = None) -> None:
        super().__init__(message, ErrorKind.READ_FAILURE, source=source)


class DateParseError(ValueError):
    """A string is not an ISO 8601 calendar date (``YYYY-MM-DD``)."""

    def __init__(self, text: str, position: int, reason: str = "") -> None:
        self.text = text
        self.position = position
        self.reason = reason
        detail = f"Text '{text}' could not be parsed at index {position}"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)


class MalformedUrlError(ValueError):
    """A string is not a syntactically valid absolute URL."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(reason)
