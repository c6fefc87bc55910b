"""Field validators for CFF records.

Each validator takes the raw value read from the document and returns the
validated value, or raises :class:`DataValidationError`. ``None`` means the
key was absent and is passed through untouched.
"""

import re
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .defined_values import COUNTRIES, ORCID_URL_PATTERN, ORCID_URL_PATTERN_DISPLAY, URL_SCHEMES, languages
from .errors import DataValidationError, DateParseError, ErrorKind, MalformedUrlError

_DATE_SHAPE = "dddd-dd-dd"
_ORCID_RE = re.compile(ORCID_URL_PATTERN, re.ASCII)
_URL_ADAPTER = TypeAdapter(AnyUrl)


def missing_key(
    data: Mapping[str, Any],
    required: Sequence[Tuple[str, str]],
    by_name: bool = True,
) -> Optional[str]:
    """Return the CFF key of the first required field that is absent.

    ``required`` holds ``(field_name, cff_key)`` pairs in declaration order.
    A value counts as absent when it is missing, ``None``, or, for the
    ``authors`` list, empty. With ``by_name=False`` only the CFF key is
    looked up.
    """
    for name, key in required:
        value = data.get(key, data.get(name)) if by_name else data.get(key)
        if value is None:
            return key
        if name == "authors" and isinstance(value, (list, tuple)) and not value:
            return key
    return None


def parse_iso_date(text: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` calendar date."""
    for i, expected in enumerate(_DATE_SHAPE):
        if i >= len(text):
            raise DateParseError(text, i, "text ended early")
        ch = text[i]
        if expected == "d" and not ("0" <= ch <= "9"):
            raise DateParseError(text, i, "expected a digit")
        if expected == "-" and ch != "-":
            raise DateParseError(text, i, "expected '-'")
    if len(text) > len(_DATE_SHAPE):
        raise DateParseError(text, len(_DATE_SHAPE), "unparsed text found")
    try:
        return date(int(text[0:4]), int(text[5:7]), int(text[8:10]))
    except ValueError as exc:
        raise DateParseError(text, 0, str(exc)) from exc


def validate_date(value: Any, field: str) -> Optional[date]:
    if value is None:
        return None
    # PyYAML turns unquoted timestamps into datetime, which is not a calendar date.
    if isinstance(value, datetime):
        value = value.isoformat()
    elif isinstance(value, date):
        return value
    text = str(value)
    try:
        return parse_iso_date(text)
    except DateParseError as exc:
        raise DataValidationError(
            f"Invalid date in field '{field}': {exc}",
            ErrorKind.FORMAT,
            field=field,
            value=text,
            source=exc,
        ) from exc


def parse_url(text: str) -> str:
    """Check that ``text`` is an absolute URL with a known protocol and return it unchanged."""
    try:
        url = _URL_ADAPTER.validate_python(text)
    except ValidationError as exc:
        raise MalformedUrlError(text, exc.errors()[0]["msg"]) from exc
    if url.scheme not in URL_SCHEMES:
        raise MalformedUrlError(text, f"unknown protocol: {url.scheme}")
    return text


def validate_url(value: Any, field: str, template: str, **context: Any) -> Optional[str]:
    """Validate an optional URL field.

    ``template`` is formatted with ``field``, ``value``, ``reason`` and any
    extra ``context`` (for example the owning record's title).
    """
    if value is None:
        return None
    text = str(value)
    try:
        return parse_url(text)
    except MalformedUrlError as exc:
        message = template.format(field=field, value=text, reason=exc.reason, **context)
        raise DataValidationError(message, ErrorKind.FORMAT, field=field, value=text, source=exc) from exc


def validate_orcid(value: Any) -> Optional[str]:
    """Check the ORCID pattern first, then URL syntax.

    The two stages raise distinguishable errors: a pattern violation has no
    ``source``, a URL failure carries the :class:`MalformedUrlError`.
    """
    if value is None:
        return None
    text = str(value)
    if not _ORCID_RE.fullmatch(text):
        raise DataValidationError(
            f"ORCID id {text} is not a valid ORCID URL with pattern '{ORCID_URL_PATTERN_DISPLAY}'!",
            ErrorKind.FORMAT,
            field="orcid",
            value=text,
        )
    return validate_url(text, "orcid", "The ORCID URL '{value}' is not valid!")


def is_country_valid(code: str) -> bool:
    return code in COUNTRIES


def validate_country(value: Any) -> Optional[str]:
    if value is None:
        return None
    code = str(value)
    if not is_country_valid(code):
        raise DataValidationError(
            f"'country' value '{code}' is not a valid ISO 3166-1 alpha-2 code.",
            ErrorKind.ENUM_MEMBERSHIP,
            field="country",
            value=code,
        )
    return code


def is_language_valid(code: str) -> bool:
    """True for two-letter ISO 639-1 and three-letter ISO 639-3 codes."""
    if not 2 <= len(code) <= 3:
        return False
    return code in languages()


def validate_languages(values: Iterable[str]) -> Tuple[str, ...]:
    """Validate every code in order; the first invalid one is reported."""
    codes = tuple(values)
    for code in codes:
        if not is_language_valid(code):
            raise DataValidationError(
                f"The language '{code}' is not a valid ISO 639-1 or 639-3 code.",
                ErrorKind.ENUM_MEMBERSHIP,
                field="languages",
                value=code,
            )
    return codes


def validate_member(value: Any, allowed: Iterable[str], field: str, message: str) -> Optional[str]:
    """Exact membership check; ``message`` is formatted with ``value``."""
    if value is None:
        return None
    text = str(value)
    if text not in allowed:
        raise DataValidationError(
            message.format(value=text),
            ErrorKind.ENUM_MEMBERSHIP,
            field=field,
            value=text,
        )
    return text


def scalar_text(value: Any) -> Any:
    """Text form of a YAML-typed scalar read into a text field.

    Booleans become ``true``/``false``, dates and timestamps their ISO form.
    Anything else is returned unchanged.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def none_as_empty(value: Any) -> Any:
    """Read an explicit null in a collection field as an empty collection."""
    return () if value is None else value
