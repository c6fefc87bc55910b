"""Root record of a CITATION.cff document."""

from datetime import date
from typing import Any, ClassVar, List, Mapping, Optional, Tuple

from pydantic import ConfigDict, ValidationInfo, field_validator

from .codec import CITATION_KEYS, CFFRecord, key_mapper
from .defined_values import CFF_VERSION
from .errors import DataValidationError, ErrorKind
from .reference import Reference
from .subjects import Entity, Person, Subject, entities_of, persons_of
from .validators import none_as_empty, validate_date, validate_url

_URL_MESSAGE = "The citation metadata for '{title}' contains an invalid URL in field '{field}'!"


class CitationMetadata(CFFRecord):
    """Citation metadata for one piece of software.

    Required keys are checked first, in the order ``cff-version``,
    ``message``, ``authors``, ``date-released``, ``title``, ``version``.
    Only CFF 1.0.3 documents are accepted.
    """

    KEYS: ClassVar[Mapping[str, str]] = CITATION_KEYS
    REQUIRED: ClassVar[Tuple[str, ...]] = (
        "cff_version", "message", "authors", "date_released", "title", "version",
    )

    model_config = ConfigDict(alias_generator=key_mapper(CITATION_KEYS))

    # Required
    cff_version: str
    message: str
    authors: Tuple[Subject, ...]
    date_released: date
    title: str
    version: str

    # Optional
    abstract: Optional[str] = None
    commit: Optional[str] = None
    contact: Tuple[Subject, ...] = ()
    doi: Optional[str] = None
    keywords: Tuple[str, ...] = ()
    license: Optional[str] = None
    license_url: Optional[str] = None
    repository: Optional[str] = None
    repository_code: Optional[str] = None
    repository_artifact: Optional[str] = None
    url: Optional[str] = None
    references: Tuple[Reference, ...] = ()

    @field_validator("cff_version", mode="before")
    @classmethod
    def _check_version(cls, v: Any) -> str:
        if v != CFF_VERSION:
            raise DataValidationError(
                f"'cff-version' must be {CFF_VERSION}!",
                ErrorKind.ENUM_MEMBERSHIP,
                field="cff-version",
                value=v,
            )
        return v

    @field_validator("date_released", mode="before")
    @classmethod
    def _parse_date_released(cls, v: Any) -> Optional[date]:
        return validate_date(v, "date-released")

    @field_validator("contact", "keywords", "references", mode="before")
    @classmethod
    def _null_collections(cls, v: Any) -> Any:
        return none_as_empty(v)

    @field_validator("license_url", "repository", "repository_code", "repository_artifact", "url", mode="before")
    @classmethod
    def _check_urls(cls, v: Any, info: ValidationInfo) -> Optional[str]:
        return validate_url(v, CITATION_KEYS[info.field_name], _URL_MESSAGE, title=info.data.get("title"))

    @property
    def person_authors(self) -> List[Person]:
        """Authors that are persons, in document order."""
        return persons_of(self.authors)

    @property
    def entity_authors(self) -> List[Entity]:
        """Authors that are entities, in document order."""
        return entities_of(self.authors)

    @property
    def person_contacts(self) -> List[Person]:
        return persons_of(self.contact)

    @property
    def entity_contacts(self) -> List[Entity]:
        return entities_of(self.contact)
