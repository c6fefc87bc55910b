"""References: works the cited software builds on or relates to."""

from datetime import date
from typing import Any, ClassVar, List, Mapping, Optional, Tuple

from pydantic import ConfigDict, ValidationInfo, field_validator

from .codec import REFERENCE_KEYS, CFFRecord, key_mapper
from .defined_values import REFERENCE_STATUSES, REFERENCE_TYPES
from .subjects import Entity, Person, Subject, entities_of, persons_of
from .validators import none_as_empty, validate_date, validate_languages, validate_member, validate_url

_URL_MESSAGE = "The reference '{title}' of type '{type}' contains an invalid URL in field '{field}': {reason}"


class Reference(CFFRecord):
    """A paper, dataset, talk, etc. associated with the software.

    ``type``, ``title`` and a non-empty ``authors`` list are required.
    Dates, URLs, ``languages`` and ``status`` are validated; all other
    fields are taken as given.
    """

    KEYS: ClassVar[Mapping[str, str]] = REFERENCE_KEYS
    REQUIRED: ClassVar[Tuple[str, ...]] = ("type", "title", "authors")
    REQUIRED_MESSAGE: ClassVar[str] = "'{key}' is a required key in references and must be present and not null!"

    model_config = ConfigDict(alias_generator=key_mapper(REFERENCE_KEYS))

    type: str
    title: str
    authors: Tuple[Subject, ...]
    conference: Optional[Entity] = None
    abbreviation: Optional[str] = None
    abstract: Optional[str] = None
    collection_doi: Optional[str] = None
    collection_title: Optional[str] = None
    collection_type: Optional[str] = None
    commit: Optional[str] = None
    copyright: Optional[str] = None
    data_type: Optional[str] = None
    database: Optional[str] = None
    date_accessed: Optional[date] = None
    date_downloaded: Optional[date] = None
    date_released: Optional[date] = None
    date_published: Optional[date] = None
    department: Optional[str] = None
    doi: Optional[str] = None
    edition: Optional[str] = None
    end: Optional[int] = None
    entry: Optional[str] = None
    filename: Optional[str] = None
    format: Optional[str] = None
    isbn: Optional[str] = None
    issn: Optional[str] = None
    issue: Optional[str] = None
    issue_date: Optional[str] = None
    issue_title: Optional[str] = None
    journal: Optional[str] = None
    keywords: Tuple[str, ...] = ()
    languages: Tuple[str, ...] = ()
    license: Optional[str] = None
    license_url: Optional[str] = None
    loc_start: Optional[int] = None
    loc_end: Optional[int] = None
    medium: Optional[str] = None
    month: Optional[int] = None
    nihmsid: Optional[str] = None
    notes: Optional[str] = None
    number: Optional[str] = None
    number_volumes: Optional[int] = None
    pages: Optional[int] = None
    patent_states: Tuple[str, ...] = ()
    pmcid: Optional[str] = None
    repository: Optional[str] = None
    repository_code: Optional[str] = None
    repository_artifact: Optional[str] = None
    scope: Optional[str] = None
    section: Optional[str] = None
    status: Optional[str] = None
    start: Optional[int] = None
    thesis_type: Optional[str] = None
    url: Optional[str] = None
    version: Optional[str] = None
    volume: Optional[int] = None
    volume_title: Optional[str] = None
    year: Optional[int] = None
    year_original: Optional[int] = None
    contact: Tuple[Subject, ...] = ()
    database_provider: Optional[Entity] = None
    editors: Tuple[Subject, ...] = ()
    editors_series: Tuple[Subject, ...] = ()
    institution: Optional[Entity] = None
    location: Optional[Entity] = None
    publisher: Optional[Entity] = None
    recipients: Tuple[Subject, ...] = ()
    senders: Tuple[Subject, ...] = ()
    translators: Tuple[Subject, ...] = ()

    @field_validator("type", mode="before")
    @classmethod
    def _check_type(cls, v: Any) -> Optional[str]:
        return validate_member(
            v,
            REFERENCE_TYPES,
            "type",
            "The reference type '{value}' is not defined in the CFF format specifications.",
        )

    @field_validator(
        "keywords", "languages", "patent_states", "contact", "editors",
        "editors_series", "recipients", "senders", "translators",
        mode="before",
    )
    @classmethod
    def _null_collections(cls, v: Any) -> Any:
        return none_as_empty(v)

    @field_validator("date_accessed", "date_downloaded", "date_released", "date_published", mode="before")
    @classmethod
    def _parse_dates(cls, v: Any, info: ValidationInfo) -> Optional[date]:
        return validate_date(v, REFERENCE_KEYS[info.field_name])

    @field_validator("languages")
    @classmethod
    def _check_languages(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return validate_languages(v)

    @field_validator("license_url", "repository", "repository_code", "repository_artifact", "url", mode="before")
    @classmethod
    def _check_urls(cls, v: Any, info: ValidationInfo) -> Optional[str]:
        return validate_url(
            v,
            REFERENCE_KEYS[info.field_name],
            _URL_MESSAGE,
            title=info.data.get("title"),
            type=info.data.get("type"),
        )

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, v: Any) -> Optional[str]:
        return validate_member(v, REFERENCE_STATUSES, "status", "The status '{value}' is not defined.")

    @property
    def person_authors(self) -> List[Person]:
        return persons_of(self.authors)

    @property
    def entity_authors(self) -> List[Entity]:
        return entities_of(self.authors)

    @property
    def person_contacts(self) -> List[Person]:
        return persons_of(self.contact)

    @property
    def entity_contacts(self) -> List[Entity]:
        return entities_of(self.contact)

    @property
    def person_editors(self) -> List[Person]:
        return persons_of(self.editors)

    @property
    def entity_editors(self) -> List[Entity]:
        return entities_of(self.editors)

    @property
    def person_editors_series(self) -> List[Person]:
        return persons_of(self.editors_series)

    @property
    def entity_editors_series(self) -> List[Entity]:
        return entities_of(self.editors_series)

    @property
    def person_recipients(self) -> List[Person]:
        return persons_of(self.recipients)

    @property
    def entity_recipients(self) -> List[Entity]:
        return entities_of(self.recipients)

    @property
    def person_senders(self) -> List[Person]:
        return persons_of(self.senders)

    @property
    def entity_senders(self) -> List[Entity]:
        return entities_of(self.senders)

    @property
    def person_translators(self) -> List[Person]:
        return persons_of(self.translators)

    @property
    def entity_translators(self) -> List[Entity]:
        return entities_of(self.translators)
