"""Key tables between Python field names and CFF document keys.

Each record type declares one table. The table is installed as the model's
alias generator, so it drives both reading (``from_cff`` on a parsed
document) and writing (``to_cff``).
"""

from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationInfo, model_validator

from .errors import DataValidationError, ErrorKind
from .validators import missing_key, scalar_text

CONTACT_KEYS: Dict[str, str] = {
    "address": "address",
    "city": "city",
    "region": "region",
    "post_code": "post-code",
    "country": "country",
    "orcid": "orcid",
    "email": "email",
    "tel": "tel",
    "fax": "fax",
    "website": "website",
}

PERSON_KEYS: Dict[str, str] = {
    **CONTACT_KEYS,
    "family_names": "family-names",
    "given_names": "given-names",
    "name_particle": "name-particle",
    "name_suffix": "name-suffix",
    "affiliation": "affiliation",
}

ENTITY_KEYS: Dict[str, str] = {
    **CONTACT_KEYS,
    "name": "name",
    "date_start": "date-start",
    "date_end": "date-end",
    "location": "location",
}

REFERENCE_KEYS: Dict[str, str] = {
    "type": "type",
    "title": "title",
    "authors": "authors",
    "conference": "conference",
    "abbreviation": "abbreviation",
    "abstract": "abstract",
    "collection_doi": "collection-doi",
    "collection_title": "collection-title",
    "collection_type": "collection-type",
    "commit": "commit",
    "copyright": "copyright",
    "data_type": "data-type",
    "database": "database",
    "date_accessed": "date-accessed",
    "date_downloaded": "date-downloaded",
    "date_released": "date-released",
    "date_published": "date-published",
    "department": "department",
    "doi": "doi",
    "edition": "edition",
    "end": "end",
    "entry": "entry",
    "filename": "filename",
    "format": "format",
    "isbn": "isbn",
    "issn": "issn",
    "issue": "issue",
    "issue_date": "issue-date",
    "issue_title": "issue-title",
    "journal": "journal",
    "keywords": "keywords",
    "languages": "languages",
    "license": "license",
    "license_url": "license-url",
    "loc_start": "loc-start",
    "loc_end": "loc-end",
    "medium": "medium",
    "month": "month",
    "nihmsid": "nihmsid",
    "notes": "notes",
    "number": "number",
    "number_volumes": "number-volumes",
    "pages": "pages",
    "patent_states": "patent-states",
    "pmcid": "pmcid",
    "repository": "repository",
    "repository_code": "repository-code",
    "repository_artifact": "repository-artifact",
    "scope": "scope",
    "section": "section",
    "status": "status",
    "start": "start",
    "thesis_type": "thesis-type",
    "url": "url",
    "version": "version",
    "volume": "volume",
    "volume_title": "volume-title",
    "year": "year",
    "year_original": "year-original",
    "contact": "contact",
    "database_provider": "database-provider",
    "editors": "editors",
    "editors_series": "editors-series",
    "institution": "institution",
    "location": "location",
    "publisher": "publisher",
    "recipients": "recipients",
    "senders": "senders",
    "translators": "translators",
}

CITATION_KEYS: Dict[str, str] = {
    "cff_version": "cff-version",
    "message": "message",
    "authors": "authors",
    "date_released": "date-released",
    "title": "title",
    "version": "version",
    "abstract": "abstract",
    "commit": "commit",
    "contact": "contact",
    "doi": "doi",
    "keywords": "keywords",
    "license": "license",
    "license_url": "license-url",
    "repository": "repository",
    "repository_code": "repository-code",
    "repository_artifact": "repository-artifact",
    "url": "url",
    "references": "references",
}


def key_mapper(table: Mapping[str, str]) -> Callable[[str], str]:
    """Alias generator looking field names up in ``table``."""
    def to_key(field_name: str) -> str:
        return table.get(field_name, field_name)
    return to_key


# Validation context flag set when the input is a parsed CFF document.
# Documents must use CFF keys; Python field names are for direct construction.
CFF_DOCUMENT = "cff_document"
DOCUMENT_CONTEXT: Dict[str, Any] = {CFF_DOCUMENT: True}

_TEXT_ANNOTATIONS = (str, Optional[str])
_TEXT_LIST_ANNOTATION = Tuple[str, ...]


class CFFRecord(BaseModel):
    """Base for all CFF records: immutable, keyed by the record's table.

    Subclasses set ``KEYS``, the ``REQUIRED`` field names in declaration
    order, and the ``REQUIRED_MESSAGE`` template for a missing key.
    """

    KEYS: ClassVar[Mapping[str, str]] = {}
    REQUIRED: ClassVar[Tuple[str, ...]] = ()
    REQUIRED_MESSAGE: ClassVar[str] = "'{key}' is a required key and must be present and not null!"

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _prepare_fields(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, Mapping):
            return data
        from_document = bool(info.context and info.context.get(CFF_DOCUMENT))
        required = [(name, cls.KEYS[name]) for name in cls.REQUIRED]
        key = missing_key(data, required, by_name=not from_document)
        if key is not None:
            raise DataValidationError(
                cls.REQUIRED_MESSAGE.format(key=key),
                ErrorKind.PRESENCE,
                field=key,
            )
        if from_document:
            known = set(cls.KEYS.values())
            for name in data:
                if name not in known:
                    raise ValueError(f"'{name}' is not a key of this CFF record")
        return cls._scalars_as_text(data)

    @classmethod
    def _scalars_as_text(cls, data: Mapping[str, Any]) -> Dict[str, Any]:
        converted = dict(data)
        for name, field in cls.model_fields.items():
            for key in {cls.KEYS.get(name, name), name}:
                if key not in converted:
                    continue
                value = converted[key]
                if field.annotation in _TEXT_ANNOTATIONS:
                    converted[key] = scalar_text(value)
                elif field.annotation == _TEXT_LIST_ANNOTATION and isinstance(value, (list, tuple)):
                    converted[key] = [scalar_text(v) for v in value]
        return converted

    @classmethod
    def from_cff(cls, node: Mapping[str, Any]):
        """Build the record from a parsed CFF mapping, accepting CFF keys only."""
        return cls.model_validate(node, context=DOCUMENT_CONTEXT)

    def to_cff(self) -> Dict[str, Any]:
        """Return the record as a plain mapping keyed by CFF keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)
