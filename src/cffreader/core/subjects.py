"""Subjects: the persons and entities that author, edit or receive works.

A subject is one of two variants sharing the contact fields of
:class:`ContactInfo`. Which variant a document node becomes is decided once,
at the deserialization boundary, by :func:`subject_tag`: a node with a
``name`` key is an :class:`Entity`, any other mapping is a :class:`Person`.
The choice is never revisited, so a node lacking both ``name`` and the
person names fails as a person with a missing ``family-names``.
"""

from datetime import date
from typing import Annotated, Any, ClassVar, Iterable, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import ConfigDict, Discriminator, Field, Tag, TypeAdapter, field_validator

from .codec import DOCUMENT_CONTEXT, ENTITY_KEYS, PERSON_KEYS, CFFRecord, key_mapper
from .validators import validate_country, validate_date, validate_orcid, validate_url


class ContactInfo(CFFRecord):
    """Contact fields shared by persons and entities."""

    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    post_code: Optional[str] = None
    country: Optional[str] = None
    orcid: Optional[str] = None
    email: Optional[str] = None
    tel: Optional[str] = None
    fax: Optional[str] = None
    website: Optional[str] = None

    @field_validator("country", mode="before")
    @classmethod
    def _check_country(cls, v: Any) -> Optional[str]:
        return validate_country(v)

    @field_validator("orcid", mode="before")
    @classmethod
    def _check_orcid(cls, v: Any) -> Optional[str]:
        return validate_orcid(v)

    @field_validator("website", mode="before")
    @classmethod
    def _check_website(cls, v: Any) -> Optional[str]:
        return validate_url(v, "website", "The 'website' URL '{value}' is not valid.")


class Person(ContactInfo):
    """A human author, editor, contact, etc."""

    KEYS: ClassVar[Mapping[str, str]] = PERSON_KEYS
    REQUIRED: ClassVar[Tuple[str, ...]] = ("family_names", "given_names")
    REQUIRED_MESSAGE: ClassVar[str] = "'{key}' is a required key in persons and must be present and not null!"

    model_config = ConfigDict(alias_generator=key_mapper(PERSON_KEYS))

    kind: Literal["person"] = Field("person", exclude=True)
    family_names: str
    given_names: str
    name_particle: Optional[str] = None
    name_suffix: Optional[str] = None
    affiliation: Optional[str] = None


class Entity(ContactInfo):
    """A non-human subject: an organization, team, conference, etc."""

    KEYS: ClassVar[Mapping[str, str]] = ENTITY_KEYS
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)
    REQUIRED_MESSAGE: ClassVar[str] = "'{key}' is a required key in entities and must be present and not null!"

    model_config = ConfigDict(alias_generator=key_mapper(ENTITY_KEYS))

    kind: Literal["entity"] = Field("entity", exclude=True)
    name: str
    date_start: Optional[date] = None
    date_end: Optional[date] = None
    location: Optional[str] = None

    @field_validator("date_start", mode="before")
    @classmethod
    def _parse_date_start(cls, v: Any) -> Optional[date]:
        return validate_date(v, "date-start")

    @field_validator("date_end", mode="before")
    @classmethod
    def _parse_date_end(cls, v: Any) -> Optional[date]:
        return validate_date(v, "date-end")


def subject_tag(node: Any) -> Optional[str]:
    """Return ``"entity"`` or ``"person"`` for a subject node.

    Already constructed subjects keep their own tag. Anything that is not a
    mapping has no tag and is rejected by the union.
    """
    if isinstance(node, (Person, Entity)):
        return node.kind
    if isinstance(node, Mapping):
        return "entity" if "name" in node else "person"
    return None


Subject = Annotated[
    Union[Annotated[Person, Tag("person")], Annotated[Entity, Tag("entity")]],
    Discriminator(
        subject_tag,
        custom_error_type="subject_type",
        custom_error_message="A subject must be a mapping of person or entity keys",
    ),
]

_SUBJECT_ADAPTER: TypeAdapter = TypeAdapter(Subject)


def resolve_subject(node: Any) -> Union[Person, Entity]:
    """Build the person or entity a document node describes."""
    return _SUBJECT_ADAPTER.validate_python(node, context=DOCUMENT_CONTEXT)


def persons_of(subjects: Iterable[Union[Person, Entity]]) -> List[Person]:
    """The persons in ``subjects``, in their original order."""
    return [s for s in subjects if s.kind == "person"]


def entities_of(subjects: Iterable[Union[Person, Entity]]) -> List[Entity]:
    """The entities in ``subjects``, in their original order."""
    return [s for s in subjects if s.kind == "entity"]
