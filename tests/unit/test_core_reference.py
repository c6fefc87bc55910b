"""Unit tests for the Reference record."""

from datetime import date

import pytest
from pydantic import ValidationError

from cffreader.core.errors import DataValidationError, ErrorKind, MalformedUrlError
from cffreader.core.reference import Reference
from cffreader.core.subjects import Entity, Person


def make_reference(**overrides):
    """A minimal valid reference node, keyed by CFF keys."""
    node = {
        "type": "book",
        "title": "Book Title",
        "authors": [{"family-names": "Druskat", "given-names": "Stephan"}],
    }
    node.update(overrides)
    return node


class TestReferenceConstruction:
    """Tests for required keys and defaults."""

    def test_only_required_values(self) -> None:
        reference = Reference.model_validate(make_reference())
        assert reference.type == "book"
        assert reference.title == "Book Title"
        assert len(reference.authors) == 1
        assert reference.doi is None
        assert reference.keywords == ()
        assert reference.languages == ()
        assert reference.editors == ()
        assert reference.publisher is None

    @pytest.mark.parametrize("key", ["type", "title", "authors"])
    def test_missing_required_key(self, key: str) -> None:
        node = make_reference()
        del node[key]
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(node)
        error = exc_info.value
        assert str(error) == f"'{key}' is a required key in references and must be present and not null!"
        assert error.kind is ErrorKind.PRESENCE
        assert error.field == key

    def test_empty_authors_counts_as_missing(self) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(make_reference(authors=[]))
        assert exc_info.value.field == "authors"

    def test_missing_title_reported_before_bad_type(self) -> None:
        """Presence checks run before any value is validated."""
        node = make_reference(type="singularity")
        del node["title"]
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(node)
        assert exc_info.value.field == "title"

    def test_python_field_names(self) -> None:
        reference = Reference(
            type="article",
            title="Software citation principles",
            authors=[Person(family_names="Smith", given_names="Arfon M.")],
            collection_title="PeerJ Computer Science",
            loc_start=14,
        )
        assert reference.collection_title == "PeerJ Computer Science"
        assert reference.loc_start == 14

    def test_null_collections_are_empty(self) -> None:
        reference = Reference.model_validate(make_reference(keywords=None, editors=None, languages=None))
        assert reference.keywords == ()
        assert reference.editors == ()
        assert reference.languages == ()

    def test_nested_entities(self) -> None:
        reference = Reference.model_validate(
            make_reference(
                conference={"name": "WSSSPE", "date-start": "2017-10-30"},
                publisher={"name": "PeerJ", "city": "San Diego"},
            )
        )
        assert isinstance(reference.conference, Entity)
        assert reference.conference.date_start == date(2017, 10, 30)
        assert reference.publisher.city == "San Diego"

    def test_nested_entity_requires_name(self) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(make_reference(institution={"city": "Berlin"}))
        assert str(exc_info.value) == "'name' is a required key in entities and must be present and not null!"

    def test_integer_fields_stay_integers(self) -> None:
        reference = Reference.model_validate(make_reference(year=2017, month=3, pages=765, issue=123))
        assert reference.year == 2017
        assert reference.month == 3
        assert reference.pages == 765
        assert reference.issue == "123"

    def test_integer_field_rejects_text(self) -> None:
        with pytest.raises(ValidationError):
            Reference.model_validate(make_reference(year="last year"))


class TestReferenceValidation:
    """Tests for the validated reference fields."""

    def test_bad_type(self) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(make_reference(type="singularity"))
        error = exc_info.value
        assert str(error) == "The reference type 'singularity' is not defined in the CFF format specifications."
        assert error.kind is ErrorKind.ENUM_MEMBERSHIP
        assert error.value == "singularity"

    def test_bad_language(self) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(make_reference(languages=["BAD LANGUAGE!"]))
        assert str(exc_info.value) == "The language 'BAD LANGUAGE!' is not a valid ISO 639-1 or 639-3 code."
        assert exc_info.value.value == "BAD LANGUAGE!"

    def test_valid_languages(self) -> None:
        reference = Reference.model_validate(make_reference(languages=["aaa", "zu"]))
        assert reference.languages == ("aaa", "zu")

    def test_bad_status(self) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(make_reference(status="BAD STATUS!"))
        assert str(exc_info.value) == "The status 'BAD STATUS!' is not defined."
        assert exc_info.value.kind is ErrorKind.ENUM_MEMBERSHIP

    @pytest.mark.parametrize("status", ["in-preparation", "abstract", "submitted", "in-press", "advance-online", "preprint"])
    def test_valid_statuses(self, status: str) -> None:
        assert Reference.model_validate(make_reference(status=status)).status == status

    def test_bad_url_names_reference(self) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(make_reference(**{"license-url": "not a url"}))
        error = exc_info.value
        assert str(error).startswith(
            "The reference 'Book Title' of type 'book' contains an invalid URL in field 'license-url': "
        )
        assert error.field == "license-url"
        assert isinstance(error.source, MalformedUrlError)

    def test_urls_kept_verbatim(self) -> None:
        reference = Reference.model_validate(
            make_reference(
                url="http://j.mp",
                **{"repository-code": "http://142.42.1.1:8080/"},
            )
        )
        assert reference.url == "http://j.mp"
        assert reference.repository_code == "http://142.42.1.1:8080/"

    @pytest.mark.parametrize("key", ["date-accessed", "date-downloaded", "date-released", "date-published"])
    def test_bad_dates(self, key: str) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(make_reference(**{key: "31.10.2017"}))
        assert exc_info.value.field == key
        assert exc_info.value.kind is ErrorKind.FORMAT

    def test_dates(self) -> None:
        reference = Reference.model_validate(
            make_reference(**{"date-accessed": "2017-10-31", "date-published": date(2017, 10, 31)})
        )
        assert reference.date_accessed == date(2017, 10, 31)
        assert reference.date_published == date(2017, 10, 31)

    def test_bad_author_subject(self) -> None:
        with pytest.raises(DataValidationError) as exc_info:
            Reference.model_validate(make_reference(authors=[{"given-names": "Stephan"}]))
        assert exc_info.value.field == "family-names"


class TestReferencePartitions:
    """Tests for the person/entity views of each subject list."""

    def setup_method(self) -> None:
        person = {"family-names": "Druskat", "given-names": "Stephan"}
        entity = {"name": "Software Sustainability Institute"}
        self.reference = Reference.model_validate(
            make_reference(
                authors=[person, entity],
                contact=[entity],
                editors=[person, person],
                **{"editors-series": [entity, person]},
                recipients=[entity],
                senders=[person],
                translators=[entity, person, entity],
            )
        )

    def test_authors(self) -> None:
        assert len(self.reference.person_authors) == 1
        assert len(self.reference.entity_authors) == 1

    def test_contacts(self) -> None:
        assert self.reference.person_contacts == []
        assert len(self.reference.entity_contacts) == 1

    def test_editors(self) -> None:
        assert len(self.reference.person_editors) == 2
        assert self.reference.entity_editors == []
        assert len(self.reference.person_editors_series) == 1
        assert len(self.reference.entity_editors_series) == 1

    def test_senders_and_recipients(self) -> None:
        assert len(self.reference.person_senders) == 1
        assert self.reference.entity_senders == []
        assert self.reference.person_recipients == []
        assert len(self.reference.entity_recipients) == 1

    def test_translators(self) -> None:
        assert len(self.reference.person_translators) == 1
        assert [e.name for e in self.reference.entity_translators] == [
            "Software Sustainability Institute",
            "Software Sustainability Institute",
        ]

    def test_views_do_not_change_source(self) -> None:
        views = self.reference.person_translators
        views.clear()
        assert len(self.reference.translators) == 3
        assert len(self.reference.person_translators) == 1


class TestReferenceToCff:
    """Tests for encoding a reference back to CFF keys."""

    def test_to_cff_uses_cff_keys(self) -> None:
        reference = Reference.model_validate(
            make_reference(
                languages=["aaa"],
                **{"date-published": "2017-10-31", "loc-start": 14},
            )
        )
        assert reference.to_cff() == {
            "type": "book",
            "title": "Book Title",
            "authors": [{"family-names": "Druskat", "given-names": "Stephan"}],
            "languages": ["aaa"],
            "date-published": "2017-10-31",
            "loc-start": 14,
        }
