from types import SimpleNamespace

import pytest

from storefront.domain.exceptions import ValidationFailure
from storefront.domain.sections.gateway import TemplateRecord
from storefront.domain.sections.types import SectionLocation
from storefront.normalizers.editor import normalize_error
from storefront.normalizers.section import (
    normalize_section,
    parse_location,
    parse_settings,
    section_from_payload,
    section_from_row,
)
from storefront.normalizers.template import normalize_template


class TestParseSettings:
    def test_mapping(self):
        raw = {"title": "Hi"}
        parsed = parse_settings(raw)

        assert parsed == {"title": "Hi"}
        assert parsed is not raw

    def test_json_string(self):
        assert parse_settings('{"title": "Hi", "count": 3}') == {"title": "Hi", "count": 3}

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty(self, raw):
        assert parse_settings(raw) == {}

    def test_invalid_json(self):
        with pytest.raises(ValidationFailure):
            parse_settings("{not json")

    @pytest.mark.parametrize("raw", ["[1, 2]", [1, 2], 42])
    def test_non_object(self, raw):
        with pytest.raises(ValidationFailure):
            parse_settings(raw)


def test_parse_location():
    assert parse_location("footer") is SectionLocation.FOOTER
    assert parse_location(None) is None
    assert parse_location("sidebar") is None


class TestSectionFromRow:
    def _row(self, **overrides):
        row = dict(
            id="s1",
            section_type="hero",
            position=2,
            is_visible=1,
            settings='{"title": "Stored as text"}',
            location=None,
        )
        row.update(overrides)
        return SimpleNamespace(**row)

    def test_string_settings_are_decoded(self):
        section = section_from_row(self._row())

        assert section.settings == {"title": "Stored as text"}
        assert section.visible is True
        assert section.type == "hero"

    def test_location_column(self):
        assert section_from_row(self._row(location="header")).location is SectionLocation.HEADER


class TestSectionFromPayload:
    def test_position_override(self):
        section = section_from_payload({"id": "a", "type": "hero", "position": 9}, position=0)
        assert section.position == 0

    def test_defaults(self):
        section = section_from_payload({"id": "a", "type": "hero"})

        assert section.visible is True
        assert section.settings == {}
        assert section.location is None

    @pytest.mark.parametrize("data", [{"type": "hero"}, {"id": "a"}, "hero", None])
    def test_id_and_type_required(self, data):
        with pytest.raises(ValidationFailure):
            section_from_payload(data)


class TestNormalizeSection:
    def test_location_inferred_from_registry(self, registry, make_section):
        data = normalize_section(make_section("a", "footer"), registry=registry)
        assert data["location"] == "footer"

    def test_location_without_registry(self, make_section):
        assert normalize_section(make_section("a", "footer"))["location"] is None

    def test_explicit_location_wins(self, registry, make_section):
        section = make_section("a", "footer")
        section.location = SectionLocation.TEMPLATE

        assert normalize_section(section, registry=registry)["location"] == "template"

    def test_unknown_type_is_template_location(self, registry, make_section):
        assert normalize_section(make_section("a", "marquee"), registry=registry)["location"] == "template"


def test_normalize_template_sorts_sections(make_section):
    template = TemplateRecord(
        id="t-1",
        name="Summer",
        sections=[make_section("b", position=1), make_section("a", position=0)],
    )

    data = normalize_template(template)

    assert data["section_count"] == 2
    assert [s["id"] for s in data["sections"]] == ["a", "b"]
    assert "sections" not in normalize_template(template, include_sections=False)


def test_normalize_error():
    error = ValidationFailure("Bad settings", ["s1.title must be a string"])

    assert normalize_error(None) is None
    assert normalize_error(error) == {
        "type": "ValidationFailure",
        "message": "Bad settings",
        "errors": ["s1.title must be a string"],
    }
