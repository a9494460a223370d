import json
from typing import Any, Dict, Optional

from storefront.domain.exceptions import ValidationFailure
from storefront.domain.sections.types import Section, SectionLocation


def parse_settings(raw: Any) -> Dict[str, Any]:
    """
    Settings arrive either as a mapping or as a serialized JSON string.
    """
    if raw is None or raw == "":
        return {}

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise ValidationFailure("Section settings are not valid JSON") from exc

    if not isinstance(raw, dict):
        raise ValidationFailure("Section settings must be an object")

    return dict(raw)


def parse_location(raw: Any) -> Optional[SectionLocation]:
    if not raw:
        return None
    try:
        return SectionLocation(raw)
    except ValueError:
        return None


def section_from_row(row) -> Section:
    return Section(
        id=row.id,
        type=row.section_type,
        position=row.position,
        visible=bool(row.is_visible),
        settings=parse_settings(row.settings),
        location=parse_location(row.location),
    )


def section_from_payload(data: Dict[str, Any], position: Optional[int] = None) -> Section:
    """Builds a Section from an embedded template entry or API body."""
    if not isinstance(data, dict) or not data.get("id") or not data.get("type"):
        raise ValidationFailure("Section entries need an id and a type")

    return Section(
        id=str(data["id"]),
        type=str(data["type"]),
        position=position if position is not None else int(data.get("position", 0)),
        visible=bool(data.get("visible", True)),
        settings=parse_settings(data.get("settings")),
        location=parse_location(data.get("location")),
    )


def normalize_section(section: Section, registry=None) -> Dict[str, Any]:
    location = section.location
    if location is None and registry is not None:
        location = registry.location_for(section.type)

    return {
        "id": section.id,
        "type": section.type,
        "position": section.position,
        "visible": section.visible,
        "settings": section.settings or {},
        "location": location.value if location else None,
    }
