import logging
import re
from typing import Any, List

from ..exceptions import ValidationFailure
from ..sections.types import FieldDescriptor, FieldKind

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

STRING_KINDS = {
    FieldKind.TEXT,
    FieldKind.TEXTAREA,
    FieldKind.RICH_TEXT,
    FieldKind.IMAGE,
}


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid number setting
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def field_errors(field: FieldDescriptor, value: Any, path: str) -> List[str]:
    """
    Returns the problems with one setting value, empty when it is valid.

    A missing key is never an error: partially-shaped settings fall back
    to defaults at render time.
    """
    kind = field.kind

    if kind in STRING_KINDS:
        if not isinstance(value, str):
            return [f"{path} must be a string"]
        return []

    if kind == FieldKind.COLOR:
        if not isinstance(value, str) or not HEX_COLOR.match(value):
            return [f"{path} must be a hex color"]
        return []

    if kind == FieldKind.TOGGLE:
        if not isinstance(value, bool):
            return [f"{path} must be true or false"]
        return []

    if kind in (FieldKind.NUMBER, FieldKind.RANGE):
        if not _is_number(value):
            return [f"{path} must be a number"]
        if field.min is not None and value < field.min:
            return [f"{path} must be >= {field.min:g}"]
        if field.max is not None and value > field.max:
            return [f"{path} must be <= {field.max:g}"]
        return []

    if kind == FieldKind.SELECT:
        allowed = [option for option, _ in field.options]
        if value not in allowed:
            return [f"{path} must be one of {allowed}"]
        return []

    if kind == FieldKind.ARRAY:
        if not isinstance(value, list):
            return [f"{path} must be a list"]
        if field.max_items is not None and len(value) > field.max_items:
            return [f"{path} allows at most {field.max_items} items"]

        errors: List[str] = []
        for index, item in enumerate(value):
            item_path = f"{path}[{index}]"
            if not isinstance(item, dict):
                errors.append(f"{item_path} must be an object")
                continue
            for item_field in field.item_schema:
                if item_field.key in item:
                    errors.extend(
                        field_errors(item_field, item[item_field.key], f"{item_path}.{item_field.key}")
                    )
        return errors

    return []


def section_settings_errors(section, descriptor) -> List[str]:
    if not isinstance(section.settings, dict):
        return [f"{section.id}: settings must be an object"]

    errors: List[str] = []
    for field in descriptor.schema:
        if field.key in section.settings:
            errors.extend(
                field_errors(field, section.settings[field.key], f"{section.id}.{field.key}")
            )
    return errors


def assert_settings(sections, registry):
    errors: List[str] = []

    for section in sections:
        descriptor = registry.lookup(section.type)
        if descriptor is None:
            # Unregistered kinds only come from storage and are saved back as-is
            logger.warning("Saving section %s of unregistered type %s unchecked", section.id, section.type)
            continue
        errors.extend(section_settings_errors(section, descriptor))

    if errors:
        raise ValidationFailure("Section settings do not match their schema", errors)
