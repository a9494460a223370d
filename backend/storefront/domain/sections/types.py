from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class PageType(str, Enum):
    HOME = "home"
    CATALOG = "catalog"
    PRODUCT = "product"

    @classmethod
    def parse(cls, value: Any) -> Optional["PageType"]:
        try:
            return cls(value)
        except ValueError:
            return None


PAGE_TYPE_CONFIG: Dict[PageType, Dict[str, str]] = {
    PageType.HOME: {
        "label": "Home Page",
        "icon": "Home",
        "description": "Your storefront homepage",
    },
    PageType.CATALOG: {
        "label": "Catalog Page",
        "icon": "LayoutGrid",
        "description": "Product listing/shop all page",
    },
    PageType.PRODUCT: {
        "label": "Product Page",
        "icon": "Package",
        "description": "Individual product detail page",
    },
}


class SectionType(str, Enum):
    ANNOUNCEMENT_BAR = "announcement_bar"
    HERO = "hero"
    FEATURED_PRODUCTS = "featured_products"
    NEWSLETTER = "newsletter"
    TRUST_BADGES = "trust_badges"
    RICH_TEXT = "rich_text"
    IMAGE_BANNER = "image_banner"
    CATALOG_HEADER = "catalog_header"
    PRODUCT_TRUST = "product_trust"
    RELATED_PRODUCTS = "related_products"
    PRODUCT_TABS = "product_tabs"
    FOOTER = "footer"

    @classmethod
    def parse(cls, value: Any) -> Optional["SectionType"]:
        """Return the matching kind, or None for keys nothing can render."""
        try:
            return cls(value)
        except ValueError:
            return None


class SectionLocation(str, Enum):
    HEADER = "header"
    TEMPLATE = "template"
    FOOTER = "footer"


class FieldKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    RICH_TEXT = "rich_text"
    NUMBER = "number"
    SELECT = "select"
    TOGGLE = "toggle"
    RANGE = "range"
    COLOR = "color"
    IMAGE = "image"
    ARRAY = "array"


@dataclass(frozen=True)
class FieldDescriptor:
    """One entry of a section's settings schema, consumed by the editor UI."""

    key: str
    kind: FieldKind
    label: str
    placeholder: Optional[str] = None
    hint: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    options: Tuple[Tuple[str, str], ...] = ()
    item_schema: Tuple["FieldDescriptor", ...] = ()
    max_items: Optional[int] = None
    folder: Optional[str] = None
    rows: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "key": self.key,
            "type": self.kind.value,
            "label": self.label,
        }
        for name in ("placeholder", "hint", "min", "max", "max_items", "folder", "rows"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        if self.options:
            data["options"] = [
                {"value": value, "label": label} for value, label in self.options
            ]
        if self.item_schema:
            data["item_schema"] = [item.to_dict() for item in self.item_schema]
        return data


@dataclass(frozen=True)
class SectionDescriptor:
    """
    Static description of a section kind.

    The default settings are held privately and handed out as deep copies,
    so no two sections ever share a settings object.
    """

    type: SectionType
    name: str
    description: str
    icon: str
    defaults: Dict[str, Any] = field(default_factory=dict, repr=False)
    schema: Tuple[FieldDescriptor, ...] = ()
    page_types: Optional[Tuple[PageType, ...]] = None
    location: SectionLocation = SectionLocation.TEMPLATE

    def default_settings(self) -> Dict[str, Any]:
        return copy.deepcopy(self.defaults)

    def available_on(self, page_type: Optional[PageType]) -> bool:
        if page_type is None or self.page_types is None:
            return True
        return page_type in self.page_types

    def field_for(self, key: str) -> Optional[FieldDescriptor]:
        for descriptor in self.schema:
            if descriptor.key == key:
                return descriptor
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "location": self.location.value,
            "page_types": (
                [page_type.value for page_type in self.page_types]
                if self.page_types is not None
                else None
            ),
            "default_settings": self.default_settings(),
            "settings_schema": [item.to_dict() for item in self.schema],
        }


@dataclass
class Section:
    id: str
    type: str
    position: int
    visible: bool = True
    settings: Dict[str, Any] = field(default_factory=dict)
    location: Optional[SectionLocation] = None

    def clone(self) -> "Section":
        return copy.deepcopy(self)
