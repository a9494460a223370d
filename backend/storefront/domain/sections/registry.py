from typing import Any, Dict, List, Optional

from .types import PageType, SectionDescriptor, SectionLocation, SectionType


class SectionTypeRegistry:
    """
    Maps a section type key to its descriptor.

    Lookups never raise: an unknown key yields None so a page with one
    unrenderable section still renders the rest.
    """

    def __init__(self) -> None:
        self._descriptors: Dict[SectionType, SectionDescriptor] = {}

    def register(self, section_type: SectionType, descriptor: SectionDescriptor) -> None:
        kind = SectionType(section_type)
        if descriptor.type is not kind:
            raise ValueError(
                f"Descriptor for {descriptor.type.value} registered under {kind.value}"
            )
        self._descriptors[kind] = descriptor

    def lookup(self, section_type: Any) -> Optional[SectionDescriptor]:
        kind = SectionType.parse(section_type)
        if kind is None:
            return None
        return self._descriptors.get(kind)

    def descriptors(self, page_type: Optional[PageType] = None) -> List[SectionDescriptor]:
        return [
            descriptor
            for descriptor in self._descriptors.values()
            if descriptor.available_on(page_type)
        ]

    def defaults_for(self, section_type: Any) -> Optional[Dict[str, Any]]:
        descriptor = self.lookup(section_type)
        return descriptor.default_settings() if descriptor else None

    def location_for(self, section_type: Any) -> SectionLocation:
        descriptor = self.lookup(section_type)
        return descriptor.location if descriptor else SectionLocation.TEMPLATE

    def __contains__(self, section_type: Any) -> bool:
        return self.lookup(section_type) is not None

    def __len__(self) -> int:
        return len(self._descriptors)
