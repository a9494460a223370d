from typing import Any, Callable, List, Optional, Set

from ..exceptions import UnknownSectionType
from .catalogue import DEFAULT_PAGE_SECTIONS
from .ids import generate_section_id
from .registry import SectionTypeRegistry
from .types import PageType, Section


class SectionFactory:
    """
    Builds fresh and duplicated sections.

    A factory remembers every id it handed out, so ids are never reused
    for as long as the factory (one editor session) lives.
    """

    def __init__(
        self,
        registry: SectionTypeRegistry,
        id_generator: Callable[[], str] = generate_section_id,
    ) -> None:
        self.registry = registry
        self._generate_id = id_generator
        self._issued: Set[str] = set()

    def reserve(self, section_ids) -> None:
        """Mark ids that already exist in the collection as taken."""
        self._issued.update(section_ids)

    def new_id(self) -> str:
        section_id = self._generate_id()
        while section_id in self._issued:
            section_id = self._generate_id()
        self._issued.add(section_id)
        return section_id

    def create(self, section_type: Any, position: int = 0) -> Section:
        descriptor = self.registry.lookup(section_type)
        if descriptor is None:
            raise UnknownSectionType(section_type)

        return Section(
            id=self.new_id(),
            type=descriptor.type.value,
            position=position,
            visible=True,
            settings=descriptor.default_settings(),
        )

    def duplicate(self, source: Section) -> Section:
        clone = source.clone()
        clone.id = self.new_id()
        clone.position = source.position + 1
        return clone

    def defaults_for_page(self, page_type: Optional[PageType]) -> List[Section]:
        kinds = DEFAULT_PAGE_SECTIONS.get(PageType.parse(page_type), ())
        return [self.create(kind, position) for position, kind in enumerate(kinds)]
