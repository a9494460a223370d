import copy
import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from ...utils.order import compact_order
from ..exceptions import SectionNotFound, ValidationFailure
from ..invariants.section import assert_section_positions
from .factory import SectionFactory
from .types import Section, SectionLocation

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"visible", "settings", "location"}


class StoreState(str, Enum):
    LOADED = "loaded"
    DIRTY = "dirty"
    SAVING = "saving"
    ERROR = "error"


PersistFn = Callable[[List[Section]], None]


class SectionCollectionStore:
    """
    In-memory working copy of one page or template's sections.

    Every mutation keeps positions dense (0..n-1, matching list order) and
    recomputes the dirty flag by comparing the working copy with the
    baseline. The store takes no locks; callers serialize access. An edit
    that still lands while a save is in flight is not folded into the
    saved baseline, so it stays dirty.
    """

    def __init__(
        self,
        sections: Iterable[Section],
        *,
        persist: PersistFn,
        factory: SectionFactory,
    ) -> None:
        working = compact_order([section.clone() for section in sections])
        self._sections: List[Section] = working
        self._baseline: List[Section] = copy.deepcopy(working)
        self._persist = persist
        self._factory = factory
        self._factory.reserve(section.id for section in working)
        self._state = StoreState.LOADED
        self._dirty = False
        self.error: Optional[Exception] = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def sections(self) -> List[Section]:
        return list(self._sections)

    @property
    def baseline(self) -> List[Section]:
        return copy.deepcopy(self._baseline)

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def __len__(self) -> int:
        return len(self._sections)

    def get(self, section_id: str) -> Section:
        return self._sections[self._index_of(section_id)]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(self, section_type: Any, index: Optional[int] = None) -> Section:
        if index is None:
            index = len(self._sections)
        self._check_index(index, len(self._sections), "index")

        section = self._factory.create(section_type, index)
        self._sections.insert(index, section)
        self._after_mutation()
        return section

    def remove(self, section_id: str) -> Section:
        removed = self._sections.pop(self._index_of(section_id))
        self._after_mutation()
        return removed

    def reorder(self, from_index: int, to_index: int) -> None:
        last = len(self._sections) - 1
        self._check_index(from_index, last, "from_index")
        self._check_index(to_index, last, "to_index")

        moved = self._sections.pop(from_index)
        self._sections.insert(to_index, moved)
        self._after_mutation()

    def duplicate(self, section_id: str) -> Section:
        index = self._index_of(section_id)
        clone = self._factory.duplicate(self._sections[index])
        self._sections.insert(index + 1, clone)
        self._after_mutation()
        return clone

    def update_setting(self, section_id: str, key: str, value: Any) -> Section:
        section = self.get(section_id)
        section.settings = {**section.settings, key: copy.deepcopy(value)}
        self._after_mutation()
        return section

    def update_section(self, section_id: str, changes: Dict[str, Any]) -> Section:
        """Merges top-level fields into a section; id, type and position are fixed."""
        illegal = sorted(set(changes) - EDITABLE_FIELDS)
        if illegal:
            raise ValidationFailure(f"Fields cannot be edited: {', '.join(illegal)}", illegal)

        section = self.get(section_id)
        if "visible" in changes:
            section.visible = bool(changes["visible"])
        if "settings" in changes:
            if not isinstance(changes["settings"], dict):
                raise ValidationFailure("settings must be an object", ["settings"])
            section.settings = {**section.settings, **copy.deepcopy(changes["settings"])}
        if "location" in changes:
            section.location = _parse_location(changes["location"])

        self._after_mutation()
        return section

    def toggle_visibility(self, section_id: str) -> Section:
        section = self.get(section_id)
        section.visible = not section.visible
        self._after_mutation()
        return section

    # ------------------------------------------------------------------
    # Save / reset
    # ------------------------------------------------------------------
    def save(self) -> bool:
        """
        Flush the working copy through the persist callable.

        Returns False without touching storage when nothing changed. On
        failure the working copy is left as-is, the exception is kept on
        `self.error` and re-raised so the caller can offer a retry.
        """
        if not self._dirty:
            return False

        self._state = StoreState.SAVING
        self.error = None
        snapshot = copy.deepcopy(self._sections)
        try:
            self._persist(copy.deepcopy(snapshot))
        except Exception as exc:
            self._state = StoreState.ERROR
            self.error = exc
            logger.warning("Saving %d sections failed: %s", len(snapshot), exc)
            raise

        # The baseline is what reached storage, not whatever the working copy holds now
        self._baseline = snapshot
        self._dirty = self._sections != self._baseline
        self._state = StoreState.DIRTY if self._dirty else StoreState.LOADED
        return True

    def reset(self) -> None:
        self._sections = copy.deepcopy(self._baseline)
        self._dirty = False
        self._state = StoreState.LOADED
        self.error = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _index_of(self, section_id: str) -> int:
        for index, section in enumerate(self._sections):
            if section.id == section_id:
                return index
        raise SectionNotFound(section_id)

    @staticmethod
    def _check_index(index: int, upper: int, name: str) -> None:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index <= upper:
            raise ValidationFailure(f"{name} out of range: {index}", [name])

    def _after_mutation(self) -> None:
        compact_order(self._sections)
        assert_section_positions(self._sections)

        self._dirty = self._sections != self._baseline
        self._state = StoreState.DIRTY if self._dirty else StoreState.LOADED


def _parse_location(value: Any) -> Optional[SectionLocation]:
    if value is None:
        return None
    try:
        return SectionLocation(value)
    except ValueError:
        raise ValidationFailure(f"Unknown location: {value}", ["location"]) from None
