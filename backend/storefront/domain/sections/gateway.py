from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .types import PageType, Section


@dataclass
class TemplateRecord:
    id: str
    name: str
    sections: List[Section] = field(default_factory=list)


class SectionGateway(ABC):
    """
    Durable storage for section lists.

    Read methods return empty results for absent rows. Write methods return
    None on success and raise PersistenceFailure, NotFound or
    ValidationFailure otherwise. `replace_all_by_page` must apply as one
    transaction: either every old row is replaced or none is.
    """

    @abstractmethod
    def fetch_by_page(self, merchant_id: str, page_type: PageType) -> List[Section]:
        ...

    @abstractmethod
    def fetch_template(self, merchant_id: str, template_id: str) -> Optional[TemplateRecord]:
        ...

    @abstractmethod
    def replace_all_by_page(
        self,
        merchant_id: str,
        page_type: PageType,
        sections: Sequence[Section],
    ) -> None:
        ...

    @abstractmethod
    def replace_template_sections(
        self,
        merchant_id: str,
        template_id: str,
        sections: Sequence[Section],
    ) -> None:
        ...

    @abstractmethod
    def rename_template(self, merchant_id: str, template_id: str, name: str) -> None:
        ...
