import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ...utils.order import compact_order
from .factory import SectionFactory
from .gateway import SectionGateway
from .types import PageType, Section

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionRequest:
    merchant_id: Optional[str]
    page_type: PageType
    template_id: Optional[str] = None


@dataclass
class Resolution:
    sections: List[Section]
    source: str
    template_name: Optional[str] = None
    failures: List[Tuple[str, str]] = field(default_factory=list)


class TemplateStrategy:
    """A product's assigned template, if it exists and holds sections."""

    name = "template"

    def __init__(self, gateway: SectionGateway) -> None:
        self.gateway = gateway

    def __call__(self, request: ResolutionRequest) -> Optional[Resolution]:
        if not request.merchant_id or not request.template_id:
            return None

        template = self.gateway.fetch_template(request.merchant_id, request.template_id)
        if template is None:
            logger.info("Template %s not found, falling back", request.template_id)
            return None
        if not template.sections:
            return None
        return Resolution(template.sections, self.name, template_name=template.name)


class MerchantPageStrategy:
    """The merchant's own saved sections for the page type."""

    name = "page"

    def __init__(self, gateway: SectionGateway) -> None:
        self.gateway = gateway

    def __call__(self, request: ResolutionRequest) -> Optional[Resolution]:
        if not request.merchant_id:
            return None

        sections = self.gateway.fetch_by_page(request.merchant_id, request.page_type)
        if not sections:
            return None
        return Resolution(sorted(sections, key=lambda s: s.position), self.name)


class DefaultSectionsStrategy:
    """Hardcoded defaults, built fresh on every call and never persisted."""

    name = "default"

    def __init__(self, factory: SectionFactory) -> None:
        self.factory = factory

    def __call__(self, request: ResolutionRequest) -> Optional[Resolution]:
        return Resolution(self.factory.defaults_for_page(request.page_type), self.name)


class SectionResolver:
    """
    Tries each strategy in order and returns the first answer.

    A strategy that raises is logged and skipped, so a storage outage
    degrades to the next tier instead of failing the page. The last
    strategy is expected to always answer.
    """

    def __init__(self, strategies: Sequence) -> None:
        if not strategies:
            raise ValueError("At least one resolution strategy is required")
        self.strategies = list(strategies)

    def resolve(self, request: ResolutionRequest) -> Resolution:
        failures: List[Tuple[str, str]] = []

        for strategy in self.strategies:
            try:
                result = strategy(request)
            except Exception as exc:
                logger.error(
                    "Section resolution tier '%s' failed for merchant %s: %s",
                    strategy.name,
                    request.merchant_id,
                    exc,
                )
                failures.append((strategy.name, str(exc)))
                continue

            if result is not None and result.sections:
                compact_order(result.sections)
                result.failures = failures
                return result

        raise LookupError(f"No section list resolved for {request.page_type.value}")


def product_resolver(gateway: SectionGateway, factory: SectionFactory) -> SectionResolver:
    return SectionResolver(
        [
            TemplateStrategy(gateway),
            MerchantPageStrategy(gateway),
            DefaultSectionsStrategy(factory),
        ]
    )


def page_resolver(gateway: SectionGateway, factory: SectionFactory) -> SectionResolver:
    return SectionResolver(
        [
            MerchantPageStrategy(gateway),
            DefaultSectionsStrategy(factory),
        ]
    )


def resolve_product_sections(
    gateway: SectionGateway,
    factory: SectionFactory,
    merchant_id: Optional[str],
    template_id: Optional[str] = None,
) -> Resolution:
    request = ResolutionRequest(merchant_id, PageType.PRODUCT, template_id)
    return product_resolver(gateway, factory).resolve(request)


def resolve_page_sections(
    gateway: SectionGateway,
    factory: SectionFactory,
    merchant_id: Optional[str],
    page_type: PageType,
) -> Resolution:
    request = ResolutionRequest(merchant_id, page_type)
    return page_resolver(gateway, factory).resolve(request)
