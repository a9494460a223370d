from typing import Any, Dict, Optional

from storefront.domain.exceptions import ValidationFailure
from storefront.domain.sections.factory import SectionFactory
from storefront.domain.sections.gateway import TemplateRecord
from storefront.domain.sections.types import PageType


def create_template(
    *,
    gateway,
    registry,
    merchant_id: str,
    data: Dict[str, Any],
) -> TemplateRecord:
    """
    Create a product page template.

    Edge cases handled:
    - Missing or blank name
    - `seed` of "defaults" starts the template from the product page
      default sections instead of an empty list
    """
    name: Optional[str] = data.get("name")
    if not name or not str(name).strip():
        raise ValidationFailure("Template name is required", ["name"])

    seed = data.get("seed", "empty")
    if seed not in ("empty", "defaults"):
        raise ValidationFailure(f"Unknown template seed: {seed}", ["seed"])

    sections = []
    if seed == "defaults":
        sections = SectionFactory(registry).defaults_for_page(PageType.PRODUCT)

    return gateway.create_template(merchant_id, str(name), sections)
