import copy
from typing import List, Optional, Sequence

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.exceptions import PersistenceFailure, TemplateNotFound, ValidationFailure
from storefront.domain.invariants.page import assert_page
from storefront.domain.sections.gateway import SectionGateway, TemplateRecord
from storefront.domain.sections.types import PageType, Section
from storefront.extensions import db, section_registry
from storefront.models.product_page_template import ProductPageTemplate
from storefront.models.storefront_section import StorefrontSection
from storefront.normalizers.section import normalize_section, section_from_payload, section_from_row
from storefront.utils.audit import log_action
from storefront.utils.transaction import transactional


def _page_key(page_type) -> str:
    return PageType(page_type).value


def _template_sections(template: ProductPageTemplate) -> List[Section]:
    entries = template.sections or []
    return [section_from_payload(entry, position=index) for index, entry in enumerate(entries)]


class SqlSectionGateway(SectionGateway):
    """
    Section storage on top of Flask-SQLAlchemy.

    Page sections are rows in `storefront_sections`; template sections are
    an embedded JSON list on `product_page_templates`. Every database error
    surfaces as PersistenceFailure with the original error as its cause.
    """

    def __init__(self, registry=section_registry, validate_settings: bool = True):
        self.registry = registry
        self.validate_settings = validate_settings

    # ------------------------
    # Reads
    # ------------------------
    def fetch_by_page(self, merchant_id: str, page_type: PageType) -> List[Section]:
        try:
            rows = (
                StorefrontSection.query
                .filter_by(merchant_id=merchant_id, page_type=_page_key(page_type))
                .order_by(StorefrontSection.position.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceFailure(f"Could not load {_page_key(page_type)} sections") from exc

        return [section_from_row(row) for row in rows]

    def fetch_template(self, merchant_id: str, template_id: str) -> Optional[TemplateRecord]:
        try:
            template = ProductPageTemplate.query.filter_by(
                id=template_id,
                merchant_id=merchant_id,
            ).first()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceFailure(f"Could not load template {template_id}") from exc

        if template is None:
            return None

        return TemplateRecord(
            id=template.id,
            name=template.name,
            sections=_template_sections(template),
        )

    def list_templates(self, merchant_id: str) -> List[TemplateRecord]:
        try:
            templates = (
                ProductPageTemplate.query
                .filter_by(merchant_id=merchant_id)
                .order_by(ProductPageTemplate.created_at.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceFailure("Could not load templates") from exc

        return [
            TemplateRecord(id=t.id, name=t.name, sections=_template_sections(t))
            for t in templates
        ]

    # ------------------------
    # Writes
    # ------------------------
    def replace_all_by_page(
        self,
        merchant_id: str,
        page_type: PageType,
        sections: Sequence[Section],
    ) -> None:
        self._check(sections)
        page_key = _page_key(page_type)

        try:
            with transactional(f"{page_key} sections save"):
                existing = {
                    row.id: row
                    for row in StorefrontSection.query.filter_by(
                        merchant_id=merchant_id,
                        page_type=page_key,
                    ).all()
                }
                keep = {section.id for section in sections}

                for row_id, row in existing.items():
                    if row_id not in keep:
                        db.session.delete(row)

                for section in sections:
                    row = existing.get(section.id)
                    if row is None:
                        row = StorefrontSection()
                        row.id = section.id
                        row.merchant_id = merchant_id
                        row.page_type = page_key

                    row.section_type = section.type
                    row.position = section.position
                    row.is_visible = section.visible
                    row.location = section.location.value if section.location else None
                    row.settings = copy.deepcopy(section.settings)
                    db.session.add(row)

                log_action(
                    action="sections.replace",
                    entity_type="page",
                    entity_id=page_key,
                    merchant_id=merchant_id,
                    payload={"count": len(sections)},
                )
        except SQLAlchemyError as exc:
            current_app.logger.error("Saving %s sections for %s failed: %s", page_key, merchant_id, exc)
            raise PersistenceFailure(f"Could not save {page_key} sections") from exc

    def replace_template_sections(
        self,
        merchant_id: str,
        template_id: str,
        sections: Sequence[Section],
    ) -> None:
        self._check(sections)

        try:
            with transactional(f"template {template_id} save"):
                template = self._get_template(merchant_id, template_id)
                template.sections = [normalize_section(section) for section in sections]

                log_action(
                    action="template.sections.replace",
                    entity_type="template",
                    entity_id=template.id,
                    merchant_id=merchant_id,
                    payload={"count": len(sections)},
                )
        except SQLAlchemyError as exc:
            current_app.logger.error("Saving template %s failed: %s", template_id, exc)
            raise PersistenceFailure(f"Could not save template {template_id}") from exc

    def rename_template(self, merchant_id: str, template_id: str, name: str) -> None:
        name = (name or "").strip()
        if not name:
            raise ValidationFailure("Template name is required", ["name"])

        try:
            with transactional(f"template {template_id} rename"):
                template = self._get_template(merchant_id, template_id)
                previous = template.name
                template.name = name

                log_action(
                    action="template.rename",
                    entity_type="template",
                    entity_id=template.id,
                    merchant_id=merchant_id,
                    payload={"from": previous, "to": name},
                )
        except SQLAlchemyError as exc:
            raise PersistenceFailure(f"Could not rename template {template_id}") from exc

    def create_template(
        self,
        merchant_id: str,
        name: str,
        sections: Sequence[Section] = (),
    ) -> TemplateRecord:
        name = (name or "").strip()
        if not name:
            raise ValidationFailure("Template name is required", ["name"])
        self._check(sections)

        template = ProductPageTemplate()
        template.merchant_id = merchant_id
        template.name = name
        template.sections = [normalize_section(section) for section in sections]

        try:
            with transactional("template create"):
                db.session.add(template)
                db.session.flush()  # ensures template.id is available

                log_action(
                    action="template.create",
                    entity_type="template",
                    entity_id=template.id,
                    merchant_id=merchant_id,
                    payload={"name": name},
                )
        except SQLAlchemyError as exc:
            raise PersistenceFailure("Could not create template") from exc

        return TemplateRecord(id=template.id, name=template.name, sections=list(sections))

    # ------------------------
    # Helpers
    # ------------------------
    def _get_template(self, merchant_id: str, template_id: str) -> ProductPageTemplate:
        template = ProductPageTemplate.query.filter_by(
            id=template_id,
            merchant_id=merchant_id,
        ).first()

        if template is None:
            raise TemplateNotFound(template_id)
        return template

    def _check(self, sections: Sequence[Section]) -> None:
        assert_page(sections, registry=self.registry if self.validate_settings else None)


def gateway_from_config(config) -> SqlSectionGateway:
    return SqlSectionGateway(
        registry=section_registry,
        validate_settings=config.get("STOREFRONT_VALIDATE_SETTINGS", True),
    )
