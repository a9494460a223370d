from flask import current_app, jsonify, request
from storefront.domain.sections.factory import SectionFactory
from storefront.domain.sections.resolver import resolve_page_sections, resolve_product_sections
from storefront.extensions import section_registry
from storefront.normalizers.section import normalize_section
from .editor import current_gateway
from .section_types import parse_page_type
from . import v1_bp


def _renderable(resolution):
    """Visible sections whose type something can render; the rest are skipped."""
    sections = []
    for section in resolution.sections:
        if section_registry.lookup(section.type) is None:
            current_app.logger.warning("Skipping section %s of unknown type %s", section.id, section.type)
            continue
        if section.visible:
            sections.append(normalize_section(section, registry=section_registry))
    return sections


def _resolution_response(resolution):
    return jsonify({
        "source": resolution.source,
        "template_name": resolution.template_name,
        "degraded": bool(resolution.failures),
        "sections": _renderable(resolution)
    })


@v1_bp.route("/storefront/<merchant_id>/pages/<page_type>", methods=["GET"])
def get_storefront_page(merchant_id, page_type):
    resolution = resolve_page_sections(
        current_gateway(),
        SectionFactory(section_registry),
        merchant_id,
        parse_page_type(page_type),
    )
    return _resolution_response(resolution)


@v1_bp.route("/storefront/<merchant_id>/products/sections", methods=["GET"])
def get_product_sections(merchant_id):
    resolution = resolve_product_sections(
        current_gateway(),
        SectionFactory(section_registry),
        merchant_id,
        request.args.get("template_id") or None,
    )
    return _resolution_response(resolution)
