from flask import jsonify, request
from flask_jwt_extended import jwt_required
from storefront.domain.exceptions import ValidationFailure
from storefront.domain.sections.types import PAGE_TYPE_CONFIG, PageType
from storefront.extensions import section_registry
from storefront.utils.decorators import merchant_required
from . import v1_bp


def parse_page_type(raw, required=True):
    if raw is None and not required:
        return None
    page_type = PageType.parse(raw)
    if page_type is None:
        raise ValidationFailure(
            f"Invalid page type: {raw}",
            [f"page_type must be one of {[p.value for p in PageType]}"],
        )
    return page_type


@v1_bp.route("/section-types", methods=["GET"])
@jwt_required()
@merchant_required
def list_section_types():
    page_type = parse_page_type(request.args.get("page_type"), required=False)

    return jsonify([
        descriptor.to_dict()
        for descriptor in section_registry.descriptors(page_type)
    ])


@v1_bp.route("/page-types", methods=["GET"])
def list_page_types():
    return jsonify([
        {"type": page_type.value, **config}
        for page_type, config in PAGE_TYPE_CONFIG.items()
    ])
