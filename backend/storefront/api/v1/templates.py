from flask import g, jsonify, request
from flask_jwt_extended import jwt_required
from storefront.application.storefront.create_template import create_template
from storefront.application.storefront.rename_template import rename_template
from storefront.domain.exceptions import TemplateNotFound, ValidationFailure
from storefront.extensions import section_registry
from storefront.normalizers.template import normalize_template
from storefront.utils.decorators import merchant_required, roles_required
from .editor import current_gateway, current_sessions
from . import v1_bp


@v1_bp.route("/templates", methods=["GET"])
@jwt_required()
@merchant_required
@roles_required("admin")
def list_templates():
    templates = current_gateway().list_templates(g.current_merchant_id)

    return jsonify([
        normalize_template(t, registry=section_registry, include_sections=False)
        for t in templates
    ])


@v1_bp.route("/templates/<template_id>", methods=["GET"])
@jwt_required()
@merchant_required
@roles_required("admin")
def get_template(template_id):
    template = current_gateway().fetch_template(g.current_merchant_id, template_id)
    if template is None:
        raise TemplateNotFound(template_id)

    return jsonify(normalize_template(template, registry=section_registry))


@v1_bp.route("/templates", methods=["POST"])
@jwt_required()
@merchant_required
@roles_required("admin")
def create_template_route():
    template = create_template(
        gateway=current_gateway(),
        registry=section_registry,
        merchant_id=g.current_merchant_id,
        data=request.get_json(silent=True) or {},
    )

    return jsonify(normalize_template(template, registry=section_registry)), 201


@v1_bp.route("/templates/<template_id>/name", methods=["PUT"])
@jwt_required()
@merchant_required
@roles_required("admin")
def rename_template_route(template_id):
    data = request.get_json(silent=True) or {}

    name = data.get("name")
    if not isinstance(name, str):
        raise ValidationFailure("Template name is required", ["name"])

    new_name = rename_template(
        gateway=current_gateway(),
        sessions=current_sessions(),
        merchant_id=g.current_merchant_id,
        template_id=template_id,
        name=name,
    )

    return jsonify({"id": template_id, "name": new_name}), 200
