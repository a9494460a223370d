# storefront/api/v1/editor.py
from contextlib import contextmanager
from flask import current_app, g, jsonify, request
from flask_jwt_extended import jwt_required
from storefront.domain.exceptions import ValidationFailure
from storefront.extensions import section_registry
from storefront.normalizers.editor import normalize_session
from storefront.normalizers.section import normalize_section
from storefront.persistence.sql_gateway import gateway_from_config
from storefront.utils.decorators import merchant_required, roles_required
from .section_types import parse_page_type
from . import v1_bp


def current_gateway():
    return gateway_from_config(current_app.config)


def current_sessions():
    return current_app.extensions["editor_sessions"]


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailure("Request body must be a JSON object")
    return data


def _session(session_id):
    return current_sessions().get(session_id, g.current_merchant_id)


@contextmanager
def _exclusive(session_id):
    """Looks up the session and holds it until the response is built."""
    session = _session(session_id)
    with session.exclusive():
        yield session


def _session_response(session, status=200):
    return jsonify(normalize_session(session, registry=section_registry)), status


# ------------------------
# Sessions
# ------------------------
@v1_bp.route("/editor/sessions", methods=["POST"])
@jwt_required()
@merchant_required
@roles_required("admin")
def open_session():
    data = _json_body()
    sessions = current_sessions()

    if data.get("template_id"):
        session = sessions.open_template(
            gateway=current_gateway(),
            registry=section_registry,
            merchant_id=g.current_merchant_id,
            template_id=str(data["template_id"]),
        )
    else:
        session = sessions.open_page(
            gateway=current_gateway(),
            registry=section_registry,
            merchant_id=g.current_merchant_id,
            page_type=parse_page_type(data.get("page_type", "home")),
        )

    if session.load_failures:
        current_app.logger.warning(
            "Editor session %s seeded from %s after failures: %s",
            session.id,
            session.source,
            session.load_failures,
        )

    return _session_response(session, 201)


@v1_bp.route("/editor/sessions/<session_id>", methods=["GET"])
@jwt_required()
@merchant_required
@roles_required("admin")
def get_session(session_id):
    return _session_response(_session(session_id))


@v1_bp.route("/editor/sessions/<session_id>", methods=["DELETE"])
@jwt_required()
@merchant_required
@roles_required("admin")
def close_session(session_id):
    with _exclusive(session_id) as session:
        current_sessions().close(session.id, g.current_merchant_id)

    return jsonify({
        "message": "Editor session closed",
        "discarded_changes": session.store.is_dirty
    }), 200


# ------------------------
# Section mutations
# ------------------------
@v1_bp.route("/editor/sessions/<session_id>/sections", methods=["POST"])
@jwt_required()
@merchant_required
@roles_required("admin")
def add_section(session_id):
    data = _json_body()

    section_type = data.get("type")
    if not section_type:
        raise ValidationFailure("Section type is required", ["type"])

    with _exclusive(session_id) as session:
        section = session.store.add(section_type, data.get("index"))

        return jsonify({
            "section": normalize_section(section, registry=section_registry),
            "session": normalize_session(session, registry=section_registry)
        }), 201


@v1_bp.route("/editor/sessions/<session_id>/sections/<section_id>", methods=["DELETE"])
@jwt_required()
@merchant_required
@roles_required("admin")
def remove_section(session_id, section_id):
    with _exclusive(session_id) as session:
        session.store.remove(section_id)
        return _session_response(session)


@v1_bp.route("/editor/sessions/<session_id>/sections/<section_id>", methods=["PATCH"])
@jwt_required()
@merchant_required
@roles_required("admin")
def update_section(session_id, section_id):
    changes = _json_body()

    with _exclusive(session_id) as session:
        session.store.update_section(section_id, changes)
        return _session_response(session)


@v1_bp.route("/editor/sessions/<session_id>/sections/<section_id>/settings", methods=["PATCH"])
@jwt_required()
@merchant_required
@roles_required("admin")
def update_section_setting(session_id, section_id):
    data = _json_body()

    key = data.get("key")
    if not key or "value" not in data:
        raise ValidationFailure("Both key and value are required", ["key", "value"])

    with _exclusive(session_id) as session:
        session.store.update_setting(section_id, str(key), data["value"])
        return _session_response(session)


@v1_bp.route("/editor/sessions/<session_id>/sections/<section_id>/visibility", methods=["POST"])
@jwt_required()
@merchant_required
@roles_required("admin")
def toggle_section_visibility(session_id, section_id):
    with _exclusive(session_id) as session:
        session.store.toggle_visibility(section_id)
        return _session_response(session)


@v1_bp.route("/editor/sessions/<session_id>/sections/<section_id>/duplicate", methods=["POST"])
@jwt_required()
@merchant_required
@roles_required("admin")
def duplicate_section(session_id, section_id):
    with _exclusive(session_id) as session:
        clone = session.store.duplicate(section_id)

        return jsonify({
            "section": normalize_section(clone, registry=section_registry),
            "session": normalize_session(session, registry=section_registry)
        }), 201


@v1_bp.route("/editor/sessions/<session_id>/reorder", methods=["POST"])
@jwt_required()
@merchant_required
@roles_required("admin")
def reorder_sections(session_id):
    data = _json_body()

    if "from_index" not in data or "to_index" not in data:
        raise ValidationFailure("from_index and to_index are required", ["from_index", "to_index"])

    with _exclusive(session_id) as session:
        session.store.reorder(data["from_index"], data["to_index"])
        return _session_response(session)


# ------------------------
# Save / reset
# ------------------------
@v1_bp.route("/editor/sessions/<session_id>/save", methods=["POST"])
@jwt_required()
@merchant_required
@roles_required("admin")
def save_session(session_id):
    with _exclusive(session_id) as session:
        # Failures propagate to the error handlers; the working copy stays intact
        saved = session.store.save()

        return jsonify({
            "saved": saved,
            "session": normalize_session(session, registry=section_registry)
        }), 200


@v1_bp.route("/editor/sessions/<session_id>/reset", methods=["POST"])
@jwt_required()
@merchant_required
@roles_required("admin")
def reset_session(session_id):
    with _exclusive(session_id) as session:
        session.store.reset()
        return _session_response(session)
