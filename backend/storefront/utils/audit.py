from flask import g, has_app_context
from storefront.extensions import db
from storefront.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    merchant_id: Optional[str] = None,
    payload: dict | None = None
):
    if not has_app_context():
        return

    merchant_id = merchant_id or getattr(g, "current_merchant_id", None)
    if not merchant_id:
        return  # Skip logging outside a merchant context

    log = AuditLog()

    log.actor_id = getattr(g, "current_user_id", None)
    log.merchant_id = merchant_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    db.session.add(log)
