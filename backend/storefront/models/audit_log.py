from sqlalchemy import event
from storefront.extensions import db
from .base import BaseModel
from .merchant_mixin import MerchantMixin


class AuditLog(BaseModel, MerchantMixin):
    """One row per persisted storefront change: section saves, template creation and renames."""
    __tablename__ = "audit_logs"

    __table_args__ = (
        db.Index("ix_audit_merchant_entity", "merchant_id", "entity_type", "entity_id"),
        db.Index("ix_audit_merchant_created", "merchant_id", "created_at"),
    )

    # Null when the change did not come from an authenticated request
    actor_id = db.Column(db.String(36), nullable=True)
    action = db.Column(db.String(50), nullable=False, index=True)

    entity_type = db.Column(db.String(50), nullable=False)  # page, template
    entity_id = db.Column(db.String(36), nullable=False)  # page type or template id

    payload = db.Column(db.JSON, nullable=False, default=dict)


@event.listens_for(AuditLog, "before_update")
@event.listens_for(AuditLog, "before_delete")
def prevent_audit_mutation(mapper, connection, target):
    raise RuntimeError("Audit logs are immutable")
