from datetime import datetime, timezone
from storefront.domain.sections.ids import generate_section_id
from storefront.extensions import db


def utc_now():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    """
    Common columns for every storefront table.

    Ids are UUID strings drawn from the same generator as section ids, so
    a section row can keep the id it was given in the editor.
    """
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=generate_section_id)
    created_at = db.Column(db.DateTime(timezone=True), default=utc_now, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def __init__(self, **kwargs):
        # Explicit so type checkers accept column keyword arguments
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<{type(self).__name__} {self.id}>"
