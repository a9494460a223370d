from storefront.extensions import db
from .base import BaseModel
from .merchant_mixin import MerchantMixin

class StorefrontSection(BaseModel, MerchantMixin):
    __tablename__ = "storefront_sections"

    page_type = db.Column(db.String(20), nullable=False)  # home, catalog, product
    section_type = db.Column(db.String(100), nullable=False)  # hero, newsletter, ...
    position = db.Column(db.Integer, nullable=False, default=0)
    is_visible = db.Column(db.Boolean, nullable=False, default=True)
    location = db.Column(db.String(20), nullable=True)
    # Older rows hold settings as a serialized JSON string
    settings = db.Column(db.JSON, default=dict)

    __table_args__ = (
        db.Index("idx_section_merchant_page_position", "merchant_id", "page_type", "position"),
    )
