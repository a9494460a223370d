from storefront.extensions import db
from .base import BaseModel
from .merchant_mixin import MerchantMixin

class ProductPageTemplate(BaseModel, MerchantMixin):
    __tablename__ = "product_page_templates"

    name = db.Column(db.String(200), nullable=False)
    # Embedded, ordered section list; independent of the merchant's product page
    sections = db.Column(db.JSON, nullable=False, default=list)

    __table_args__ = (
        db.Index("idx_template_merchant", "merchant_id", "created_at"),
    )
