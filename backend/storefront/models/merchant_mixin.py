from storefront.extensions import db

class MerchantMixin:
    # Merchants live in the accounts service; only their id is stored here
    merchant_id = db.Column(
        db.String(36),
        nullable=False,
        index=True
    )
