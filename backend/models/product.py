# backend/models/product.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, CheckConstraint, func
from database import Base

# Model Product
# A purchasable credit bundle or upgrade in the catalog.
# Prices are integer minor currency units (cents).
# Products are never removed: DELETE only sets is_deleted so old cart items stay valid.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    partner_id = Column(Integer, nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    short_name = Column(String(22), nullable=True)
    display_name = Column(String(36), nullable=True)
    description = Column(Text, nullable=True)
    label = Column(String(20), nullable=True)
    icon = Column(String(32), nullable=True)

    # Stripe catalog references
    stripe_test = Column(String(64), nullable=True)
    stripe_live = Column(String(64), nullable=True)

    price = Column(Integer, CheckConstraint("price >= 0"), nullable=False)
    partner_share = Column(Integer, default=0, nullable=False)

    # What a purchase grants: pr / credits / enhanced / newsdb ...
    product_type = Column(String(12), nullable=True, index=True)
    product_credits = Column(Integer, nullable=True)

    is_deleted = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    is_upgrade = Column(Boolean, default=False, nullable=False)
    is_solo_upgrade = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
