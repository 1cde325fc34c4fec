from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from database import Base


# Append-only credit ledger row.
# Positive rows are grants, negative rows consume a credit for the release in pr_id.
# company_id NULL means a user-level credit not tied to a brand.
class BrandCredit(Base):
    __tablename__ = "brand_credits"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey("company.id"), nullable=True, index=True)
    pr_id = Column(Integer, ForeignKey("releases.id"), nullable=True, index=True)
    credits = Column(Integer, default=0, nullable=False)
    product_type = Column(String(36), nullable=True)
    notes = Column(String(48), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
