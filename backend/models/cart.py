# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime, func
from sqlalchemy.orm import relationship
from database import Base

# One checkout attempt; draft until a confirmed payment completes it
class CartSession(Base):
    __tablename__ = "cart_sessions"

    id = Column(Integer, primary_key=True, index=True)
    session_uuid = Column(String(36), unique=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    partner_id = Column(Integer, nullable=False)
    status = Column(String(20), default="draft", nullable=False, index=True) # draft / completed

    # Amounts in cents
    subtotal = Column(Integer, default=0, nullable=False)
    tax_amount = Column(Integer, default=0, nullable=False)
    total_amount = Column(Integer, default=0, nullable=False)

    # Stripe references
    stripe_checkout_session_id = Column(String(128), nullable=True)
    stripe_payment_intent_id = Column(String(128), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    payment_attempted_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    items = relationship("CartItem", back_populates="session", order_by="CartItem.id")
    transactions = relationship("CartTransaction", back_populates="session", order_by="CartTransaction.id")


# A line item; product attributes are copied at purchase time, not joined live
class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("cart_sessions.id"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)

    # Product snapshot
    product_name = Column(String(128), nullable=False)
    product_type = Column(String(20), nullable=False)
    product_credits = Column(Integer, nullable=True)
    unit_price = Column(Integer, nullable=False)
    quantity = Column(Integer, default=1, nullable=False)
    total_price = Column(Integer, nullable=False)
    stripe_price_id = Column(String(128), nullable=True)

    added_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    session = relationship("CartSession", back_populates="items")
    product = relationship("Product")


# Append-only outcome of a payment attempt; a session may collect several
class CartTransaction(Base):
    __tablename__ = "cart_transactions"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("cart_sessions.id"), index=True, nullable=False)
    transaction_type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False) # succeeded / failed
    amount = Column(Integer, nullable=False)
    currency = Column(String(3), default="usd", nullable=False)

    stripe_event_id = Column(String(128), nullable=True)
    stripe_payment_intent_id = Column(String(128), nullable=True)
    error_code = Column(String(50), nullable=True)
    error_message = Column(Text, nullable=True)
    customer_email = Column(String(256), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    processed_at = Column(DateTime(timezone=True), nullable=True)

    session = relationship("CartSession", back_populates="transactions")
