from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime

# Request schema for starting a checkout
class CheckoutRequest(BaseModel):
    product_id: int

# Response schema: Stripe-hosted checkout page
class CheckoutResponse(BaseModel):
    url: Optional[str]

# Snapshot line item of a cart session
class CartItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    product_name: str
    product_type: str
    product_credits: Optional[int] = None
    unit_price: int
    quantity: int
    total_price: int

# Payment attempt outcome
class CartTransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    amount: int
    currency: str
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    processed_at: Optional[datetime] = None

class CartSessionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    session_uuid: str
    status: str
    subtotal: int
    tax_amount: int
    total_amount: int
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    items: List[CartItemOut]
    transactions: List[CartTransactionOut]
