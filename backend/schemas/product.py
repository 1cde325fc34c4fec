# backend/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Admin create/replace payload. Required fields are checked in the route so
# a missing one is a 400 with a readable message rather than a 422.
class ProductWrite(BaseModel):
    display_name: Optional[str] = Field(None, max_length=36)
    short_name: Optional[str] = Field(None, max_length=22)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=32)
    label: Optional[str] = Field(None, max_length=20)
    price: Optional[int] = Field(None, description="Price in cents")
    product_type: Optional[str] = Field(None, max_length=12)
    product_credits: Optional[int] = Field(None, ge=0)
    partner_id: Optional[int] = None
    stripe_test: Optional[str] = None
    stripe_live: Optional[str] = None
    is_active: Optional[bool] = None
    is_upgrade: Optional[bool] = None
    is_solo_upgrade: Optional[bool] = None


# Full product representation
class ProductOut(ORMBase):
    id: int
    partner_id: Optional[int] = None
    display_name: Optional[str] = None
    short_name: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    label: Optional[str] = None
    price: int
    product_type: Optional[str] = None
    product_credits: Optional[int] = None
    is_active: bool
    is_deleted: bool
    is_upgrade: bool
    is_solo_upgrade: bool
    created_at: Optional[datetime] = None


class ProductListPage(ORMBase):
    items: List[ProductOut]
    total: int
