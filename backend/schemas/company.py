from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict
from datetime import datetime


# Shared company fields
class CompanyBase(BaseModel):
    first_name: Optional[str] = Field(None, max_length=48)
    last_name: Optional[str] = Field(None, max_length=48)
    title: Optional[str] = Field(None, max_length=48)
    website: Optional[str] = Field(None, max_length=128)
    email: Optional[str] = Field(None, max_length=128)
    phone: Optional[str] = Field(None, max_length=30)
    logo_url: Optional[str] = None
    addr1: Optional[str] = Field(None, max_length=100)
    addr2: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=60)
    state: Optional[str] = Field(None, max_length=2)
    postal_code: Optional[str] = Field(None, max_length=10)
    country_code: Optional[str] = Field(None, max_length=5)


# Schema for creating a company
class CompanyCreate(CompanyBase):
    company_name: str = Field(min_length=1, max_length=100)


# Schema for updating company information
class CompanyUpdate(CompanyBase):
    company_name: Optional[str] = Field(None, min_length=1, max_length=100)


# Schema for displaying company details
class CompanyOut(CompanyBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    company_name: str
    created_at: Optional[datetime] = None


class ContactCreate(BaseModel):
    first_name: Optional[str] = Field(None, max_length=48)
    last_name: Optional[str] = Field(None, max_length=48)
    title: Optional[str] = Field(None, max_length=48)
    email: Optional[str] = Field(None, max_length=128)
    phone: Optional[str] = Field(None, max_length=30)
    is_primary: bool = False


class ContactOut(ContactCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str


# Brand credit balances for one company
class CompanyCredits(BaseModel):
    company_id: int
    balance: int
    by_type: Dict[str, int]
