from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# Shared properties for user models
class UserBase(BaseModel):
    email: str

# Subscription counters
class SubscriptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    remaining_pr: int = 0
    remaining_pluspr: int = 0
    newsdb_credits: int = 0

# Output schema for user profile details
class UserResponse(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_admin: bool = False
    is_staff: bool = False
    is_editor: bool = False

# Caller profile with resolved permissions
class MeResponse(UserResponse):
    permissions: List[str]
    subscription: SubscriptionOut
    credit_balance: int

class UserDetail(UserResponse):
    subscription: SubscriptionOut
    credit_balance: int

# Schema for administrative user updates
class UserAdminUpdate(BaseModel):
    first_name: Optional[str] = Field(None, max_length=48)
    last_name: Optional[str] = Field(None, max_length=48)
    is_admin: Optional[bool] = None
    is_staff: Optional[bool] = None
    is_editor: Optional[bool] = None
    newsdb_credits: Optional[int] = Field(None, ge=0)

# Admin grant (positive) or removal (negative) of ledger credits
class CreditGrant(BaseModel):
    credits: int
    company_id: Optional[int] = None
    product_type: str = Field("pr", max_length=36)
    notes: Optional[str] = Field(None, max_length=48)

class CreditGrantResult(BaseModel):
    id: int
    credits: int
    company_id: Optional[int] = None
    balance: int
