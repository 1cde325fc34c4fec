from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Literal, Optional
from datetime import datetime


class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Content fields shared by create and update
class ReleaseContent(BaseModel):
    title: Optional[str] = Field(None, max_length=180)
    abstract: Optional[str] = None
    body: Optional[str] = None
    pullquote: Optional[str] = None
    location: Optional[str] = Field(None, max_length=120)
    timezone: Optional[str] = Field(None, max_length=32)
    release_at: Optional[datetime] = None


class ReleaseCreate(ReleaseContent):
    company_id: Optional[int] = None


class ReleaseUpdate(ReleaseContent):
    pass


# Suggested replacement for part of the body
class ApplyEditRequest(BaseModel):
    original_text: Optional[str] = None
    improved_text: Optional[str] = None


class ReleaseNoteOut(ORMBase):
    id: int
    from_id: int
    from_name: Optional[str] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None


class QueueOut(ORMBase):
    id: int
    uuid: str
    release_id: int
    editor_id: Optional[int] = None
    editor_name: Optional[str] = None
    submitted: Optional[datetime] = None
    checkedout: Optional[datetime] = None
    approved: Optional[datetime] = None
    returned: Optional[datetime] = None


class ReleaseOut(ORMBase):
    id: int
    uuid: str
    company_id: int
    title: Optional[str] = None
    slug: Optional[str] = None
    abstract: Optional[str] = None
    body: Optional[str] = None
    pullquote: Optional[str] = None
    location: Optional[str] = None
    timezone: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    release_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None


class ReleaseDetail(ReleaseOut):
    queue: Optional[QueueOut] = None
    notes: List[ReleaseNoteOut] = []


class ReleaseCreated(BaseModel):
    id: int
    uuid: str


# Upgrade products offered on the distribution step
class DistributionProduct(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: int
    price_display: str
    type: str
    icon: Optional[str] = None
    label: Optional[str] = None
    is_solo_upgrade: bool = False


class DistributionInfo(BaseModel):
    distribution: Optional[str] = None
    credit_balance: Dict[str, int] = {}
    products: List[DistributionProduct] = []


class DistributionRequest(BaseModel):
    action: Literal["use_credit", "skip"]
    product_type: Optional[str] = Field(None, max_length=12)


class DistributionResult(BaseModel):
    success: bool = True
    distribution: str


# Stakeholder approvals
class PriorApprover(BaseModel):
    email: str = Field(max_length=128)
    email_to: Optional[str] = Field(None, max_length=64)


class ApprovalCreate(BaseModel):
    email: Optional[str] = Field(None, max_length=128)
    email_to: Optional[str] = Field(None, max_length=64)
    notes: Optional[str] = None
    prior_approvers: List[PriorApprover] = []


class ApprovalOut(ORMBase):
    id: int
    uuid: str
    release_id: int
    email: Optional[str] = None
    email_to: Optional[str] = None
    notes: Optional[str] = None
    signature: Optional[str] = None
    feedback: Optional[str] = None
    approved: bool
    requested_at: Optional[datetime] = None
    signed_at: Optional[datetime] = None


class ApprovalList(BaseModel):
    approvals: List[ApprovalOut]
    prior_approvers: List[PriorApprover]


class ApprovalCreated(BaseModel):
    success: bool = True
    approvals: List[ApprovalOut]


# Answer submitted through the public approval link
class ApprovalResponse(BaseModel):
    signature: Optional[str] = Field(None, max_length=64)
    feedback: Optional[str] = None
    approved: bool = False
