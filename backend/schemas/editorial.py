from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime


# Editor claims a queued release
class QueueCheckout(BaseModel):
    queue_id: int
    editor_id: int
    editor_name: str = Field("", max_length=32)


class QueueRelease(BaseModel):
    queue_id: int


class ReviewRequest(BaseModel):
    release_id: int
    queue_id: int
    action: Literal["approve", "reject"]
    notes: Optional[str] = None
    editor_id: int
    editor_name: str = Field("", max_length=32)


class ReviewResult(BaseModel):
    success: bool = True
    action: Literal["approved", "rejected"]


# Row of the editorial queue listing
class QueueItemOut(BaseModel):
    queue_id: int
    queue_uuid: str
    release_id: int
    release_uuid: str
    title: Optional[str] = None
    company_name: Optional[str] = None
    excerpt: str = ""
    submitted: Optional[datetime] = None
    checkedout: Optional[datetime] = None
    editor_id: Optional[int] = None
    editor_name: Optional[str] = None
