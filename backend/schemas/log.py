from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional
from datetime import datetime


# One audit entry; user_email is resolved from the joined account
class LogEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ts: datetime
    user_id: Optional[int] = None
    user_email: Optional[str] = None
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    meta: Optional[Any] = None


class LogPage(BaseModel):
    items: List[LogEntryOut]
    total: int
    page: int
    page_size: int
