from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class InfluencerWrite(BaseModel):
    name: Optional[str] = Field(None, max_length=64)
    bio: Optional[str] = None
    cell: Optional[str] = Field(None, max_length=20)
    altemail: Optional[str] = Field(None, max_length=128)
    avatar: Optional[str] = None


class InfluencerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: str
    user_id: int
    name: Optional[str] = None
    bio: Optional[str] = None
    cell: Optional[str] = None
    altemail: Optional[str] = None
    avatar: Optional[str] = None
    completed_jobs: int = 0
