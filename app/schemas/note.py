from datetime import datetime
from pydantic import BaseModel, field_validator
from typing import List, Optional
from app.models.tenant import PlanType
from app.schemas.common import as_utc

class NoteCreate(BaseModel):
    title: str
    content: str

class NoteUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None

class NoteResponse(BaseModel):
    id: str
    title: str
    content: str
    tenant_id: str
    author_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @field_validator("created_at", "updated_at")
    @classmethod
    def serialize_timestamps(cls, v):
        return as_utc(v)

class Usage(BaseModel):
    current: int
    limit: int
    can_create_more: bool
    plan: PlanType

class NoteListResponse(BaseModel):
    notes: List[NoteResponse]
    count: int
    usage: Usage
