from datetime import datetime
from pydantic import BaseModel, field_validator
from typing import Optional
from app.models.tenant import PlanType
from app.schemas.common import as_utc

class TenantSummary(BaseModel):
    slug: str
    name: str
    plan: PlanType
    note_limit: int

    class Config:
        from_attributes = True

class TenantResponse(TenantSummary):
    is_active: bool
    upgraded_at: Optional[datetime] = None

    @field_validator("upgraded_at")
    @classmethod
    def serialize_upgraded_at(cls, v):
        return as_utc(v)
