from pydantic import BaseModel
from app.models.user import UserRole

class UserSummary(BaseModel):
    id: str
    email: str
    name: str
    role: UserRole
    tenant_id: str

    class Config:
        from_attributes = True
