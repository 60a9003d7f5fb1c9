from pydantic import BaseModel, field_validator
from app.models.user import UserRole
from app.schemas.tenant import TenantSummary
from app.schemas.user import UserSummary


class LoginRequest(BaseModel):
    # Plain str rather than EmailStr: the seeded accounts use the reserved
    # ".test" TLD, which email-validator rejects.
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        local, _, domain = v.partition("@")
        if not local or not domain:
            raise ValueError("Valid email is required")
        return v

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSummary
    tenant: TenantSummary


class Principal(BaseModel):
    """
    Authenticated identity derived from a verified token.

    Every authorization decision is taken against these claims; the
    ``tenant_slug`` claim is the anchor for tenant isolation.
    """
    user_id: str
    email: str
    role: UserRole
    tenant_slug: str
    issued_at: float
    expires_at: float

    class Config:
        frozen = True

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin
