import enum
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.database import Base, TimestampMixin

class UserRole(str, enum.Enum):
    admin = "Admin"
    member = "Member"

class User(Base, TimestampMixin):
    __tablename__ = "user"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.member)
    tenant_id = Column(String, ForeignKey("tenant.slug", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime, nullable=True)

    tenant = relationship("Tenant", back_populates="users")
