import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from app.database import Base, TimestampMixin

# note_limit sentinel for plans without a note cap
UNLIMITED_NOTES = -1

class PlanType(str, enum.Enum):
    free = "free"
    pro = "pro"

class Tenant(Base, TimestampMixin):
    __tablename__ = "tenant"

    slug = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    plan = Column(Enum(PlanType), nullable=False, default=PlanType.free)
    note_limit = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    upgraded_at = Column(DateTime, nullable=True)

    users = relationship("User", back_populates="tenant")
    notes = relationship("Note", back_populates="tenant")

    @property
    def is_unlimited(self) -> bool:
        return self.plan == PlanType.pro or self.note_limit == UNLIMITED_NOTES
