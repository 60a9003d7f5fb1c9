import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 50000

class Note(Base):
    __tablename__ = "note"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String, ForeignKey("tenant.slug", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String, ForeignKey("user.id"), nullable=False)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    # Set explicitly by CRUDNote so created_at == updated_at on insert
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False, index=True)

    tenant = relationship("Tenant", back_populates="notes")
