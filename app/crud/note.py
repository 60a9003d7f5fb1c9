from datetime import timedelta
from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.database import utcnow
from app.models.note import Note


class CRUDNote(CRUDBase[Note]):
    """
    CRUD operations for Note model.

    Only title, content and updated_at are ever written after creation;
    id, tenant_id, author_id and created_at are fixed at insert.
    """

    def get_multi(self, db: Session, *, tenant_id: str) -> List[Note]:
        """
        Retrieve a tenant's notes, most recently updated first.
        """
        return super().get_multi(
            db,
            tenant_id=tenant_id,
            order_by=(Note.updated_at.desc(), Note.created_at.desc()),
        )

    def create(
        self,
        db: Session,
        *,
        tenant_id: str,
        author_id: str,
        title: str,
        content: str
    ) -> Note:
        """
        Create a new note with matching creation and update stamps.
        """
        now = utcnow()
        return super().create(
            db=db,
            obj_in={
                "author_id": author_id,
                "title": title,
                "content": content,
                "created_at": now,
                "updated_at": now,
            },
            tenant_id=tenant_id,
        )

    def update(
        self,
        db: Session,
        *,
        db_obj: Note,
        title: Optional[str] = None,
        content: Optional[str] = None
    ) -> Note:
        """
        Update title and/or content and advance updated_at.

        Note: This method assumes db_obj was already retrieved and its
        tenant authorized by the caller.
        """
        if title is not None:
            db_obj.title = title
        if content is not None:
            db_obj.content = content

        # updated_at must move forward even for two writes within one clock tick
        now = utcnow()
        if now <= db_obj.updated_at:
            now = db_obj.updated_at + timedelta(microseconds=1)
        db_obj.updated_at = now

        db.add(db_obj)
        db.flush()
        return db_obj


# Create a singleton instance
note = CRUDNote(Note)
