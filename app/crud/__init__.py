from app.crud.base import CRUDBase
from .note import note
from .tenant import tenant
from .user import user

__all__ = ["CRUDBase", "note", "tenant", "user"]
