from typing import Generic, TypeVar, Type, Optional, List, Any, Dict, Sequence
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from app.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """
    Generic CRUD class for tenant-owned records.

    Reads by tenant always filter on ``tenant_id``. The single-record ``get``
    is deliberately unscoped: callers must authorize tenant access against
    the returned record's ``tenant_id`` before exposing it.

    Methods flush but never commit; the surrounding ``Store.transaction()``
    owns the commit.

    Type Parameters:
        ModelType: SQLAlchemy model class with ``id`` and ``tenant_id`` columns
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize CRUD object with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def get(self, db: Session, id: str) -> Optional[ModelType]:
        """
        Retrieve a single record by ID.

        Args:
            db: Database session
            id: Record ID

        Returns:
            Model instance or None if not found
        """
        stmt = select(self.model).where(self.model.id == id)
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def get_multi(
        self,
        db: Session,
        *,
        tenant_id: str,
        order_by: Sequence[Any] = ()
    ) -> List[ModelType]:
        """
        Retrieve every record belonging to a tenant.

        Args:
            db: Database session
            tenant_id: Tenant slug for isolation
            order_by: Column expressions to sort by

        Returns:
            List of model instances belonging to tenant
        """
        stmt = (
            select(self.model)
            .where(self.model.tenant_id == tenant_id)
            .order_by(*order_by)
        )
        result = db.execute(stmt)
        return list(result.scalars().all())

    def count(self, db: Session, *, tenant_id: str) -> int:
        stmt = select(func.count()).select_from(self.model).where(
            self.model.tenant_id == tenant_id
        )
        return db.execute(stmt).scalar_one()

    def create(
        self,
        db: Session,
        *,
        obj_in: Dict[str, Any],
        tenant_id: str
    ) -> ModelType:
        """
        Create a new record with tenant association.

        Args:
            db: Database session
            obj_in: Column values for the new record
            tenant_id: Tenant slug for isolation

        Returns:
            Created model instance
        """
        db_obj = self.model(tenant_id=tenant_id, **obj_in)
        db.add(db_obj)
        db.flush()
        return db_obj

    def delete(self, db: Session, *, db_obj: ModelType) -> ModelType:
        """
        Delete a record previously loaded (and authorized) by the caller.

        Args:
            db: Database session
            db_obj: Model instance to delete

        Returns:
            The deleted instance
        """
        db.delete(db_obj)
        db.flush()
        return db_obj
