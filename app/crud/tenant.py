from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.database import utcnow
from app.models.tenant import Tenant, PlanType, UNLIMITED_NOTES


class CRUDTenant:
    """
    CRUD operations for Tenant model.

    Note: Tenant model doesn't have tenant_id (it IS the tenant),
    so we don't inherit from CRUDBase.
    """

    def __init__(self):
        self.model = Tenant

    def get(self, db: Session, slug: str) -> Optional[Tenant]:
        stmt = select(Tenant).where(Tenant.slug == slug)
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def get_active(self, db: Session, slug: str) -> Optional[Tenant]:
        tenant = self.get(db, slug)
        if tenant is None or not tenant.is_active:
            return None
        return tenant

    def create(
        self,
        db: Session,
        *,
        slug: str,
        name: str,
        note_limit: int,
        plan: PlanType = PlanType.free
    ) -> Tenant:
        """
        Create a tenant.

        Args:
            db: Database session
            slug: Unique tenant identifier
            name: Display name
            note_limit: Maximum notes on the free plan
            plan: Initial plan; pro tenants are always unlimited

        Returns:
            Created Tenant instance
        """
        if plan == PlanType.pro:
            note_limit = UNLIMITED_NOTES
        elif note_limit < 0:
            raise ValueError("Free plan note limit must be zero or more")

        tenant = Tenant(slug=slug, name=name, plan=plan, note_limit=note_limit, is_active=True)
        db.add(tenant)
        db.flush()
        return tenant

    def set_pro_plan(self, db: Session, *, db_obj: Tenant) -> Tenant:
        """
        Move a tenant to the pro plan. There is no reverse operation.
        """
        db_obj.plan = PlanType.pro
        db_obj.note_limit = UNLIMITED_NOTES
        db_obj.upgraded_at = utcnow()
        db.add(db_obj)
        db.flush()
        return db_obj


# Create singleton instance
tenant = CRUDTenant()
