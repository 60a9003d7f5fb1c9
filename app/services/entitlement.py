from dataclasses import dataclass
from app.core.authorization import require_role
from app.core.exceptions import (
    AlreadyProError,
    CrossTenantUpgradeError,
    NoteLimitExceededError,
    TenantNotFoundError,
)
from app.core.logging_config import logger
from app.crud import tenant as tenant_crud
from app.database import Store
from app.models.tenant import Tenant, PlanType, UNLIMITED_NOTES
from app.models.user import UserRole
from app.schemas.auth import Principal
from app.schemas.note import Usage


@dataclass(frozen=True)
class CreateAllowance:
    allowed: bool
    remaining: int  # UNLIMITED_NOTES when the plan has no cap


class EntitlementService:
    """
    Plan-gating rules.

    Limit decisions are pure functions of the tenant row and the current note
    count. Callers that act on a decision (note creation) must read both and
    insert inside the same ``Store.transaction()``.
    """

    def check_create_allowed(self, tenant: Tenant, current_count: int) -> CreateAllowance:
        """
        Decide whether one more note fits the tenant's plan.

        Args:
            tenant: Tenant row read in the caller's transaction
            current_count: Number of notes the tenant holds right now

        Returns:
            Allowance with the number of notes still available
        """
        if tenant.is_unlimited:
            return CreateAllowance(allowed=True, remaining=UNLIMITED_NOTES)

        remaining = max(tenant.note_limit - current_count, 0)
        return CreateAllowance(allowed=current_count < tenant.note_limit, remaining=remaining)

    def usage(self, tenant: Tenant, current_count: int) -> Usage:
        allowance = self.check_create_allowed(tenant, current_count)
        return Usage(
            current=current_count,
            limit=tenant.note_limit,
            can_create_more=allowance.allowed,
            plan=tenant.plan,
        )

    def ensure_can_create(self, tenant: Tenant, current_count: int) -> None:
        """
        Raises:
            NoteLimitExceededError: With usage context, if the tenant is at its limit
        """
        if self.check_create_allowed(tenant, current_count).allowed:
            return

        logger.warning(
            f"Note limit reached: tenant={tenant.slug}, current={current_count}, "
            f"limit={tenant.note_limit}"
        )
        raise NoteLimitExceededError(
            usage={
                "current": current_count,
                "limit": tenant.note_limit,
                "plan": tenant.plan.value,
                "upgrade_required": True,
            }
        )

    def upgrade(self, store: Store, tenant_slug: str, principal: Principal) -> Tenant:
        """
        Move a tenant from free to pro.

        Args:
            store: Datastore
            tenant_slug: Tenant to upgrade
            principal: Requesting principal

        Returns:
            Upgraded Tenant instance

        Raises:
            InsufficientPermissionsError: Requester is not an Admin
            CrossTenantUpgradeError: Requester belongs to another tenant
            TenantNotFoundError: Slug does not resolve to an active tenant
            AlreadyProError: Tenant is already on the pro plan
        """
        require_role(principal, UserRole.admin)

        if principal.tenant_slug != tenant_slug:
            logger.warning(
                f"Cross-tenant upgrade attempt: user_id={principal.user_id}, "
                f"own_tenant={principal.tenant_slug}, target={tenant_slug}"
            )
            raise CrossTenantUpgradeError()

        with store.transaction() as db:
            tenant = tenant_crud.get_active(db, tenant_slug)
            if tenant is None:
                raise TenantNotFoundError()

            if tenant.plan == PlanType.pro:
                raise AlreadyProError()

            tenant = tenant_crud.set_pro_plan(db, db_obj=tenant)

        logger.info(f"Tenant upgraded to pro: tenant={tenant_slug}, by user_id={principal.user_id}")
        return tenant


# Create a singleton instance
entitlement_service = EntitlementService()
