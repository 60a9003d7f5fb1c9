import pytest

from app.core.exceptions import (
    AlreadyProError,
    CrossTenantUpgradeError,
    InsufficientPermissionsError,
    NoteLimitExceededError,
)
from app.crud import tenant as tenant_crud
from app.models.tenant import Tenant, PlanType, UNLIMITED_NOTES
from app.services.entitlement import entitlement_service


def _free(limit=3):
    return Tenant(slug="acme", name="Acme", plan=PlanType.free, note_limit=limit)


def _pro():
    return Tenant(slug="acme", name="Acme", plan=PlanType.pro, note_limit=UNLIMITED_NOTES)


@pytest.mark.parametrize("count,allowed,remaining", [(0, True, 3), (2, True, 1), (3, False, 0), (5, False, 0)])
def test_free_plan_allows_below_limit(count, allowed, remaining):
    allowance = entitlement_service.check_create_allowed(_free(), count)
    assert allowance.allowed is allowed
    assert allowance.remaining == remaining


def test_pro_plan_is_unlimited():
    allowance = entitlement_service.check_create_allowed(_pro(), 10_000)
    assert allowance.allowed is True
    assert allowance.remaining == UNLIMITED_NOTES


def test_zero_limit_never_allows():
    assert not entitlement_service.check_create_allowed(_free(limit=0), 0).allowed


def test_usage_summary():
    usage = entitlement_service.usage(_free(), 3)
    assert usage.current == 3
    assert usage.limit == 3
    assert usage.can_create_more is False
    assert usage.plan == PlanType.free


def test_ensure_can_create_carries_usage_context():
    with pytest.raises(NoteLimitExceededError) as exc_info:
        entitlement_service.ensure_can_create(_free(), 3)

    body = exc_info.value.to_dict()
    assert body["error"] == "NOTE_LIMIT_EXCEEDED"
    assert body["usage"] == {"current": 3, "limit": 3, "plan": "free", "upgrade_required": True}


def test_upgrade_moves_tenant_to_pro(store, acme_admin):
    tenant = entitlement_service.upgrade(store, "acme", acme_admin)

    assert tenant.plan == PlanType.pro
    assert tenant.note_limit == UNLIMITED_NOTES
    assert tenant.upgraded_at is not None

    with store.transaction() as db:
        stored = tenant_crud.get(db, "acme")
        assert stored.plan == PlanType.pro
        assert stored.note_limit == UNLIMITED_NOTES


def test_upgrade_is_one_way(store, acme_admin):
    entitlement_service.upgrade(store, "acme", acme_admin)

    with pytest.raises(AlreadyProError):
        entitlement_service.upgrade(store, "acme", acme_admin)

    with store.transaction() as db:
        assert tenant_crud.get(db, "acme").plan == PlanType.pro


def test_member_cannot_upgrade(store, acme_member):
    with pytest.raises(InsufficientPermissionsError):
        entitlement_service.upgrade(store, "acme", acme_member)

    with store.transaction() as db:
        assert tenant_crud.get(db, "acme").plan == PlanType.free


def test_admin_cannot_upgrade_other_tenant(store, acme_admin):
    with pytest.raises(CrossTenantUpgradeError):
        entitlement_service.upgrade(store, "globex", acme_admin)

    with store.transaction() as db:
        assert tenant_crud.get(db, "globex").plan == PlanType.free


def test_role_checked_before_tenant(store, acme_member):
    with pytest.raises(InsufficientPermissionsError):
        entitlement_service.upgrade(store, "globex", acme_member)
