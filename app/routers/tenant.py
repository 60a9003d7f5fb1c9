from fastapi import APIRouter, Depends, Path
from app.database import Store, get_store
from app.dependencies import require_admin
from app.schemas.auth import Principal
from app.schemas.tenant import TenantResponse
from app.services.entitlement import entitlement_service

router = APIRouter()


@router.post("/{slug}/upgrade", response_model=TenantResponse)
def upgrade_tenant(
    slug: str = Path(..., pattern=r"^[A-Za-z0-9_-]+$"),
    store: Store = Depends(get_store),
    principal: Principal = Depends(require_admin)
):
    """
    Upgrade your tenant to the Pro plan (unlimited notes).

    Admin only, and only for the Admin's own tenant. The upgrade cannot be
    undone.

    Raises:
        InsufficientPermissionsError 403: If caller is not an Admin
        CrossTenantUpgradeError 403: If slug is not the caller's tenant
        AlreadyProError 400: If tenant is already on Pro
    """
    return entitlement_service.upgrade(store, slug, principal)
