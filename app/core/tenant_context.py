from fastapi import Depends
from app.schemas.auth import Principal
from app.dependencies import get_current_principal


def get_tenant_slug(principal: Principal = Depends(get_current_principal)) -> str:
    """
    FastAPI dependency that extracts the tenant slug from the verified token.

    The slug always comes from the token's tenant claim, never from the
    request path, query or body. It is then passed explicitly through the
    service and CRUD layers.

    Args:
        principal: Authenticated principal from the JWT

    Returns:
        Slug of the principal's tenant
    """
    return principal.tenant_slug
