from fastapi import APIRouter, Depends
from app.database import Store, get_store
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.tenant import TenantSummary
from app.schemas.user import UserSummary
from app.services.auth import auth_service

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, store: Store = Depends(get_store)):
    """
    Exchange email and password for a 24 hour access token.

    Args:
        credentials: Email and password
        store: Datastore

    Returns:
        Access token plus user and tenant summaries

    Raises:
        InvalidCredentialsError: If credentials are invalid
        TenantNotFoundError: If the user's tenant is inactive
    """
    result = auth_service.login(store, email=credentials.email, password=credentials.password)

    return LoginResponse(
        access_token=result.access_token,
        user=UserSummary.model_validate(result.user),
        tenant=TenantSummary.model_validate(result.tenant)
    )
