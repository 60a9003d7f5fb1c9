from dataclasses import dataclass
from app.core.exceptions import InvalidCredentialsError, TenantNotFoundError
from app.core.logging_config import logger
from app.core.security import TokenService, token_service, verify_password
from app.crud import tenant as tenant_crud
from app.crud import user as user_crud
from app.database import Store
from app.models.tenant import Tenant
from app.models.user import User


@dataclass
class LoginResult:
    access_token: str
    user: User
    tenant: Tenant


class AuthService:
    """
    Service layer for credential checks and token issuance.
    """

    def __init__(self, tokens: TokenService = token_service):
        self.tokens = tokens

    def login(self, store: Store, email: str, password: str) -> LoginResult:
        """
        Authenticate a user by email and password and issue a token.

        Unknown email, inactive user and wrong password all produce the
        same error.

        Args:
            store: Datastore
            email: Login email
            password: Plain text password

        Returns:
            Issued token with the user and tenant it was issued for

        Raises:
            InvalidCredentialsError: If the credentials do not match an active user
            TenantNotFoundError: If the user's tenant is missing or inactive
        """
        with store.transaction() as db:
            user = user_crud.get_by_email(db, email=email)

        # Password check runs outside the store lock
        if not user or not user.is_active or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login attempt: email={email}")
            raise InvalidCredentialsError()

        with store.transaction() as db:
            tenant = tenant_crud.get_active(db, user.tenant_id)
            if tenant is None:
                logger.warning(f"Login for inactive tenant: email={email}, tenant={user.tenant_id}")
                raise TenantNotFoundError()

            user = user_crud.record_login(db, db_obj=user)
            access_token = self.tokens.issue(user, tenant)

        logger.info(f"Login successful: user_id={user.id}, tenant={tenant.slug}")
        return LoginResult(access_token=access_token, user=user, tenant=tenant)


# Create a singleton instance
auth_service = AuthService()
