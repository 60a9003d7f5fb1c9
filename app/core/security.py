from typing import Callable, Optional
from datetime import datetime, timezone
from jose import JWTError, jwt
from pydantic import ValidationError as SchemaValidationError
import bcrypt
from app.core.config import settings
from app.core.exceptions import MalformedTokenError, SignatureInvalidError, TokenExpiredError
from app.models.tenant import Tenant
from app.models.user import User
from app.schemas.auth import Principal

BCRYPT_MAX_PASSWORD_BYTES = 72


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode('utf-8')
    # bcrypt rejects input past 72 bytes; no stored hash can match it
    if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    hashed_bytes = hashed_password.encode('utf-8')
    return bcrypt.checkpw(password_bytes, hashed_bytes)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and verifies signed, time-bounded identity assertions (JWT).

    Verification is stateless: it needs only the signing secret and the
    current time, so any number of request threads may call it at once.

    Args:
        secret_key: HMAC signing secret
        algorithm: JWS algorithm, HS256 by default
        ttl_seconds: Lifetime of an issued token
        issuer: Value of the ``iss`` claim, checked on verify
        audience: Value of the ``aud`` claim, checked on verify
        clock: Callable returning the current timezone-aware UTC time
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        ttl_seconds: int = 24 * 60 * 60,
        issuer: str = "notes-api",
        audience: str = "notes-users",
        clock: Callable[[], datetime] = _utc_now
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds
        self.issuer = issuer
        self.audience = audience
        self.clock = clock

    def _now(self) -> float:
        # Sub-second precision; NumericDate claims may be fractional
        return self.clock().timestamp()

    def issue(self, user: User, tenant: Tenant) -> str:
        """
        Create a JWT for a freshly authenticated user.

        Args:
            user: Authenticated user
            tenant: Tenant the user belongs to

        Returns:
            Encoded JWT whose ``exp`` is exactly ``ttl_seconds`` after ``iat``
        """
        issued_at = self._now()
        claims = {
            "sub": user.id,
            "email": user.email,
            "role": user.role.value,
            "tenant": tenant.slug,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
            "iss": self.issuer,
            "aud": self.audience,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Principal:
        """
        Verify a JWT and return the principal it asserts.

        Checks run in order: shape, then signature (including issuer and
        audience), then expiry.

        Raises:
            MalformedTokenError: token is not a JWT or lacks expected claims
            SignatureInvalidError: signature, issuer or audience check failed
            TokenExpiredError: current time is at or past ``exp``
        """
        try:
            unverified = jwt.get_unverified_claims(token)
        except JWTError:
            raise MalformedTokenError()

        principal = self._principal_from_claims(unverified)

        try:
            # Expiry is checked below against our own clock, with an exclusive bound
            jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_exp": False},
            )
        except JWTError:
            raise SignatureInvalidError()

        if self._now() >= principal.expires_at:
            raise TokenExpiredError()

        return principal

    @staticmethod
    def _principal_from_claims(claims: dict) -> Principal:
        try:
            return Principal(
                user_id=claims["sub"],
                email=claims["email"],
                role=claims["role"],
                tenant_slug=claims["tenant"],
                issued_at=claims["iat"],
                expires_at=claims["exp"],
            )
        except (KeyError, SchemaValidationError):
            raise MalformedTokenError()


token_service = TokenService(
    settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    ttl_seconds=settings.access_token_ttl_seconds,
    issuer=settings.TOKEN_ISSUER,
    audience=settings.TOKEN_AUDIENCE,
)
