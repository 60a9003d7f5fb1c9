from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from app.models.user import User, UserRole
from app.core.security import get_password_hash
from app.database import utcnow


class CRUDUser:
    """
    CRUD operations for User model.

    Note: While User model has tenant_id, we don't inherit from CRUDBase
    because user lookups (login by email, token subject resolution) are
    global rather than tenant-isolated.
    """

    def __init__(self):
        self.model = User

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """
        Retrieve user by email address.

        Args:
            db: Database session
            email: User email (compared lower-cased)

        Returns:
            User instance or None if not found
        """
        stmt = select(User).where(User.email == email.strip().lower())
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def get(self, db: Session, user_id: str) -> Optional[User]:
        """
        Retrieve user by ID.

        Args:
            db: Database session
            user_id: User ID

        Returns:
            User instance or None if not found
        """
        stmt = select(User).where(User.id == user_id)
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def get_active(self, db: Session, user_id: str) -> Optional[User]:
        user = self.get(db, user_id)
        if user is None or not user.is_active:
            return None
        return user

    def create(
        self,
        db: Session,
        *,
        id: str,
        email: str,
        password: str,
        tenant_id: str,
        name: str,
        role: UserRole = UserRole.member,
        is_active: bool = True,
        password_rounds: Optional[int] = None
    ) -> User:
        """
        Create a new user with hashed password.

        Args:
            db: Database session
            id: User ID
            email: User email
            password: Plain text password (will be hashed)
            tenant_id: Tenant slug the user belongs to
            name: Display name
            role: Admin or Member
            is_active: Whether user is active
            password_rounds: bcrypt cost override

        Returns:
            Created User instance

        Raises:
            ValueError: If a user with this email already exists
        """
        db_user = User(
            id=id,
            email=email.strip().lower(),
            hashed_password=get_password_hash(password, rounds=password_rounds),
            role=role,
            tenant_id=tenant_id,
            name=name,
            is_active=is_active
        )
        db.add(db_user)

        try:
            db.flush()
        except IntegrityError as e:
            # Rollback is left to the surrounding Store.transaction()
            if "unique constraint" in str(e).lower():
                raise ValueError(f"User with email {email} already exists") from e
            raise

        return db_user

    def record_login(self, db: Session, *, db_obj: User) -> User:
        db_obj.last_login = utcnow()
        db.add(db_obj)
        db.flush()
        return db_obj


# Create singleton instance
user = CRUDUser()
