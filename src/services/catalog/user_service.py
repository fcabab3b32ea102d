"""User accounts: registration, login and profile management."""

from functools import lru_cache
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from src.database.connection import DatabaseConnection, get_database
from src.database.models import User
from src.database.repositories.user import UserRepository
from src.services.catalog.errors import (
    AlreadyExistsError,
    NotFoundError,
    ValidationFailedError,
    operation,
)
from src.services.catalog.schemas import ProfilePatch, UserRegistration, check_password
from src.settings import settings
from src.utils.logger import get_logger

logger = get_logger("catalog.user")

ADMIN = "admin"


class UserService:
    """Operations on user accounts."""

    def __init__(self, db: DatabaseConnection | None = None, admin_email: str | None = None) -> None:
        """Initialize service.

        Args:
            db: Connection to use. Defaults to the shared connection.
            admin_email: Account granted the admin role at login.
                Defaults to ADMIN_EMAIL.
        """
        self._db = db or get_database()
        self._admin_email = (admin_email or settings.security.admin_email).lower()

    @staticmethod
    def _op(name: str) -> Any:
        return operation(f"service.user.{name}", logger)

    def register(self, data: UserRegistration) -> int:
        """Create an account with a hashed password.

        Returns:
            Id of the new user.

        Raises:
            AlreadyExistsError: If the email is taken.
        """
        with self._op("register"), self._db.session() as session:
            repo = UserRepository(session)
            if repo.get_by_email(data.email) is not None:
                raise AlreadyExistsError(f"user {data.email} already exists")
            user = repo.create(
                User(
                    name=data.name,
                    email=data.email,
                    number=data.number,
                    date_of_birth=data.date_of_birth,
                    password_hash=generate_password_hash(data.password),
                )
            )
            user_id = user.id
        logger.info(f"Registered user {user_id}")
        return user_id

    def login(self, email: str, password: str) -> User:
        """Check credentials.

        The configured admin account is promoted to the admin role.

        Returns:
            The authenticated user.

        Raises:
            NotFoundError: If no account uses this email.
            ValidationFailedError: If the password is wrong.
        """
        email = email.strip().lower()
        with self._op("login"), self._db.session() as session:
            user = UserRepository(session).get_by_email(email)
            if user is None:
                raise NotFoundError(f"user {email} not found")
            if not check_password_hash(user.password_hash, password):
                raise ValidationFailedError("wrong password")
            if email == self._admin_email and user.user_type != ADMIN:
                user.user_type = ADMIN
                logger.info(f"Granted admin role to user {user.id}")
            return user

    def get_by_id(self, user_id: int) -> User:
        """User by id.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with self._op("get_by_id"), self._db.session() as session:
            return UserRepository(session).require(user_id)

    def get_all(self) -> list[User]:
        """All users ordered by id."""
        with self._op("get_all"), self._db.session() as session:
            return UserRepository(session).get_all()

    def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        """Replace the password after checking the current one.

        Raises:
            NotFoundError: If the user does not exist.
            ValidationFailedError: If the current password is wrong or
                the new one is too weak.
        """
        with self._op("change_password"):
            try:
                check_password(new_password)
            except ValueError as e:
                raise ValidationFailedError(str(e)) from e
            with self._db.session() as session:
                user = UserRepository(session).require(user_id)
                if not check_password_hash(user.password_hash, old_password):
                    raise ValidationFailedError("wrong password")
                user.password_hash = generate_password_hash(new_password)
        logger.info(f"Changed password of user {user_id}")

    def update_profile(self, user_id: int, patch: ProfilePatch) -> User:
        """Apply a sparse profile update.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with self._op("update_profile"), self._db.session() as session:
            user = UserRepository(session).require(user_id)
            for field, value in patch.model_dump(exclude_none=True).items():
                setattr(user, field, value)
            session.flush()
            return user

    def remove(self, user_id: int) -> None:
        """Delete an account and its favorites.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with self._op("remove"), self._db.session() as session:
            UserRepository(session).delete(user_id)
        logger.info(f"Deleted user {user_id}")


@lru_cache(maxsize=1)
def get_user_service() -> UserService:
    """Get cached UserService bound to the shared connection."""
    return UserService()
