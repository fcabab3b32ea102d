"""User account model."""

from datetime import date

from sqlalchemy import CheckConstraint, Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.database.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Registered user.

    Attributes:
        id: Primary key.
        name: Display name.
        email: Login (unique).
        number: Phone number.
        date_of_birth: Birth date, if given.
        user_type: 'user' or 'admin'.
        password_hash: Salted password hash.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    number: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    date_of_birth: Mapped[date | None] = mapped_column(Date)
    user_type: Mapped[str] = mapped_column(String(20), nullable=False, default="user")
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        CheckConstraint("user_type IN ('user', 'admin')", name="chk_user_type"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<User(id={self.id}, email='{self.email}')>"
