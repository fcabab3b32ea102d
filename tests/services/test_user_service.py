"""Tests for UserService."""

import pytest
from pydantic import ValidationError
from werkzeug.security import check_password_hash

from src.services.catalog.errors import AlreadyExistsError, NotFoundError, ValidationFailedError
from src.services.catalog.schemas import ProfilePatch, UserRegistration
from tests.factories import ADMIN_EMAIL, PASSWORD, make_movie, make_series


def register(user_service, email: str, password: str = PASSWORD) -> int:
    return user_service.register(UserRegistration(name="User", email=email, password=password))


class TestRegister:
    """Tests for account creation."""

    @staticmethod
    def test_password_is_hashed(user_service) -> None:
        user_id = register(user_service, "carol@example.com")
        user = user_service.get_by_id(user_id)
        assert user.password_hash != PASSWORD
        assert check_password_hash(user.password_hash, PASSWORD)
        assert user.user_type == "user"

    @staticmethod
    def test_email_is_lowercased(user_service) -> None:
        user_id = register(user_service, "Carol@Example.COM")
        assert user_service.get_by_id(user_id).email == "carol@example.com"

    @staticmethod
    def test_duplicate_email_raises(user_service) -> None:
        register(user_service, "carol@example.com")
        with pytest.raises(AlreadyExistsError):
            register(user_service, "CAROL@example.com")

    @staticmethod
    @pytest.mark.parametrize("password", ["abc12", "abcdefgh", "12345678"])
    def test_weak_password_rejected(password: str) -> None:
        with pytest.raises(ValidationError):
            UserRegistration(name="U", email="u@example.com", password=password)

    @staticmethod
    def test_invalid_email_rejected() -> None:
        with pytest.raises(ValidationError):
            UserRegistration(name="U", email="not-an-email", password=PASSWORD)


class TestLogin:
    """Tests for credential checks."""

    @staticmethod
    def test_valid_credentials(user_service) -> None:
        user_id = register(user_service, "carol@example.com")
        assert user_service.login(" Carol@example.com ", PASSWORD).id == user_id

    @staticmethod
    def test_unknown_email(user_service) -> None:
        with pytest.raises(NotFoundError):
            user_service.login("nobody@example.com", PASSWORD)

    @staticmethod
    def test_wrong_password(user_service) -> None:
        register(user_service, "carol@example.com")
        with pytest.raises(ValidationFailedError, match="wrong password"):
            user_service.login("carol@example.com", "wrong123")

    @staticmethod
    def test_admin_email_is_promoted(user_service) -> None:
        user_id = register(user_service, ADMIN_EMAIL)
        assert user_service.login(ADMIN_EMAIL, PASSWORD).user_type == "admin"
        assert user_service.get_by_id(user_id).user_type == "admin"


class TestProfile:
    """Tests for profile and password changes."""

    @staticmethod
    def test_update_profile_is_sparse(user_service) -> None:
        user_id = register(user_service, "carol@example.com")
        user = user_service.update_profile(user_id, ProfilePatch(number="0600000000"))
        assert user.number == "0600000000"
        assert user.name == "User"

    @staticmethod
    def test_change_password(user_service) -> None:
        user_id = register(user_service, "carol@example.com")
        user_service.change_password(user_id, PASSWORD, "newpass9")
        assert user_service.login("carol@example.com", "newpass9").id == user_id

    @staticmethod
    def test_change_password_checks_current(user_service) -> None:
        user_id = register(user_service, "carol@example.com")
        with pytest.raises(ValidationFailedError):
            user_service.change_password(user_id, "wrong123", "newpass9")

    @staticmethod
    def test_change_password_checks_strength(user_service) -> None:
        user_id = register(user_service, "carol@example.com")
        with pytest.raises(ValidationFailedError):
            user_service.change_password(user_id, PASSWORD, "short")


class TestRemove:
    """Tests for account deletion."""

    @staticmethod
    def test_remove_releases_popularity(user_service, movie_service, project_service, users) -> None:
        u1, u2 = users
        movie_id = movie_service.add(make_movie())
        project_id = project_service.create_series(make_series())
        movie_service.add_to_favorites(movie_id, u1)
        movie_service.add_to_favorites(movie_id, u2)
        project_service.add_to_favorites(project_id, u1)

        user_service.remove(u1)

        assert movie_service.get_by_id(movie_id).popularity == 1
        assert project_service.get_content(project_id).popularity == 0
        assert project_service.get_favorites(u1).movies == []
        with pytest.raises(NotFoundError):
            user_service.get_by_id(u1)

    @staticmethod
    def test_remove_missing_raises(user_service) -> None:
        with pytest.raises(NotFoundError):
            user_service.remove(99)
