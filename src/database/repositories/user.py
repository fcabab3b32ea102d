"""User repository."""

from sqlalchemy import delete, select, update

from src.database.models import FavoriteMovie, FavoriteProject, FavoriteSeries, Movie, Series, User
from src.database.repositories.base import BaseRepository
from src.services.catalog.errors import NotFoundError, operation


class UserRepository(BaseRepository[User]):
    """Repository for User entity operations."""

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Retrieve user by login email."""
        return self._session.scalar(select(User).where(User.email == email))

    def require(self, user_id: int) -> User:
        """Retrieve a user or raise NotFoundError."""
        with operation("storage.user.get_by_id"):
            user = self.get_by_id(user_id)
            if user is None:
                raise NotFoundError(f"user {user_id} not found")
            return user

    def delete(self, user_id: int) -> None:
        """Delete a user and release the popularity held by their favorites.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with operation("storage.user.delete"):
            if not self.exists(user_id):
                raise NotFoundError(f"user {user_id} not found")
            for model, favorite, column in (
                (Movie, FavoriteMovie, FavoriteMovie.movie_id),
                (Series, FavoriteSeries, FavoriteSeries.series_id),
            ):
                favorites = select(column).where(favorite.user_id == user_id)
                self._session.execute(
                    update(model)
                    .where(model.id.in_(favorites))
                    .values(popularity=model.popularity - 1)
                    .execution_options(synchronize_session=False)
                )
                self._session.execute(delete(favorite).where(favorite.user_id == user_id))
            self._session.execute(delete(FavoriteProject).where(FavoriteProject.user_id == user_id))
            self.delete_by_id(user_id)
