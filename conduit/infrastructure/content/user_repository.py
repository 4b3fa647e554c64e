"""
Adapter: User repository.

Implements UserRepository port on a SQLAlchemy session.
Owns the users table and the follows association.
"""

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from conduit.domain.content.entities import Profile, User
from conduit.domain.content.errors import NotFoundError
from conduit.domain.content.ports import UserRepository
from conduit.infrastructure.content.mappers import to_profile, to_user
from conduit.infrastructure.content.orm_models import UserRow

logger = logging.getLogger(__name__)

UPDATABLE_COLUMNS = frozenset({"username", "email", "password_hash", "bio", "image"})


class UserRepositoryAdapter(UserRepository):
    """SQL implementation of the user repository.

    Implements the UserRepository port defined in the domain layer.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _row_by(self, column, value) -> Optional[UserRow]:
        return self._session.scalars(select(UserRow).where(column == value)).first()

    def get_by_id(self, user_id: int) -> Optional[User]:
        row = self._session.get(UserRow, user_id)
        return to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        row = self._row_by(UserRow.email, email)
        return to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        row = self._row_by(UserRow.username, username)
        return to_user(row) if row else None

    def create(self, username: str, email: str, password_hash: str) -> User:
        """Persist a new user.

        Args:
            username: Unique username.
            email: Unique email.
            password_hash: Digest produced by the password hasher.

        Returns:
            The stored user with its identifier.
        """
        row = UserRow(username=username, email=email, password_hash=password_hash)
        self._session.add(row)
        self._session.commit()
        self._session.refresh(row)
        logger.debug("Created user id=%d", row.id)
        return to_user(row)

    def update(self, user_id: int, changes: dict[str, Any]) -> User:
        """Overwrite the given columns on a user.

        Raises:
            NotFoundError: If the user does not exist.
            ValueError: If a change names a column that cannot be updated.
        """
        unknown = set(changes) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update user columns: {sorted(unknown)}")
        row = self._session.get(UserRow, user_id)
        if row is None:
            raise NotFoundError("User", user_id)
        for name, value in changes.items():
            setattr(row, name, value)
        self._session.commit()
        self._session.refresh(row)
        return to_user(row)

    def get_profile(
        self, username: str, viewer_id: Optional[int] = None
    ) -> Optional[Profile]:
        row = self._row_by(UserRow.username, username)
        return to_profile(self._session, row, viewer_id) if row else None

    def add_follow(self, follower_id: int, followee_id: int) -> None:
        follower = self._session.get(UserRow, follower_id)
        followee = self._session.get(UserRow, followee_id)
        if followee not in follower.following:
            follower.following.append(followee)
        self._session.commit()

    def remove_follow(self, follower_id: int, followee_id: int) -> None:
        follower = self._session.get(UserRow, follower_id)
        followee = self._session.get(UserRow, followee_id)
        if followee in follower.following:
            follower.following.remove(followee)
        self._session.commit()
