"""
Port interfaces (ABCs) for the content bounded context.

Ports define the contracts that the use cases require from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from conduit.domain.content.entities import (
    Article,
    ArticleFilter,
    ArticlePage,
    Comment,
    Profile,
    User,
)


class UserRepository(ABC):
    """Port for persisting users and the follow relation."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[User]:
        """Return a user by identifier, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Return a user by email, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[User]:
        """Return a user by username, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def create(self, username: str, email: str, password_hash: str) -> User:
        """Persist a new user and return it."""
        raise NotImplementedError

    @abstractmethod
    def update(self, user_id: int, changes: dict[str, Any]) -> User:
        """Overwrite the given attributes on a user and return it."""
        raise NotImplementedError

    @abstractmethod
    def get_profile(
        self, username: str, viewer_id: Optional[int] = None
    ) -> Optional[Profile]:
        """Return the public profile of a user as seen by the viewer."""
        raise NotImplementedError

    @abstractmethod
    def add_follow(self, follower_id: int, followee_id: int) -> None:
        """Make follower follow followee. Adding twice has no effect."""
        raise NotImplementedError

    @abstractmethod
    def remove_follow(self, follower_id: int, followee_id: int) -> None:
        """Stop follower following followee. Removing twice has no effect."""
        raise NotImplementedError


class ArticleRepository(ABC):
    """Port for persisting articles, their tags and the favorite relation."""

    @abstractmethod
    def get_by_slug(
        self, slug: str, viewer_id: Optional[int] = None
    ) -> Optional[Article]:
        """Return an article by slug as seen by the viewer, or None."""
        raise NotImplementedError

    @abstractmethod
    def title_exists(self, title: str, exclude_id: Optional[int] = None) -> bool:
        """Return True if another article already uses this title."""
        raise NotImplementedError

    @abstractmethod
    def slug_exists(self, slug: str) -> bool:
        """Return True if the slug is already assigned."""
        raise NotImplementedError

    @abstractmethod
    def find_and_count(
        self,
        filters: ArticleFilter,
        limit: int,
        offset: int,
        viewer_id: Optional[int] = None,
    ) -> ArticlePage:
        """Return one page of matching articles, most recent first.

        Args:
            filters: Conjunctive filters; unset fields do not restrict.
            limit: Maximum number of articles in the page.
            offset: Number of matches to skip.
            viewer_id: User the favorited/following flags are computed for.

        Returns:
            The page together with the total number of matches.
        """
        raise NotImplementedError

    @abstractmethod
    def create(
        self,
        author_id: int,
        slug: str,
        title: str,
        description: str,
        body: str,
        tag_names: list[str],
    ) -> Article:
        """Persist a new article, creating any unknown tags."""
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        article_id: int,
        changes: dict[str, Any],
        tag_names: Optional[list[str]] = None,
        viewer_id: Optional[int] = None,
    ) -> Article:
        """Overwrite the given attributes (and tags, if given) on an article."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, article_id: int) -> None:
        """Remove an article with its comments, tags and favorites links."""
        raise NotImplementedError

    @abstractmethod
    def add_favorite(self, user_id: int, article_id: int) -> None:
        """Mark the article as favorited by the user. Idempotent."""
        raise NotImplementedError

    @abstractmethod
    def remove_favorite(self, user_id: int, article_id: int) -> None:
        """Remove the user's favorite mark from the article. Idempotent."""
        raise NotImplementedError


class CommentRepository(ABC):
    """Port for persisting comments."""

    @abstractmethod
    def get_by_id(
        self, comment_id: int, viewer_id: Optional[int] = None
    ) -> Optional[Comment]:
        """Return a comment by identifier, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def list_for_article(
        self, article_id: int, viewer_id: Optional[int] = None
    ) -> list[Comment]:
        """Return the comments of an article, oldest first."""
        raise NotImplementedError

    @abstractmethod
    def create(self, article_id: int, author_id: int, body: str) -> Comment:
        """Persist a new comment and return it as seen by its author."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, comment_id: int) -> None:
        """Remove a comment."""
        raise NotImplementedError


class TagRepository(ABC):
    """Port for reading known tags."""

    @abstractmethod
    def list_names(self) -> list[str]:
        """Return every known tag name, alphabetically."""
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        """Return a salted digest of the plaintext."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, plaintext: str, digest: str) -> bool:
        """Return True if the plaintext matches the digest."""
        raise NotImplementedError


class TokenSigner(ABC):
    """Port for issuing and verifying session tokens."""

    @abstractmethod
    def sign(self, user_id: int) -> str:
        """Return a signed token asserting the user identifier."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, token: str) -> Optional[int]:
        """Return the user identifier asserted by a valid token, else None."""
        raise NotImplementedError
