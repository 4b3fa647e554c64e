"""
Domain entities for the content bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
Views that depend on who is asking (favorited, following) are computed
by the repositories for a given viewer and carried on the entity.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ToggleDirection(Enum):
    """Direction of a relation toggle (favorite, follow)."""

    ADD = "add"
    REMOVE = "remove"

    @classmethod
    def from_method(cls, method: str) -> "ToggleDirection":
        """Resolve the direction from an HTTP verb.

        POST adds the relation, DELETE removes it.

        Raises:
            ValueError: If the verb carries no toggle meaning.
        """
        verb = method.upper()
        if verb == "POST":
            return cls.ADD
        if verb == "DELETE":
            return cls.REMOVE
        raise ValueError(f"No toggle direction for method: {method}")


@dataclass(frozen=True)
class Caller:
    """The authenticated user making a request.

    Attributes:
        id: Identifier of the user the session token was issued for.
        username: Username at the time the token was verified.
        token: The raw session token presented with the request.
    """

    id: int
    username: str
    token: str


@dataclass(frozen=True)
class User:
    """A registered account. The password is only ever held hashed."""

    id: int
    username: str
    email: str
    password_hash: str
    bio: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class Profile:
    """Public view of a user, as seen by a given viewer."""

    username: str
    bio: Optional[str] = None
    image: Optional[str] = None
    following: bool = False


@dataclass(frozen=True)
class Article:
    """A published article, as seen by a given viewer."""

    id: int
    slug: str
    title: str
    description: str
    body: str
    author_id: int
    author: Profile
    created_at: datetime
    updated_at: datetime
    tag_list: list[str] = field(default_factory=list)
    favorited: bool = False
    favorites_count: int = 0


@dataclass(frozen=True)
class ArticlePage:
    """One page of a listing plus the total match count ignoring paging."""

    articles: list[Article]
    count: int


@dataclass(frozen=True)
class Comment:
    """A comment left on an article."""

    id: int
    body: str
    article_id: int
    author_id: int
    author: Profile
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ArticleFilter:
    """Conjunctive filters for an article listing.

    Attributes:
        author: Username of the author.
        tag: Tag name the article must carry.
        favorited_by_id: Identifier of a user who favorited the article.
        followed_by_id: Identifier of a user following the author (feed).
    """

    author: Optional[str] = None
    tag: Optional[str] = None
    favorited_by_id: Optional[int] = None
    followed_by_id: Optional[int] = None
