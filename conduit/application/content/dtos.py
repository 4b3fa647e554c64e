"""
Data Transfer Objects for the content application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior. Payload fields are
Optional so that presence checks happen in the use cases.
"""

from dataclasses import dataclass
from typing import Optional

from conduit.domain.content.entities import Caller, ToggleDirection


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------


@dataclass(frozen=True)
class RegisterUserCommand:
    """Input DTO for sign-up."""

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class LoginUserCommand:
    """Input DTO for sign-in."""

    email: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class UpdateUserCommand:
    """Input DTO for updating the caller's own account.

    Attributes:
        caller: The authenticated caller, or None.
        username, email, password, bio, image: New values; None leaves
            the attribute unchanged.
    """

    caller: Optional[Caller]
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    bio: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class UserResult:
    """Output DTO for the authenticated user representation.

    Attributes:
        email: Account email.
        token: Session token bound to the account.
        username: Account username.
        bio: Free text biography.
        image: Avatar URL.
    """

    email: str
    token: str
    username: str
    bio: Optional[str]
    image: Optional[str]


# ------------------------------------------------------------------
# Profiles
# ------------------------------------------------------------------


@dataclass(frozen=True)
class GetProfileQuery:
    """Input DTO for reading a public profile."""

    username: str
    caller: Optional[Caller] = None


@dataclass(frozen=True)
class FollowProfileCommand:
    """Input DTO for following or unfollowing a user."""

    caller: Optional[Caller]
    username: str
    direction: ToggleDirection


# ------------------------------------------------------------------
# Articles
# ------------------------------------------------------------------


@dataclass(frozen=True)
class ListArticlesQuery:
    """Input DTO for the filtered article listing.

    Attributes:
        caller: The caller, used only for the favorited/following flags.
        author: Username of the author.
        tag: Tag name.
        favorited: Username of a user who favorited the articles.
        limit: Page size.
        offset: Number of matches to skip.
    """

    caller: Optional[Caller] = None
    author: Optional[str] = None
    tag: Optional[str] = None
    favorited: Optional[str] = None
    limit: int = 20
    offset: int = 0


@dataclass(frozen=True)
class FeedArticlesQuery:
    """Input DTO for the caller's feed of followed authors."""

    caller: Optional[Caller]
    limit: int = 20
    offset: int = 0


@dataclass(frozen=True)
class GetArticleQuery:
    """Input DTO for reading a single article."""

    slug: str
    caller: Optional[Caller] = None


@dataclass(frozen=True)
class CreateArticleCommand:
    """Input DTO for publishing an article."""

    caller: Optional[Caller]
    title: Optional[str] = None
    description: Optional[str] = None
    body: Optional[str] = None
    tag_list: Optional[list[str]] = None


@dataclass(frozen=True)
class UpdateArticleCommand:
    """Input DTO for editing an article. None leaves a field unchanged."""

    caller: Optional[Caller]
    slug: str
    title: Optional[str] = None
    description: Optional[str] = None
    body: Optional[str] = None
    tag_list: Optional[list[str]] = None


@dataclass(frozen=True)
class DeleteArticleCommand:
    """Input DTO for deleting an article."""

    caller: Optional[Caller]
    slug: str


@dataclass(frozen=True)
class FavoriteArticleCommand:
    """Input DTO for favoriting or unfavoriting an article."""

    caller: Optional[Caller]
    slug: str
    direction: ToggleDirection


# ------------------------------------------------------------------
# Comments
# ------------------------------------------------------------------


@dataclass(frozen=True)
class ListCommentsQuery:
    """Input DTO for reading the comments of an article."""

    slug: str
    caller: Optional[Caller] = None


@dataclass(frozen=True)
class CreateCommentCommand:
    """Input DTO for commenting on an article."""

    caller: Optional[Caller]
    slug: str
    body: Optional[str] = None


@dataclass(frozen=True)
class DeleteCommentCommand:
    """Input DTO for deleting a comment."""

    caller: Optional[Caller]
    slug: str
    comment_id: int
