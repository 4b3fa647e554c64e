"""
Row-to-entity translation shared by the repository adapters.

Flags that depend on who is looking (``following``, ``favorited``) are
computed here for an optional viewer.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from conduit.domain.content.entities import Article, Comment, Profile, User
from conduit.infrastructure.content.orm_models import (
    ArticleRow,
    CommentRow,
    UserRow,
    follows,
)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp; SQLite drops the offset on read."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        bio=row.bio,
        image=row.image,
    )


def is_following(session: Session, viewer_id: Optional[int], user_id: int) -> bool:
    if viewer_id is None:
        return False
    stmt = select(follows.c.follower_id).where(
        follows.c.follower_id == viewer_id,
        follows.c.followee_id == user_id,
    )
    return session.execute(stmt).first() is not None


def to_profile(session: Session, row: UserRow, viewer_id: Optional[int]) -> Profile:
    return Profile(
        username=row.username,
        bio=row.bio,
        image=row.image,
        following=is_following(session, viewer_id, row.id),
    )


def to_article(session: Session, row: ArticleRow, viewer_id: Optional[int]) -> Article:
    fan_ids = {user.id for user in row.favorited_by}
    return Article(
        id=row.id,
        slug=row.slug,
        title=row.title,
        description=row.description,
        body=row.body,
        author_id=row.author_id,
        author=to_profile(session, row.author, viewer_id),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
        tag_list=[tag.name for tag in row.tags],
        favorited=viewer_id in fan_ids,
        favorites_count=len(fan_ids),
    )


def to_comment(session: Session, row: CommentRow, viewer_id: Optional[int]) -> Comment:
    return Comment(
        id=row.id,
        body=row.body,
        article_id=row.article_id,
        author_id=row.author_id,
        author=to_profile(session, row.author, viewer_id),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )
