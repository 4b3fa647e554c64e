"""
Adapter: Comment repository.

Implements CommentRepository port on a SQLAlchemy session.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from conduit.domain.content.entities import Comment
from conduit.domain.content.errors import NotFoundError
from conduit.domain.content.ports import CommentRepository
from conduit.infrastructure.content.mappers import to_comment
from conduit.infrastructure.content.orm_models import CommentRow, utcnow


class CommentRepositoryAdapter(CommentRepository):
    """SQL implementation of the comment repository."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(
        self, comment_id: int, viewer_id: Optional[int] = None
    ) -> Optional[Comment]:
        row = self._session.get(CommentRow, comment_id)
        return to_comment(self._session, row, viewer_id) if row else None

    def list_for_article(
        self, article_id: int, viewer_id: Optional[int] = None
    ) -> list[Comment]:
        rows = self._session.scalars(
            select(CommentRow)
            .where(CommentRow.article_id == article_id)
            .order_by(CommentRow.created_at, CommentRow.id)
        ).all()
        return [to_comment(self._session, row, viewer_id) for row in rows]

    def create(self, article_id: int, author_id: int, body: str) -> Comment:
        now = utcnow()
        row = CommentRow(
            body=body,
            article_id=article_id,
            author_id=author_id,
            created_at=now,
            updated_at=now,
        )
        self._session.add(row)
        self._session.commit()
        self._session.refresh(row)
        return to_comment(self._session, row, author_id)

    def delete(self, comment_id: int) -> None:
        row = self._session.get(CommentRow, comment_id)
        if row is None:
            raise NotFoundError("Comment", comment_id)
        self._session.delete(row)
        self._session.commit()
