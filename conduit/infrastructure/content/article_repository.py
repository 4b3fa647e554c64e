"""
Adapter: Article repository.

Implements ArticleRepository port on a SQLAlchemy session.
Owns the articles table, the article_tags association (creating tags
on first use) and the favorites association.
"""

import logging
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from conduit.domain.content.entities import Article, ArticleFilter, ArticlePage
from conduit.domain.content.errors import NotFoundError
from conduit.domain.content.ports import ArticleRepository
from conduit.infrastructure.content.mappers import to_article
from conduit.infrastructure.content.orm_models import (
    ArticleRow,
    TagRow,
    UserRow,
    favorites,
    follows,
    utcnow,
)

logger = logging.getLogger(__name__)

UPDATABLE_COLUMNS = frozenset({"title", "description", "body"})


class ArticleRepositoryAdapter(ArticleRepository):
    """SQL implementation of the article repository.

    Implements the ArticleRepository port defined in the domain layer.
    Each mutating method commits exactly once.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _row_by_slug(self, slug: str) -> Optional[ArticleRow]:
        return self._session.scalars(
            select(ArticleRow).where(ArticleRow.slug == slug)
        ).first()

    def _require_row(self, article_id: int) -> ArticleRow:
        row = self._session.get(ArticleRow, article_id)
        if row is None:
            raise NotFoundError("Article", article_id)
        return row

    def _resolve_tags(self, names: list[str]) -> list[TagRow]:
        """Return tag rows for the names, adding the ones not yet known."""
        if not names:
            return []
        known = {
            tag.name: tag
            for tag in self._session.scalars(
                select(TagRow).where(TagRow.name.in_(names))
            )
        }
        rows = []
        for name in names:
            tag = known.get(name)
            if tag is None:
                tag = TagRow(name=name)
                self._session.add(tag)
                known[name] = tag
            rows.append(tag)
        return rows

    def get_by_slug(
        self, slug: str, viewer_id: Optional[int] = None
    ) -> Optional[Article]:
        row = self._row_by_slug(slug)
        return to_article(self._session, row, viewer_id) if row else None

    def title_exists(self, title: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(ArticleRow.id).where(ArticleRow.title == title)
        if exclude_id is not None:
            stmt = stmt.where(ArticleRow.id != exclude_id)
        return self._session.execute(stmt).first() is not None

    def slug_exists(self, slug: str) -> bool:
        stmt = select(ArticleRow.id).where(ArticleRow.slug == slug)
        return self._session.execute(stmt).first() is not None

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
        stmt = select(ArticleRow)
        if filters.author:
            stmt = stmt.where(ArticleRow.author.has(UserRow.username == filters.author))
        if filters.tag:
            stmt = stmt.where(ArticleRow.tags.any(TagRow.name == filters.tag))
        if filters.favorited_by_id is not None:
            stmt = stmt.where(
                ArticleRow.id.in_(
                    select(favorites.c.article_id).where(
                        favorites.c.user_id == filters.favorited_by_id
                    )
                )
            )
        if filters.followed_by_id is not None:
            stmt = stmt.where(
                ArticleRow.author_id.in_(
                    select(follows.c.followee_id).where(
                        follows.c.follower_id == filters.followed_by_id
                    )
                )
            )

        count = self._session.scalar(select(func.count()).select_from(stmt.subquery()))
        rows = self._session.scalars(
            stmt.order_by(ArticleRow.created_at.desc(), ArticleRow.id.desc())
            .limit(limit)
            .offset(offset)
        ).all()

        logger.debug("Matched %d articles, returning %d.", count, len(rows))
        return ArticlePage(
            articles=[to_article(self._session, row, viewer_id) for row in rows],
            count=count or 0,
        )

    def create(
        self,
        author_id: int,
        slug: str,
        title: str,
        description: str,
        body: str,
        tag_names: list[str],
    ) -> Article:
        now = utcnow()
        row = ArticleRow(
            slug=slug,
            title=title,
            description=description,
            body=body,
            author_id=author_id,
            created_at=now,
            updated_at=now,
        )
        row.tags = self._resolve_tags(tag_names)
        self._session.add(row)
        self._session.commit()
        self._session.refresh(row)
        logger.debug("Created article id=%d slug=%s", row.id, row.slug)
        return to_article(self._session, row, author_id)

    def update(
        self,
        article_id: int,
        changes: dict[str, Any],
        tag_names: Optional[list[str]] = None,
        viewer_id: Optional[int] = None,
    ) -> Article:
        """Overwrite the given columns and, if given, the tag set.

        Raises:
            NotFoundError: If the article does not exist.
            ValueError: If a change names a column that cannot be updated.
        """
        unknown = set(changes) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update article columns: {sorted(unknown)}")
        row = self._require_row(article_id)
        for name, value in changes.items():
            setattr(row, name, value)
        if tag_names is not None:
            row.tags = self._resolve_tags(tag_names)
        row.updated_at = utcnow()
        self._session.commit()
        self._session.refresh(row)
        return to_article(self._session, row, viewer_id)

    def delete(self, article_id: int) -> None:
        row = self._require_row(article_id)
        self._session.delete(row)
        self._session.commit()
        logger.debug("Deleted article id=%d", article_id)

    def add_favorite(self, user_id: int, article_id: int) -> None:
        row = self._require_row(article_id)
        user = self._session.get(UserRow, user_id)
        if user not in row.favorited_by:
            row.favorited_by.append(user)
        self._session.commit()

    def remove_favorite(self, user_id: int, article_id: int) -> None:
        row = self._require_row(article_id)
        user = self._session.get(UserRow, user_id)
        if user in row.favorited_by:
            row.favorited_by.remove(user)
        self._session.commit()
