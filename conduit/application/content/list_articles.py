"""
Use case: List articles with optional filters and pagination.

Input: ListArticlesQuery (author, tag, favorited, limit, offset)
Output: ArticlePage (page plus total match count)
Side effects: None (read-only query).
Failure cases: None. An unknown "favorited" username yields an empty page.
"""

import logging

from conduit.application.content.dtos import ListArticlesQuery
from conduit.domain.content.entities import ArticleFilter, ArticlePage
from conduit.domain.content.ports import ArticleRepository, UserRepository

logger = logging.getLogger(__name__)


class ListArticlesUseCase:
    """Orchestrates the filtered article listing.

    Filters combine conjunctively; with none given, every article is
    listed, most recent first.
    """

    def __init__(
        self, article_repo: ArticleRepository, user_repo: UserRepository
    ) -> None:
        self._article_repo = article_repo
        self._user_repo = user_repo

    def execute(self, query: ListArticlesQuery) -> ArticlePage:
        """Run the listing use case.

        Args:
            query: Filters, pagination and the optional caller.

        Returns:
            One page of articles with the total count ignoring pagination.
        """
        logger.info(
            "Listing articles: author=%s, tag=%s, favorited=%s, limit=%d, offset=%d",
            query.author,
            query.tag,
            query.favorited,
            query.limit,
            query.offset,
        )

        favorited_by_id = None
        if query.favorited:
            fan = self._user_repo.get_by_username(query.favorited)
            if fan is None:
                return ArticlePage(articles=[], count=0)
            favorited_by_id = fan.id

        filters = ArticleFilter(
            author=query.author or None,
            tag=query.tag or None,
            favorited_by_id=favorited_by_id,
        )
        return self._article_repo.find_and_count(
            filters,
            limit=query.limit,
            offset=query.offset,
            viewer_id=query.caller.id if query.caller else None,
        )
