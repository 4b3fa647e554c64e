"""
Use case: List articles written by the users the caller follows.

Input: FeedArticlesQuery (caller, limit, offset)
Output: ArticlePage
Side effects: None (read-only query).
Failure cases: UnauthorizedError.
"""

from conduit.application.content.dtos import FeedArticlesQuery
from conduit.application.content.guards import require_caller
from conduit.domain.content.entities import ArticleFilter, ArticlePage
from conduit.domain.content.ports import ArticleRepository


class FeedArticlesUseCase:
    def __init__(self, article_repo: ArticleRepository) -> None:
        self._article_repo = article_repo

    def execute(self, query: FeedArticlesQuery) -> ArticlePage:
        caller = require_caller(query.caller)
        return self._article_repo.find_and_count(
            ArticleFilter(followed_by_id=caller.id),
            limit=query.limit,
            offset=query.offset,
            viewer_id=caller.id,
        )
