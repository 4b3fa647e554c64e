"""
Use case: Read a single article by slug.

Input: GetArticleQuery (slug, optional caller)
Output: Article
Side effects: None (read-only query).
Failure cases: NotFoundError.
"""

from conduit.application.content.dtos import GetArticleQuery
from conduit.domain.content.entities import Article
from conduit.domain.content.errors import NotFoundError
from conduit.domain.content.ports import ArticleRepository


class GetArticleUseCase:
    def __init__(self, article_repo: ArticleRepository) -> None:
        self._article_repo = article_repo

    def execute(self, query: GetArticleQuery) -> Article:
        viewer_id = query.caller.id if query.caller else None
        article = self._article_repo.get_by_slug(query.slug, viewer_id=viewer_id)
        if article is None:
            raise NotFoundError("Article", query.slug)
        return article
