"""
Use case: Read the comments of an article.

Input: ListCommentsQuery (slug, optional caller)
Output: list[Comment], oldest first
Side effects: None (read-only query).
Failure cases: NotFoundError.
"""

from conduit.application.content.dtos import ListCommentsQuery
from conduit.domain.content.entities import Comment
from conduit.domain.content.errors import NotFoundError
from conduit.domain.content.ports import ArticleRepository, CommentRepository


class ListCommentsUseCase:
    def __init__(
        self, article_repo: ArticleRepository, comment_repo: CommentRepository
    ) -> None:
        self._article_repo = article_repo
        self._comment_repo = comment_repo

    def execute(self, query: ListCommentsQuery) -> list[Comment]:
        article = self._article_repo.get_by_slug(query.slug)
        if article is None:
            raise NotFoundError("Article", query.slug)
        viewer_id = query.caller.id if query.caller else None
        return self._comment_repo.list_for_article(article.id, viewer_id=viewer_id)
