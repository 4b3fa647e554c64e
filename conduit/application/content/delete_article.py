"""
Use case: Delete an article owned by the caller.

Input: DeleteArticleCommand (caller, slug)
Output: Confirmation message
Side effects: Removes the article, its comments and its relations.
Failure cases: UnauthorizedError, NotFoundError, ForbiddenError.
"""

import logging

from conduit.application.content.dtos import DeleteArticleCommand
from conduit.application.content.guards import mutate_owned
from conduit.domain.content.entities import Article, Caller
from conduit.domain.content.ports import ArticleRepository

logger = logging.getLogger(__name__)

ARTICLE_DELETED = "Article deleted successfully"


class DeleteArticleUseCase:
    """Orchestrates an ownership-gated article deletion."""

    def __init__(self, article_repo: ArticleRepository) -> None:
        self._article_repo = article_repo

    def execute(self, command: DeleteArticleCommand) -> str:
        def remove(caller: Caller, article: Article) -> str:
            logger.info("Deleting article slug=%s", article.slug)
            self._article_repo.delete(article.id)
            return ARTICLE_DELETED

        return mutate_owned(
            caller=command.caller,
            resource_name="article",
            key=command.slug,
            load=lambda caller: self._article_repo.get_by_slug(command.slug),
            owner_of=lambda article: article.author_id,
            action=remove,
        )
