"""
Use case: Favorite or unfavorite an article.

Input: FavoriteArticleCommand (caller, slug, direction)
Output: Article reflecting the new favorited state and count
Side effects: Adds or removes the favorite relation.
Failure cases: UnauthorizedError, NotFoundError.
"""

import logging

from conduit.application.content.dtos import FavoriteArticleCommand
from conduit.application.content.guards import toggle_relation
from conduit.domain.content.entities import Article
from conduit.domain.content.ports import ArticleRepository

logger = logging.getLogger(__name__)


class FavoriteArticleUseCase:
    """Toggles the caller's favorite mark on an article."""

    def __init__(self, article_repo: ArticleRepository) -> None:
        self._article_repo = article_repo

    def execute(self, command: FavoriteArticleCommand) -> Article:
        """Run the favorite toggle.

        Raises:
            UnauthorizedError: If there is no caller.
            NotFoundError: If the slug does not resolve.
        """
        logger.info(
            "Favorite toggle slug=%s direction=%s",
            command.slug,
            command.direction.value,
        )
        return toggle_relation(
            caller=command.caller,
            direction=command.direction,
            resource_name="article",
            key=command.slug,
            load=lambda caller: self._article_repo.get_by_slug(command.slug),
            add=lambda caller, article: self._article_repo.add_favorite(
                caller.id, article.id
            ),
            remove=lambda caller, article: self._article_repo.remove_favorite(
                caller.id, article.id
            ),
            reload=lambda caller, article: self._article_repo.get_by_slug(
                article.slug, viewer_id=caller.id
            ),
        )
