"""
Use case: Edit an article owned by the caller.

Input: UpdateArticleCommand (caller, slug, optional fields)
Output: Article
Side effects: Persists the changed attributes. The slug never changes.
Failure cases: UnauthorizedError, NotFoundError, ForbiddenError,
    FieldRequiredError, AlreadyTakenError.
"""

import logging

from conduit.application.content.create_article import normalize_tags
from conduit.application.content.dtos import UpdateArticleCommand
from conduit.application.content.guards import mutate_owned, reject_blank
from conduit.domain.content.entities import Article, Caller
from conduit.domain.content.errors import AlreadyTakenError
from conduit.domain.content.ports import ArticleRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "body")


class UpdateArticleUseCase:
    """Orchestrates an ownership-gated article edit."""

    def __init__(self, article_repo: ArticleRepository) -> None:
        self._article_repo = article_repo

    def execute(self, command: UpdateArticleCommand) -> Article:
        """Run the update use case.

        Raises:
            UnauthorizedError: If there is no caller.
            NotFoundError: If the slug does not resolve.
            ForbiddenError: If the caller is not the author.
            FieldRequiredError: If title, description or body is sent blank.
            AlreadyTakenError: If the new title belongs to another article.
        """

        def apply(caller: Caller, article: Article) -> Article:
            reject_blank(command, EDITABLE_FIELDS)
            changes = {
                name: getattr(command, name)
                for name in EDITABLE_FIELDS
                if getattr(command, name) is not None
            }
            title = changes.get("title")
            if title is not None and title != article.title:
                if self._article_repo.title_exists(title, exclude_id=article.id):
                    raise AlreadyTakenError("title", title)

            tag_names = None
            if command.tag_list is not None:
                tag_names = normalize_tags(command.tag_list)

            logger.info(
                "Updating article slug=%s fields=%s", article.slug, sorted(changes)
            )
            return self._article_repo.update(
                article.id, changes, tag_names=tag_names, viewer_id=caller.id
            )

        return mutate_owned(
            caller=command.caller,
            resource_name="article",
            key=command.slug,
            load=lambda caller: self._article_repo.get_by_slug(
                command.slug, viewer_id=caller.id
            ),
            owner_of=lambda article: article.author_id,
            action=apply,
        )
