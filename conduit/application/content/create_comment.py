"""
Use case: Comment on an article.

Input: CreateCommentCommand (caller, slug, body)
Output: Comment
Side effects: Persists the comment.
Failure cases: UnauthorizedError, FieldRequiredError, NotFoundError.
"""

import logging

from conduit.application.content.dtos import CreateCommentCommand
from conduit.application.content.guards import require_caller, require_fields
from conduit.domain.content.entities import Comment
from conduit.domain.content.errors import NotFoundError
from conduit.domain.content.ports import ArticleRepository, CommentRepository

logger = logging.getLogger(__name__)


class CreateCommentUseCase:
    """Orchestrates comment creation against an existing article."""

    def __init__(
        self, article_repo: ArticleRepository, comment_repo: CommentRepository
    ) -> None:
        self._article_repo = article_repo
        self._comment_repo = comment_repo

    def execute(self, command: CreateCommentCommand) -> Comment:
        """Run the create use case.

        Raises:
            UnauthorizedError: If there is no caller.
            FieldRequiredError: If the body is missing.
            NotFoundError: If the slug does not resolve.
        """
        caller = require_caller(command.caller)
        require_fields(command, ("body",))

        article = self._article_repo.get_by_slug(command.slug)
        if article is None:
            raise NotFoundError("Article", command.slug)

        logger.info("Creating comment on slug=%s author_id=%d", command.slug, caller.id)
        return self._comment_repo.create(
            article_id=article.id, author_id=caller.id, body=command.body
        )
