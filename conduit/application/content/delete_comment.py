"""
Use case: Delete a comment owned by the caller.

Input: DeleteCommentCommand (caller, slug, comment_id)
Output: Confirmation message
Side effects: Removes the comment.
Failure cases: UnauthorizedError, NotFoundError, ForbiddenError.
"""

import logging
from typing import Optional

from conduit.application.content.dtos import DeleteCommentCommand
from conduit.application.content.guards import mutate_owned
from conduit.domain.content.entities import Caller, Comment
from conduit.domain.content.ports import ArticleRepository, CommentRepository

logger = logging.getLogger(__name__)

COMMENT_DELETED = "Comment deleted successfully"


class DeleteCommentUseCase:
    """Orchestrates an ownership-gated comment deletion.

    A comment addressed through the wrong article slug counts as absent.
    """

    def __init__(
        self, article_repo: ArticleRepository, comment_repo: CommentRepository
    ) -> None:
        self._article_repo = article_repo
        self._comment_repo = comment_repo

    def _load(self, command: DeleteCommentCommand) -> Optional[Comment]:
        comment = self._comment_repo.get_by_id(command.comment_id)
        if comment is None:
            return None
        article = self._article_repo.get_by_slug(command.slug)
        if article is None or article.id != comment.article_id:
            return None
        return comment

    def execute(self, command: DeleteCommentCommand) -> str:
        def remove(caller: Caller, comment: Comment) -> str:
            logger.info("Deleting comment id=%d", comment.id)
            self._comment_repo.delete(comment.id)
            return COMMENT_DELETED

        return mutate_owned(
            caller=command.caller,
            resource_name="comment",
            key=command.comment_id,
            load=lambda caller: self._load(command),
            owner_of=lambda comment: comment.author_id,
            action=remove,
        )
