"""
Use case: Publish a new article.

Input: CreateArticleCommand (caller, title, description, body, tag_list)
Output: Article
Side effects: Persists the article and any tag not yet known.
Failure cases: UnauthorizedError, FieldRequiredError, AlreadyTakenError.
"""

import logging
from typing import Iterable, Optional

from conduit.application.content.dtos import CreateArticleCommand
from conduit.application.content.guards import require_caller, require_fields
from conduit.domain.content.entities import Article
from conduit.domain.content.errors import AlreadyTakenError
from conduit.domain.content.ports import ArticleRepository
from conduit.domain.content.slugs import candidate_slugs

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "body")


def normalize_tags(tag_list: Optional[Iterable[str]]) -> list[str]:
    """Strip tag names, drop blanks and duplicates, keep first-seen order."""
    seen: dict[str, None] = {}
    for name in tag_list or []:
        name = name.strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)


class CreateArticleUseCase:
    """Orchestrates article creation.

    Requires a caller, validates the payload, rejects a title already in
    use, derives a unique slug and persists the article with its tags.
    """

    def __init__(self, article_repo: ArticleRepository) -> None:
        self._article_repo = article_repo

    def execute(self, command: CreateArticleCommand) -> Article:
        """Run the create use case.

        Raises:
            UnauthorizedError: If there is no caller.
            FieldRequiredError: For the first missing of title, description, body.
            AlreadyTakenError: If the title is already used.
        """
        caller = require_caller(command.caller)
        require_fields(command, REQUIRED_FIELDS)

        if self._article_repo.title_exists(command.title):
            raise AlreadyTakenError("title", command.title)

        slug = next(
            s for s in candidate_slugs(command.title)
            if not self._article_repo.slug_exists(s)
        )
        logger.info("Creating article slug=%s author_id=%d", slug, caller.id)

        return self._article_repo.create(
            author_id=caller.id,
            slug=slug,
            title=command.title,
            description=command.description,
            body=command.body,
            tag_names=normalize_tags(command.tag_list),
        )
