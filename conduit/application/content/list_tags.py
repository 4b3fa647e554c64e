"""
Use case: List every known tag name.
"""

from conduit.domain.content.ports import TagRepository


class ListTagsUseCase:
    def __init__(self, tag_repo: TagRepository) -> None:
        self._tag_repo = tag_repo

    def execute(self) -> list[str]:
        return self._tag_repo.list_names()
