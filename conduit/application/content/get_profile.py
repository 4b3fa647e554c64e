"""
Use case: Read a user's public profile.

Input: GetProfileQuery (username, optional caller)
Output: Profile
Side effects: None (read-only query).
Failure cases: NotFoundError.
"""

from conduit.application.content.dtos import GetProfileQuery
from conduit.domain.content.entities import Profile
from conduit.domain.content.errors import NotFoundError
from conduit.domain.content.ports import UserRepository


class GetProfileUseCase:
    """Looks up a profile by username; the caller only affects ``following``."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, query: GetProfileQuery) -> Profile:
        viewer_id = query.caller.id if query.caller else None
        profile = self._user_repo.get_profile(query.username, viewer_id=viewer_id)
        if profile is None:
            raise NotFoundError("Profile", query.username)
        return profile
