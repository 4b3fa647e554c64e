"""
Use case: Follow or unfollow a user.

Input: FollowProfileCommand (caller, username, direction)
Output: Profile reflecting the new following state
Side effects: Adds or removes the follow relation.
Failure cases: UnauthorizedError, NotFoundError.
"""

import logging

from conduit.application.content.dtos import FollowProfileCommand
from conduit.application.content.guards import toggle_relation
from conduit.domain.content.entities import Profile
from conduit.domain.content.ports import UserRepository

logger = logging.getLogger(__name__)


class FollowProfileUseCase:
    """Toggles the caller's follow relation to another user."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, command: FollowProfileCommand) -> Profile:
        """Run the follow toggle.

        Raises:
            UnauthorizedError: If there is no caller.
            NotFoundError: If the username does not exist.
        """
        logger.info(
            "Follow toggle username=%s direction=%s",
            command.username,
            command.direction.value,
        )
        return toggle_relation(
            caller=command.caller,
            direction=command.direction,
            resource_name="profile",
            key=command.username,
            load=lambda caller: self._user_repo.get_by_username(command.username),
            add=lambda caller, user: self._user_repo.add_follow(caller.id, user.id),
            remove=lambda caller, user: self._user_repo.remove_follow(
                caller.id, user.id
            ),
            reload=lambda caller, user: self._user_repo.get_profile(
                user.username, viewer_id=caller.id
            ),
        )
