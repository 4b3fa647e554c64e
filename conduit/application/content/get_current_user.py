"""
Use case: Return the authenticated caller's own account.

Input: Optional[Caller]
Output: UserResult carrying the caller's token
Side effects: None.
Failure cases: UnauthorizedError.
"""

from typing import Optional

from conduit.application.content.dtos import UserResult
from conduit.application.content.guards import require_caller
from conduit.domain.content.entities import Caller
from conduit.domain.content.errors import UnauthorizedError
from conduit.domain.content.ports import UserRepository


class GetCurrentUserUseCase:
    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, caller: Optional[Caller]) -> UserResult:
        caller = require_caller(caller)
        user = self._user_repo.get_by_id(caller.id)
        if user is None:
            raise UnauthorizedError()
        return UserResult(
            email=user.email,
            token=caller.token,
            username=user.username,
            bio=user.bio,
            image=user.image,
        )
