"""
Use case: Update the caller's own account.

Input: UpdateUserCommand (caller, optional username/email/password/bio/image)
Output: UserResult
Side effects: Persists the changed attributes; a new password is hashed.
Failure cases: UnauthorizedError, FieldRequiredError, AlreadyTakenError.
"""

import logging

from conduit.application.content.dtos import UpdateUserCommand, UserResult
from conduit.application.content.guards import reject_blank, require_caller
from conduit.domain.content.errors import AlreadyTakenError, UnauthorizedError
from conduit.domain.content.ports import PasswordHasher, UserRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "email", "password")


class UpdateUserUseCase:
    """Orchestrates self-service account updates.

    No ownership check is needed: the caller can only ever address
    their own record. Fields left as None are not touched.
    """

    def __init__(self, user_repo: UserRepository, hasher: PasswordHasher) -> None:
        self._user_repo = user_repo
        self._hasher = hasher

    def execute(self, command: UpdateUserCommand) -> UserResult:
        """Run the update use case.

        Raises:
            UnauthorizedError: If there is no caller.
            FieldRequiredError: If username, email or password is sent blank.
            AlreadyTakenError: If the new username or email belongs to
                another user.
        """
        caller = require_caller(command.caller)
        reject_blank(command, REQUIRED_FIELDS)
        user = self._user_repo.get_by_id(caller.id)
        if user is None:
            raise UnauthorizedError()

        changes = {}
        if command.email is not None and command.email != user.email:
            other = self._user_repo.get_by_email(command.email)
            if other is not None and other.id != user.id:
                raise AlreadyTakenError("email", command.email)
            changes["email"] = command.email
        if command.username is not None and command.username != user.username:
            other = self._user_repo.get_by_username(command.username)
            if other is not None and other.id != user.id:
                raise AlreadyTakenError("username", command.username)
            changes["username"] = command.username
        if command.bio is not None:
            changes["bio"] = command.bio
        if command.image is not None:
            changes["image"] = command.image
        if command.password is not None:
            changes["password_hash"] = self._hasher.hash(command.password)

        logger.info(
            "Updating user_id=%d fields=%s", user.id, sorted(changes) or "none"
        )
        if changes:
            user = self._user_repo.update(user.id, changes)

        return UserResult(
            email=user.email,
            token=caller.token,
            username=user.username,
            bio=user.bio,
            image=user.image,
        )
