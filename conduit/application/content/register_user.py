"""
Use case: Register a new account (sign-up).

Input: RegisterUserCommand (username, email, password)
Output: UserResult with a fresh session token
Side effects: Persists a user with a hashed password.
Failure cases: FieldRequiredError, AlreadyTakenError.
"""

import logging

from conduit.application.content.dtos import RegisterUserCommand, UserResult
from conduit.application.content.guards import require_fields
from conduit.domain.content.errors import AlreadyTakenError
from conduit.domain.content.ports import PasswordHasher, TokenSigner, UserRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "email", "password")


class RegisterUserUseCase:
    """Orchestrates account creation.

    Validates the payload, enforces unique email and username, hashes
    the password and issues a session token for the new account.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        signer: TokenSigner,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._signer = signer

    def execute(self, command: RegisterUserCommand) -> UserResult:
        """Run the sign-up use case.

        Args:
            command: The sign-up payload.

        Returns:
            The new user's representation with a session token.

        Raises:
            FieldRequiredError: If username, email or password is missing.
            AlreadyTakenError: If the email or username is in use.
        """
        require_fields(command, REQUIRED_FIELDS)
        logger.info("Registering user username=%s", command.username)

        if self._user_repo.get_by_email(command.email) is not None:
            raise AlreadyTakenError("email", command.email)
        if self._user_repo.get_by_username(command.username) is not None:
            raise AlreadyTakenError("username", command.username)

        user = self._user_repo.create(
            username=command.username,
            email=command.email,
            password_hash=self._hasher.hash(command.password),
        )
        return UserResult(
            email=user.email,
            token=self._signer.sign(user.id),
            username=user.username,
            bio=user.bio,
            image=user.image,
        )
