"""
Use case: Authenticate with email and password (sign-in).

Input: LoginUserCommand (email, password)
Output: UserResult with a fresh session token
Side effects: None.
Failure cases: FieldRequiredError, NotFoundError, ValidationError.
"""

import logging

from conduit.application.content.dtos import LoginUserCommand, UserResult
from conduit.application.content.guards import require_fields
from conduit.domain.content.errors import NotFoundError, ValidationError
from conduit.domain.content.ports import PasswordHasher, TokenSigner, UserRepository

logger = logging.getLogger(__name__)


class LoginUserUseCase:
    """Orchestrates sign-in: look up by email, check the password, sign a token."""

    def __init__(
        self,
        user_repo: UserRepository,
        hasher: PasswordHasher,
        signer: TokenSigner,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._signer = signer

    def execute(self, command: LoginUserCommand) -> UserResult:
        """Run the sign-in use case.

        Raises:
            FieldRequiredError: If email or password is missing.
            NotFoundError: If no user has this email.
            ValidationError: If the password does not match.
        """
        require_fields(command, ("email", "password"))

        user = self._user_repo.get_by_email(command.email)
        if user is None:
            raise NotFoundError("Email", command.email)
        if not self._hasher.verify(command.password, user.password_hash):
            logger.info("Rejected sign-in for user_id=%d", user.id)
            raise ValidationError("Wrong email/password combination")

        logger.info("Signed in user_id=%d", user.id)
        return UserResult(
            email=user.email,
            token=self._signer.sign(user.id),
            username=user.username,
            bio=user.bio,
            image=user.image,
        )
