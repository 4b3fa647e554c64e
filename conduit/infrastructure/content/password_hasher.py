"""
Adapter: Password hashing.

Implements PasswordHasher port with passlib's bcrypt scheme.
"""

from passlib.context import CryptContext

from conduit.domain.content.ports import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt digests through a passlib CryptContext."""

    def __init__(self, rounds: int = 12) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        return self._context.verify(plaintext, digest)
