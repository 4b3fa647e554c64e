"""
Adapter: Session tokens.

Implements TokenSigner port with python-jose JWTs. The subject claim
carries the user identifier; tokens expire after a configured lifetime.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from conduit.domain.content.ports import TokenSigner

logger = logging.getLogger(__name__)


class JwtTokenSigner(TokenSigner):
    """Issues and verifies signed JWT session tokens.

    Args:
        secret_key: Shared secret for HMAC signing.
        algorithm: JWS algorithm name.
        expire_minutes: Token lifetime.
    """

    def __init__(
        self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expire_minutes)

    def sign(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        claims = {"sub": str(user_id), "iat": now, "exp": now + self._lifetime}
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[int]:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            logger.info("Rejected session token")
            return None
        subject = payload.get("sub")
        if subject is None or not str(subject).isdigit():
            return None
        return int(subject)
