"""Signed bearer tokens for authenticated lecturers."""

import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from jose import JWTError, jwt

from config import AuthSettings
from core.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Issues and verifies HS256 JWTs carrying a principal id in ``sub``."""

    def __init__(self, settings: AuthSettings):
        """Initialize TokenIssuer.

        Args:
            settings: Authentication settings holding the signing secret,
                algorithm and token lifetime.
        """
        self.secret_key = settings.secret_key
        self.algorithm = settings.algorithm
        self.expires = settings.token_expires

    def issue(self, principal_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a signed token for a principal.

        Args:
            principal_id: Identifier to encode in the ``sub`` claim.
            expires_delta: Optional lifetime overriding the configured one.

        Returns:
            Encoded JWT string.
        """
        expire = datetime.now(pytz.utc) + (expires_delta or self.expires)
        to_encode = {"sub": principal_id, "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify a token and return the principal id it carries.

        Args:
            token: Encoded JWT string.

        Returns:
            The principal id from the ``sub`` claim.

        Raises:
            InvalidTokenError: If the signature is invalid, the token is
                malformed or expired, or the ``sub`` claim is missing.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidTokenError() from exc

        principal_id = payload.get("sub")
        if not principal_id:
            raise InvalidTokenError()
        return principal_id
