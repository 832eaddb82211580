"""
Token Codec

Signed, time-bound, stateless tokens (HS256 JWT) carrying an account id
and a purpose. Nothing is persisted: a token is valid when its signature,
purpose and expiry check out.
"""

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from jose import JWTError, jwt

from src.app.services.clock import utcnow
from src.domain.entities import TokenPurpose


class TokenError(Exception):
    """Base class for token verification failures"""


class InvalidTokenError(TokenError):
    """Signature mismatch, malformed token or wrong purpose"""


class ExpiredTokenError(TokenError):
    """Token is past its expiry"""


@dataclass(frozen=True)
class TokenConfig:
    secret: str
    algorithm: str = "HS256"


class TokenCodec:
    """
    Issues and verifies signed tokens.

    The signing secret comes from the injected TokenConfig, never from
    process-wide state. The injected clock drives both issue time and the
    expiry check on decode.
    """

    def __init__(
        self, config: TokenConfig, clock: Callable[[], datetime] = utcnow
    ):
        self.config = config
        self.clock = clock

    def issue(
        self,
        subject_id: Any,
        ttl: timedelta,
        purpose: TokenPurpose,
        claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Issue a signed token.

        Args:
            subject_id: Account id the token speaks for
            ttl: Lifetime; expiry is now + ttl
            purpose: What the token may be used for
            claims: Extra claims to embed (e.g. email, role)

        Returns:
            Encoded JWT string
        """
        now = self.clock()
        payload = dict(claims or {})
        payload.update(
            {
                "sub": str(subject_id),
                "purpose": purpose.value,
                "iat": now,
                "exp": now + ttl,
            }
        )
        return jwt.encode(payload, self.config.secret, algorithm=self.config.algorithm)

    def decode(self, token: str, purpose: TokenPurpose) -> Dict[str, Any]:
        """
        Verify a token and return its claims.

        Raises:
            ExpiredTokenError: token is past expiry
            InvalidTokenError: bad signature, malformed, or wrong purpose
        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret,
                algorithms=[self.config.algorithm],
                # exp is checked below against the codec clock
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidTokenError("Token is invalid") from exc

        exp = payload.get("exp")
        if not isinstance(exp, int):
            raise InvalidTokenError("Token is invalid")
        if exp < calendar.timegm(self.clock().utctimetuple()):
            raise ExpiredTokenError("Token has expired")

        if payload.get("purpose") != purpose.value or not payload.get("sub"):
            raise InvalidTokenError("Token is invalid")

        return payload

    def verify(self, token: str, purpose: TokenPurpose) -> str:
        """Verify a token and return its subject (account id as string)"""
        return self.decode(token, purpose)["sub"]
