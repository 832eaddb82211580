"""
Login Use Case

Authenticates an account and issues a session token.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from src.app.services.clock import utcnow
from src.app.services.password_policy import PasswordPolicy
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import ErrorCode
from src.domain.entities import AccountStatus, TokenPurpose
from src.libs.result import Error, Result, Return
from .dtos import LoginResponse

logger = logging.getLogger(__name__)


def format_ttl(ttl: timedelta) -> str:
    """Render a token lifetime the way clients expect it ("2h", "30m", "45s")"""
    seconds = int(ttl.total_seconds())
    if seconds % 3600 == 0:
        return f"{seconds // 3600}h"
    if seconds % 60 == 0:
        return f"{seconds // 60}m"
    return f"{seconds}s"


class LoginUseCase:
    """
    Use case for account login and session token issuance.

    Business Rules (each gate short-circuits, in this order):
    1. Unknown email -> INVALID_CREDENTIALS (no account enumeration)
    2. Status other than Active -> EMAIL_NOT_VERIFIED
    3. Wrong password -> INVALID_CREDENTIALS
    4. Password older than the max age -> PASSWORD_EXPIRED
    5. Issue a 2h session token
    6. Upsert the account's session (active, last_accessed=now)

    Nothing is written before every gate has passed.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        password_policy: PasswordPolicy,
        session_ttl: timedelta = timedelta(hours=2),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.password_policy = password_policy
        self.session_ttl = session_ttl
        self.clock = clock

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: Account email
            password: Plain text password

        Returns:
            Result with LoginResponse (token, expires_in), or Error
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)

            if account is None:
                # Hash a dummy password so unknown emails take as long as known ones
                self.password_policy.burn_time()
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")
                )

            if account.status != AccountStatus.active:
                return Return.err(
                    Error(
                        ErrorCode.EMAIL_NOT_VERIFIED,
                        "Please verify your email before logging in",
                    )
                )

            if not self.password_policy.matches(password, account.password_hash):
                return Return.err(
                    Error(ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")
                )

            now = self.clock()
            if self.password_policy.is_expired(
                account.password_changed_at, account.created_at, now
            ):
                return Return.err(
                    Error(
                        ErrorCode.PASSWORD_EXPIRED,
                        "Your password has expired. Please change your password.",
                    )
                )

            token = self.token_codec.issue(
                account.id,
                self.session_ttl,
                TokenPurpose.session,
                claims={"email": account.email, "role": account.role.value},
            )

            await self.uow.sessions.upsert_by_account_id(account.id, now)
            await self.uow.commit()

            logger.info(f"Login succeeded for account {account.id}")

        return Return.ok(LoginResponse(token=token, expires_in=format_ttl(self.session_ttl)))
