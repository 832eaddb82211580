"""
Verify Email Use Case

Consumes an email verification token and activates the account.
"""

import logging
from uuid import UUID

from src.app.services.token_codec import TokenCodec, TokenError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import ErrorCode
from src.domain.entities import TokenPurpose
from src.libs.result import Error, Result, Return
from .dtos import VerifyEmailResponse

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must carry a valid signature, purpose=email_verification and
      an unexpired exp claim
    - Invalid and expired tokens are reported the same way
    - Only a Pending account is activated; the status flip is a single
      conditional update, so a replayed token fails with ALREADY_VERIFIED
    """

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, token: str) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            token: Verification token from email link

        Returns:
            Result with verification status, or Error

        Errors:
            - INVALID_OR_EXPIRED_TOKEN: Bad signature, wrong purpose or expired
            - ACCOUNT_NOT_FOUND: Token subject no longer exists
            - ALREADY_VERIFIED: Account is not Pending anymore
        """
        try:
            account_id = UUID(
                self.token_codec.verify(token, TokenPurpose.email_verification)
            )
        except (TokenError, ValueError):
            return Return.err(
                Error(ErrorCode.INVALID_OR_EXPIRED_TOKEN, "Invalid or expired token")
            )

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(
                    Error(ErrorCode.ACCOUNT_NOT_FOUND, "Account not found")
                )

            activated = await self.uow.accounts.activate_if_pending(account_id)
            if not activated:
                return Return.err(
                    Error(ErrorCode.ALREADY_VERIFIED, "Email already verified")
                )

            await self.uow.commit()

        logger.info(f"Email verified for account {account_id}")

        return Return.ok(
            VerifyEmailResponse(status="verified", message="Email verified successfully")
        )
