"""
Resend Verification Email Use Case

Issues a fresh email verification token for a still-Pending account.
"""

import logging
from datetime import timedelta

from src.app.services.email_sender import IEmailSender
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AccountStatus, TokenPurpose
from src.libs.result import Result, Return
from .dtos import ResendVerificationResponse

logger = logging.getLogger(__name__)


class ResendVerificationUseCase:
    """
    Use case for resending email verification.

    Business Rules:
    - Pending account: issue a new 24h token and email it
    - Any other status: return already_verified, nothing sent
    - Unknown email: same response as a send (no enumeration)
    - Tokens are stateless, so older tokens stay valid until they expire
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        email_sender: IEmailSender,
        verification_ttl: timedelta = timedelta(days=1),
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.email_sender = email_sender
        self.verification_ttl = verification_ttl

    async def execute(self, email: str) -> Result[ResendVerificationResponse]:
        sent = ResendVerificationResponse(
            status="sent",
            message="If the email exists, a verification link has been sent",
        )

        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)

            if account is None:
                return Return.ok(sent)

            if account.status != AccountStatus.pending:
                return Return.ok(
                    ResendVerificationResponse(
                        status="already_verified", message="Email is already verified"
                    )
                )

            account_id = account.id

        token = self.token_codec.issue(
            account_id, self.verification_ttl, TokenPurpose.email_verification
        )
        try:
            await self.email_sender.send_verification(email, token)
        except Exception:
            logger.exception(f"Verification email delivery failed for account {account_id}")

        return Return.ok(sent)
