"""
Use Case: Send Setup Invitation

Admin-initiated onboarding. Emails a signed account_setup link that lets
the employee choose a password and activate the account.
"""

import logging
from datetime import timedelta
from uuid import UUID
from pydantic import BaseModel

from src.app.services.email_sender import IEmailSender
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.account_setup_use_case import (
    PASSWORD_VERSION_CLAIM,
    password_version,
)
from src.app.use_cases.errors import ErrorCode
from src.domain.entities import AccountStatus, TokenPurpose
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class SendSetupInvitationResponse(BaseModel):
    """Response DTO for SendSetupInvitationUseCase"""

    status: str
    email_sent: bool


class SendSetupInvitationUseCase:
    """
    Send an account setup link (admin API key integration).

    Business Logic:
    1. Validate account exists and is not Suspended
    2. Issue an account_setup token (24h by default) bound to the current
       password version, so the link is single-use
    3. Email it; delivery failure is logged and reported, not raised
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        email_sender: IEmailSender,
        setup_ttl: timedelta = timedelta(days=1),
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.email_sender = email_sender
        self.setup_ttl = setup_ttl

    async def execute(self, account_id: UUID) -> Result[SendSetupInvitationResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if not account:
                return Return.err(Error(ErrorCode.ACCOUNT_NOT_FOUND, "Account not found"))
            if account.status == AccountStatus.suspended:
                return Return.err(Error(ErrorCode.ACCOUNT_SUSPENDED, "Account is suspended"))
            email = account.email
            version = password_version(account.password_changed_at)

        token = self.token_codec.issue(
            account_id,
            self.setup_ttl,
            TokenPurpose.account_setup,
            claims={PASSWORD_VERSION_CLAIM: version},
        )

        email_sent = True
        try:
            await self.email_sender.send_account_setup(email, token)
        except Exception:
            logger.exception(f"Setup email delivery failed for account {account_id}")
            email_sent = False

        return Return.ok(SendSetupInvitationResponse(status="sent", email_sent=email_sent))
