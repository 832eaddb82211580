"""
Account Setup Use Cases

Admin-initiated onboarding: the employee opens a setup link, sees their
prefilled details and chooses a password, which activates the account.

A setup token carries the account's password version (its
password_changed_at at issue time). Completing setup moves that timestamp,
so each link applies once.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Tuple
from uuid import UUID

from src.app.services.clock import utcnow
from src.app.services.password_policy import PasswordPolicy
from src.app.services.token_codec import TokenCodec, TokenError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import ErrorCode
from src.domain.entities import Account, AccountStatus, TokenPurpose
from src.libs.result import Error, Result, Return
from .dtos import CompleteSetupResponse, SetupDetailsResponse

logger = logging.getLogger(__name__)

PASSWORD_VERSION_CLAIM = "pwv"


def password_version(changed_at: Optional[datetime]) -> str:
    """Setup token claim identifying the password a link was issued against"""
    return changed_at.isoformat() if changed_at else ""


def _invalid_token() -> Result:
    return Return.err(Error(ErrorCode.INVALID_OR_EXPIRED_TOKEN, "Invalid or expired token"))


def _decode_setup_token(token_codec: TokenCodec, token: str) -> Result[Tuple[UUID, str]]:
    try:
        payload = token_codec.decode(token, TokenPurpose.account_setup)
        account_id = UUID(payload["sub"])
    except (TokenError, ValueError):
        return _invalid_token()

    version = payload.get(PASSWORD_VERSION_CLAIM)
    if not isinstance(version, str):
        return _invalid_token()
    return Return.ok((account_id, version))


async def _load_for_setup(uow: UnitOfWork, account_id: UUID, version: str) -> Result[Account]:
    account = await uow.accounts.get_by_id(account_id)
    if account is None:
        return Return.err(Error(ErrorCode.ACCOUNT_NOT_FOUND, "Account not found"))
    if account.status == AccountStatus.suspended:
        return Return.err(Error(ErrorCode.ACCOUNT_SUSPENDED, "Account is suspended"))
    if password_version(account.password_changed_at) != version:
        # Link already used, or the password moved on since it was issued
        return _invalid_token()
    return Return.ok(account)


class GetSetupDetailsUseCase:
    """Resolve a setup token to the email and name used to prefill the form"""

    def __init__(self, uow: UnitOfWork, token_codec: TokenCodec):
        self.uow = uow
        self.token_codec = token_codec

    async def execute(self, token: str) -> Result[SetupDetailsResponse]:
        decoded = _decode_setup_token(self.token_codec, token)
        if decoded.is_err():
            return Return.err(decoded.error)
        account_id, version = decoded.value

        async with self.uow:
            loaded = await _load_for_setup(self.uow, account_id, version)
            if loaded.is_err():
                return Return.err(loaded.error)

            account = loaded.value
            return Return.ok(SetupDetailsResponse(email=account.email, name=account.name))


class CompleteSetupUseCase:
    """
    Use case for finishing account setup.

    Business Rules:
    - Token must be a valid, unexpired account_setup token for the
      account's current password version (one use per link)
    - Suspended accounts are rejected; setup never lifts a suspension
    - The chosen password must not be one of the last 5 passwords
    - Sets the password, activates the account and restarts password aging
      in one conditional update
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        password_policy: PasswordPolicy,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.password_policy = password_policy
        self.clock = clock

    async def execute(self, token: str, password: str) -> Result[CompleteSetupResponse]:
        """
        Errors:
            - INVALID_OR_EXPIRED_TOKEN: bad, expired or already used link
            - ACCOUNT_NOT_FOUND
            - ACCOUNT_SUSPENDED
            - PASSWORD_REUSED: chosen password is one of the last 5
        """
        decoded = _decode_setup_token(self.token_codec, token)
        if decoded.is_err():
            return Return.err(decoded.error)
        account_id, version = decoded.value

        async with self.uow:
            loaded = await _load_for_setup(self.uow, account_id, version)
            if loaded.is_err():
                return Return.err(loaded.error)
            account = loaded.value

            if self.password_policy.is_reused(password, account.password_history):
                return Return.err(
                    Error(
                        ErrorCode.PASSWORD_REUSED,
                        "New password must not match any of your last "
                        f"{self.password_policy.history_size} passwords",
                    )
                )

            new_hash = self.password_policy.hash(password)
            completed = await self.uow.accounts.complete_setup(
                account_id,
                expected_changed_at=account.password_changed_at,
                password_hash=new_hash,
                password_history=self.password_policy.push_history(
                    account.password_history, new_hash
                ),
                changed_at=self.clock(),
            )
            if not completed:
                # Suspended or used concurrently between the read and the update
                return _invalid_token()

            await self.uow.commit()

            logger.info(f"Account setup completed for account {account_id}")

        return Return.ok(
            CompleteSetupResponse(status="active", message="Account setup completed")
        )
