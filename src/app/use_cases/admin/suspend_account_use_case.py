"""
Use Case: Suspend Account

Blocks an account from logging in and ends its session record.
"""

from uuid import UUID
from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import ErrorCode
from src.domain.entities import AccountStatus
from src.libs.result import Error, Result, Return


class SuspendAccountResponse(BaseModel):
    """Response DTO for SuspendAccountUseCase"""

    status: str
    sessions_ended: int


class SuspendAccountUseCase:
    """
    Suspend an account (admin API key integration).

    Business Logic:
    1. Validate account exists
    2. Set status to Suspended (login then fails at the status gate)
    3. Soft-end the account's session

    Idempotent: suspending an already-suspended account succeeds and ends 0 sessions
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[SuspendAccountResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if not account:
                return Return.err(Error(ErrorCode.ACCOUNT_NOT_FOUND, "Account not found"))

            account.status = AccountStatus.suspended
            await self.uow.accounts.update(account)

            sessions_ended = await self.uow.sessions.deactivate_by_account_id(account_id)

            await self.uow.commit()

            return Return.ok(
                SuspendAccountResponse(
                    status=AccountStatus.suspended.value, sessions_ended=sessions_ended
                )
            )
