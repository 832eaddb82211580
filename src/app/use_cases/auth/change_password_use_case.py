"""
Change Password Use Case

Rotates an account password under the reuse-history policy.
"""

import logging
from datetime import datetime
from typing import Callable
from uuid import UUID

from src.app.services.clock import utcnow
from src.app.services.password_policy import PasswordPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import ErrorCode
from src.libs.result import Error, Result, Return
from .dtos import ChangePasswordResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing a password.

    Business Rules:
    - Current password must match the stored hash
    - New password must not match any of the last 5 passwords set
      (current one included)
    - Rotation pushes the new hash onto the bounded history and resets
      password_changed_at, which restarts the 180-day aging clock
    - When end_session_on_change is set, the account's session record is
      soft-ended in the same transaction; otherwise sessions are untouched
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_policy: PasswordPolicy,
        end_session_on_change: bool = False,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.password_policy = password_policy
        self.end_session_on_change = end_session_on_change
        self.clock = clock

    async def execute(
        self, account_id: UUID, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        """
        Execute change password use case.

        Errors:
            - ACCOUNT_NOT_FOUND
            - INCORRECT_PASSWORD: current password does not match
            - PASSWORD_REUSED: new password is one of the last 5
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error(ErrorCode.ACCOUNT_NOT_FOUND, "Account not found"))

            if not self.password_policy.matches(current_password, account.password_hash):
                return Return.err(
                    Error(ErrorCode.INCORRECT_PASSWORD, "Current password is incorrect")
                )

            history = account.password_history or [account.password_hash]
            if self.password_policy.is_reused(new_password, history):
                return Return.err(
                    Error(
                        ErrorCode.PASSWORD_REUSED,
                        "New password must not match any of your last "
                        f"{self.password_policy.history_size} passwords",
                    )
                )

            new_hash = self.password_policy.hash(new_password)
            account.password_hash = new_hash
            # Assign a new list so the JSON column is flagged dirty
            account.password_history = self.password_policy.push_history(history, new_hash)
            account.password_changed_at = self.clock()
            await self.uow.accounts.update(account)

            ended = 0
            if self.end_session_on_change:
                ended = await self.uow.sessions.deactivate_by_account_id(account_id)

            await self.uow.commit()

            logger.info(
                f"Password changed for account {account_id} (sessions ended: {ended})"
            )

        return Return.ok(
            ChangePasswordResponse(status="success", message="Password updated successfully")
        )
