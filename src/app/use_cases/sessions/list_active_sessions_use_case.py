"""
List Active Sessions Use Case

Paginated, time-filtered listing of currently logged-in accounts.
"""

from datetime import datetime
from typing import Optional

from src.app.services.clock import to_naive_utc
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import ErrorCode
from src.domain.entities import AccountRole
from src.libs.result import Error, Result, Return
from .dtos import ActiveSessionInfo, ActiveSessionsResponse


class ListActiveSessionsUseCase:
    """
    Use case for listing active sessions.

    Business Rules:
    - Caller must have role=admin
    - Only sessions with is_active=True are listed
    - Optional bounds apply to last_accessed (inclusive)
    - skip = (page - 1) * limit; total_users counts the filtered set
      before pagination
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requesting_role: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Result[ActiveSessionsResponse]:
        if requesting_role != AccountRole.admin.value:
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "Only admins can list active sessions")
            )

        page = max(page, 1)
        limit = max(limit, 1)
        start_date = to_naive_utc(start_date) if start_date else None
        end_date = to_naive_utc(end_date) if end_date else None

        async with self.uow:
            rows = await self.uow.sessions.list_active(
                start_date, end_date, skip=(page - 1) * limit, limit=limit
            )
            total = await self.uow.sessions.count_active(start_date, end_date)

            users = [
                ActiveSessionInfo(
                    id=str(account.id),
                    name=account.name,
                    email=account.email,
                    role=account.role.value,
                    status=account.status.value,
                    last_accessed=session_obj.last_accessed,
                )
                for session_obj, account in rows
            ]

        return Return.ok(
            ActiveSessionsResponse(users=users, total_users=total, page=page, limit=limit)
        )
