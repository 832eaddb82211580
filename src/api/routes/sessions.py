from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import ErrorCode
from src.app.use_cases.sessions import ActiveSessionsResponse, ListActiveSessionsUseCase
from src.depends import get_current_account, get_unit_of_work

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=ActiveSessionsResponse,
)
async def list_active_sessions(
    start_date: Optional[datetime] = Query(None, description="Earliest last_accessed"),
    end_date: Optional[datetime] = Query(None, description="Latest last_accessed"),
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(10, ge=1, le=100, description="Page size"),
    current_account: dict = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Logged-in Accounts

    Active sessions joined with a restricted account projection, newest
    access first. total_users counts all matches before pagination.

    Raises:
        - 401 Unauthorized: Missing/invalid session token
        - 403 Forbidden: Caller is not an admin
        - 500 Internal Server Error: Server error
    """
    use_case = ListActiveSessionsUseCase(uow)
    result = await use_case.execute(
        requesting_role=current_account["role"],
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.FORBIDDEN:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
