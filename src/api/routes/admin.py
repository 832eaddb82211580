"""
Admin API Routes - Account Administration Endpoints

These endpoints are for internal HR tooling.
Authentication is via Admin API Key, not session tokens.
"""

from datetime import timedelta
from uuid import UUID
from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.email_sender import IEmailSender
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    SendSetupInvitationResponse,
    SendSetupInvitationUseCase,
    SuspendAccountResponse,
    SuspendAccountUseCase,
)
from src.app.use_cases.errors import ErrorCode
from src.depends import get_email_sender, get_token_codec, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/accounts/{account_id}/setup-invitation",
    status_code=status.HTTP_200_OK,
    response_model=SendSetupInvitationResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def send_setup_invitation(
    account_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Send Account Setup Invitation

    Emails a signed setup link; the employee chooses a password through
    /auth/setup-account, which activates the account.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 403 Forbidden: ACCOUNT_SUSPENDED
        - 404 Not Found: ACCOUNT_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = SendSetupInvitationUseCase(
        uow,
        token_codec,
        email_sender,
        setup_ttl=timedelta(hours=ApplicationConfig.SETUP_TOKEN_TTL_HOURS),
    )
    result = await use_case.execute(account_id)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.ACCOUNT_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == ErrorCode.ACCOUNT_SUSPENDED:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.post(
    "/accounts/{account_id}/suspend",
    status_code=status.HTTP_200_OK,
    response_model=SuspendAccountResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def suspend_account(
    account_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend Account

    Blocks login for the account and soft-ends its session.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: ACCOUNT_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = SuspendAccountUseCase(uow)
    result = await use_case.execute(account_id)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.ACCOUNT_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
