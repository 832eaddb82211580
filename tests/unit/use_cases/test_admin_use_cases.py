from uuid import uuid4

import pytest

from src.app.use_cases.admin import SendSetupInvitationUseCase, SuspendAccountUseCase
from src.app.use_cases.auth.account_setup_use_case import PASSWORD_VERSION_CLAIM
from src.app.use_cases.errors import ErrorCode
from src.domain.entities import Account, AccountStatus, TokenPurpose


@pytest.fixture
def account():
    return Account(
        id=uuid4(),
        email="new.hire@acme.com",
        name="New Hire",
        password_hash="placeholder",
        employee_id="EMP-4321",
        status=AccountStatus.active,
    )


@pytest.mark.asyncio
async def test_send_setup_invitation(mock_uow, token_codec, email_sender, account):
    mock_uow.accounts.get_by_id.return_value = account

    result = await SendSetupInvitationUseCase(mock_uow, token_codec, email_sender).execute(
        account.id
    )

    assert result.is_ok()
    assert result.value.email_sent is True
    email, token = email_sender.send_account_setup.call_args.args
    assert email == "new.hire@acme.com"
    payload = token_codec.decode(token, TokenPurpose.account_setup)
    assert payload["sub"] == str(account.id)
    assert payload[PASSWORD_VERSION_CLAIM] == ""


@pytest.mark.asyncio
async def test_send_setup_invitation_delivery_failure(
    mock_uow, token_codec, email_sender, account
):
    mock_uow.accounts.get_by_id.return_value = account
    email_sender.send_account_setup.side_effect = RuntimeError("smtp down")

    result = await SendSetupInvitationUseCase(mock_uow, token_codec, email_sender).execute(
        account.id
    )

    assert result.is_ok()
    assert result.value.email_sent is False


@pytest.mark.asyncio
async def test_send_setup_invitation_unknown_account(mock_uow, token_codec, email_sender):
    result = await SendSetupInvitationUseCase(mock_uow, token_codec, email_sender).execute(
        uuid4()
    )

    assert result.error.code == ErrorCode.ACCOUNT_NOT_FOUND
    email_sender.send_account_setup.assert_not_called()


@pytest.mark.asyncio
async def test_suspend_account(mock_uow, account):
    mock_uow.accounts.get_by_id.return_value = account
    mock_uow.sessions.deactivate_by_account_id.return_value = 1

    result = await SuspendAccountUseCase(mock_uow).execute(account.id)

    assert result.is_ok()
    assert result.value.status == "Suspended"
    assert result.value.sessions_ended == 1
    assert account.status == AccountStatus.suspended
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_suspend_unknown_account(mock_uow):
    result = await SuspendAccountUseCase(mock_uow).execute(uuid4())

    assert result.error.code == ErrorCode.ACCOUNT_NOT_FOUND
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_send_setup_invitation_to_suspended_account(
    mock_uow, token_codec, email_sender, account
):
    account.status = AccountStatus.suspended
    mock_uow.accounts.get_by_id.return_value = account

    result = await SendSetupInvitationUseCase(mock_uow, token_codec, email_sender).execute(
        account.id
    )

    assert result.error.code == ErrorCode.ACCOUNT_SUSPENDED
    email_sender.send_account_setup.assert_not_called()
