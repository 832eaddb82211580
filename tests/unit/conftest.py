import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.password_policy import PasswordPolicy
from src.app.services.token_codec import TokenCodec, TokenConfig


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with account and session repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.get_by_employee_id = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update = AsyncMock(side_effect=lambda account: account)
    uow.accounts.activate_if_pending = AsyncMock(return_value=True)
    uow.accounts.complete_setup = AsyncMock(return_value=True)

    uow.sessions = MagicMock()
    uow.sessions.upsert_by_account_id = AsyncMock()
    uow.sessions.get_by_account_id = AsyncMock(return_value=None)
    uow.sessions.list_active = AsyncMock(return_value=[])
    uow.sessions.count_active = AsyncMock(return_value=0)
    uow.sessions.deactivate_by_account_id = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def password_policy():
    # Minimum bcrypt cost keeps the suite fast
    return PasswordPolicy(rounds=4)


@pytest.fixture
def token_codec():
    return TokenCodec(TokenConfig(secret="unit-test-secret"))


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_verification = AsyncMock()
    sender.send_account_setup = AsyncMock()
    return sender
