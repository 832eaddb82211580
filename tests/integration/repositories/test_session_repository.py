from datetime import timedelta

import pytest
from sqlmodel import select

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.app.repositories.errors import UniqueConstraintViolation
from src.app.services.clock import utcnow
from src.domain.entities import Account, AccountStatus, Session


async def create_account(db_session, email: str, employee_id: str) -> Account:
    account = await AccountRepository(db_session).create(
        Account(
            email=email,
            name=email.split("@")[0],
            password_hash="hash",
            employee_id=employee_id,
            status=AccountStatus.active,
        )
    )
    await db_session.commit()
    return account


@pytest.mark.asyncio
async def test_upsert_creates_then_refreshes_single_row(db_session):
    account = await create_account(db_session, "jane@acme.com", "EMP-1000")
    account_id = account.id
    repo = SessionRepository(db_session)
    first_seen = utcnow() - timedelta(hours=1)
    later = utcnow()

    created = await repo.upsert_by_account_id(account_id, first_seen)
    await repo.deactivate_by_account_id(account_id)
    refreshed = await repo.upsert_by_account_id(account_id, later)
    await db_session.commit()

    rows = (await db_session.exec(select(Session))).all()
    assert len(rows) == 1
    assert refreshed.id == created.id
    assert refreshed.is_active is True
    assert refreshed.last_accessed == later


@pytest.mark.asyncio
async def test_list_and_count_active(db_session):
    now = utcnow()
    repo = SessionRepository(db_session)
    ids = []
    for i in range(3):
        account = await create_account(db_session, f"user{i}@acme.com", f"EMP-200{i}")
        ids.append(account.id)
        await repo.upsert_by_account_id(account.id, now - timedelta(minutes=i))
    await repo.deactivate_by_account_id(ids[2])
    await db_session.commit()

    rows = await repo.list_active(None, None, skip=0, limit=10)

    assert [account.id for _, account in rows] == ids[:2]
    assert await repo.count_active(None, None) == 2
    assert await repo.count_active(now - timedelta(seconds=30), None) == 1
    assert await repo.list_active(None, None, skip=1, limit=1) == [rows[1]]


@pytest.mark.asyncio
async def test_duplicate_employee_id_reports_field(db_session):
    await create_account(db_session, "first@acme.com", "EMP-3000")

    with pytest.raises(UniqueConstraintViolation) as exc_info:
        await create_account(db_session, "second@acme.com", "EMP-3000")

    assert exc_info.value.field == "employee_id"


@pytest.mark.asyncio
async def test_activate_if_pending_is_one_shot(db_session):
    account = await AccountRepository(db_session).create(
        Account(email="p@acme.com", name="P", password_hash="hash", employee_id="EMP-4000")
    )
    account_id = account.id
    await db_session.commit()
    repo = AccountRepository(db_session)

    assert await repo.activate_if_pending(account_id) is True
    assert await repo.activate_if_pending(account_id) is False


@pytest.mark.asyncio
async def test_complete_setup_applies_once_and_skips_suspended(db_session):
    repo = AccountRepository(db_session)
    pending = await repo.create(
        Account(email="s@acme.com", name="S", password_hash="hash", employee_id="EMP-5000")
    )
    suspended = await repo.create(
        Account(
            email="x@acme.com", name="X", password_hash="hash", employee_id="EMP-5001",
            status=AccountStatus.suspended,
        )
    )
    pending_id, suspended_id = pending.id, suspended.id
    await db_session.commit()
    now = utcnow()

    def complete(account_id):
        return repo.complete_setup(
            account_id, expected_changed_at=None, password_hash="new",
            password_history=["new"], changed_at=now,
        )

    assert await complete(pending_id) is True
    assert await complete(pending_id) is False
    assert await complete(suspended_id) is False
    await db_session.commit()

    db_session.expire_all()
    statuses = {
        account.email: (account.status, account.password_changed_at)
        for account in (await db_session.exec(select(Account))).all()
    }
    assert statuses == {
        "s@acme.com": (AccountStatus.active, now),
        "x@acme.com": (AccountStatus.suspended, None),
    }
