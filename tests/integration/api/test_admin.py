import pytest
from httpx import AsyncClient
from sqlmodel import select

from config import ApplicationConfig
from src.domain.entities import Account, AccountStatus, Session

ADMIN_HEADERS = {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


async def account_id_for(db_session, email: str) -> str:
    account = (await db_session.exec(select(Account).where(Account.email == email))).one()
    return str(account.id)


@pytest.mark.asyncio
async def test_setup_invitation_flow(client: AsyncClient, test_data, outbox, db_session):
    """Admin-initiated Account Setup

    Given a Pending account that never verified its email
    When an admin sends a setup invitation
    And the employee opens the link and chooses a password
    Then the account is Active and can log in with that password
    """
    payload = test_data.get_copy("register_payload")
    await client.post("/auth/register", json=payload)
    account_id = await account_id_for(db_session, payload["email"])

    invite = await client.post(
        f"/admin/accounts/{account_id}/setup-invitation", headers=ADMIN_HEADERS
    )
    assert invite.status_code == 200
    assert invite.json() == {"status": "sent", "email_sent": True}
    token = outbox.last_setup_token(payload["email"])

    details = await client.get("/auth/setup-account", params={"token": token})
    assert details.status_code == 200
    assert details.json() == {"email": payload["email"], "name": payload["name"]}

    complete = await client.post(
        "/auth/setup-account", json={"token": token, "password": "ChosenPass789!"}
    )
    assert complete.status_code == 200
    assert complete.json()["status"] == "active"

    login = await client.post(
        "/auth/login", json={"email": payload["email"], "password": "ChosenPass789!"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_setup_account_rejects_verification_token(client: AsyncClient, test_data, outbox):
    payload = test_data.get_copy("register_payload")
    await client.post("/auth/register", json=payload)
    token = outbox.last_verification_token(payload["email"])

    response = await client.get("/auth/setup-account", params={"token": token})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_admin_endpoints_require_api_key(client: AsyncClient):
    account_id = "00000000-0000-0000-0000-000000000000"

    missing = await client.post(f"/admin/accounts/{account_id}/suspend")
    wrong = await client.post(
        f"/admin/accounts/{account_id}/suspend", headers={"X-Admin-API-Key": "nope"}
    )

    assert missing.status_code == 401
    assert missing.json()["error"]["code"] == "UNAUTHORIZED"
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_admin_unknown_account(client: AsyncClient):
    account_id = "00000000-0000-0000-0000-000000000000"

    response = await client.post(
        f"/admin/accounts/{account_id}/setup-invitation", headers=ADMIN_HEADERS
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ACCOUNT_NOT_FOUND"


@pytest.mark.asyncio
async def test_suspend_account(
    client: AsyncClient, test_data, register_and_verify, login, db_session
):
    payload = await register_and_verify(test_data.get_copy("register_payload"))
    await login(payload["email"], payload["password"])
    account_id = await account_id_for(db_session, payload["email"])

    response = await client.post(
        f"/admin/accounts/{account_id}/suspend", headers=ADMIN_HEADERS
    )

    assert response.status_code == 200
    assert response.json() == {"status": "Suspended", "sessions_ended": 1}

    db_session.expire_all()
    account = (
        await db_session.exec(select(Account).where(Account.email == payload["email"]))
    ).one()
    assert account.status == AccountStatus.suspended
    session = (await db_session.exec(select(Session))).one()
    assert session.is_active is False

    blocked = await client.post(
        "/auth/login", json={"email": payload["email"], "password": payload["password"]}
    )
    assert blocked.status_code == 403
    assert blocked.json()["error"]["code"] == "EMAIL_NOT_VERIFIED"


@pytest.mark.asyncio
async def test_setup_link_does_not_lift_suspension(
    client: AsyncClient, test_data, register_and_verify, outbox, db_session
):
    """A setup link issued before a suspension cannot reactivate the account"""
    payload = await register_and_verify(test_data.get_copy("register_payload"))
    account_id = await account_id_for(db_session, payload["email"])
    await client.post(f"/admin/accounts/{account_id}/setup-invitation", headers=ADMIN_HEADERS)
    token = outbox.last_setup_token(payload["email"])
    await client.post(f"/admin/accounts/{account_id}/suspend", headers=ADMIN_HEADERS)

    details = await client.get("/auth/setup-account", params={"token": token})
    complete = await client.post(
        "/auth/setup-account", json={"token": token, "password": "ChosenPass789!"}
    )

    assert details.status_code == 403
    assert details.json()["error"]["code"] == "ACCOUNT_SUSPENDED"
    assert complete.status_code == 403
    assert complete.json()["error"]["code"] == "ACCOUNT_SUSPENDED"

    db_session.expire_all()
    account = (
        await db_session.exec(select(Account).where(Account.email == payload["email"]))
    ).one()
    assert account.status == AccountStatus.suspended

    for password in ("ChosenPass789!", payload["password"]):
        blocked = await client.post(
            "/auth/login", json={"email": payload["email"], "password": password}
        )
        assert blocked.status_code == 403


@pytest.mark.asyncio
async def test_setup_link_works_once(client: AsyncClient, test_data, outbox, db_session):
    payload = test_data.get_copy("register_payload")
    await client.post("/auth/register", json=payload)
    account_id = await account_id_for(db_session, payload["email"])
    await client.post(f"/admin/accounts/{account_id}/setup-invitation", headers=ADMIN_HEADERS)
    token = outbox.last_setup_token(payload["email"])

    first = await client.post(
        "/auth/setup-account", json={"token": token, "password": "ChosenPass789!"}
    )
    replay = await client.post(
        "/auth/setup-account", json={"token": token, "password": "AnotherPass456!"}
    )

    assert first.status_code == 200
    assert replay.status_code == 400
    assert replay.json()["error"]["code"] == "INVALID_OR_EXPIRED_TOKEN"

    # The password chosen with the first use is the one that stands
    login = await client.post(
        "/auth/login", json={"email": payload["email"], "password": "ChosenPass789!"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_setup_rejects_reused_password(
    client: AsyncClient, test_data, outbox, db_session
):
    payload = test_data.get_copy("register_payload")
    await client.post("/auth/register", json=payload)
    account_id = await account_id_for(db_session, payload["email"])
    await client.post(f"/admin/accounts/{account_id}/setup-invitation", headers=ADMIN_HEADERS)
    token = outbox.last_setup_token(payload["email"])

    response = await client.post(
        "/auth/setup-account", json={"token": token, "password": payload["password"]}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "PASSWORD_REUSED"


@pytest.mark.asyncio
async def test_setup_invitation_refused_for_suspended_account(
    client: AsyncClient, test_data, register_and_verify, outbox, db_session
):
    payload = await register_and_verify(test_data.get_copy("register_payload"))
    account_id = await account_id_for(db_session, payload["email"])
    await client.post(f"/admin/accounts/{account_id}/suspend", headers=ADMIN_HEADERS)

    response = await client.post(
        f"/admin/accounts/{account_id}/setup-invitation", headers=ADMIN_HEADERS
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ACCOUNT_SUSPENDED"
    assert outbox.setups == []
