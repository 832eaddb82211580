from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.errors import UniqueConstraintViolation
from src.domain.entities import Account, AccountStatus


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address"""
        stmt = select(Account).where(Account.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_employee_id(self, employee_id: str) -> Optional[Account]:
        """Get account by employee identifier"""
        stmt = select(Account).where(Account.employee_id == employee_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: Account) -> Account:
        """
        Create a new account.

        The unique indexes on email and employee_id are the final guard
        against concurrent registrations; a clash is reported as
        UniqueConstraintViolation naming the offending field.
        """
        self.session.add(account)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            message = str(exc.orig)
            field = "employee_id" if "employee_id" in message else "email"
            raise UniqueConstraintViolation(field) from exc
        await self.session.refresh(account)
        return account

    async def update(self, account: Account) -> Account:
        """Update existing account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def activate_if_pending(self, account_id: UUID) -> bool:
        """Conditional UPDATE: only a Pending account is moved to Active"""
        stmt = (
            update(Account)
            .where(Account.id == account_id, Account.status == AccountStatus.pending)
            .values(status=AccountStatus.active)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def complete_setup(
        self,
        account_id: UUID,
        expected_changed_at: Optional[datetime],
        password_hash: str,
        password_history: List[str],
        changed_at: datetime,
    ) -> bool:
        """Conditional UPDATE: a setup link applies once and never to a Suspended account"""
        if expected_changed_at is None:
            unchanged = Account.password_changed_at.is_(None)
        else:
            unchanged = Account.password_changed_at == expected_changed_at
        stmt = (
            update(Account)
            .where(
                Account.id == account_id,
                Account.status != AccountStatus.suspended,
                unchanged,
            )
            .values(
                password_hash=password_hash,
                password_history=password_history,
                password_changed_at=changed_at,
                status=AccountStatus.active,
            )
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
