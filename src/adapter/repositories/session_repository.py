from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Account, Session

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert_by_account_id(self, account_id: UUID, last_accessed: datetime) -> Session:
        """
        Create or refresh the account's session.

        Issued as a single INSERT ... ON CONFLICT (account_id) DO UPDATE so two
        concurrent logins for one account can never leave two rows behind.
        """
        dialect = self.session.bind.dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Session upsert not supported on {dialect}")

        stmt = insert(Session).values(
            id=uuid4(),
            account_id=account_id,
            is_active=True,
            last_accessed=last_accessed,
            created_at=last_accessed,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["account_id"],
            set_={"is_active": True, "last_accessed": last_accessed},
        )
        await self.session.execute(stmt)
        await self.session.flush()

        session_obj = await self.get_by_account_id(account_id)
        # The ORM identity map may hold a stale copy from an earlier read
        await self.session.refresh(session_obj)
        return session_obj

    async def get_by_account_id(self, account_id: UUID) -> Optional[Session]:
        """Get the session record of an account"""
        stmt = select(Session).where(Session.account_id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    def _active_filter(self, stmt, start_date: Optional[datetime], end_date: Optional[datetime]):
        stmt = stmt.where(Session.is_active == True)  # noqa: E712
        if start_date is not None:
            stmt = stmt.where(Session.last_accessed >= start_date)
        if end_date is not None:
            stmt = stmt.where(Session.last_accessed <= end_date)
        return stmt

    async def list_active(
        self,
        start_date: Optional[datetime],
        end_date: Optional[datetime],
        skip: int,
        limit: int,
    ) -> List[Tuple[Session, Account]]:
        """Active sessions joined with their owning account"""
        stmt = select(Session, Account).join(Account, Account.id == Session.account_id)
        stmt = self._active_filter(stmt, start_date, end_date)
        stmt = stmt.order_by(Session.last_accessed.desc()).offset(skip).limit(limit)
        result = await self.session.exec(stmt)
        return [(session_obj, account) for session_obj, account in result.all()]

    async def count_active(
        self, start_date: Optional[datetime], end_date: Optional[datetime]
    ) -> int:
        """Total active sessions before pagination"""
        stmt = select(func.count()).select_from(Session)
        stmt = self._active_filter(stmt, start_date, end_date)
        result = await self.session.exec(stmt)
        return result.one()

    async def deactivate_by_account_id(self, account_id: UUID) -> int:
        """Soft-end the account's active session"""
        stmt = (
            update(Session)
            .where(Session.account_id == account_id, Session.is_active == True)  # noqa: E712
            .values(is_active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
