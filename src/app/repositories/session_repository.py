from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Account, Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def upsert_by_account_id(self, account_id: UUID, last_accessed: datetime) -> Session:
        """Create or refresh the account's session (active, last_accessed) in one atomic write"""
        pass

    @abstractmethod
    async def get_by_account_id(self, account_id: UUID) -> Optional[Session]:
        """Get the session record of an account"""
        pass

    @abstractmethod
    async def list_active(
        self,
        start_date: Optional[datetime],
        end_date: Optional[datetime],
        skip: int,
        limit: int,
    ) -> List[Tuple[Session, Account]]:
        """Active sessions joined with their accounts, newest access first"""
        pass

    @abstractmethod
    async def count_active(
        self, start_date: Optional[datetime], end_date: Optional[datetime]
    ) -> int:
        """Count active sessions matching the same filter as list_active"""
        pass

    @abstractmethod
    async def deactivate_by_account_id(self, account_id: UUID) -> int:
        """Soft-end the account's session. Returns count of sessions ended."""
        pass
