from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address (exact match)"""
        pass

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def get_by_employee_id(self, employee_id: str) -> Optional[Account]:
        """Get account by employee identifier"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account. Raises UniqueConstraintViolation on email/employee_id clash."""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Persist mutated fields of an existing account"""
        pass

    @abstractmethod
    async def activate_if_pending(self, account_id: UUID) -> bool:
        """Atomically move a Pending account to Active. Returns True if this call did it."""
        pass

    @abstractmethod
    async def complete_setup(
        self,
        account_id: UUID,
        expected_changed_at: Optional[datetime],
        password_hash: str,
        password_history: List[str],
        changed_at: datetime,
    ) -> bool:
        """
        Atomically set the password and activate the account.

        Applies only while the account is not Suspended and its
        password_changed_at still equals expected_changed_at. Returns True
        if this call did it.
        """
        pass
