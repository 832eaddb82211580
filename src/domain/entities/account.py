"""
Account Entity

Represents one platform identity.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.app.services.clock import utcnow
from .enums import AccountRole, AccountStatus


class Account(SQLModel, table=True):
    """
    Account entity - one employee identity on the HR platform.

    Business Rules:
    - Email must be unique (case-sensitive identity key)
    - Status starts at Pending; becomes Active via email verification or setup
    - Password stored as bcrypt hash, never in clear form
    - password_history keeps the hashes of the last 5 passwords set
      (current one included), newest last
    - employee_id is unique and human-readable (EMP-NNNN)
    - Never hard-deleted
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(max_length=255)

    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    password_history: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    role: AccountRole = Field(default=AccountRole.user)
    status: AccountStatus = Field(default=AccountStatus.pending)

    employee_id: str = Field(unique=True, index=True, max_length=16)

    # Job metadata
    job_title: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=255)
    applications_managed: List[str] = Field(
        default_factory=list, sa_column=Column(JSON)
    )
    employment_type: Optional[str] = Field(default=None, max_length=50)

    # Contact / address
    phone_number: Optional[str] = Field(default=None, max_length=50)
    address: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    date_of_birth: Optional[date] = None

    # Timestamps
    password_changed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_account_status", "status"),)
