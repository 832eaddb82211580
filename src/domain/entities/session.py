"""
Session Entity

Tracks the current/most-recent authenticated access window of an account.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.app.services.clock import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - one row per account.

    Business Rules:
    - account_id is unique: login creates or refreshes the same row (upsert)
    - is_active=False ends the session without deleting it (kept for listing)
    - last_accessed moves forward on every login
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, unique=True)

    is_active: bool = Field(default=True)
    last_accessed: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_active_last_accessed", "is_active", "last_accessed"),
    )
