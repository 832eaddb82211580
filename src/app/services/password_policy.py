"""
Password Policy

Hashing, comparison, aging and reuse rules for account passwords.
"""

from datetime import datetime, timedelta
from typing import List, Optional

import bcrypt


class PasswordPolicy:
    """
    Business Rules:
    - bcrypt with a tunable cost factor (12 in production)
    - A password expires max_age_days after it was last changed
      (account creation time when it was never changed)
    - A new password must not match any of the last history_size passwords
    """

    def __init__(self, rounds: int = 12, max_age_days: int = 180, history_size: int = 5):
        self.rounds = rounds
        self.max_age = timedelta(days=max_age_days)
        self.history_size = history_size

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(self.rounds)).decode(
            "utf-8"
        )

    def matches(self, plaintext: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            # Malformed stored hash never matches
            return False

    def burn_time(self) -> None:
        """Run one bcrypt comparison so unknown accounts cost as much as known ones."""
        bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(self.rounds))

    def is_expired(
        self,
        last_changed_at: Optional[datetime],
        created_at: datetime,
        now: datetime,
    ) -> bool:
        changed_at = last_changed_at or created_at
        return now - changed_at >= self.max_age

    def is_reused(self, plaintext: str, history: List[str]) -> bool:
        recent = history[-self.history_size:] if self.history_size else []
        return any(self.matches(plaintext, old_hash) for old_hash in recent)

    def push_history(self, history: List[str], new_hash: str) -> List[str]:
        """Return a new history with new_hash appended, oldest entries evicted."""
        updated = list(history or []) + [new_hash]
        return updated[-self.history_size:] if self.history_size else []
