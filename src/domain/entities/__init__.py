"""
HR Identity Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import AccountRole, AccountStatus, TokenPurpose
from .account import Account
from .session import Session

__all__ = [
    # Enums
    "AccountRole",
    "AccountStatus",
    "TokenPurpose",
    # Entities
    "Account",
    "Session",
]
