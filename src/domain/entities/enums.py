"""
HR Identity Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AccountRole(str, Enum):
    """Access role derived from onboarding attributes"""

    user = "user"
    support = "support"
    admin = "admin"


class AccountStatus(str, Enum):
    """Account lifecycle status"""

    pending = "Pending"
    active = "Active"
    suspended = "Suspended"


class TokenPurpose(str, Enum):
    """What a signed token may be used for"""

    email_verification = "email_verification"
    account_setup = "account_setup"
    session = "session"
