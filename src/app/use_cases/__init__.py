"""
Use Cases

Organized into domain folders:
- auth/: Registration, verification, login, password and setup flows
- sessions/: Session registry reporting
- admin/: Admin API key operations
"""

from .errors import ErrorCode
from .auth import (
    RegisterUseCase,
    RegisterCommand,
    RegisterResponse,
    VerifyEmailUseCase,
    ResendVerificationUseCase,
    LoginUseCase,
    ChangePasswordUseCase,
    GetSetupDetailsUseCase,
    CompleteSetupUseCase,
)
from .sessions import ListActiveSessionsUseCase
from .admin import SendSetupInvitationUseCase, SuspendAccountUseCase

__all__ = [
    "ErrorCode",
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "RegisterResponse",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    "LoginUseCase",
    "ChangePasswordUseCase",
    "GetSetupDetailsUseCase",
    "CompleteSetupUseCase",
    # Sessions
    "ListActiveSessionsUseCase",
    # Admin
    "SendSetupInvitationUseCase",
    "SuspendAccountUseCase",
]
