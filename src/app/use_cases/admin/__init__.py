"""Admin use cases for system administration operations."""

from .send_setup_invitation_use_case import (
    SendSetupInvitationUseCase,
    SendSetupInvitationResponse,
)
from .suspend_account_use_case import SuspendAccountUseCase, SuspendAccountResponse

__all__ = [
    "SendSetupInvitationUseCase",
    "SendSetupInvitationResponse",
    "SuspendAccountUseCase",
    "SuspendAccountResponse",
]
