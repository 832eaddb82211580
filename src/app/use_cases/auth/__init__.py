"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .register_dto import AddressInfo, RegisterCommand, RegisterResponse
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .login_use_case import LoginUseCase
from .change_password_use_case import ChangePasswordUseCase
from .account_setup_use_case import CompleteSetupUseCase, GetSetupDetailsUseCase
from .dtos import (
    VerifyEmailResponse,
    ResendVerificationResponse,
    LoginResponse,
    ChangePasswordResponse,
    SetupDetailsResponse,
    CompleteSetupResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    "LoginUseCase",
    "ChangePasswordUseCase",
    "GetSetupDetailsUseCase",
    "CompleteSetupUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "VerifyEmailResponse",
    "ResendVerificationResponse",
    "LoginResponse",
    "ChangePasswordResponse",
    "SetupDetailsResponse",
    "CompleteSetupResponse",
    # DTOs - Nested Models
    "AddressInfo",
]
