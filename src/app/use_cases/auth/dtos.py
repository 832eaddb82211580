"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from pydantic import BaseModel


# ============================================================================
# Response DTOs
# ============================================================================


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    status: str
    message: str


class ResendVerificationResponse(BaseModel):
    """Response for resend verification email use case"""

    status: str
    message: str


class LoginResponse(BaseModel):
    """Response for user login use case"""

    token: str
    expires_in: str


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str


class SetupDetailsResponse(BaseModel):
    """Prefill data for the account setup form"""

    email: str
    name: str


class CompleteSetupResponse(BaseModel):
    """Response for completing account setup"""

    status: str
    message: str
