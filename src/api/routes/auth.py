from datetime import timedelta
from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import AfterValidator, BaseModel, Field, validate_email

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.email_sender import IEmailSender
from src.app.services.password_policy import PasswordPolicy
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AddressInfo,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    VerifyEmailUseCase,
    ResendVerificationUseCase,
    LoginUseCase,
    ChangePasswordUseCase,
    GetSetupDetailsUseCase,
    CompleteSetupUseCase,
    VerifyEmailResponse,
    ResendVerificationResponse,
    LoginResponse,
    ChangePasswordResponse,
    SetupDetailsResponse,
    CompleteSetupResponse,
)
from src.app.use_cases.errors import ErrorCode
from src.depends import (
    get_current_account,
    get_email_sender,
    get_password_policy,
    get_token_codec,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _exact_email(value: str) -> str:
    """Validate like EmailStr but keep the address as typed (email is a case-sensitive key)"""
    _, normalized = validate_email(value)
    if normalized.lower() != value.lower():
        raise ValueError("value is not a valid email address")
    return value


ExactEmail = Annotated[str, AfterValidator(_exact_email)]


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    API layer responsibility: HTTP validation and serialization.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    email: ExactEmail = Field(..., description="Work email address")
    password: str = Field(..., min_length=8, description="Password (min 8 chars)")
    job_title: Optional[str] = Field(None, max_length=255)
    applications_managed: List[str] = Field(default_factory=list)
    department: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=50)
    address: Optional[AddressInfo] = None
    date_of_birth: Optional[str] = Field(
        None, description="ISO-8601 date, e.g. 1990-04-21; other formats are INVALID_DATE"
    )
    employment_type: Optional[str] = Field(None, max_length=50)


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    password_policy: PasswordPolicy = Depends(get_password_policy),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Register Account

    Creates a Pending account and emails a verification link.
    The email is stored exactly as typed, since it is a case-sensitive key.
    No session is created until the email is verified and the user logs in.

    Raises:
        - 409 Conflict: Email already registered
        - 400 Bad Request: date_of_birth is not an ISO-8601 date (INVALID_DATE)
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(**request.model_dump())

    use_case = RegisterUseCase(
        uow,
        token_codec,
        password_policy,
        email_sender,
        verification_ttl=timedelta(hours=ApplicationConfig.VERIFICATION_TOKEN_TTL_HOURS),
        max_employee_id_attempts=ApplicationConfig.EMPLOYEE_ID_MAX_ATTEMPTS,
    )
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.DUPLICATE_EMAIL:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == ErrorCode.INVALID_DATE:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class VerifyEmailRequest(BaseModel):
    """Verify email HTTP request payload"""

    token: str = Field(..., description="Email verification token")


@router.post("/verify-email", status_code=status.HTTP_200_OK, response_model=VerifyEmailResponse)
async def verify_email(
    request: VerifyEmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    Email Verification

    Activates a Pending account. The token is one-time by virtue of the
    status transition.

    Raises:
        - 400 Bad Request: Invalid or expired token, or already verified
        - 404 Not Found: Account no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyEmailUseCase(uow, token_codec)
    result = await use_case.execute(request.token)

    if result.is_err():
        error = result.error
        if error.code in (ErrorCode.INVALID_OR_EXPIRED_TOKEN, ErrorCode.ALREADY_VERIFIED):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == ErrorCode.ACCOUNT_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class ResendVerificationRequest(BaseModel):
    """Resend verification email HTTP request payload"""

    email: ExactEmail = Field(..., description="Account email address")


@router.post(
    "/resend-verification",
    status_code=status.HTTP_200_OK,
    response_model=ResendVerificationResponse,
)
async def resend_verification(
    request: ResendVerificationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Resend Verification Email

    Security:
        - No email enumeration (same response for valid/invalid emails)
    """
    use_case = ResendVerificationUseCase(
        uow,
        token_codec,
        email_sender,
        verification_ttl=timedelta(hours=ApplicationConfig.VERIFICATION_TOKEN_TTL_HOURS),
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: ExactEmail = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    password_policy: PasswordPolicy = Depends(get_password_policy),
):
    """
    Account Login

    Returns a 2h session token and records the session.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Email not verified, or password expired
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(
        uow,
        token_codec,
        password_policy,
        session_ttl=timedelta(hours=ApplicationConfig.SESSION_TOKEN_TTL_HOURS),
    )
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.INVALID_CREDENTIALS:
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in (ErrorCode.EMAIL_NOT_VERIFIED, ErrorCode.PASSWORD_EXPIRED):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class ChangePasswordRequest(BaseModel):
    """Change password HTTP request payload"""

    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., min_length=8, description="New password (min 8 chars)")


@router.post(
    "/change-password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    current_account: dict = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_policy: PasswordPolicy = Depends(get_password_policy),
):
    """
    Change Password

    Rotates the password of the authenticated account.

    Raises:
        - 400 Bad Request: Current password incorrect, or new password reused
        - 401 Unauthorized: Missing/invalid session token
        - 404 Not Found: Account no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = ChangePasswordUseCase(
        uow,
        password_policy,
        end_session_on_change=ApplicationConfig.REVOKE_SESSION_ON_PASSWORD_CHANGE,
    )
    result = await use_case.execute(
        UUID(current_account["account_id"]),
        request.current_password,
        request.new_password,
    )

    if result.is_err():
        error = result.error
        if error.code in (ErrorCode.INCORRECT_PASSWORD, ErrorCode.PASSWORD_REUSED):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == ErrorCode.ACCOUNT_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get(
    "/setup-account", status_code=status.HTTP_200_OK, response_model=SetupDetailsResponse
)
async def get_setup_details(
    token: str = Query(..., description="Account setup token"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    Account Setup Details

    Returns email and name to prefill the setup form.

    Raises:
        - 400 Bad Request: Invalid or expired token
        - 403 Forbidden: Account is suspended
        - 404 Not Found: Account no longer exists
    """
    use_case = GetSetupDetailsUseCase(uow, token_codec)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code == ErrorCode.INVALID_OR_EXPIRED_TOKEN:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == ErrorCode.ACCOUNT_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == ErrorCode.ACCOUNT_SUSPENDED:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class CompleteSetupRequest(BaseModel):
    """Complete account setup HTTP request payload"""

    token: str = Field(..., description="Account setup token")
    password: str = Field(..., min_length=8, description="Chosen password (min 8 chars)")


@router.post(
    "/setup-account", status_code=status.HTTP_200_OK, response_model=CompleteSetupResponse
)
async def complete_setup(
    request: CompleteSetupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    password_policy: PasswordPolicy = Depends(get_password_policy),
):
    """
    Complete Account Setup

    Sets the password and activates the account. Each setup link works once.

    Raises:
        - 400 Bad Request: Invalid, expired or already used token, or reused password
        - 403 Forbidden: Account is suspended
        - 404 Not Found: Account no longer exists
    """
    use_case = CompleteSetupUseCase(uow, token_codec, password_policy)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in (ErrorCode.INVALID_OR_EXPIRED_TOKEN, ErrorCode.PASSWORD_REUSED):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == ErrorCode.ACCOUNT_NOT_FOUND:
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == ErrorCode.ACCOUNT_SUSPENDED:
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
