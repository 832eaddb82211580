from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.smtp_email_sender import SmtpEmailSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.app.services.password_policy import PasswordPolicy
from src.app.services.token_codec import TokenCodec, TokenConfig, TokenError
from src.domain.entities import TokenPurpose

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

token_codec = TokenCodec(
    TokenConfig(secret=ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM)
)

password_policy = PasswordPolicy(
    rounds=ApplicationConfig.BCRYPT_ROUNDS,
    max_age_days=ApplicationConfig.PASSWORD_MAX_AGE_DAYS,
    history_size=ApplicationConfig.PASSWORD_HISTORY_SIZE,
)

email_sender = SmtpEmailSender(
    smtp_host=ApplicationConfig.SMTP_HOST,
    smtp_port=ApplicationConfig.SMTP_PORT,
    smtp_user=ApplicationConfig.SMTP_USER,
    smtp_password=ApplicationConfig.SMTP_PASSWORD,
    smtp_use_tls=ApplicationConfig.SMTP_USE_TLS,
    from_email=ApplicationConfig.SMTP_FROM_EMAIL,
    base_url=ApplicationConfig.APP_BASE_URL,
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_codec() -> TokenCodec:
    return token_codec


def get_password_policy() -> PasswordPolicy:
    return password_policy


def get_email_sender() -> IEmailSender:
    return email_sender


async def get_current_account(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    codec: TokenCodec = Depends(get_token_codec),
) -> dict:
    """
    Dependency to extract and verify the session token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header
        codec: Token codec holding the signing configuration

    Returns:
        Dict with account_id, email and role from the token

    Raises:
        HTTPException: 401 if token is invalid, expired or not a session token
    """
    try:
        payload = codec.decode(credentials.credentials, TokenPurpose.session)
    except TokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return {
        "account_id": payload["sub"],
        "email": payload.get("email"),
        "role": payload.get("role"),
    }


async def init_db() -> None:
    """Create missing tables (accounts, sessions) on the configured database"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
