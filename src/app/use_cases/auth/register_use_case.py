"""
Register Use Case

Onboards a new account and sends the email verification link.
"""

import logging
import secrets
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from src.app.repositories.errors import UniqueConstraintViolation
from src.app.services.clock import utcnow
from src.app.services.email_sender import IEmailSender
from src.app.services.password_policy import PasswordPolicy
from src.app.services.role_resolver import resolve_role
from src.app.services.token_codec import TokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import ErrorCode
from src.domain.entities import Account, AccountStatus, TokenPurpose
from src.libs.result import Error, Result, Return
from .register_dto import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)

EMPLOYEE_ID_PREFIX = "EMP-"


def generate_employee_id() -> str:
    """EMP- followed by a random 4-digit number (1000-9999)"""
    return f"{EMPLOYEE_ID_PREFIX}{1000 + secrets.randbelow(9000)}"


def parse_date_of_birth(value: Optional[str]) -> Result[Optional[date]]:
    """
    Parse an ISO-8601 date (YYYY-MM-DD, a full ISO timestamp also works).

    Empty means not given. Any other form, e.g. 04/21/1990, is INVALID_DATE.
    """
    if not value:
        return Return.ok(None)
    try:
        return Return.ok(datetime.fromisoformat(value.strip()).date())
    except ValueError:
        return Return.err(
            Error(ErrorCode.INVALID_DATE, "Invalid date_of_birth format")
        )


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (full onboarding profile)
    - Output: Result[RegisterResponse]

    Business Logic:
    1. Reject duplicate email
    2. Resolve role from job title / managed applications
    3. Parse date_of_birth (optional, must be ISO-8601 when given)
    4. Draw a unique employee id; retry on collision
    5. Create Account with status=Pending and bcrypt hash
    6. Issue a 24h email verification token
    7. Send it - delivery failure is logged, never rolled back
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        password_policy: PasswordPolicy,
        email_sender: IEmailSender,
        verification_ttl: timedelta = timedelta(days=1),
        max_employee_id_attempts: int = 10,
        clock: Callable[[], datetime] = utcnow,
        employee_id_generator: Callable[[], str] = generate_employee_id,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.password_policy = password_policy
        self.email_sender = email_sender
        self.verification_ttl = verification_ttl
        self.max_employee_id_attempts = max_employee_id_attempts
        self.clock = clock
        self.employee_id_generator = employee_id_generator

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with the onboarding profile

        Returns:
            Result[RegisterResponse], or Error(DUPLICATE_EMAIL | INVALID_DATE)
        """
        async with self.uow:
            existing = await self.uow.accounts.get_by_email(command.email)
            if existing:
                return Return.err(
                    Error(ErrorCode.DUPLICATE_EMAIL, "Email already registered")
                )

            role = resolve_role(command.job_title, command.applications_managed)

            dob_result = parse_date_of_birth(command.date_of_birth)
            if dob_result.is_err():
                return Return.err(dob_result.error)

            password_hash = self.password_policy.hash(command.password)

            account = None
            for _ in range(self.max_employee_id_attempts):
                employee_id = self.employee_id_generator()
                if await self.uow.accounts.get_by_employee_id(employee_id):
                    continue

                try:
                    account = await self.uow.accounts.create(
                        Account(
                            email=command.email,
                            name=command.name,
                            password_hash=password_hash,
                            password_history=self.password_policy.push_history(
                                [], password_hash
                            ),
                            role=role,
                            status=AccountStatus.pending,
                            employee_id=employee_id,
                            job_title=command.job_title,
                            department=command.department,
                            applications_managed=list(command.applications_managed),
                            employment_type=command.employment_type,
                            phone_number=command.phone_number,
                            address=command.address.model_dump() if command.address else None,
                            date_of_birth=dob_result.value,
                            created_at=self.clock(),
                        )
                    )
                except UniqueConstraintViolation as exc:
                    if exc.field == "email":
                        # Lost a race with a concurrent registration
                        return Return.err(
                            Error(ErrorCode.DUPLICATE_EMAIL, "Email already registered")
                        )
                    logger.warning(f"Employee id collision on {employee_id}, retrying")
                    continue
                break

            if account is None:
                return Return.err(
                    Error(
                        ErrorCode.EMPLOYEE_ID_EXHAUSTED,
                        "Could not allocate a unique employee id",
                    )
                )

            account_id = account.id
            email = account.email
            await self.uow.commit()

        logger.info(f"Account registered: id={account_id} role={role.value}")

        token = self.token_codec.issue(
            account_id, self.verification_ttl, TokenPurpose.email_verification
        )

        email_sent = True
        try:
            await self.email_sender.send_verification(email, token)
        except Exception:
            # Account stays Pending; verification can be resent later
            logger.exception(f"Verification email delivery failed for account {account_id}")
            email_sent = False

        return Return.ok(
            RegisterResponse(
                status="pending",
                message="Registration successful. Please verify your email.",
                email_sent=email_sent,
            )
        )
