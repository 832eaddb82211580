"""
Use Case Error Codes

Closed set of failure kinds a use case may return. The API layer maps each
code to an HTTP status; nothing below the API knows about transport.
"""

from enum import Enum


class ErrorCode(str, Enum):
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_DATE = "INVALID_DATE"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    ALREADY_VERIFIED = "ALREADY_VERIFIED"
    INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    PASSWORD_EXPIRED = "PASSWORD_EXPIRED"
    INCORRECT_PASSWORD = "INCORRECT_PASSWORD"
    PASSWORD_REUSED = "PASSWORD_REUSED"
    FORBIDDEN = "FORBIDDEN"
    ACCOUNT_SUSPENDED = "ACCOUNT_SUSPENDED"

    # Server-side: employee id space exhausted after retries
    EMPLOYEE_ID_EXHAUSTED = "EMPLOYEE_ID_EXHAUSTED"
