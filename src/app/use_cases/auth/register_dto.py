"""
Register Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- RegisterCommand: Input to use case (validated business intent)
- RegisterResponse: Output from use case (structured result)
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class AddressInfo(BaseModel):
    """Postal address captured at onboarding"""

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class RegisterCommand(BaseModel):
    """
    Register command - full onboarding profile

    Created by API layer after request validation passes.
    date_of_birth stays a raw string; the use case owns its parsing.
    """

    name: str
    email: str
    password: str
    job_title: Optional[str] = None
    applications_managed: List[str] = Field(default_factory=list)
    department: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[AddressInfo] = None
    date_of_birth: Optional[str] = None
    employment_type: Optional[str] = None


class RegisterResponse(BaseModel):
    """Registration outcome - the account waits for email verification"""

    status: str
    message: str
    email_sent: bool
