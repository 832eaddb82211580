from typing import Optional, Sequence

from src.domain.entities import AccountRole


def resolve_role(
    job_title: Optional[str], applications_managed: Optional[Sequence[str]] = None
) -> AccountRole:
    """
    Derive an access role from onboarding attributes.

    "admin" anywhere in the job title (any case) wins; otherwise managing
    at least one application makes the account support staff.
    """
    if job_title and "admin" in job_title.lower():
        return AccountRole.admin
    if applications_managed:
        return AccountRole.support
    return AccountRole.user
