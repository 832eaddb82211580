"""
Session Use Cases

Reporting over the session registry.
"""

from .list_active_sessions_use_case import ListActiveSessionsUseCase
from .dtos import ActiveSessionInfo, ActiveSessionsResponse

__all__ = [
    "ListActiveSessionsUseCase",
    "ActiveSessionInfo",
    "ActiveSessionsResponse",
]
