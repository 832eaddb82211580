from datetime import datetime
from typing import List
from pydantic import BaseModel


class ActiveSessionInfo(BaseModel):
    """Restricted account projection joined with its session"""

    id: str
    name: str
    email: str
    role: str
    status: str
    last_accessed: datetime


class ActiveSessionsResponse(BaseModel):
    """One page of logged-in accounts plus the total for pagination UI"""

    users: List[ActiveSessionInfo]
    total_users: int
    page: int
    limit: int
