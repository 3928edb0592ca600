"""
Session Use Case DTOs
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel


class ActiveSessionInfo(BaseModel):
    session_id: str
    created_at: datetime
    last_activity_at: datetime
    expires_at: datetime
    is_current: bool


class ActiveSessionsResponse(BaseModel):
    """Sessions of the caller, most recent activity first"""

    sessions: List[ActiveSessionInfo]


class CleanupResponse(BaseModel):
    deleted_sessions: int
    deleted_reset_tokens: int
    message: str
