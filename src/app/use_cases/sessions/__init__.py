"""
Session Management Use Cases
"""

from .list_active_sessions_use_case import ListActiveSessionsUseCase
from .cleanup_expired_sessions_use_case import CleanupExpiredSessionsUseCase
from .dtos import ActiveSessionInfo, ActiveSessionsResponse, CleanupResponse

__all__ = [
    "ListActiveSessionsUseCase",
    "CleanupExpiredSessionsUseCase",
    "ActiveSessionInfo",
    "ActiveSessionsResponse",
    "CleanupResponse",
]
