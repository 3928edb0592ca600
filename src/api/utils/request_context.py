"""
Request Context

Source IP and user agent forwarded to the store for its audit trail.
"""

from typing import Optional

from fastapi import Request

from src.domain.entities import AuditContext


def client_ip(request: Request) -> Optional[str]:
    """First X-Forwarded-For entry, else the peer address"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else None


def get_audit_context(request: Request) -> AuditContext:
    return AuditContext(
        source_ip=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
