"""
AuditContext

Request metadata forwarded to every auditable procedure.
"""

from typing import Optional

from sqlmodel import SQLModel


class AuditContext(SQLModel):
    source_ip: Optional[str] = None
    user_agent: Optional[str] = None
