"""
Fantasy League Domain Enums

Enumeration types shared by the read models.
"""

from enum import Enum


class SystemRole(str, Enum):
    """System-wide role code reported by the store"""

    admin = "ADMIN"
    user = "USER"
    brand_manager = "BRAND_MANAGER"


class AccountStatus(int, Enum):
    """UserAccount.AccountStatus values"""

    locked = 0
    active = 1
    deactivated = 2
