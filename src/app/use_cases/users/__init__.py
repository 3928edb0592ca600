"""
User Use Cases

All user-related business logic.
"""

from .get_profile_use_case import GetProfileUseCase

__all__ = [
    "GetProfileUseCase",
]
