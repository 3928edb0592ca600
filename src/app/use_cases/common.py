"""Errors shared by every use case package."""

from src.core.result import Error

SERVICE_ERROR = Error(
    "SERVICE_ERROR",
    "The service is temporarily unavailable. Please try again later.",
)
