from typing import Dict, NoReturn

from fastapi import status
from src.core.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


def raise_for_error(error: Error, client_codes: Dict[str, int]) -> NoReturn:
    """Raise the HTTP error for a use case error; unmapped codes are server errors"""
    if error.code in client_codes:
        raise ClientError(error, status_code=client_codes[error.code])
    if error.code == "SERVICE_ERROR":
        raise ServerError(error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    raise ServerError(error)
