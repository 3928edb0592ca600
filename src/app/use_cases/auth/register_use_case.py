"""
Register Use Case

Creates a user account through app.sp_RegisterUser.
"""

import logging

from src.app.repositories.user_repository import IUserRepository
from src.app.services.errors import BackingStoreError, DatabaseError
from src.app.use_cases.common import SERVICE_ERROR
from src.core.result import Error, Result, Return
from src.domain.entities import AuditContext, NewUserAccount
from .dtos import RegisterCommand, RegisterResponse
from .password_policy import check_new_password

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Rules:
    - Password complexity is checked before the store is called
    - Profile image size requires both width and height
    - Email uniqueness, alias rules and password hashing belong to the store
    - Store rejections are surfaced with the store's message
    """

    def __init__(self, users: IUserRepository):
        self.users = users

    async def execute(
        self, command: RegisterCommand, context: AuditContext
    ) -> Result[RegisterResponse]:
        password_error = check_new_password(command.password, command.password_confirm)
        if password_error:
            return Return.err(password_error)

        if command.profile_image_bytes is not None and (
            command.profile_image_width is None or command.profile_image_height is None
        ):
            return Return.err(
                Error(
                    "INVALID_PROFILE_IMAGE",
                    "Profile image size requires both width and height.",
                )
            )

        account = NewUserAccount(**command.model_dump())

        try:
            result = await self.users.register(account, context)
        except BackingStoreError as e:
            return Return.err(Error("REGISTRATION_FAILED", e.message))
        except DatabaseError:
            logger.exception(f"Registration failed for {command.email}")
            return Return.err(SERVICE_ERROR)

        if result is None:
            return Return.err(Error("REGISTRATION_FAILED", "User registration failed."))

        logger.info(f"User registered: user_id={result.user_id}")
        return Return.ok(
            RegisterResponse(
                user_id=result.user_id,
                system_role_code=result.system_role_code,
                message=result.message or "User registered successfully.",
            )
        )
