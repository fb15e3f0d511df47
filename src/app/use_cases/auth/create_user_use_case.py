"""
Create User Use Case

Admin-issued account creation inside the admin's own company.
"""

import logging
from uuid import UUID

from src.app.services.clock import IClock
from src.app.services.unit_of_work import UnitOfWork
from src.app.utils.credentials import (
    hash_password,
    normalize_email,
    validate_email_format,
    validate_password_strength,
)
from src.domain.entities import User, UserRole
from src.domain.errors import DuplicateRecordError
from src.libs.result import Error, Result, Return
from .dtos import CreateUserCommand, CreatedUserResponse

logger = logging.getLogger(__name__)

USER_EXISTS = Error("USER_ALREADY_EXISTS", "User already exists with this email")


class CreateUserUseCase:
    """
    Use case for admin-created users.

    Business Rules:
    - The caller is an admin; the route enforces that, not this class
    - The new user joins the caller's company
    - role=admin is never accepted (one admin per company, made at signup)
    - Email is globally unique; the admin vouches for it, so it is
      marked verified on creation
    """

    def __init__(self, uow: UnitOfWork, clock: IClock):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, company_id: UUID, command: CreateUserCommand
    ) -> Result[CreatedUserResponse]:
        """
        Execute create user use case.

        Args:
            company_id: The calling admin's company
            command: New user details

        Returns:
            Result[CreatedUserResponse], or Error(CANNOT_CREATE_ADMIN /
            VALIDATION_ERROR / INVALID_EMAIL / USER_ALREADY_EXISTS /
            COMPANY_NOT_FOUND)
        """
        try:
            role = UserRole(command.role)
        except ValueError:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    "Invalid role",
                    details=[{"field": "role", "message": "Invalid role"}],
                )
            )

        if role == UserRole.admin:
            return Return.err(Error("CANNOT_CREATE_ADMIN", "Cannot create admin users"))

        email = normalize_email(command.email)
        if not validate_email_format(email):
            return Return.err(Error("INVALID_EMAIL", "Invalid email format"))

        strength = validate_password_strength(command.password)
        if not strength.is_valid:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Password validation failed: {', '.join(strength.errors)}",
                    details=[
                        {"field": "password", "message": message}
                        for message in strength.errors
                    ],
                )
            )

        async with self.uow:
            company = await self.uow.companies.get_by_id(company_id)
            if company is None:
                return Return.err(Error("COMPANY_NOT_FOUND", "Company not found"))

            if await self.uow.users.get_by_email(email) is not None:
                return Return.err(USER_EXISTS)

            now = self.clock.now()
            user = User(
                company_id=company.id,
                email=email,
                password_hash=hash_password(command.password),
                first_name=command.first_name.strip(),
                last_name=command.last_name.strip(),
                phone=command.phone,
                employee_id=command.employee_id,
                role=role,
                is_active=True,
                email_verified_at=now,
                created_at=now,
            )

            try:
                user = await self.uow.users.create(user)
                await self.uow.commit()
            except DuplicateRecordError:
                return Return.err(USER_EXISTS)

        logger.info(f"User {user.id} ({role.value}) created in company {company_id}")
        return Return.ok(
            CreatedUserResponse(
                user_id=str(user.id),
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
                role=user.role.value,
                company_id=str(user.company_id),
                phone=user.phone,
                employee_id=user.employee_id,
                is_active=user.is_active,
            )
        )
