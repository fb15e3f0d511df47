"""
Pending Registration Service

Holds an unconfirmed signup until its email OTP is verified, then
promotes it into a Company and its admin User in the same transaction.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from pydantic import BaseModel

from src.app.services.clock import IClock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    Company,
    PendingRegistration,
    SubscriptionTier,
    User,
    UserRole,
)
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class SignupDraft(BaseModel):
    """Validated signup data with the password already hashed"""

    email: str
    password_hash: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    company_name: str
    company_email: str
    company_phone: Optional[str] = None
    company_abn: Optional[str] = None


@dataclass
class PromotedAccount:
    company: Company
    user: User


class PendingRegistrationService:
    """
    Pending Registration Store.

    Business Rules:
    - Staging is rejected when the email belongs to an existing user or
      company, or the company email is already taken
    - The last signup attempt for an email wins
    - Drafts live for 24 hours; expired drafts are deleted when touched
    - Promotion creates the free-tier company (30 day trial) and the admin
      user, then deletes the draft; nothing is committed here
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: IClock,
        ttl: timedelta = timedelta(hours=24),
        trial_period: timedelta = timedelta(days=30),
    ):
        self.uow = uow
        self.clock = clock
        self.ttl = ttl
        self.trial_period = trial_period

    async def stage(self, draft: SignupDraft) -> Result[str]:
        """
        Stage a signup draft.

        Returns:
            Result with the draft's verification token, or
            Error(EMAIL_ALREADY_EXISTS / COMPANY_ALREADY_EXISTS)
        """
        if await self.uow.users.get_by_email(draft.email) is not None:
            return Return.err(
                Error("EMAIL_ALREADY_EXISTS", "User already exists with this email")
            )

        company = await self.uow.companies.get_by_email(draft.email)
        if company is not None and company.is_active:
            return Return.err(
                Error("EMAIL_ALREADY_EXISTS", "A company already uses this email")
            )

        if await self.uow.companies.get_by_email(draft.company_email) is not None:
            return Return.err(
                Error("COMPANY_ALREADY_EXISTS", "Company already exists with this email")
            )

        replaced = await self.uow.pending_registrations.delete_by_email(draft.email)
        if replaced:
            logger.info("Replaced an earlier pending registration")

        now = self.clock.now()
        registration = PendingRegistration(
            **draft.model_dump(),
            verification_token=secrets.token_urlsafe(32),
            expires_at=now + self.ttl,
            created_at=now,
        )
        registration = await self.uow.pending_registrations.create(registration)
        return Return.ok(registration.verification_token)

    async def get_active(self, email: str) -> Optional[PendingRegistration]:
        """The live draft for an email; an expired one is deleted and None returned."""
        registration = await self.uow.pending_registrations.get_by_email(email)
        if registration is None:
            return None

        if registration.expires_at < self.clock.now():
            await self.uow.pending_registrations.delete_by_email(email)
            return None

        return registration

    async def promote(self, email: str) -> Result[PromotedAccount]:
        """
        Turn a verified draft into Company + admin User.

        Only call after the email_verification OTP for this email succeeded.
        """
        registration = await self.get_active(email)
        if registration is None:
            return Return.err(
                Error(
                    "REGISTRATION_EXPIRED",
                    "Registration not found or expired. Please sign up again.",
                )
            )

        now = self.clock.now()
        company = Company(
            name=registration.company_name,
            email=registration.company_email,
            phone=registration.company_phone,
            abn=registration.company_abn,
            subscription_tier=SubscriptionTier.free,
            is_active=True,
            trial_ends_at=now + self.trial_period,
            created_at=now,
        )
        company = await self.uow.companies.create(company)

        user = User(
            company_id=company.id,
            email=registration.email,
            password_hash=registration.password_hash,
            first_name=registration.first_name,
            last_name=registration.last_name,
            phone=registration.phone,
            role=UserRole.admin,
            is_active=True,
            email_verified_at=now,
            created_at=now,
        )
        user = await self.uow.users.create(user)

        await self.uow.pending_registrations.delete_by_email(email)

        return Return.ok(PromotedAccount(company=company, user=user))
