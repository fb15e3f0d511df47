from abc import ABC, abstractmethod

from src.domain.entities import OTPPurpose


class IEmailService(ABC):
    """
    Outbound transactional email.

    Callers treat every method as fire-and-forget: a failure is logged and
    never fails the operation that triggered the email.
    """

    @abstractmethod
    async def send_otp_email(self, email: str, code: str, purpose: OTPPurpose) -> None:
        pass

    @abstractmethod
    async def send_welcome_email(self, email: str, first_name: str, company_name: str) -> None:
        pass
