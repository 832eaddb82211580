from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound email port - delivery is best-effort"""

    @abstractmethod
    async def send_verification(self, email: str, token: str) -> None:
        """Send the email verification link carrying token"""
        pass

    @abstractmethod
    async def send_account_setup(self, email: str, token: str) -> None:
        """Send the account setup link carrying token"""
        pass
