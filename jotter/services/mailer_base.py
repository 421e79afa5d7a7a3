"""
Jotter Backend — Abstract Mailer Interface
============================================

What:  Contract for delivering one-time passcodes by email.
How:   Concrete implementations inherit from Mailer and implement send_otp().
Who:   AuthService receives a Mailer in its constructor; tests pass a fake.

Contract:
    - send_otp() either delivers the message or raises UpstreamError
    - No retries: a failed send aborts the request and the client re-requests
"""

from abc import ABC, abstractmethod
from typing import Optional


class Mailer(ABC):
    """Delivers OTP emails."""

    @abstractmethod
    async def send_otp(self, recipient: str, code: str, name: Optional[str] = None) -> None:
        """
        Send `code` to `recipient`.

        Args:
            recipient: Normalised email address
            code: The 6-digit passcode
            name: Display name used in the greeting, if known

        Raises:
            UpstreamError: the mail transport rejected or could not take the message
        """
        ...
