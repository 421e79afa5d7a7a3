"""
Jotter Backend — SMTP Mailer
==============================

What:  Mailer implementation that submits OTP emails to an SMTP relay.
How:   Builds a multipart (plain text + HTML) EmailMessage and hands it to
       aiosmtplib, which speaks SMTP without blocking the event loop.
Who:   Created once per process by the get_mailer dependency.

Failure handling:
    SMTP protocol errors, timeouts and connection errors are all wrapped in
    UpstreamError (HTTP 500). The recipient address and error type go to the
    log; the code itself is never logged.
"""

import logging
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

import aiosmtplib

from jotter.exceptions import UpstreamError
from jotter.services.mailer_base import Mailer

logger = logging.getLogger(__name__)

OTP_SUBJECT = "Your OTP Code - Jotter"

_TEXT_TEMPLATE = """Hi{greeting},

Use the following code to verify your email address:

    {code}

This code expires in {ttl} minutes. If you didn't request it, you can ignore this email.
"""

_HTML_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #337DFF; text-align: center;">Welcome to Jotter!</h2>
  <p>Hi{greeting},</p>
  <p>Use the following code to verify your email address:</p>
  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; text-align: center;">
    <span style="font-size: 32px; font-weight: bold; color: #337DFF; letter-spacing: 8px;">{code}</span>
  </div>
  <p style="color: #666;">This code expires in {ttl} minutes.</p>
  <p>If you didn't request this, please ignore this email.</p>
</div>
"""


def build_otp_message(
    sender: str,
    sender_name: str,
    recipient: str,
    code: str,
    name: Optional[str] = None,
    ttl_minutes: int = 10,
) -> EmailMessage:
    greeting = f" {name}" if name else ""
    message = EmailMessage()
    message["From"] = formataddr((sender_name, sender))
    message["To"] = recipient
    message["Subject"] = OTP_SUBJECT
    message.set_content(_TEXT_TEMPLATE.format(greeting=greeting, code=code, ttl=ttl_minutes))
    message.add_alternative(
        _HTML_TEMPLATE.format(greeting=greeting, code=code, ttl=ttl_minutes), subtype="html"
    )
    return message


class SMTPMailer(Mailer):
    def __init__(
        self,
        hostname: str,
        port: int,
        sender: str,
        sender_name: str = "Jotter",
        username: Optional[str] = None,
        password: Optional[str] = None,
        start_tls: bool = True,
        timeout: float = 10.0,
        ttl_minutes: int = 10,
    ):
        self.hostname = hostname
        self.port = port
        self.sender = sender
        self.sender_name = sender_name
        self.username = username or None
        self.password = password or None
        self.start_tls = start_tls
        self.timeout = timeout
        self.ttl_minutes = ttl_minutes

    async def send_otp(self, recipient: str, code: str, name: Optional[str] = None) -> None:
        message = build_otp_message(
            sender=self.sender,
            sender_name=self.sender_name,
            recipient=recipient,
            code=code,
            name=name,
            ttl_minutes=self.ttl_minutes,
        )
        try:
            await aiosmtplib.send(
                message,
                hostname=self.hostname,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=self.start_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Failed to send OTP email to %s: %s", recipient, type(e).__name__)
            raise UpstreamError(
                message="Failed to send OTP email. Please try again.",
                context={"recipient": recipient, "error_type": type(e).__name__},
            ) from e
        logger.info("OTP email sent to %s", recipient)
