"""Mail transport protocol."""

from typing import Protocol

from msgraph_mail.mail_provider.models import MailMessage


class MailTransport(Protocol):
    """Anything that can deliver a MailMessage."""

    def send(self, message: MailMessage) -> None:
        """Send one message. Success is the absence of an exception."""
        ...
