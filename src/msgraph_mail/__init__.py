"""Send mail through the Microsoft Graph sendMail API with client-credentials auth."""

from msgraph_mail.config import GraphMailConfig
from msgraph_mail.errors import (
    CouldNotGetToken,
    CouldNotReachService,
    CouldNotSendMail,
    GraphMailError,
    ReachFailure,
)
from msgraph_mail.mail_provider import (
    Attachment,
    GraphMailTransport,
    GraphMockTransport,
    MailMessage,
    NamedAddress,
    PlainAddress,
    build_payload,
    message_from_mime,
)

__version__ = "0.1.0"

__all__ = [
    "GraphMailConfig",
    "CouldNotGetToken",
    "CouldNotReachService",
    "CouldNotSendMail",
    "GraphMailError",
    "ReachFailure",
    "Attachment",
    "GraphMailTransport",
    "GraphMockTransport",
    "MailMessage",
    "NamedAddress",
    "PlainAddress",
    "build_payload",
    "message_from_mime",
]
