"""Mail provider: MailMessage model, Graph payload builder and transports."""

from msgraph_mail.mail_provider.models import (
    Attachment,
    MailMessage,
    NamedAddress,
    PlainAddress,
)
from msgraph_mail.mail_provider.protocol import MailTransport
from msgraph_mail.mail_provider.payload import build_payload
from msgraph_mail.mail_provider.graph_transport import GraphMailTransport
from msgraph_mail.mail_provider.graph_mock import GraphMockTransport
from msgraph_mail.mail_provider.mapping import message_from_mime

__all__ = [
    "Attachment",
    "MailMessage",
    "NamedAddress",
    "PlainAddress",
    "MailTransport",
    "build_payload",
    "GraphMailTransport",
    "GraphMockTransport",
    "message_from_mime",
]
