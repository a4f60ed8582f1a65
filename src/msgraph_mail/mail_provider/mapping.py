"""Map standard-library EmailMessage objects to MailMessage."""

from email.message import EmailMessage, Message
from email.utils import getaddresses
from typing import Iterator

from msgraph_mail.mail_provider.models import (
    Attachment,
    MailMessage,
    NamedAddress,
    PlainAddress,
)


def _addresses(message: EmailMessage, header: str) -> list[PlainAddress | NamedAddress]:
    values = [str(v) for v in message.get_all(header, [])]
    result: list[PlainAddress | NamedAddress] = []
    for name, address in getaddresses(values):
        if name:
            result.append(NamedAddress(address=address, name=name))
        else:
            result.append(PlainAddress(address=address))
    return result


def _leaf_parts(part: Message) -> Iterator[Message]:
    """Non-multipart parts in document order. Attached messages (message/*) are skipped."""
    maintype = part.get_content_maintype()
    if maintype == "multipart":
        for sub in part.get_payload():
            yield from _leaf_parts(sub)
    elif maintype != "message":
        yield part


def _attachment(part: Message) -> Attachment:
    content_id = part.get("Content-ID")
    return Attachment(
        filename=part.get_filename(),
        content_id=str(content_id).strip().strip("<>") if content_id else None,
        content_type=part.get_content_type(),
        content=part.get_payload(decode=True),
        disposition="inline" if part.get_content_disposition() == "inline" else "attachment",
    )


def message_from_mime(message: EmailMessage) -> MailMessage:
    """Convert a parsed or hand-built EmailMessage (email.policy.default).

    The first text/html and text/plain body candidates become html_body and
    text_body; every other leaf part becomes an Attachment.
    """
    if not isinstance(message, EmailMessage):
        raise TypeError(f"Expected instance of {EmailMessage.__name__}, got {type(message).__name__}")

    html_part = message.get_body(preferencelist=("html",))
    text_part = message.get_body(preferencelist=("plain",))
    attachments = [
        _attachment(part)
        for part in _leaf_parts(message)
        if part is not html_part and part is not text_part
    ]
    return MailMessage(
        from_=_addresses(message, "From"),
        to=_addresses(message, "To"),
        cc=_addresses(message, "Cc"),
        bcc=_addresses(message, "Bcc"),
        reply_to=_addresses(message, "Reply-To"),
        subject=str(message.get("Subject", "")),
        html_body=html_part.get_content() if html_part is not None else None,
        text_body=text_part.get_content() if text_part is not None else None,
        attachments=attachments,
    )
