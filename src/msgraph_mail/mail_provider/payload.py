"""Build the Microsoft Graph message resource (sendMail payload) from a MailMessage."""

import base64
from typing import Any, Iterable

from msgraph_mail.mail_provider.models import Attachment, MailMessage, NamedAddress, PlainAddress

FILE_ATTACHMENT_TYPE = "#microsoft.graph.fileAttachment"
IMPORTANCE = "Normal"


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (str, list, dict)) and not value)


def drop_empty(obj: dict[str, Any]) -> dict[str, Any]:
    """Remove keys whose value is None, "", [] or {}. False and 0 are kept."""
    return {key: value for key, value in obj.items() if not _is_empty(value)}


def email_address(entry: PlainAddress | NamedAddress) -> dict[str, Any]:
    """Graph recipient object for one address; name only when non-empty."""
    name = entry.name if entry.kind == "named" else None
    return {"emailAddress": drop_empty({"name": name, "address": entry.address})}


def recipients(entries: Iterable[PlainAddress | NamedAddress]) -> list[dict[str, Any]]:
    """Map recipients in order, skipping entries without an address."""
    return [email_address(entry) for entry in entries if entry.address]


def attachments(items: Iterable[Attachment]) -> list[dict[str, Any]]:
    """Graph fileAttachment objects; attachments without bytes are skipped."""
    collection = []
    for item in items:
        if item.content is None:
            continue
        collection.append(
            drop_empty(
                {
                    "name": item.filename,
                    "contentId": item.content_id,
                    "contentType": item.content_type,
                    "contentBytes": base64.b64encode(item.content).decode("ascii"),
                    "size": len(item.content),
                    "@odata.type": FILE_ATTACHMENT_TYPE,
                    "isInline": item.is_inline,
                }
            )
        )
    return collection


def body(message: MailMessage) -> dict[str, Any]:
    """HTML wins over text. Empty when the message has neither."""
    if message.html_body:
        return {"contentType": "html", "content": message.html_body}
    if message.text_body is None:
        return {}
    return {"contentType": "text", "content": message.text_body}


def build_payload(message: MailMessage) -> dict[str, Any]:
    """Return the Graph message object for message, empty fields removed."""
    return drop_empty(
        {
            "subject": message.subject,
            "sender": email_address(message.sender),
            "from": email_address(message.sender),
            "replyTo": recipients(message.reply_to),
            "toRecipients": recipients(message.to),
            "ccRecipients": recipients(message.cc),
            "bccRecipients": recipients(message.bcc),
            "importance": IMPORTANCE,
            "body": body(message),
            "attachments": attachments(message.attachments),
        }
    )
