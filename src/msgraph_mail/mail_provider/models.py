"""Pydantic models for an outgoing mail message handed to a transport."""

import mimetypes
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlainAddress(BaseModel):
    """Bare mailbox address, no display name."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["plain"] = "plain"
    address: str = ""


class NamedAddress(BaseModel):
    """Mailbox address with an optional display name."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["named"] = "named"
    address: str = ""
    name: Optional[str] = None


Address = Annotated[Union[PlainAddress, NamedAddress], Field(discriminator="kind")]


def _coerce_address(item: Any) -> Any:
    if isinstance(item, str):
        return {"kind": "plain", "address": item}
    if isinstance(item, dict) and "kind" not in item:
        if len(item) == 1 and not item.keys() & {"address", "name"}:
            # {"b@y.com": "Bob"}: address -> display name
            address, name = next(iter(item.items()))
            return {"kind": "named", "address": address, "name": name}
        kind = "named" if "name" in item else "plain"
        return {"kind": kind, **item}
    return item


class Attachment(BaseModel):
    """File attached to a message. content=None means no binary part to send."""

    filename: Optional[str] = None
    content_id: Optional[str] = None
    content_type: str = "application/octet-stream"
    content: Optional[bytes] = None
    disposition: Literal["attachment", "inline"] = "attachment"

    @property
    def is_inline(self) -> bool:
        return self.disposition == "inline"

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        inline: bool = False,
        content_id: str | None = None,
    ) -> "Attachment":
        """Read a local file; content type is guessed from the extension."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content_id=content_id,
            content_type=content_type or "application/octet-stream",
            content=path.read_bytes(),
            disposition="inline" if inline else "attachment",
        )


class MailMessage(BaseModel):
    """Application-level email message.

    Recipient lists accept PlainAddress/NamedAddress instances, plain address
    strings, dicts with address (and optionally name), or single-entry
    {address: name} dicts. Unknown keys are rejected. The first from
    entry must carry an address; it becomes the Graph sender and selects the
    mailbox the message is sent from.
    """

    model_config = ConfigDict(populate_by_name=True)

    from_: list[Address] = Field(alias="from", min_length=1)
    to: list[Address] = []
    cc: list[Address] = []
    bcc: list[Address] = []
    reply_to: list[Address] = []
    subject: str = ""
    html_body: Optional[str] = None
    text_body: Optional[str] = None
    attachments: list[Attachment] = []

    @field_validator("from_", "to", "cc", "bcc", "reply_to", mode="before")
    @classmethod
    def _coerce_addresses(cls, value: Any) -> Any:
        if isinstance(value, (str, dict, PlainAddress, NamedAddress)):
            value = [value]
        if isinstance(value, (list, tuple)):
            return [_coerce_address(item) for item in value]
        return value

    @field_validator("from_")
    @classmethod
    def _sender_has_address(cls, value: list[Any]) -> list[Any]:
        if not value[0].address:
            raise ValueError("first from entry must have an address")
        return value

    @property
    def sender(self) -> PlainAddress | NamedAddress:
        return self.from_[0]
