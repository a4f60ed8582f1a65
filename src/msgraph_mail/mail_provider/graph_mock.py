"""Mock transport: writes the sendMail request body to sent_items.json instead of calling Graph."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import quote

from msgraph_mail.mail_provider.graph_transport import SEND_MAIL_ENDPOINT
from msgraph_mail.mail_provider.models import MailMessage
from msgraph_mail.mail_provider.payload import build_payload
from msgraph_mail.utils.logger import get_logger

logger = get_logger("msgraph_mail.mail_provider")


class GraphMockTransport:
    """Dry-run transport. Each send appends {url, sentDateTime, body} to a JSON list."""

    def __init__(self, sent_items_path: Path):
        self._sent_items_path = Path(sent_items_path)
        logger.info("mail_provider.mock_init", sent_items_path=str(self._sent_items_path))

    def __str__(self) -> str:
        return "msgraph-mock"

    def __enter__(self) -> "GraphMockTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        pass

    def _load_sent(self) -> list[dict[str, Any]]:
        if not self._sent_items_path.exists():
            logger.debug("mail_provider.sent_missing", sent_items_path=str(self._sent_items_path))
            return []
        with self._sent_items_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.debug("mail_provider.sent_loaded", count=len(data))
        return data

    def _save_sent(self, items: list[dict[str, Any]]) -> None:
        self._sent_items_path.parent.mkdir(parents=True, exist_ok=True)
        with self._sent_items_path.open("w", encoding="utf-8") as f:
            json.dump(items, f, indent=2)
        logger.info("mail_provider.sent_written", count=len(items), sent_items_path=str(self._sent_items_path))

    def sent_items(self) -> list[dict[str, Any]]:
        return self._load_sent()

    def send(self, message: MailMessage) -> None:
        if not isinstance(message, MailMessage):
            raise TypeError(f"Expected instance of {MailMessage.__name__}, got {type(message).__name__}")
        payload = build_payload(message)
        sender = payload["from"]["emailAddress"]["address"]
        sent = self._load_sent()
        sent.append(
            {
                "url": SEND_MAIL_ENDPOINT.format(sender=quote(sender, safe="")),
                "sentDateTime": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
                "body": {"message": payload},
            }
        )
        self._save_sent(sent)
