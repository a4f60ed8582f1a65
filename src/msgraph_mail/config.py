"""Configuration and settings."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()

# Microsoft Graph application credentials (client-credentials flow)
AZURE_TENANT_ID = os.getenv("AZURE_TENANT_ID", "")
AZURE_CLIENT_ID = os.getenv("AZURE_CLIENT_ID", "")
AZURE_CLIENT_SECRET = os.getenv("AZURE_CLIENT_SECRET", "")

# Default mailbox used by the CLI when --from is not given
GRAPH_SENDER = os.getenv("GRAPH_SENDER", "")

# HTTP
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "")  # JSONL output; empty disables the file handler
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

DEFAULT_TENANT = "common"


class GraphMailConfig(BaseModel):
    """Credentials for the Graph mail transport. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    tenant: str = DEFAULT_TENANT
    client: str = Field(min_length=1)
    secret: str = Field(min_length=1, repr=False)

    @classmethod
    def from_env(cls) -> "GraphMailConfig":
        """Build from AZURE_* environment variables (.env is loaded on import)."""
        missing = [
            name
            for name, value in (
                ("AZURE_CLIENT_ID", AZURE_CLIENT_ID),
                ("AZURE_CLIENT_SECRET", AZURE_CLIENT_SECRET),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")
        return cls(
            tenant=AZURE_TENANT_ID or DEFAULT_TENANT,
            client=AZURE_CLIENT_ID,
            secret=AZURE_CLIENT_SECRET,
        )
