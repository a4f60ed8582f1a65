"""Typed errors raised by the Graph mail transport.

None of these are retried by the transport; they surface to the caller of
``send`` (or ``get_access_token``) as-is.
"""

from enum import Enum

UNKNOWN_CODE = "Unknown"
UNKNOWN_MESSAGE = "Unknown error"


class GraphMailError(RuntimeError):
    """Base class for all mail-transport errors."""


class CouldNotGetToken(GraphMailError):
    """The identity platform token endpoint answered with an error response."""

    def __init__(self, error: str, description: str):
        self.error = error
        self.description = description
        super().__init__(f"Could not get access token: {error} ({description})")

    @classmethod
    def service_responded_with_error(cls, error: str, description: str) -> "CouldNotGetToken":
        return cls(error, description)


class CouldNotSendMail(GraphMailError):
    """The sendMail endpoint answered with an error response."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"Could not send mail: {code} ({message})")

    @classmethod
    def service_responded_with_error(cls, code: str, message: str) -> "CouldNotSendMail":
        return cls(code, message)


class ReachFailure(str, Enum):
    NETWORK = "network"
    UNKNOWN = "unknown"


class CouldNotReachService(GraphMailError):
    """Transport-level failure talking to the token or sendMail endpoint."""

    def __init__(self, reason: ReachFailure):
        self.reason = reason
        if reason is ReachFailure.NETWORK:
            text = "Could not reach service: network error (DNS, connection refused or timeout)"
        else:
            text = "Could not reach service: unknown error"
        super().__init__(text)

    @property
    def is_network_error(self) -> bool:
        return self.reason is ReachFailure.NETWORK

    @classmethod
    def network_error(cls) -> "CouldNotReachService":
        return cls(ReachFailure.NETWORK)

    @classmethod
    def unknown_error(cls) -> "CouldNotReachService":
        return cls(ReachFailure.UNKNOWN)
