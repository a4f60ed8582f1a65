"""Utility modules."""

from msgraph_mail.utils.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
