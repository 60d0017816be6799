"""
Logging utilities for the CAPTCHA gateway.

Provides:
- get_logger(): Get a configured logger instance
"""

import structlog
from structlog.stdlib import BoundLogger


def get_logger(name: str) -> BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured structlog BoundLogger instance

    Example:
        >>> from shared.logging import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("token_signed", redirect_host="example.com")
    """
    return structlog.get_logger(name)


__all__ = ["get_logger"]
