"""
Utility functions for the EZID client

Provides logging setup and the package exception hierarchy
"""

import logging
from typing import Optional


# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure logging for the EZID client"""
    if log_level is None:
        from ezid_client.settings import get_settings
        log_level = get_settings().log_level

    level = getattr(logging, log_level.upper())
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )


# ═══════════════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════

class EzidError(Exception):
    """Base exception for the EZID client"""
    pass


class ConfigurationError(EzidError):
    """Missing or malformed arguments for a registry request"""
    pass


class StateError(EzidError):
    """Operation not permitted in the identifier's current state"""
    pass


class RegistryError(EzidError):
    """Non-success response from the EZID registry.

    ``message`` is the registry's status message, verbatim; ``status_line``
    is the full first line of the response body (``error: ...``) when known.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_line: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status_line = status_line

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code} {self.message}"
