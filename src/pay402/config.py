"""
PAY402 Settings

Protocol constants for the gas-free transfer scheme, overridable from the
environment. A ``.env`` file in the working directory is loaded on import.

Environment Variables:
    - PAY402_SCHEME_MARKER: Substring identifying the scheme in an accept description
    - PAY402_HEADER_NAME: Name of the proof-of-payment request header
    - PAY402_INTERCEPTOR_PRIORITY: Priority of the payment interceptor in the chain
    - PAY402_LOG_LEVEL: Level used by ``setup_logger`` when none is given
"""

import os
from dataclasses import dataclass
from typing import Optional

import dotenv

from .engine.exceptions import ConfigurationError

dotenv.load_dotenv()

#: Marker identifying the gas-free transfer scheme in an accept description.
DEFAULT_SCHEME_MARKER = "PAY402 is detected on this server for gas-free transfers"

#: Header carrying the proof-of-payment token on the retried request.
DEFAULT_PAYMENT_HEADER = "x-pay402"

#: Currency label of amounts parsed out of the description.
PAY_CURRENCY = "PAY"

#: Collaborator interceptors register at priority 0.
DEFAULT_INTERCEPTOR_PRIORITY = 100

DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Pay402Settings:
    """
    Settings of the payment interceptor.

    Attributes:
        scheme_marker: Substring an accept description must contain to match.
        payment_header: Header name the proof-of-payment token is sent in.
        interceptor_priority: Chain priority of the payment interceptor.
    """
    scheme_marker: str = DEFAULT_SCHEME_MARKER
    payment_header: str = DEFAULT_PAYMENT_HEADER
    interceptor_priority: int = DEFAULT_INTERCEPTOR_PRIORITY

    def __post_init__(self):
        if not self.scheme_marker:
            raise ConfigurationError("scheme_marker must be a non-empty string")
        if not self.payment_header or not self.payment_header.strip():
            raise ConfigurationError("payment_header must be a non-empty string")

    @classmethod
    def from_env(cls) -> "Pay402Settings":
        """
        Build settings from environment variables, falling back to defaults.

        Raises:
            ConfigurationError: If a value is present but invalid.
        """
        raw_priority = os.getenv("PAY402_INTERCEPTOR_PRIORITY")
        try:
            priority = int(raw_priority) if raw_priority else DEFAULT_INTERCEPTOR_PRIORITY
        except ValueError as e:
            raise ConfigurationError(
                f"PAY402_INTERCEPTOR_PRIORITY must be an integer, got {raw_priority!r}"
            ) from e

        return cls(
            scheme_marker=os.getenv("PAY402_SCHEME_MARKER") or DEFAULT_SCHEME_MARKER,
            payment_header=os.getenv("PAY402_HEADER_NAME") or DEFAULT_PAYMENT_HEADER,
            interceptor_priority=priority,
        )


def get_log_level_from_env() -> Optional[str]:
    """Return the log level configured in PAY402_LOG_LEVEL, if any."""
    return os.getenv("PAY402_LOG_LEVEL")
