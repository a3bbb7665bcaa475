"""
Exception and Error Definitions Module

Defines the exception hierarchy for the 402 interception pipeline. All
project-specific exceptions inherit from Pay402Error so callers can catch
everything raised by this package with a single clause.

Exception Hierarchy:
    Pay402Error (root)
    ├── RequestFailedError
    ├── PaymentSignatureError
    │   └── InvalidPaymentTokenError
    ├── InterceptorError
    └── ConfigurationError
    InvalidTransition
"""

from typing import TYPE_CHECKING, Optional

import httpx

if TYPE_CHECKING:
    from ..schemas.requests import RequestConfig


class Pay402Error(Exception):
    """
    Root exception class for all project-specific exceptions.
    """
    pass


class RequestFailedError(Pay402Error):
    """
    Raised by the intercepting client when a request fails.

    A failure is either a response whose status code is rejected by the
    client's status validator, or a transport error raised by httpx before any
    response was received (``response`` is then None and the transport error
    is available as ``__cause__``).

    Attributes:
        config: The request configuration that produced the failure. Handlers
                may mutate its headers and replay it through the client.
        response: The failed response, if one was received.
    """

    def __init__(
        self,
        message: str,
        config: "RequestConfig",
        response: Optional[httpx.Response] = None,
    ):
        super().__init__(message)
        self.config = config
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status of the failed response, or None for transport errors."""
        return self.response.status_code if self.response is not None else None


class PaymentSignatureError(Pay402Error):
    """
    Raised when producing a proof of payment fails inside this package.

    Failures raised by a caller-supplied payer callback are propagated as-is
    and are not wrapped in this class.
    """
    pass


class InvalidPaymentTokenError(PaymentSignatureError):
    """
    Raised when the payer callback returns something that cannot be sent as
    a proof-of-payment header (not a string, or an empty string).
    """
    pass


class InterceptorError(Pay402Error):
    """
    Raised when an interceptor is registered with invalid handlers.
    """
    pass


class ConfigurationError(Pay402Error):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Non-integer values for integer settings
    - Empty header names or scheme markers
    """
    pass


class InvalidTransition(Exception):
    """
    Raised when an invalid state transition occurs in a payment flow.

    Attributes:
        current_state: State the flow was in
        target_state: State the flow was asked to move to
    """

    def __init__(self, current_state, target_state):
        super().__init__(f"Invalid transition: {current_state} -> {target_state}")
        self.current_state = current_state
        self.target_state = target_state
