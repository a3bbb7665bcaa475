from .exceptions import (
    Pay402Error,
    RequestFailedError,
    PaymentSignatureError,
    InvalidPaymentTokenError,
    InterceptorError,
    ConfigurationError,
    InvalidTransition,
)
from .interceptors import InterceptorChain, ResponseInterceptor, is_payment_required
from .states import FlowState, PaymentFlow

__all__ = [
    "Pay402Error",
    "RequestFailedError",
    "PaymentSignatureError",
    "InvalidPaymentTokenError",
    "InterceptorError",
    "ConfigurationError",
    "InvalidTransition",
    "InterceptorChain",
    "ResponseInterceptor",
    "is_payment_required",
    "FlowState",
    "PaymentFlow",
]
