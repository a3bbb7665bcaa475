"""
Client module for PAY402 payments.

Provides an intercepting httpx client and the interceptor that pays for
gas-free transfer 402 challenges and retries the request.
"""

from .http_client import InterceptingClient
from .pay402 import Pay402Interceptor, SignTransactionCallback, with_pay402_interceptor

__all__ = [
    "InterceptingClient",
    "Pay402Interceptor",
    "SignTransactionCallback",
    "with_pay402_interceptor",
]
