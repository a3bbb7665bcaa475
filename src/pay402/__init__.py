"""
pay402 - automatic HTTP 402 payments for httpx.

Usage:
    ```python
    async def pay(options, resource):
        return await wallet.transfer(options[0])  # returns a transaction hash

    async with with_pay402_interceptor(InterceptingClient(), pay, wallet) as client:
        response = await client.get("https://api.example.com/paid")
    ```
"""

from .adapters import FallbackPaymentAdapter, extract_payment_options, parse_pay_amount
from .clients import InterceptingClient, Pay402Interceptor, with_pay402_interceptor
from .config import Pay402Settings
from .engine import Pay402Error, RequestFailedError
from .schemas import PaymentAccept, PaymentChallenge, PaymentOption, RequestConfig

__all__ = [
    "FallbackPaymentAdapter",
    "extract_payment_options",
    "parse_pay_amount",
    "InterceptingClient",
    "Pay402Interceptor",
    "with_pay402_interceptor",
    "Pay402Settings",
    "Pay402Error",
    "RequestFailedError",
    "PaymentAccept",
    "PaymentChallenge",
    "PaymentOption",
    "RequestConfig",
]
