from .https import PaymentAccept, PaymentChallenge, PaymentOption
from .requests import RequestConfig

__all__ = [
    "PaymentAccept",
    "PaymentChallenge",
    "PaymentOption",
    "RequestConfig",
]
