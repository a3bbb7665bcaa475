from .bases import FallbackPaymentAdapter, WalletClient
from .parsing import extract_payment_options, parse_pay_amount

__all__ = [
    "FallbackPaymentAdapter",
    "WalletClient",
    "extract_payment_options",
    "parse_pay_amount",
]
