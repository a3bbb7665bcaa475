"""
Payment Option Extraction

Turns the matched accept entry of a 402 challenge into the ordered list of
payment options offered to the payer.

Description grammar for the native amount:

    "Send" WS+ AMOUNT WS+ "PAY"
    AMOUNT := DIGITS ["." DIGITS*] | "." DIGITS

``PAY`` is case-sensitive and must be a whole token. At most one decimal
point is accepted.
"""

import re
from typing import List, Optional

from ..config import PAY_CURRENCY
from ..schemas.https import PaymentAccept, PaymentOption

_PAY_AMOUNT_RE = re.compile(r"Send\s+(\d+(?:\.\d*)?|\.\d+)\s+PAY\b")


def parse_pay_amount(description: Optional[str]) -> Optional[str]:
    """
    Return the PAY amount advertised in ``description``.

    Returns:
        The amount as written (e.g. "0.066"), or None when the description
        does not carry a ``Send <amount> PAY`` instruction.
    """
    if not description:
        return None
    match = _PAY_AMOUNT_RE.search(description)
    return match.group(1) if match else None


def extract_payment_options(accept: PaymentAccept) -> List[PaymentOption]:
    """
    Derive payment options from a matched accept entry.

    Order is fixed: the PAY amount from the description first, then the
    accept's own amount/asset pair. Either may be missing; an empty list
    means the offer is unusable.

    Example:
        description "... Send 0.066 PAY or the USDC amount ...",
        maxAmountRequired "14000", extra {"name": "USD Coin"} gives
        [("0.066", "PAY"), ("14000", "USD Coin")], both paying to payTo.
    """
    options: List[PaymentOption] = []

    pay_amount = parse_pay_amount(accept.description)
    if pay_amount is not None:
        options.append(
            PaymentOption(amount=pay_amount, currency=PAY_CURRENCY, pay_to=accept.pay_to)
        )

    if accept.max_amount_required and accept.asset:
        options.append(
            PaymentOption(
                amount=accept.max_amount_required,
                currency=accept.asset_name or accept.asset,
                pay_to=accept.pay_to,
            )
        )

    return options
