"""
Shared 402 payloads for the test suite.
"""

import copy

import pytest

PAY_TO = "0x37ffc90BDb5B0c3aCF8beCCCe4AA7e7d74ab38Ba"
USDC_BASE = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
RESOURCE = "http://localhost:3000/api/pay-for-order"

GAS_FREE_DESCRIPTION = (
    "PAY402 is detected on this server for gas-free transfers. "
    "Send 0.066 PAY or the USDC amount via 100Pay Internal transfer."
)

_GAS_FREE_CHALLENGE = {
    "x402Version": 1,
    "error": "X-PAYMENT header is required",
    "accepts": [
        {
            "scheme": "exact",
            "network": "base",
            "maxAmountRequired": "14000",
            "resource": RESOURCE,
            "description": GAS_FREE_DESCRIPTION,
            "mimeType": "",
            "payTo": PAY_TO,
            "maxTimeoutSeconds": 60,
            "asset": USDC_BASE,
            "outputSchema": {"input": {"type": "http", "method": "POST", "discoverable": True}},
            "extra": {"name": "USD Coin", "version": "2"},
        }
    ],
}

_STANDARD_CHALLENGE = {
    "x402Version": 1,
    "error": "X-PAYMENT header is required",
    "accepts": [
        {
            "scheme": "exact",
            "network": "base",
            "maxAmountRequired": "100",
            "resource": "http://localhost:3000/api/other",
            "description": "Standard x402 payment required.",
            "mimeType": "",
            "payTo": "0x123...",
            "maxTimeoutSeconds": 60,
            "asset": "0x...",
            "outputSchema": {},
            "extra": {},
        }
    ],
}


@pytest.fixture
def gas_free_challenge():
    """402 body advertising the gas-free transfer scheme."""
    return copy.deepcopy(_GAS_FREE_CHALLENGE)


@pytest.fixture
def standard_challenge():
    """402 body with a plain x402 offer and no gas-free marker."""
    return copy.deepcopy(_STANDARD_CHALLENGE)
