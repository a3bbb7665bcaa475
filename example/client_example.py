import asyncio

import httpx

from pay402 import InterceptingClient, PaymentOption, with_pay402_interceptor
from pay402.utils import setup_logger

wallet = None  # Replace with the wallet handle your fallback protocol expects


async def sign_transaction(options: list[PaymentOption], resource: str) -> str:
    for option in options:
        print(f"Offer for {resource}: {option.amount} {option.currency} -> {option.pay_to}")
    # Pay the chosen option with your wallet and return the transaction hash
    return "0xtxhash"


async def main():
    setup_logger(level="DEBUG")
    async with InterceptingClient(
        base_url="http://localhost:3000",
        timeout=httpx.Timeout(60.0, read=120.0)
    ) as client:
        with_pay402_interceptor(client, sign_transaction, wallet)
        return await client.post("/api/pay-for-order", json={"order": 1})


if __name__ == "__main__":
    response = asyncio.run(main())
    print("Response:", response.json())
