"""
PAY402 Payment Interceptor

Handles 402 Payment Required responses that advertise the gas-free transfer
scheme. The interceptor:
1. Finds the accept entry carrying the scheme marker
2. Derives payment options from it
3. Asks the caller's payer callback to pay, receiving a proof-of-payment token
4. Replays the original request with the token in the ``x-pay402`` header

Any 402 it cannot handle is re-raised unchanged so the fallback protocol's
interceptor, or the caller, can deal with it.
"""

from json import JSONDecodeError
from typing import Awaitable, Callable, Optional, Sequence

import httpx
from pydantic import ValidationError

from ..adapters.bases import FallbackPaymentAdapter, WalletClient
from ..adapters.parsing import extract_payment_options
from ..config import Pay402Settings
from ..engine.exceptions import InvalidPaymentTokenError, RequestFailedError
from ..engine.interceptors import is_payment_required
from ..engine.states import FlowState, PaymentFlow
from ..schemas.https import PaymentChallenge, PaymentOption
from ..utils import logger, mask_token
from .http_client import InterceptingClient

SignTransactionCallback = Callable[[Sequence[PaymentOption], str], Awaitable[str]]
FlowHook = Callable[[PaymentFlow], None]


class Pay402Interceptor:
    """
    Failure handler for the gas-free transfer scheme.

    One instance serves every request of its client; all per-request state
    lives in local variables, so concurrent 402s are handled independently.
    Concurrent 402s for the same resource each trigger their own payment.
    """

    def __init__(
        self,
        client: InterceptingClient,
        sign_transaction: SignTransactionCallback,
        settings: Optional[Pay402Settings] = None,
        flow_hook: Optional[FlowHook] = None,
    ):
        """
        Args:
            client: Client the failed requests are replayed through.
            sign_transaction: Payer callback, ``(options, resource) -> token``.
            settings: Scheme marker, header name and priority; read from the
                      environment when omitted.
            flow_hook: Called with every finished PaymentFlow; its exceptions are
                       logged, never raised.
        """
        self._client = client
        self._sign_transaction = sign_transaction
        self._settings = settings or Pay402Settings.from_env()
        self._flow_hook = flow_hook

    @property
    def settings(self) -> Pay402Settings:
        return self._settings

    def matches(self, error: Exception) -> bool:
        """
        Whether ``error`` is a 402 this interceptor should look at.

        Replays it issued itself are excluded, so a 402 on the retry
        propagates as a normal failure.
        """
        return is_payment_required(error) and not error.config.pay402_retry

    def install(self) -> int:
        """Register on the client's chain; returns the interceptor handle."""
        return self._client.interceptors.use(
            on_rejected=self.handle,
            predicate=self.matches,
            priority=self._settings.interceptor_priority,
            name="pay402",
        )

    async def handle(self, error: Exception) -> httpx.Response:
        """
        Resolve a 402 by paying and replaying, or re-raise ``error`` unchanged.

        Raises:
            Exception: ``error`` itself when deferring, the payer's exception
                       when payment fails, or the replay's failure.
        """
        if not self.matches(error):
            raise error

        flow = PaymentFlow(url=str(error.config.url))
        flow.advance(FlowState.FAILED_402)
        logger.info(f"402 status code for {error.config.method} {error.config.url}")

        challenge = self._parse_challenge(error.response)
        accept = challenge.find_accept(self._settings.scheme_marker) if challenge else None
        if accept is None:
            self._defer(flow, FlowState.DEFERRED, "no gas-free transfer offer in challenge")
            raise error

        flow.advance(FlowState.EXTRACTING)
        options = tuple(extract_payment_options(accept))
        if not options:
            self._defer(flow, FlowState.DEFERRED, "no payment option could be extracted")
            raise error

        flow.advance(FlowState.AWAITING_PAYMENT)
        logger.debug(f"Payment options for {accept.resource}: {options}")
        try:
            token = await self._sign_transaction(options, accept.resource)
        except Exception as e:
            logger.error(f"Payer failed for {accept.resource}: {e!r}")
            self._defer(flow, FlowState.SIGN_FAILED, repr(e))
            raise

        if not isinstance(token, str) or not token:
            self._defer(flow, FlowState.SIGN_FAILED, "invalid proof-of-payment token")
            raise InvalidPaymentTokenError(
                f"Payer must return a non-empty string token, got {token!r}"
            )

        config = error.config
        config.ensure_headers()[self._settings.payment_header] = token
        config.pay402_retry = True
        flow.advance(FlowState.RETRIED)
        logger.info(
            f"Retrying {config.method} {config.url} with "
            f"{self._settings.payment_header}={mask_token(token)}"
        )

        try:
            response = await self._client.replay(config)
        except Exception as e:
            self._defer(flow, FlowState.FAILED, repr(e))
            raise
        self._defer(flow, FlowState.SUCCESS)
        return response

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _parse_challenge(self, response: Optional[httpx.Response]) -> Optional[PaymentChallenge]:
        """
        Decode the 402 body; None when there is no usable JSON object body.
        """
        if response is None or not response.content:
            return None
        try:
            body = response.json()
        except (JSONDecodeError, UnicodeDecodeError):
            logger.debug("402 body is not JSON")
            return None
        if not isinstance(body, dict):
            return None
        try:
            return PaymentChallenge.model_validate(body)
        except ValidationError as e:
            logger.debug(f"402 body is not a payment challenge: {e}")
            return None

    def _defer(self, flow: PaymentFlow, state: FlowState, reason: Optional[str] = None) -> None:
        flow.advance(state, reason)
        logger.debug(f"{flow!r} ({reason or 'done'})")
        if self._flow_hook is None:
            return
        try:
            self._flow_hook(flow)
        except Exception:
            # The hook observes the flow; its failure must not replace the outcome.
            logger.exception(f"flow_hook failed for {flow!r}")


def with_pay402_interceptor(
    client: InterceptingClient,
    sign_transaction: SignTransactionCallback,
    wallet_client: WalletClient,
    fallback: Optional[FallbackPaymentAdapter] = None,
    settings: Optional[Pay402Settings] = None,
    flow_hook: Optional[FlowHook] = None,
) -> InterceptingClient:
    """
    Install the fallback protocol, then the PAY402 interceptor, on ``client``.

    The fallback is installed first; the PAY402 interceptor is registered
    afterwards at a higher priority, so it sees every 402 before the
    fallback does. Calling this twice on one client installs two independent
    pairs of interceptors.

    Args:
        client: Client to install on; mutated in place.
        sign_transaction: Payer callback, ``(options, resource) -> token``.
        wallet_client: Opaque signing context, forwarded to the fallback.
        fallback: Generic payment protocol to defer unrecognised 402s to.
        settings: Interceptor settings; defaults to ``Pay402Settings.from_env()``.
        flow_hook: Called with every finished PaymentFlow.

    Returns:
        The same client.
    """
    if fallback is not None:
        fallback.install_on(client, wallet_client)
    else:
        logger.debug("No fallback payment adapter installed")

    Pay402Interceptor(
        client,
        sign_transaction,
        settings=settings,
        flow_hook=flow_hook,
    ).install()
    return client
