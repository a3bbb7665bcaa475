"""
Abstract Base Class for Fallback Payment Protocols

A fallback adapter installs a generic 402 handler (for example a standard
x402 implementation) on an intercepting client. The payment interceptor never
inspects the adapter; it only makes sure the adapter is installed first so
that its own handler evaluates every 402 before the fallback does.

Example Implementation:
    class X402Fallback(FallbackPaymentAdapter):
        def install_on(self, client, signing_context):
            client.interceptors.use(on_rejected=self._pay, predicate=is_payment_required)
            return client
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..clients.http_client import InterceptingClient

#: Opaque wallet/signing handle, passed through unmodified.
WalletClient = Any


class FallbackPaymentAdapter(ABC):
    """
    Capability that installs a fallback payment protocol on a client.
    """

    @abstractmethod
    def install_on(
        self,
        client: "InterceptingClient",
        signing_context: WalletClient,
    ) -> "InterceptingClient":
        """
        Register the fallback protocol's interceptor on ``client``.

        Args:
            client: Client to install on; mutated in place.
            signing_context: Opaque wallet handle for the fallback protocol.

        Returns:
            The same client.
        """
        pass
