"""
Replayable request descriptor used by the intercepting client.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx


@dataclass
class RequestConfig:
    """
    Configuration of one outgoing request, kept so it can be replayed.

    Interceptors own nothing here except ``headers`` and ``pay402_retry``:
    the payment handler adds its proof-of-payment header and marks the config
    as a retry before handing it back to ``InterceptingClient.replay``.

    Attributes:
        method: HTTP method.
        url: Request URL, relative URLs resolve against the client's base_url.
        headers: Per-request headers, or None when the caller passed none.
        options: Every other keyword accepted by ``httpx.AsyncClient.request``.
        pay402_retry: True once the request has been replayed with a proof
                      of payment.
    """
    method: str
    url: httpx._types.URLTypes
    headers: Optional[httpx.Headers] = None
    options: Dict[str, Any] = field(default_factory=dict)
    pay402_retry: bool = False

    @classmethod
    def from_request_args(
        cls,
        method: str,
        url: httpx._types.URLTypes,
        headers: Optional[httpx._types.HeaderTypes] = None,
        **options: Any,
    ) -> "RequestConfig":
        """Build a config from the arguments of ``httpx.AsyncClient.request``."""
        return cls(
            method=method,
            url=url,
            headers=httpx.Headers(headers) if headers is not None else None,
            options=options,
        )

    def ensure_headers(self) -> httpx.Headers:
        """Return the header set, creating an empty one if absent."""
        if self.headers is None:
            self.headers = httpx.Headers()
        return self.headers
