"""
Intercepting HTTP Client

Provides an httpx.AsyncClient whose responses flow through a prioritized
interceptor chain. Failed requests are turned into RequestFailedError so that
payment handlers can inspect them, retry them, or let them through.
"""

from typing import Callable, Optional

import httpx

from ..engine.exceptions import RequestFailedError
from ..engine.interceptors import InterceptorChain
from ..schemas.requests import RequestConfig
from ..utils import logger


def default_validate_status(status_code: int) -> bool:
    """Accept 2xx responses only."""
    return 200 <= status_code < 300


class InterceptingClient(httpx.AsyncClient):
    """
    Extended httpx.AsyncClient with a response-interceptor pipeline.

    Every request is recorded as a RequestConfig, sent, and its outcome passed
    through ``interceptors``. Responses rejected by ``validate_status`` and
    transport errors become RequestFailedError; if no interceptor resolves the
    failure it is raised to the caller.

    Fully compatible with httpx.AsyncClient - get, post, etc. all go through
    ``request`` and can be used as an async context manager.

    Usage:
        ```python
        async with InterceptingClient(base_url="https://api.example.com") as client:
            with_pay402_interceptor(client, sign_transaction, wallet)
            response = await client.get("/data")
        ```
    """

    def __init__(
        self,
        validate_status: Optional[Callable[[int], bool]] = None,
        **kwargs
    ):
        """
        Initialize client.

        Args:
            validate_status: Returns True for status codes that count as success.
            **kwargs: All standard httpx.AsyncClient arguments (base_url, timeout, headers, etc.)
        """
        super().__init__(**kwargs)
        self.interceptors = InterceptorChain()
        self._validate_status = validate_status or default_validate_status

    # =========================================================================
    # Override httpx.AsyncClient.request to run the interceptor chain
    # =========================================================================

    async def request(
        self,
        method: str,
        url: httpx._types.URLTypes,
        **kwargs
    ) -> httpx.Response:
        """
        Execute HTTP request through the interceptor chain.

        Overrides httpx.AsyncClient.request() so all convenience methods
        (get, post, etc.) are intercepted.

        Raises:
            RequestFailedError: If the request fails and no interceptor resolves it.
        """
        config = RequestConfig.from_request_args(method, url, **kwargs)
        return await self._dispatch(config)

    async def replay(self, config: RequestConfig) -> httpx.Response:
        """
        Reissue a recorded request through the same client and chain.

        Base URL, default headers and other client defaults apply again; the
        config's own headers are sent as they are now.
        """
        return await self._dispatch(config)

    # =========================================================================
    # Core Dispatch Logic
    # =========================================================================

    async def _dispatch(self, config: RequestConfig) -> httpx.Response:
        try:
            response = await super().request(
                config.method,
                config.url,
                headers=config.headers,
                **config.options
            )
        except httpx.RequestError as e:
            logger.debug(f"Transport error for {config.method} {config.url}: {e}")
            failure = RequestFailedError(f"Request failed: {e}", config=config)
            failure.__cause__ = e
            return await self.interceptors.run(failure)

        if self._validate_status(response.status_code):
            return await self.interceptors.run(response)

        failure = RequestFailedError(
            f"Request failed with status code {response.status_code}",
            config=config,
            response=response,
        )
        return await self.interceptors.run(failure)
