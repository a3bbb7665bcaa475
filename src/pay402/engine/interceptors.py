"""
Prioritized response-interceptor chain.

Every outcome of a request, a response or a RequestFailedError, is passed
through the registered interceptors in order. Fulfilled handlers see
responses; rejected handlers see failures. A rejected handler resolves the
failure by returning a response and rejects by raising, either the same error
(pass-through) or a new one. Whatever a handler produces becomes the outcome
the next interceptor sees, so a failure nobody resolves reaches the caller.

Order: higher priority first; within a priority, most recently registered
first.
"""

import inspect
import itertools
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional, Union

import httpx

from .exceptions import InterceptorError, RequestFailedError

FulfilledHandler = Callable[[httpx.Response], Awaitable[httpx.Response]]
RejectedHandler = Callable[[Exception], Awaitable[httpx.Response]]
FailurePredicate = Callable[[Exception], bool]

Outcome = Union[httpx.Response, Exception]


@dataclass(frozen=True)
class ResponseInterceptor:
    """A registered pair of handlers with its position in the chain."""
    handle: int
    on_fulfilled: Optional[FulfilledHandler] = None
    on_rejected: Optional[RejectedHandler] = None
    predicate: Optional[FailurePredicate] = None
    priority: int = 0
    name: str = ""

    def accepts(self, error: Exception) -> bool:
        """Whether the rejected handler wants to see ``error``."""
        if self.on_rejected is None:
            return False
        return self.predicate is None or self.predicate(error)


class InterceptorChain:
    """Ordered set of response interceptors owned by one client."""

    def __init__(self) -> None:
        self._interceptors: Dict[int, ResponseInterceptor] = {}
        self._counter = itertools.count()

    def use(
        self,
        on_fulfilled: Optional[FulfilledHandler] = None,
        on_rejected: Optional[RejectedHandler] = None,
        *,
        predicate: Optional[FailurePredicate] = None,
        priority: int = 0,
        name: Optional[str] = None,
    ) -> int:
        """
        Register an interceptor.

        Args:
            on_fulfilled: Async handler for responses; returns a response.
            on_rejected: Async handler for failures; returns a response or raises.
            predicate: Optional filter; the rejected handler only runs for
                       failures it accepts.
            priority: Higher runs first.
            name: Label used in logs and ``__repr__``.

        Returns:
            Handle that can be passed to ``eject``.

        Raises:
            InterceptorError: If no handler is given or a handler is not a
                              coroutine function.
        """
        if on_fulfilled is None and on_rejected is None:
            raise InterceptorError("At least one of on_fulfilled/on_rejected is required")
        for handler in (on_fulfilled, on_rejected):
            if handler is not None and not inspect.iscoroutinefunction(handler):
                raise InterceptorError(
                    f"Handler must be a coroutine function, got {type(handler).__name__}"
                )

        handle = next(self._counter)
        self._interceptors[handle] = ResponseInterceptor(
            handle=handle,
            on_fulfilled=on_fulfilled,
            on_rejected=on_rejected,
            predicate=predicate,
            priority=priority,
            name=name or f"interceptor-{handle}",
        )
        return handle

    def eject(self, handle: int) -> None:
        """Remove a registered interceptor; unknown handles are ignored."""
        self._interceptors.pop(handle, None)

    def clear(self) -> None:
        self._interceptors.clear()

    def ordered(self) -> List[ResponseInterceptor]:
        """Interceptors in execution order."""
        return sorted(
            self._interceptors.values(),
            key=lambda i: (i.priority, i.handle),
            reverse=True,
        )

    def __len__(self) -> int:
        return len(self._interceptors)

    async def run(self, outcome: Outcome) -> httpx.Response:
        """
        Pass an outcome through the chain.

        Returns:
            The final response.

        Raises:
            Exception: The final failure if no handler resolved it.
        """
        for interceptor in self.ordered():
            if isinstance(outcome, Exception):
                if not interceptor.accepts(outcome):
                    continue
                handler = interceptor.on_rejected
                argument = outcome
            else:
                if interceptor.on_fulfilled is None:
                    continue
                handler = interceptor.on_fulfilled
                argument = outcome

            try:
                outcome = await handler(argument)
            except Exception as exc:
                outcome = exc

        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def is_payment_required(error: Exception) -> bool:
    """Predicate matching failures that carry a 402 response."""
    return isinstance(error, RequestFailedError) and error.status_code == 402
