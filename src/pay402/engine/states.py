"""
Per-attempt state machine of the 402 payment flow.

    SENT ──> SUCCESS
      └────> FAILED_402 ──> DEFERRED
                 └────────> EXTRACTING ──> DEFERRED
                                 └───────> AWAITING_PAYMENT ──> SIGN_FAILED
                                                  └───────────> RETRIED ──> SUCCESS | FAILED

SUCCESS, FAILED, DEFERRED and SIGN_FAILED are terminal.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from .exceptions import InvalidTransition


class FlowState(str, Enum):
    SENT = "sent"
    SUCCESS = "success"
    FAILED = "failed"
    FAILED_402 = "failed_402"
    DEFERRED = "deferred"
    EXTRACTING = "extracting"
    AWAITING_PAYMENT = "awaiting_payment"
    SIGN_FAILED = "sign_failed"
    RETRIED = "retried"


TRANSITIONS: Dict[FlowState, FrozenSet[FlowState]] = {
    FlowState.SENT: frozenset({FlowState.SUCCESS, FlowState.FAILED_402}),
    FlowState.FAILED_402: frozenset({FlowState.DEFERRED, FlowState.EXTRACTING}),
    FlowState.EXTRACTING: frozenset({FlowState.DEFERRED, FlowState.AWAITING_PAYMENT}),
    FlowState.AWAITING_PAYMENT: frozenset({FlowState.RETRIED, FlowState.SIGN_FAILED}),
    FlowState.RETRIED: frozenset({FlowState.SUCCESS, FlowState.FAILED}),
    FlowState.SUCCESS: frozenset(),
    FlowState.FAILED: frozenset(),
    FlowState.DEFERRED: frozenset(),
    FlowState.SIGN_FAILED: frozenset(),
}


class PaymentFlow:
    """
    Tracks one request attempt through the payment flow.

    Attributes:
        url: URL of the request, for logging.
        history: States visited, in order.
        reason: Why the flow ended where it did, if it was deferred or failed.
    """

    def __init__(self, url: str = "") -> None:
        self.url = url
        self.history: List[FlowState] = [FlowState.SENT]
        self.reason: Optional[str] = None

    @property
    def state(self) -> FlowState:
        return self.history[-1]

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self.state]

    def advance(self, target: FlowState, reason: Optional[str] = None) -> FlowState:
        """
        Move to ``target``.

        Raises:
            InvalidTransition: If ``target`` is not reachable from the current state.
        """
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransition(self.state, target)
        self.history.append(target)
        if reason is not None:
            self.reason = reason
        return target

    def __repr__(self) -> str:
        path = " -> ".join(s.value for s in self.history)
        return f"PaymentFlow(url={self.url!r}, path={path})"
