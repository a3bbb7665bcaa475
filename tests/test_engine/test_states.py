import pytest

from pay402.engine.exceptions import InvalidTransition
from pay402.engine.states import FlowState, PaymentFlow


def test_paid_retry_path():
    flow = PaymentFlow(url="/protected")
    for state in (
        FlowState.FAILED_402,
        FlowState.EXTRACTING,
        FlowState.AWAITING_PAYMENT,
        FlowState.RETRIED,
        FlowState.SUCCESS,
    ):
        flow.advance(state)

    assert flow.state is FlowState.SUCCESS
    assert flow.is_terminal
    assert flow.history[0] is FlowState.SENT


def test_deferral_records_reason():
    flow = PaymentFlow()
    flow.advance(FlowState.FAILED_402)
    flow.advance(FlowState.DEFERRED, reason="no offer")

    assert flow.is_terminal
    assert flow.reason == "no offer"


@pytest.mark.parametrize(
    "path, illegal",
    [
        ([], FlowState.RETRIED),
        ([FlowState.FAILED_402], FlowState.AWAITING_PAYMENT),
        ([FlowState.FAILED_402, FlowState.EXTRACTING, FlowState.AWAITING_PAYMENT], FlowState.DEFERRED),
        ([FlowState.SUCCESS], FlowState.FAILED_402),
    ],
)
def test_illegal_transitions_raise(path, illegal):
    flow = PaymentFlow()
    for state in path:
        flow.advance(state)

    with pytest.raises(InvalidTransition) as exc_info:
        flow.advance(illegal)

    assert exc_info.value.target_state is illegal
    assert flow.state is (path[-1] if path else FlowState.SENT)
