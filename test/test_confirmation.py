import pytest

from mobile_client.confirmation import ConfirmationFlow, ConfirmationState
from mobile_client.errors import InvalidTransition


def test_confirm_applies_requested_payload():
    flow = ConfirmationFlow()

    flow.request("task-1")
    assert flow.is_open
    assert flow.confirm() == "task-1"
    assert flow.state is ConfirmationState.APPLIED


def test_cancel_discards_payload():
    flow = ConfirmationFlow()
    flow.request("task-1")

    flow.cancel()

    assert flow.state is ConfirmationState.CANCELLED
    assert flow.payload is None


def test_choose_replaces_payload_while_open():
    flow = ConfirmationFlow()
    flow.request(1)

    flow.choose(2)

    assert flow.confirm() == 2


@pytest.mark.parametrize("event", ["confirm", "cancel"])
def test_events_outside_confirming_are_rejected(event):
    flow = ConfirmationFlow()

    with pytest.raises(InvalidTransition):
        getattr(flow, event)()


def test_second_request_while_open_is_rejected():
    flow = ConfirmationFlow()
    flow.request("a")

    with pytest.raises(InvalidTransition):
        flow.request("b")
    assert flow.payload == "a"


def test_finished_flow_can_be_reused_and_reset():
    flow = ConfirmationFlow()
    flow.request("a")
    flow.cancel()

    flow.request("b")
    flow.confirm()
    flow.reset()

    assert flow.state is ConfirmationState.IDLE
    assert flow.payload is None
