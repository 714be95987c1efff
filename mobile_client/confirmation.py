"""
Confirm/cancel flows (delete confirmation, date picker) as a plain state machine.

    IDLE       → request(payload)  → CONFIRMING
    CONFIRMING → choose(payload)   → CONFIRMING (payload replaced)
    CONFIRMING → confirm()         → APPLIED    (returns the payload)
    CONFIRMING → cancel()          → CANCELLED
    APPLIED / CANCELLED → request(payload) → CONFIRMING
    any        → reset()           → IDLE
"""

from enum import Enum
from typing import Generic, TypeVar

from mobile_client.errors import InvalidTransition

T = TypeVar("T")


class ConfirmationState(Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    APPLIED = "applied"
    CANCELLED = "cancelled"


class ConfirmationFlow(Generic[T]):
    def __init__(self) -> None:
        self.state = ConfirmationState.IDLE
        self.payload: T | None = None

    @property
    def is_open(self) -> bool:
        return self.state is ConfirmationState.CONFIRMING

    def request(self, payload: T) -> None:
        if self.state is ConfirmationState.CONFIRMING:
            raise InvalidTransition("A confirmation is already pending")
        self.payload = payload
        self.state = ConfirmationState.CONFIRMING

    def choose(self, payload: T) -> None:
        self._require_open("choose")
        self.payload = payload

    def confirm(self) -> T:
        self._require_open("confirm")
        self.state = ConfirmationState.APPLIED
        return self.payload  # type: ignore[return-value]

    def cancel(self) -> None:
        self._require_open("cancel")
        self.payload = None
        self.state = ConfirmationState.CANCELLED

    def reset(self) -> None:
        self.payload = None
        self.state = ConfirmationState.IDLE

    def _require_open(self, event: str) -> None:
        if self.state is not ConfirmationState.CONFIRMING:
            raise InvalidTransition(f"Cannot {event} from {self.state.value}")
