"""
Status state machines for connections and requests.

Each machine is a mapping from the current status to the set of statuses it
may move to. Statuses absent from the keys, or mapped to an empty set, are
terminal.
"""

from typing import Dict, FrozenSet, Mapping

from campusconnect.core.enums import (
    ConnectionStatus,
    EquipmentRequestStatus,
    ServiceRequestStatus,
)
from campusconnect.core.exceptions import ConflictError

Transitions = Mapping[str, FrozenSet[str]]

CONNECTION_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    ConnectionStatus.pending.value: frozenset({
        ConnectionStatus.accepted.value,
        ConnectionStatus.rejected.value,
    }),
    ConnectionStatus.accepted.value: frozenset(),
    ConnectionStatus.rejected.value: frozenset(),
}

SERVICE_REQUEST_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    ServiceRequestStatus.pending.value: frozenset({
        ServiceRequestStatus.accepted.value,
        ServiceRequestStatus.rejected.value,
        ServiceRequestStatus.completed.value,
    }),
    ServiceRequestStatus.accepted.value: frozenset({
        ServiceRequestStatus.completed.value,
    }),
    ServiceRequestStatus.rejected.value: frozenset(),
    ServiceRequestStatus.completed.value: frozenset(),
}

EQUIPMENT_REQUEST_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    EquipmentRequestStatus.pending.value: frozenset({
        EquipmentRequestStatus.approved.value,
        EquipmentRequestStatus.rejected.value,
    }),
    EquipmentRequestStatus.approved.value: frozenset({
        EquipmentRequestStatus.returned.value,
    }),
    EquipmentRequestStatus.rejected.value: frozenset(),
    EquipmentRequestStatus.returned.value: frozenset(),
}


def can_transition(transitions: Transitions, current: str, target: str) -> bool:
    return target in transitions.get(current, frozenset())


def is_terminal(transitions: Transitions, status: str) -> bool:
    return not transitions.get(status)


def ensure_transition(transitions: Transitions, current: str, target: str, *, entity: str) -> None:
    """Raise ConflictError unless ``current -> target`` is a legal move"""
    if can_transition(transitions, current, target):
        return
    if is_terminal(transitions, current):
        message = f"{entity} is already {current} and cannot change status"
    else:
        message = f"{entity} cannot move from {current} to {target}"
    raise ConflictError(
        message,
        code="INVALID_STATE",
        details={"currentStatus": current, "requestedStatus": target},
    )
