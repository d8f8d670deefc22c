"""
Instance Value Object

Architectural Intent:
- What a node group reports about each of its machines
- Maps backend lifecycle states onto the three states the control loop knows
"""

from dataclasses import dataclass
from enum import Enum, auto


class InstanceState(Enum):
    RUNNING = auto()
    CREATING = auto()
    DELETING = auto()


_STATE_MAP = {
    "active": InstanceState.RUNNING,
    "provisioning": InstanceState.CREATING,
    "registering": InstanceState.CREATING,
    "removing": InstanceState.DELETING,
    "draining": InstanceState.DELETING,
}


@dataclass(frozen=True)
class Instance:
    id: str
    state: InstanceState = InstanceState.RUNNING

    @staticmethod
    def from_backend_state(instance_id: str, backend_state: str) -> "Instance":
        """Unknown backend states are reported as running."""
        state = _STATE_MAP.get(backend_state.lower(), InstanceState.RUNNING)
        return Instance(id=instance_id, state=state)
