"""
Node Value Object

Architectural Intent:
- Immutable value object for a cluster member as the control loop observes it
- Validates the node name as an RFC 1123 DNS subdomain, the way the cluster
  validates node object names
- Carries labels so callers can detect GPU-bearing nodes via the provider's
  GPU label key
"""

import re
from dataclasses import dataclass, field
from typing import Optional

# RFC 1123 subdomain: lowercase alnum/hyphen labels, dot-separated
_NODE_NAME_RE = re.compile(
    r"^(?!-)[a-z0-9-]{1,63}(?<!-)(\.(?!-)[a-z0-9-]{1,63}(?<!-))*$"
)


def _is_valid_node_name(name: str) -> bool:
    return bool(name) and len(name) <= 253 and bool(_NODE_NAME_RE.match(name))


@dataclass(frozen=True)
class Node:
    """
    Value Object representing a cluster node handed in by the control loop.
    """
    name: str
    provider_id: str = ""
    labels: dict[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not _is_valid_node_name(self.name):
            raise ValueError(f"Invalid node name: {self.name!r}")

    def __str__(self) -> str:
        return self.name

    def label(self, key: str) -> Optional[str]:
        return self.labels.get(key)

    def has_gpu(self, gpu_label: str) -> bool:
        """True when the node carries the provider's GPU label."""
        return gpu_label in self.labels
