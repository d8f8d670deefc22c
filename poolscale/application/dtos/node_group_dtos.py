"""
Node Group DTOs

Architectural Intent:
- Data Transfer Objects for reporting node groups and refresh ticks
- Decouples external representation (CLI JSON) from node group handles
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional

from poolscale.domain.ports.node_group_port import NodeGroupPort


@dataclass(frozen=True)
class NodeGroupSummary:
    id: str
    min_size: int
    max_size: int
    target_size: int
    node_count: int

    @staticmethod
    def from_node_group(group: NodeGroupPort) -> "NodeGroupSummary":
        group = group.pinned()
        return NodeGroupSummary(
            id=group.id(),
            min_size=group.min_size(),
            max_size=group.max_size(),
            target_size=group.target_size(),
            node_count=len(group.nodes()),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RefreshTickReport:
    generation: int
    succeeded: bool
    node_group_count: int
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
