"""
Cache Snapshot Module

Architectural Intent:
- One generation of the cached backend index: pools by id, backend nodes by
  cluster node name
- Built wholesale from a refresh and never mutated afterwards; a refresh
  installs a new snapshot by rebinding a single reference
- Readers take the reference once and work from it, so a concurrent refresh
  can never show them a mix of two generations

Design Decisions:
- Mappings are exposed as read-only MappingProxyType views over private copies
- Content equality ignores generation and timestamp so an unchanged backend
  can be detected and the refresh turned into a no-op
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, UTC
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from poolscale.domain.value_objects.backend_node import BackendNode
from poolscale.domain.value_objects.node_pool import NodePool


@dataclass(frozen=True)
class CacheSnapshot:
    generation: int
    pools: Mapping[str, NodePool]
    nodes: Mapping[str, BackendNode]
    refreshed_at: str = field(
        default_factory=lambda: datetime.now(UTC).isoformat(), compare=False
    )

    @staticmethod
    def build(
        generation: int,
        pools: Iterable[NodePool],
        nodes: Iterable[BackendNode],
    ) -> CacheSnapshot:
        """Index pools by id and backend nodes by their cluster node name."""
        pool_index = {pool.id: pool for pool in pools}
        node_index = {node.node_name: node for node in nodes}
        return CacheSnapshot(
            generation=generation,
            pools=MappingProxyType(pool_index),
            nodes=MappingProxyType(node_index),
        )

    def pool(self, pool_id: str) -> Optional[NodePool]:
        return self.pools.get(pool_id)

    def node(self, node_name: str) -> Optional[BackendNode]:
        return self.nodes.get(node_name)

    def nodes_in_pool(self, pool_id: str) -> list[BackendNode]:
        return [n for n in self.nodes.values() if n.node_pool_id == pool_id]

    def same_content(self, other: Optional[CacheSnapshot]) -> bool:
        if other is None:
            return False
        return dict(self.pools) == dict(other.pools) and dict(self.nodes) == dict(
            other.nodes
        )

