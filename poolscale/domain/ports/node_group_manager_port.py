"""
Node Group Manager Port

Architectural Intent:
- Contract between a cloud provider facade and its backend-specific manager
- The manager owns the backend connection and the cached index; it is the
  only writer of that cache

Design Decisions:
- refresh() and cleanup() are coroutines; listing and resolution are served
  from the cache and never perform I/O
"""

from typing import Optional, Protocol, runtime_checkable

from poolscale.domain.entities.cache_snapshot import CacheSnapshot
from poolscale.domain.value_objects.backend_node import BackendNode
from poolscale.domain.value_objects.node_pool import NodePool


@runtime_checkable
class NodeGroupManagerPort(Protocol):

    async def refresh(self) -> None:
        ...

    def list_node_pools(self) -> list[NodePool]:
        """Pools of the current generation. Raises CacheNotReadyError before the first refresh."""
        ...

    def resolve_node(self, node_name: str) -> Optional[BackendNode]:
        """Backend record for a cluster node, None when the backend does not know it."""
        ...

    def snapshot(self) -> Optional[CacheSnapshot]:
        ...

    async def set_pool_size(self, pool_id: str, quantity: int) -> None:
        ...

    async def delete_node(self, backend_node_id: str) -> None:
        ...

    async def cleanup(self) -> None:
        ...
