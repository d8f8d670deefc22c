"""
Rancher Node Group

Architectural Intent:
- Implements NodeGroupPort as a lightweight handle over one Rancher node pool
- Holds only the manager and the pool id; every size or membership query
  reads the manager's current cache snapshot
- pinned() returns a copy bound to one snapshot, so a series of reads
  describes a single generation
- Mutations are validated against the cached bounds, then sent to the backend
  through the manager; they show up in the cache after the next refresh
"""

import logging
from typing import Optional

from poolscale.domain.entities.cache_snapshot import CacheSnapshot
from poolscale.domain.errors import (
    CapabilityUnsupportedError,
    DataIntegrityError,
    InvalidScaleRequestError,
)
from poolscale.domain.ports.node_group_manager_port import NodeGroupManagerPort
from poolscale.domain.value_objects.instance import Instance
from poolscale.domain.value_objects.node_pool import NodePool

logger = logging.getLogger(__name__)

PROVIDER_NAME = "rancher"


class RancherNodeGroup:
    def __init__(
        self,
        manager: NodeGroupManagerPort,
        pool_id: str,
        snapshot: Optional[CacheSnapshot] = None,
    ) -> None:
        if not pool_id:
            raise DataIntegrityError("rancher node group id cannot be empty")
        self.manager = manager
        self._id = pool_id
        self._pinned = snapshot

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RancherNodeGroup):
            return NotImplemented
        return self._id == other._id and self.manager is other.manager

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"RancherNodeGroup({self._id!r})"

    def _snapshot(self) -> Optional[CacheSnapshot]:
        if self._pinned is not None:
            return self._pinned
        return self.manager.snapshot()

    def _current(self) -> tuple[CacheSnapshot, NodePool]:
        snapshot = self._snapshot()
        pool = snapshot.pool(self._id) if snapshot else None
        if pool is None:
            raise DataIntegrityError(
                f"node pool {self._id} is not present in the rancher cache"
            )
        return snapshot, pool

    def pinned(self) -> "RancherNodeGroup":
        """Return a handle that keeps reading the snapshot current right now."""
        return RancherNodeGroup(self.manager, self._id, self._snapshot())

    def id(self) -> str:
        return self._id

    def min_size(self) -> int:
        return self._current()[1].min_size

    def max_size(self) -> int:
        return self._current()[1].max_size

    def target_size(self) -> int:
        return self._current()[1].quantity

    def nodes(self) -> list[Instance]:
        snapshot, _ = self._current()
        return [
            Instance.from_backend_state(n.provider_id or n.node_name, n.state)
            for n in snapshot.nodes_in_pool(self._id)
        ]

    def exist(self) -> bool:
        snapshot = self._snapshot()
        return snapshot is not None and snapshot.pool(self._id) is not None

    def autoprovisioned(self) -> bool:
        return False

    def debug(self) -> str:
        snapshot = self._snapshot()
        pool = snapshot.pool(self._id) if snapshot else None
        if pool is None:
            return f"{self._id} (not cached)"
        return str(pool)

    async def increase_size(self, delta: int) -> None:
        if delta <= 0:
            raise InvalidScaleRequestError(f"size increase must be positive, got {delta}")
        _, pool = self._current()
        new_size = pool.quantity + delta
        if new_size > pool.max_size:
            raise InvalidScaleRequestError(
                f"size increase too large for {self._id}: desired {new_size}, max {pool.max_size}"
            )
        await self.manager.set_pool_size(self._id, new_size)

    async def decrease_target_size(self, delta: int) -> None:
        """Shrink the target without deleting registered nodes."""
        if delta >= 0:
            raise InvalidScaleRequestError(f"size decrease must be negative, got {delta}")
        snapshot, pool = self._current()
        new_size = pool.quantity + delta
        registered = len(snapshot.nodes_in_pool(self._id))
        if new_size < registered:
            raise InvalidScaleRequestError(
                f"attempt to delete existing nodes in {self._id}: "
                f"target {pool.quantity}, delta {delta}, registered {registered}"
            )
        await self.manager.set_pool_size(self._id, new_size)

    async def delete_nodes(self, node_names: list[str]) -> None:
        duplicates = sorted({n for n in node_names if node_names.count(n) > 1})
        if duplicates:
            raise InvalidScaleRequestError(
                f"duplicate nodes in delete request for {self._id}: {', '.join(duplicates)}"
            )
        snapshot, pool = self._current()
        if pool.quantity - len(node_names) < pool.min_size:
            raise InvalidScaleRequestError(
                f"deleting {len(node_names)} nodes would shrink {self._id} below min size {pool.min_size}"
            )

        backend_ids = []
        for name in node_names:
            backend_node = snapshot.node(name)
            if backend_node is None or backend_node.node_pool_id != self._id:
                raise InvalidScaleRequestError(
                    f"node {name} does not belong to node group {self._id}"
                )
            backend_ids.append(backend_node.id)

        logger.info(
            "Deleting %d node(s) from node group %s",
            len(backend_ids),
            self._id,
            extra={"node_group": self._id},
        )
        for backend_id in backend_ids:
            await self.manager.delete_node(backend_id)

    def template_node_info(self):
        raise CapabilityUnsupportedError("TemplateNodeInfo", PROVIDER_NAME)

    def get_options(self, defaults=None):
        raise CapabilityUnsupportedError("GetOptions", PROVIDER_NAME)

    async def create(self):
        raise CapabilityUnsupportedError("Create", PROVIDER_NAME)

    async def delete(self):
        raise CapabilityUnsupportedError("Delete", PROVIDER_NAME)
