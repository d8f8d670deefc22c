"""
Rancher Manager

Architectural Intent:
- Implements NodeGroupManagerPort for Rancher node pools
- Owns the API client and the cached index of pools and node assignments
- refresh() is the only writer of the cache: it pulls pools and nodes, builds
  a complete CacheSnapshot and installs it by rebinding one reference

Design Decisions:
- Readers call snapshot() once and work from that object, so they see either
  the old or the new generation, never a mix
- Concurrent refresh() calls are serialized with an asyncio.Lock
- An unchanged backend keeps the installed snapshot (no new generation)
- A pool is managed when a discovery spec names it or when it carries both
  size annotations; explicit specs win
- cleanup() marks the manager closed before closing the client, so a second
  call is a no-op even when the first one failed
"""

import asyncio
import logging
from typing import Any, Iterable, Optional

from poolscale.domain.entities.cache_snapshot import CacheSnapshot
from poolscale.domain.errors import (
    BackendRequestError,
    CacheNotReadyError,
    CleanupError,
    RefreshError,
)
from poolscale.domain.ports.pool_api_port import PoolApiPort
from poolscale.domain.value_objects.backend_node import BackendNode
from poolscale.domain.value_objects.node_group_spec import NodeGroupSpec
from poolscale.domain.value_objects.node_pool import NodePool

logger = logging.getLogger(__name__)

MIN_SIZE_ANNOTATION = "cluster.k8s.io/cluster-autoscaler-node-group-min-size"
MAX_SIZE_ANNOTATION = "cluster.k8s.io/cluster-autoscaler-node-group-max-size"

DEFAULT_CLEANUP_TIMEOUT_SECONDS = 5.0


class RancherManager:
    def __init__(
        self,
        client: PoolApiPort,
        node_group_specs: Iterable[NodeGroupSpec] = (),
        cleanup_timeout_seconds: float = DEFAULT_CLEANUP_TIMEOUT_SECONDS,
    ) -> None:
        self.client = client
        self.node_group_specs = {spec.pool_id: spec for spec in node_group_specs}
        self.cleanup_timeout_seconds = cleanup_timeout_seconds

        self._snapshot: Optional[CacheSnapshot] = None
        self._refresh_lock = asyncio.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Cache reads (no I/O)
    # ------------------------------------------------------------------

    def snapshot(self) -> Optional[CacheSnapshot]:
        return self._snapshot

    def _require_snapshot(self) -> CacheSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise CacheNotReadyError(
                "rancher node pool cache is empty: no refresh has succeeded yet"
            )
        return snapshot

    def list_node_pools(self) -> list[NodePool]:
        snapshot = self._require_snapshot()
        return sorted(snapshot.pools.values(), key=lambda p: p.id)

    def resolve_node(self, node_name: str) -> Optional[BackendNode]:
        return self._require_snapshot().node(node_name)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def refresh(self) -> None:
        if self._closed:
            raise RefreshError("rancher manager has been cleaned up")

        async with self._refresh_lock:
            try:
                pool_payloads = await self.client.list_node_pools()
                node_payloads = await self.client.list_nodes()
            except Exception as e:
                raise RefreshError(f"failed to refresh rancher node pools: {e}") from e

            current = self._snapshot
            generation = current.generation + 1 if current else 1
            candidate = CacheSnapshot.build(
                generation,
                self._managed_pools(pool_payloads),
                self._backend_nodes(node_payloads),
            )

            if candidate.same_content(current):
                logger.debug(
                    "Rancher state unchanged, keeping cache generation %d",
                    current.generation,
                )
                return

            self._snapshot = candidate
            logger.info(
                "Installed rancher cache generation %d (%d pools, %d nodes)",
                candidate.generation,
                len(candidate.pools),
                len(candidate.nodes),
            )

    def _managed_pools(self, payloads: list[dict[str, Any]]) -> list[NodePool]:
        pools: list[NodePool] = []
        for payload in payloads:
            pool_id = payload.get("id") or ""
            if not pool_id:
                logger.warning("Skipping rancher node pool without id: %s", payload.get("name"))
                continue

            bounds = self._pool_bounds(pool_id, payload)
            if bounds is None:
                logger.debug("Node pool %s is not managed by the autoscaler", pool_id)
                continue

            try:
                pools.append(
                    NodePool(
                        id=pool_id,
                        name=payload.get("name", ""),
                        quantity=int(payload.get("quantity", 0)),
                        min_size=bounds[0],
                        max_size=bounds[1],
                        hostname_prefix=payload.get("hostnamePrefix", ""),
                    )
                )
            except (TypeError, ValueError) as e:
                logger.warning("Skipping invalid rancher node pool %s: %s", pool_id, e)
        return pools

    def _pool_bounds(
        self, pool_id: str, payload: dict[str, Any]
    ) -> Optional[tuple[int, int]]:
        spec = self.node_group_specs.get(pool_id)
        if spec is not None:
            return spec.min_size, spec.max_size

        annotations = payload.get("annotations") or {}
        if MIN_SIZE_ANNOTATION not in annotations or MAX_SIZE_ANNOTATION not in annotations:
            return None
        try:
            return int(annotations[MIN_SIZE_ANNOTATION]), int(annotations[MAX_SIZE_ANNOTATION])
        except (TypeError, ValueError):
            logger.warning("Node pool %s has non-integer size annotations", pool_id)
            return None

    def _backend_nodes(self, payloads: list[dict[str, Any]]) -> list[BackendNode]:
        nodes: list[BackendNode] = []
        for payload in payloads:
            if not payload.get("id") or not payload.get("nodeName"):
                logger.debug("Skipping unregistered rancher node %s", payload.get("id"))
                continue
            nodes.append(
                BackendNode(
                    id=payload["id"],
                    node_name=payload["nodeName"],
                    node_pool_id=payload.get("nodePoolId") or "",
                    state=payload.get("state", "active"),
                    provider_id=payload.get("providerId") or "",
                )
            )
        return nodes

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def set_pool_size(self, pool_id: str, quantity: int) -> None:
        logger.info("Setting rancher node pool %s size to %d", pool_id, quantity)
        try:
            await self.client.scale_node_pool(pool_id, quantity)
        except Exception as e:
            raise BackendRequestError(
                f"failed to scale node pool {pool_id} to {quantity}: {e}"
            ) from e

    async def delete_node(self, backend_node_id: str) -> None:
        logger.info("Deleting rancher node %s", backend_node_id)
        try:
            await self.client.delete_node(backend_node_id)
        except Exception as e:
            raise BackendRequestError(
                f"failed to delete node {backend_node_id}: {e}"
            ) from e

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def cleanup(self) -> None:
        if self._closed:
            logger.debug("Rancher manager already cleaned up")
            return
        self._closed = True

        try:
            await asyncio.wait_for(
                self.client.close(), timeout=self.cleanup_timeout_seconds
            )
        except asyncio.TimeoutError as e:
            raise CleanupError(
                f"timed out after {self.cleanup_timeout_seconds}s closing rancher client"
            ) from e
        except Exception as e:
            raise CleanupError(f"failed to close rancher client: {e}") from e
        logger.info("Rancher manager cleaned up")
