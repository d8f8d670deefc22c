"""
Rancher Cloud Provider

Architectural Intent:
- Implements CloudProviderPort for Rancher-managed node pools
- Thin facade over RancherManager: reads come from the manager's cache,
  refresh() and cleanup() are forwarded
- build_rancher() is the construction step; it raises ConstructionError and
  leaves the abort decision to the process entry point

Design Decisions:
- node_groups() degrades a listing failure to an empty list plus an ERROR log,
  keeping the control loop alive; callers cannot tell that apart from a
  backend with zero pools
- node_group_for_node() is tri-state: a group, None for nodes this provider
  does not manage, DataIntegrityError for a backend node with no pool id
- Pricing, machine types and node group creation are not offered by Rancher
  and raise CapabilityUnsupportedError
"""

import logging
from typing import Mapping, Optional

from poolscale.domain.errors import (
    CacheNotReadyError,
    CapabilityUnsupportedError,
    CloudProviderError,
    ConstructionError,
    DataIntegrityError,
)
from poolscale.domain.ports.pool_api_port import PoolApiPort
from poolscale.domain.value_objects.node import Node
from poolscale.domain.value_objects.node_group_spec import NodeGroupSpec
from poolscale.domain.value_objects.resource_limiter import ResourceLimiter
from poolscale.infrastructure.adapters.rancher.rancher_api_client import RancherApiClient
from poolscale.infrastructure.adapters.rancher.rancher_manager import RancherManager
from poolscale.infrastructure.adapters.rancher.rancher_node_group import (
    PROVIDER_NAME,
    RancherNodeGroup,
)
from poolscale.infrastructure.config import AutoscalingOptions, NodeGroupDiscoveryOptions

logger = logging.getLogger(__name__)

# Label added to nodes with GPU resource.
GPU_LABEL = "nodes.pkds.it/gpu-node"


class RancherCloudProvider:
    def __init__(self, manager: RancherManager, resource_limiter: ResourceLimiter) -> None:
        self.manager = manager
        self.resource_limiter = resource_limiter

    def name(self) -> str:
        return PROVIDER_NAME

    def node_groups(self) -> list[RancherNodeGroup]:
        try:
            pools = self.manager.list_node_pools()
        except CloudProviderError as e:
            logger.error("failed to get node pools: %s", e)
            return []
        return [RancherNodeGroup(self.manager, pool.id) for pool in pools]

    def node_group_for_node(self, node: Node) -> Optional[RancherNodeGroup]:
        snapshot = self.manager.snapshot()
        if snapshot is None:
            raise CacheNotReadyError(
                f"cannot resolve node {node.name}: no refresh has succeeded yet"
            )
        backend_node = snapshot.node(node.name)
        if backend_node is None:
            return None

        if not backend_node.node_pool_id:
            raise DataIntegrityError(
                f"missing node pool name for node {backend_node.node_name} ({backend_node.id})"
            )

        if snapshot.pool(backend_node.node_pool_id) is None:
            logger.debug(
                "Node %s belongs to unmanaged node pool %s",
                node.name,
                backend_node.node_pool_id,
            )
            return None

        return RancherNodeGroup(self.manager, backend_node.node_pool_id)

    def pricing(self):
        raise CapabilityUnsupportedError("Pricing", PROVIDER_NAME)

    def get_available_machine_types(self) -> list[str]:
        raise CapabilityUnsupportedError("GetAvailableMachineTypes", PROVIDER_NAME)

    def new_node_group(
        self,
        machine_type: str,
        labels: Mapping[str, str],
        system_labels: Mapping[str, str],
        taints: list[str],
        extra_resources: Mapping[str, str],
    ) -> RancherNodeGroup:
        raise CapabilityUnsupportedError("NewNodeGroup", PROVIDER_NAME)

    def get_resource_limiter(self) -> ResourceLimiter:
        return self.resource_limiter

    def gpu_label(self) -> str:
        return GPU_LABEL

    def get_available_gpu_types(self) -> frozenset[str]:
        return frozenset()

    def generation(self) -> int:
        snapshot = self.manager.snapshot()
        return snapshot.generation if snapshot else 0

    async def cleanup(self) -> None:
        await self.manager.cleanup()

    async def refresh(self) -> None:
        await self.manager.refresh()


def build_rancher_manager(
    options: AutoscalingOptions,
    discovery: NodeGroupDiscoveryOptions,
    client: Optional[PoolApiPort] = None,
) -> RancherManager:
    """Build the manager and its API client. Raises ConstructionError."""
    try:
        specs = [NodeGroupSpec.parse(s) for s in discovery.node_group_specs]
    except ValueError as e:
        raise ConstructionError(f"invalid node group spec: {e}") from e

    if client is None:
        rancher = options.rancher
        missing = [k for k in ("url", "token", "cluster_id") if not getattr(rancher, k)]
        if missing:
            raise ConstructionError(
                f"rancher configuration is missing: {', '.join(missing)}"
            )
        if rancher.state_file:
            try:
                client = RancherApiClient.from_state_file(
                    rancher.state_file, rancher.url, rancher.token, rancher.cluster_id
                )
            except (OSError, ValueError) as e:
                raise ConstructionError(
                    f"failed to load rancher state file {rancher.state_file}: {e}"
                ) from e
        else:
            client = RancherApiClient(rancher.url, rancher.token, rancher.cluster_id)

    return RancherManager(
        client,
        node_group_specs=specs,
        cleanup_timeout_seconds=options.cleanup_timeout_seconds,
    )


def build_rancher(
    options: AutoscalingOptions,
    discovery: NodeGroupDiscoveryOptions,
    resource_limiter: ResourceLimiter,
    client: Optional[PoolApiPort] = None,
) -> RancherCloudProvider:
    """Build the Rancher cloud provider, manager and client."""
    if resource_limiter is None:
        raise ConstructionError("a resource limiter is required")
    manager = build_rancher_manager(options, discovery, client)
    logger.info(
        "Built rancher cloud provider (%d static node group spec(s))",
        len(manager.node_group_specs),
    )
    return RancherCloudProvider(manager, resource_limiter)
