"""
Cloud Provider Port

Architectural Intent:
- The single contract the autoscaling control loop holds for a backend
- Abstracts provider-specific pool discovery, node-to-pool resolution and
  optional capabilities
- Implemented once per backend; the backend is selected at process start

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- Read accessors are synchronous and served from the cached index only;
  refresh() and cleanup() are the only coroutines that reach the backend
- Optional capabilities raise CapabilityUnsupportedError when absent
"""

from typing import Mapping, Optional, Protocol, runtime_checkable

from poolscale.domain.ports.node_group_port import NodeGroupPort
from poolscale.domain.ports.pricing_model_port import PricingModelPort
from poolscale.domain.value_objects.node import Node
from poolscale.domain.value_objects.resource_limiter import ResourceLimiter


@runtime_checkable
class CloudProviderPort(Protocol):
    """Port for a pluggable node-pool backend."""

    def name(self) -> str:
        """Stable identifier of the backend kind."""
        ...

    def node_groups(self) -> list[NodeGroupPort]:
        """Node groups of the current cache generation; empty on listing failure."""
        ...

    def node_group_for_node(self, node: Node) -> Optional[NodeGroupPort]:
        """
        The node group owning the node, None when the node is not managed by
        this provider. Raises DataIntegrityError for a malformed assignment.
        """
        ...

    def pricing(self) -> PricingModelPort:
        ...

    def get_available_machine_types(self) -> list[str]:
        ...

    def new_node_group(
        self,
        machine_type: str,
        labels: Mapping[str, str],
        system_labels: Mapping[str, str],
        taints: list[str],
        extra_resources: Mapping[str, str],
    ) -> NodeGroupPort:
        ...

    def get_resource_limiter(self) -> ResourceLimiter:
        ...

    def gpu_label(self) -> str:
        ...

    def get_available_gpu_types(self) -> frozenset[str]:
        ...

    def generation(self) -> int:
        """Generation of the installed cache; 0 before the first refresh."""
        ...

    async def cleanup(self) -> None:
        """Release backend resources. A second call is a no-op."""
        ...

    async def refresh(self) -> None:
        """Install a fresh cache generation. Raises RefreshError on failure."""
        ...
