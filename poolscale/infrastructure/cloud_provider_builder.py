"""
Cloud Provider Builder

Architectural Intent:
- Selects and builds the backend-specific cloud provider once, at process start
- The registry maps a backend name to its builder; the control loop only ever
  holds the resulting CloudProviderPort

Design Decisions:
- Unknown backend names and builder failures surface as ConstructionError;
  the caller decides whether to abort, nothing here exits the process
"""

import logging
from typing import Callable

from poolscale.domain.errors import ConstructionError
from poolscale.domain.ports.cloud_provider_port import CloudProviderPort
from poolscale.domain.value_objects.resource_limiter import ResourceLimiter
from poolscale.infrastructure.adapters.rancher import build_rancher
from poolscale.infrastructure.config import AutoscalingOptions, NodeGroupDiscoveryOptions

logger = logging.getLogger(__name__)

CloudProviderBuilder = Callable[
    [AutoscalingOptions, NodeGroupDiscoveryOptions, ResourceLimiter], CloudProviderPort
]

AVAILABLE_CLOUD_PROVIDERS: dict[str, CloudProviderBuilder] = {
    "rancher": build_rancher,
}


def build_cloud_provider(
    options: AutoscalingOptions,
    discovery: NodeGroupDiscoveryOptions,
    resource_limiter: ResourceLimiter,
) -> CloudProviderPort:
    """Build the cloud provider named by options.cloud_provider."""
    builder = AVAILABLE_CLOUD_PROVIDERS.get(options.cloud_provider)
    if builder is None:
        raise ConstructionError(
            f"unknown cloud provider {options.cloud_provider!r}; "
            f"available: {', '.join(sorted(AVAILABLE_CLOUD_PROVIDERS))}"
        )

    logger.info("Building %s cloud provider", options.cloud_provider)
    return builder(options, discovery, resource_limiter)
