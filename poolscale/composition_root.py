"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the poolscale application
- Single place where the resource limiter, the cloud provider and the use
  cases are wired together
- No adapter instantiation should occur outside this module (except tests)

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Construction failures propagate as ConstructionError to the entry point
"""

from dataclasses import dataclass

from poolscale.application.use_cases.refresh_loop import RefreshLoop
from poolscale.domain.ports.cloud_provider_port import CloudProviderPort
from poolscale.domain.value_objects.resource_limiter import ResourceLimiter
from poolscale.infrastructure.cloud_provider_builder import build_cloud_provider
from poolscale.infrastructure.config import PoolscaleConfig, resource_limiter_from_options


@dataclass
class PoolscaleContainer:
    """DI container holding all wired dependencies."""

    config: PoolscaleConfig
    resource_limiter: ResourceLimiter
    cloud_provider: CloudProviderPort
    refresh_loop: RefreshLoop


def create_container(config: PoolscaleConfig) -> PoolscaleContainer:
    """Create and wire all dependencies. Raises ConstructionError."""
    resource_limiter = resource_limiter_from_options(config.autoscaling)
    cloud_provider = build_cloud_provider(
        config.autoscaling, config.discovery, resource_limiter
    )
    refresh_loop = RefreshLoop(cloud_provider)

    return PoolscaleContainer(
        config=config,
        resource_limiter=resource_limiter,
        cloud_provider=cloud_provider,
        refresh_loop=refresh_loop,
    )
