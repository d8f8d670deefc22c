"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the control loop needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from poolscale.domain.ports.cloud_provider_port import CloudProviderPort
from poolscale.domain.ports.node_group_port import NodeGroupPort
from poolscale.domain.ports.pricing_model_port import PricingModelPort
from poolscale.domain.ports.node_group_manager_port import NodeGroupManagerPort
from poolscale.domain.ports.pool_api_port import PoolApiPort

__all__ = [
    "CloudProviderPort",
    "NodeGroupPort",
    "PricingModelPort",
    "NodeGroupManagerPort",
    "PoolApiPort",
]
