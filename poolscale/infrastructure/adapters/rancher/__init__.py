from poolscale.infrastructure.adapters.rancher.rancher_cloud_provider import (
    GPU_LABEL,
    RancherCloudProvider,
    build_rancher,
)
from poolscale.infrastructure.adapters.rancher.rancher_manager import RancherManager
from poolscale.infrastructure.adapters.rancher.rancher_node_group import RancherNodeGroup
from poolscale.infrastructure.adapters.rancher.rancher_api_client import (
    RancherApiClient,
    RancherApiError,
)

__all__ = [
    "GPU_LABEL",
    "RancherCloudProvider",
    "RancherManager",
    "RancherNodeGroup",
    "RancherApiClient",
    "RancherApiError",
    "build_rancher",
]
