"""Global test configuration.

Shared builders for Rancher payloads and a wired cloud provider backed by
the in-memory Rancher API client.
"""

import pytest

from poolscale.domain.value_objects.node_group_spec import NodeGroupSpec
from poolscale.domain.value_objects.resource_limiter import ResourceLimiter
from poolscale.infrastructure.adapters.rancher.rancher_api_client import RancherApiClient
from poolscale.infrastructure.adapters.rancher.rancher_cloud_provider import (
    RancherCloudProvider,
)
from poolscale.infrastructure.adapters.rancher.rancher_manager import (
    MAX_SIZE_ANNOTATION,
    MIN_SIZE_ANNOTATION,
    RancherManager,
)

CLUSTER_ID = "c-abc12"


def make_pool(pool_id, quantity=2, min_size=None, max_size=None, name=None):
    """Return a Rancher nodePool payload, annotated with bounds when given."""
    annotations = {}
    if min_size is not None:
        annotations[MIN_SIZE_ANNOTATION] = str(min_size)
    if max_size is not None:
        annotations[MAX_SIZE_ANNOTATION] = str(max_size)
    return {
        "id": pool_id,
        "name": name or pool_id,
        "hostnamePrefix": f"{name or pool_id}-",
        "quantity": quantity,
        "annotations": annotations,
    }


def make_node(node_name, pool_id="", node_id=None, state="active"):
    """Return a Rancher node payload."""
    return {
        "id": node_id or f"{CLUSTER_ID}:m-{node_name}",
        "nodeName": node_name,
        "nodePoolId": pool_id,
        "state": state,
        "providerId": f"rancher://{node_name}",
    }


@pytest.fixture
def make_client():
    def _make(node_pools=None, nodes=None):
        return RancherApiClient(
            url="https://rancher.test/v3",
            token="token-xyz",
            cluster_id=CLUSTER_ID,
            node_pools=node_pools,
            nodes=nodes,
        )
    return _make


@pytest.fixture
def rancher_client(make_client):
    return make_client(
        node_pools=[
            make_pool("pool-a", quantity=2, min_size=1, max_size=5),
            make_pool("pool-b", quantity=1, min_size=0, max_size=3),
            make_pool("pool-unmanaged", quantity=1),
        ],
        nodes=[
            make_node("worker-1", "pool-a"),
            make_node("worker-2", "pool-a"),
            make_node("worker-3", "pool-b"),
            make_node("worker-9", "pool-unmanaged"),
        ],
    )


@pytest.fixture
def resource_limiter():
    return ResourceLimiter(
        min_limits={"cpu": 0, "memory": 0},
        max_limits={"cpu": 64, "memory": 256 * 1024 ** 3, "nodes": 20},
    )


@pytest.fixture
def manager(rancher_client):
    return RancherManager(rancher_client, cleanup_timeout_seconds=1)


@pytest.fixture
def provider(manager, resource_limiter):
    return RancherCloudProvider(manager, resource_limiter)


@pytest.fixture
def spec_manager(rancher_client):
    """Manager whose pool-b bounds come from a static discovery spec."""
    return RancherManager(
        rancher_client,
        node_group_specs=[NodeGroupSpec.parse("2:8:pool-b")],
        cleanup_timeout_seconds=1,
    )


@pytest.fixture
def pool_payload():
    return make_pool


@pytest.fixture
def node_payload():
    return make_node
