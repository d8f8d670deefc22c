"""
Rancher API Client

Architectural Intent:
- Implements PoolApiPort for the Rancher v3 management API
- Simulates the nodePools/nodes endpoints without a network connection,
  enabling integration testing and local development with zero credentials
- When a real Rancher endpoint is targeted, replace the _stub_* helpers with
  HTTP calls; the public method signatures remain stable

Design Decisions:
- Payload dicts mirror the Rancher v3 collection items exactly (camelCase
  keys: id, name, hostnamePrefix, quantity, annotations, nodeName, nodePoolId)
- The in-memory registry plays the role of the Rancher server: scaling a pool
  adds "provisioning" nodes, deleting a node shrinks its pool
- The registry can be seeded from a JSON state file
  ({"nodePools": [...], "nodes": [...]})
- fail_next() queues an exception for the next call, for failure drills
"""

import copy
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class RancherApiError(Exception):
    """Raised for API-level failures (unknown ids, closed client, injected faults)."""

    def __init__(self, message: str, status: int = 500) -> None:
        super().__init__(message)
        self.status = status


# ---------------------------------------------------------------------------
# Internal helpers that mimic the shape of Rancher v3 collection payloads.
# ---------------------------------------------------------------------------

def _make_machine_id(cluster_id: str) -> str:
    """Return a plausible Rancher machine id (c-xxxxx:m-xxxxx)."""
    return f"{cluster_id}:m-{uuid.uuid4().hex[:5]}"


def _stub_collection(items: list[dict[str, Any]], resource_type: str) -> dict:
    """
    Simulate a Rancher v3 collection response.

    The real call looks like:
        GET /v3/nodePools?clusterId=c-abc12
    and returns {"type": "collection", "resourceType": "nodePool", "data": [...]}.
    """
    return {
        "type": "collection",
        "resourceType": resource_type,
        "pagination": {"limit": 1000, "total": len(items)},
        "data": copy.deepcopy(items),
    }


def _state_records(state: dict[str, Any], key: str) -> list[dict[str, Any]]:
    records = state.get(key, [])
    if not isinstance(records, list):
        raise ValueError(f"{key} must be a list")
    for index, record in enumerate(records):
        if not isinstance(record, dict) or not record.get("id"):
            raise ValueError(f"{key}[{index}] must be an object with an id")
    return records


class RancherApiClient:
    """
    Rancher v3 API client backed by an in-memory registry.

    Configuration parameters
    ------------------------
    url : str
        Rancher server URL (e.g. "https://rancher.example.com/v3").
    token : str
        API bearer token. Ignored in stub mode beyond presence.
    cluster_id : str
        Cluster whose node pools and nodes are listed.
    node_pools / nodes : list[dict] | None
        Initial registry content in Rancher payload shape.
    """

    def __init__(
        self,
        url: str,
        token: str,
        cluster_id: str,
        node_pools: Optional[list[dict[str, Any]]] = None,
        nodes: Optional[list[dict[str, Any]]] = None,
    ) -> None:
        self.url = url
        self.token = token
        self.cluster_id = cluster_id

        self._pools: dict[str, dict[str, Any]] = {
            p["id"]: copy.deepcopy(p) for p in (node_pools or [])
        }
        self._nodes: dict[str, dict[str, Any]] = {
            n["id"]: copy.deepcopy(n) for n in (nodes or [])
        }
        self._pending_failures: list[Exception] = []
        self.closed = False

        logger.debug(
            "RancherApiClient initialised (url=%s, cluster=%s, pools=%d, nodes=%d)",
            url,
            cluster_id,
            len(self._pools),
            len(self._nodes),
        )

    @classmethod
    def from_state_file(
        cls, path: str, url: str, token: str, cluster_id: str
    ) -> "RancherApiClient":
        """Seed the registry from a JSON state file.

        Raises ValueError when the file is not a {"nodePools", "nodes"} object
        of id-bearing records.
        """
        with open(Path(path)) as f:
            state = json.load(f)
        if not isinstance(state, dict):
            raise ValueError(f"state must be a JSON object, got {type(state).__name__}")
        return cls(
            url=url,
            token=token,
            cluster_id=cluster_id,
            node_pools=_state_records(state, "nodePools"),
            nodes=_state_records(state, "nodes"),
        )

    def fail_next(self, exc: Exception) -> None:
        """Make the next API call raise exc."""
        self._pending_failures.append(exc)

    def _before_call(self, operation: str) -> None:
        if self.closed:
            raise RancherApiError(f"{operation}: client is closed", status=503)
        if self._pending_failures:
            raise self._pending_failures.pop(0)

    # ------------------------------------------------------------------
    # PoolApiPort implementation
    # ------------------------------------------------------------------

    async def list_node_pools(self) -> list[dict[str, Any]]:
        self._before_call("list_node_pools")
        logger.debug("Rancher GET /v3/nodePools?clusterId=%s", self.cluster_id)
        response = _stub_collection(list(self._pools.values()), "nodePool")
        return response["data"]

    async def list_nodes(self) -> list[dict[str, Any]]:
        self._before_call("list_nodes")
        logger.debug("Rancher GET /v3/nodes?clusterId=%s", self.cluster_id)
        response = _stub_collection(list(self._nodes.values()), "node")
        return response["data"]

    async def scale_node_pool(self, pool_id: str, quantity: int) -> dict[str, Any]:
        """
        Simulate PUT /v3/nodePools/<id> with a new quantity.

        Growing the pool registers new machines in the "provisioning" state;
        shrinking it drops provisioning machines beyond the new quantity.
        """
        self._before_call("scale_node_pool")
        pool = self._pools.get(pool_id)
        if pool is None:
            raise RancherApiError(f"nodePool {pool_id} not found", status=404)

        logger.info(
            "Rancher PUT /v3/nodePools/%s quantity %s -> %d",
            pool_id,
            pool.get("quantity"),
            quantity,
        )

        members = [n for n in self._nodes.values() if n.get("nodePoolId") == pool_id]
        prefix = pool.get("hostnamePrefix") or f"{pool.get('name', 'node')}-"
        index = len(members) + 1
        while len(members) < quantity:
            machine = {
                "id": _make_machine_id(self.cluster_id),
                "nodeName": f"{prefix}{index}",
                "nodePoolId": pool_id,
                "state": "provisioning",
                "providerId": "",
            }
            self._nodes[machine["id"]] = machine
            members.append(machine)
            index += 1

        provisioning = [n for n in members if n.get("state") == "provisioning"]
        while len(members) > quantity and provisioning:
            machine = provisioning.pop()
            members.remove(machine)
            del self._nodes[machine["id"]]

        pool["quantity"] = quantity
        return copy.deepcopy(pool)

    async def delete_node(self, node_id: str) -> None:
        """Simulate DELETE /v3/nodes/<id>; the owning pool shrinks by one."""
        self._before_call("delete_node")
        machine = self._nodes.pop(node_id, None)
        if machine is None:
            raise RancherApiError(f"node {node_id} not found", status=404)

        logger.info("Rancher DELETE /v3/nodes/%s (%s)", node_id, machine.get("nodeName"))

        pool = self._pools.get(machine.get("nodePoolId", ""))
        if pool is not None and pool.get("quantity", 0) > 0:
            pool["quantity"] -= 1

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        logger.debug("RancherApiClient closed (url=%s)", self.url)
