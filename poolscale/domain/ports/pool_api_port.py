"""
Pool API Port

Architectural Intent:
- Contract for the raw backend API client a manager talks to
- Payloads are plain dicts in the backend's own wire shape; translating them
  into value objects is the manager's job
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PoolApiPort(Protocol):

    async def list_node_pools(self) -> list[dict[str, Any]]:
        ...

    async def list_nodes(self) -> list[dict[str, Any]]:
        ...

    async def scale_node_pool(self, pool_id: str, quantity: int) -> dict[str, Any]:
        ...

    async def delete_node(self, node_id: str) -> None:
        ...

    async def close(self) -> None:
        ...
