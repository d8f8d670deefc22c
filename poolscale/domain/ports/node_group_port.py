"""
Node Group Port

Architectural Intent:
- Contract for one addressable, independently scalable pool
- Implementations are lightweight handles: size and membership queries read
  the shared cache, mutations go to the backend
"""

from typing import Protocol, runtime_checkable

from poolscale.domain.value_objects.instance import Instance


@runtime_checkable
class NodeGroupPort(Protocol):
    """Port for a node group handle returned by a cloud provider."""

    def pinned(self) -> "NodeGroupPort":
        """Return a handle whose queries all read one cache generation."""
        ...

    def id(self) -> str:
        ...

    def min_size(self) -> int:
        ...

    def max_size(self) -> int:
        ...

    def target_size(self) -> int:
        ...

    def nodes(self) -> list[Instance]:
        ...

    def exist(self) -> bool:
        ...

    def autoprovisioned(self) -> bool:
        ...

    def debug(self) -> str:
        ...

    async def increase_size(self, delta: int) -> None:
        ...

    async def decrease_target_size(self, delta: int) -> None:
        ...

    async def delete_nodes(self, node_names: list[str]) -> None:
        ...
