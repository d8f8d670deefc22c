"""
Backend Node Value Object

Architectural Intent:
- A node record as the backend reports it, stored in the cached index
- The owning pool id may legitimately be empty in the backend payload; the
  cloud provider decides what that means at lookup time
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BackendNode:
    """
    Value Object for a backend-owned machine and its pool assignment.
    """
    id: str
    node_name: str
    node_pool_id: str = ""
    state: str = "active"
    provider_id: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("BackendNode id cannot be empty")
        if not self.node_name:
            raise ValueError("BackendNode node_name cannot be empty")

    @property
    def has_pool(self) -> bool:
        return bool(self.node_pool_id)

    def __str__(self) -> str:
        return f"{self.node_name} ({self.id})"
