"""
Node Pool Value Object

Architectural Intent:
- Metadata for one backend pool as captured by a single refresh
- Bounds are resolved at refresh time (discovery spec or pool annotations), so
  readers never have to re-derive them
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NodePool:
    """
    Value Object for a managed, independently scalable pool.
    """
    id: str
    name: str
    quantity: int
    min_size: int
    max_size: int
    hostname_prefix: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("NodePool id cannot be empty")
        if self.min_size < 0:
            raise ValueError(f"min_size must be >= 0, got {self.min_size}")
        if self.max_size < self.min_size:
            raise ValueError(
                f"max_size {self.max_size} is below min_size {self.min_size}"
            )
        if self.quantity < 0:
            raise ValueError(f"quantity must be >= 0, got {self.quantity}")

    def __str__(self) -> str:
        return f"{self.id} [{self.min_size}..{self.max_size}] target={self.quantity}"
