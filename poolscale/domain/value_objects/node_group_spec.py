from dataclasses import dataclass


@dataclass(frozen=True)
class NodeGroupSpec:
    """
    Value Object for a statically configured node group, "min:max:pool-id".
    """
    min_size: int
    max_size: int
    pool_id: str

    def __post_init__(self) -> None:
        if not self.pool_id:
            raise ValueError("Node group spec pool id cannot be empty")
        if self.min_size < 0:
            raise ValueError(f"Node group spec min size must be >= 0, got {self.min_size}")
        if self.max_size < self.min_size:
            raise ValueError(
                f"Node group spec max size {self.max_size} is below min size {self.min_size}"
            )

    def __str__(self) -> str:
        return f"{self.min_size}:{self.max_size}:{self.pool_id}"

    @staticmethod
    def parse(spec: str) -> "NodeGroupSpec":
        """
        Parses a string like '1:10:pool-a' into a NodeGroupSpec.
        The pool id may itself contain colons (e.g. 'c-abc12:np-x1y2z').
        """
        parts = spec.strip().split(":", 2)
        if len(parts) != 3:
            raise ValueError(f"Node group spec must be 'min:max:id', got {spec!r}")
        try:
            min_size = int(parts[0])
            max_size = int(parts[1])
        except ValueError:
            raise ValueError(f"Node group spec sizes must be integers, got {spec!r}")
        return NodeGroupSpec(min_size=min_size, max_size=max_size, pool_id=parts[2])
