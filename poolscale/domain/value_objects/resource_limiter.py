"""
Resource Limiter Value Object

Architectural Intent:
- Immutable min/max bounds on aggregate cluster resources (cores, memory,
  node count)
- Built once outside the cloud provider and handed through verbatim
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

RESOURCE_CPU = "cpu"
RESOURCE_MEMORY = "memory"
RESOURCE_NODES = "nodes"


@dataclass(frozen=True, eq=False)
class ResourceLimiter:
    """
    Value Object holding per-resource lower and upper limits.

    Compared by identity: the cloud provider must hand back the very instance
    it was constructed with.
    """
    min_limits: Mapping[str, int] = field(default_factory=dict)
    max_limits: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for resource, minimum in self.min_limits.items():
            maximum = self.max_limits.get(resource)
            if maximum is not None and minimum > maximum:
                raise ValueError(
                    f"min limit {minimum} above max limit {maximum} for {resource}"
                )
        object.__setattr__(self, "min_limits", MappingProxyType(dict(self.min_limits)))
        object.__setattr__(self, "max_limits", MappingProxyType(dict(self.max_limits)))

    def get_min(self, resource: str) -> int:
        """Lower limit for a resource, 0 when none is set."""
        return self.min_limits.get(resource, 0)

    def get_max(self, resource: str) -> int:
        """Upper limit for a resource, 0 when none is set."""
        return self.max_limits.get(resource, 0)

    def has_min_limit_set(self, resource: str) -> bool:
        return resource in self.min_limits

    def has_max_limit_set(self, resource: str) -> bool:
        return resource in self.max_limits

    def resources(self) -> list[str]:
        return sorted(set(self.min_limits) | set(self.max_limits))

    def __str__(self) -> str:
        parts = [
            f"{r}:{self.get_min(r)}-{self.get_max(r)}" for r in self.resources()
        ]
        return "{" + ", ".join(parts) + "}"
