from typing import Protocol, runtime_checkable
from datetime import datetime


@runtime_checkable
class PricingModelPort(Protocol):
    """Port for backends that can price nodes over a time window."""

    def node_price(self, node_name: str, start: datetime, end: datetime) -> float:
        ...

    def pod_price(self, pod_name: str, start: datetime, end: datetime) -> float:
        ...
