"""
Cloud Provider Error Taxonomy

Architectural Intent:
- One exception hierarchy for everything the cloud provider boundary can signal
- Every error carries an ErrorKind so callers branch on kind, never on text
- Optional capabilities signal absence with CapabilityUnsupportedError, which
  never wraps a real failure

Design Decisions:
- Construction errors are raised by builders only; the process entry point
  decides whether to abort
- Refresh errors leave the previously installed cache generation authoritative
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    CONSTRUCTION = "construction"
    CAPABILITY_UNSUPPORTED = "capability_unsupported"
    DATA_INTEGRITY = "data_integrity"
    REFRESH = "refresh"
    CACHE_NOT_READY = "cache_not_ready"
    INVALID_REQUEST = "invalid_request"
    CLEANUP = "cleanup"
    BACKEND_REQUEST = "backend_request"


class CloudProviderError(Exception):
    """Base class for errors raised across the cloud provider boundary."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConstructionError(CloudProviderError):
    """A cloud provider could not be built. Fatal for the process."""

    kind = ErrorKind.CONSTRUCTION


class CapabilityUnsupportedError(CloudProviderError):
    """An optional capability is not implemented by this backend."""

    kind = ErrorKind.CAPABILITY_UNSUPPORTED

    def __init__(self, capability: str, backend: Optional[str] = None) -> None:
        self.capability = capability
        self.backend = backend
        if backend:
            message = f"{capability} is not implemented by the {backend} cloud provider"
        else:
            message = f"{capability} is not implemented"
        super().__init__(message)


class DataIntegrityError(CloudProviderError):
    """A cached backend record violates an invariant."""

    kind = ErrorKind.DATA_INTEGRITY


class RefreshError(CloudProviderError):
    """Pulling fresh state from the backend failed."""

    kind = ErrorKind.REFRESH


class CacheNotReadyError(CloudProviderError):
    """A read was attempted before the first successful refresh."""

    kind = ErrorKind.CACHE_NOT_READY


class InvalidScaleRequestError(CloudProviderError):
    """A scale mutation would violate the node group's bounds."""

    kind = ErrorKind.INVALID_REQUEST


class CleanupError(CloudProviderError):
    """Releasing backend resources failed or timed out."""

    kind = ErrorKind.CLEANUP


class BackendRequestError(CloudProviderError):
    """A scale mutation could not be delivered to the backend."""

    kind = ErrorKind.BACKEND_REQUEST
