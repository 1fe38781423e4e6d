"""Domain layer - core models, ports and errors."""

from rtt_commute.domain.errors import (
    ConfigurationError,
    NotFoundError,
    ProviderError,
    TrackerError,
    TransientProviderError,
)
from rtt_commute.domain.models import (
    Service,
    ServiceCandidate,
    ServiceStatus,
    StatusResult,
    StopCall,
    TransferBoard,
)
from rtt_commute.domain.ports import AuditLog, SnapshotWriter, TimetableRepository

__all__ = [
    "AuditLog",
    "ConfigurationError",
    "NotFoundError",
    "ProviderError",
    "Service",
    "ServiceCandidate",
    "ServiceStatus",
    "SnapshotWriter",
    "StatusResult",
    "StopCall",
    "TimetableRepository",
    "TrackerError",
    "TransferBoard",
    "TransientProviderError",
]
