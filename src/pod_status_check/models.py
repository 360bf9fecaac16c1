"""
Data model for Pod Status Check
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class PodPhase(str, Enum):
    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


# Stand-in for pods the API returned without a creation timestamp
EPOCH_ZERO = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class PodRecord:
    """Read-only snapshot of one pod at query time"""

    name: str
    namespace: str
    creation_timestamp: datetime
    phase: str

    @classmethod
    def from_v1_pod(cls, pod) -> "PodRecord":
        """Build a record from a kubernetes.client.V1Pod"""
        metadata = pod.metadata
        status = pod.status

        created = metadata.creation_timestamp or EPOCH_ZERO
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)

        phase = status.phase if status is not None and status.phase else ""

        return cls(
            name=metadata.name,
            namespace=metadata.namespace,
            creation_timestamp=created,
            phase=phase,
        )


@dataclass(frozen=True)
class EvaluationConfig:
    """Settings for one evaluation pass"""

    # Go-style duration string, e.g. "10m"
    skip_duration: str
    # Empty means all namespaces
    target_namespace: str = ""

    @property
    def all_namespaces(self) -> bool:
        return self.target_namespace == ""
