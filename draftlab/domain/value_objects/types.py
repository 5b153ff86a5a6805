"""Domain value objects and type aliases."""

from enum import Enum
from typing import NewType

# Type aliases for domain clarity
SessionId = NewType("SessionId", str)


class ProgressStatus(str, Enum):
    """Status reported while waiting on the analysis service."""

    CONNECTING = "connecting"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ERROR = "error"
