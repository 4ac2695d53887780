"""Per-run watcher state."""

from dataclasses import dataclass
from enum import Enum


class RunOutcome(str, Enum):
    """How a watch run ended."""

    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RunState:
    """Mutable state of a single watch run. Never persisted."""

    waiting: bool = True
    last_stage: str = ""
    marked_as_in_progress: bool = False
    github_deployment_id: int | None = None
