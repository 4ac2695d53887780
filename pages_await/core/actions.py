"""GitHub Actions runner integration.

Step outputs go to the file named by ``$GITHUB_OUTPUT`` and failures are
surfaced as ``::error::`` workflow commands.
"""

import json
import os
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, TextIO

from pages_await.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class EventContext:
    """Details of the workflow run used in notifications."""

    actor: str = ""
    commit_url: str = ""


def load_event_context(environ: Mapping[str, str] | None = None) -> EventContext:
    """Read the actor and head commit URL of the triggering event.

    Missing or unreadable event payloads give empty values.
    """
    env = os.environ if environ is None else environ
    context = EventContext(actor=env.get("GITHUB_ACTOR", ""))

    event_path = env.get("GITHUB_EVENT_PATH")
    if not event_path:
        return context

    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("actions.event_payload_unreadable", path=event_path, error=str(e))
        return context

    head_commit = payload.get("head_commit") if isinstance(payload, dict) else None
    if isinstance(head_commit, dict):
        context.commit_url = head_commit.get("url") or ""
    return context


class ActionsRuntime:
    """Publishes step outputs and the failure status of the step."""

    def __init__(
        self,
        output_path: str | Path | None = None,
        stream: TextIO | None = None,
    ):
        if output_path is None:
            output_path = os.environ.get("GITHUB_OUTPUT") or None
        self.output_path = Path(output_path) if output_path else None
        self.stream = stream or sys.stdout
        self.outputs: dict[str, str] = {}
        self.failed = False
        self.failure_message: str | None = None

    def set_output(self, name: str, value: object) -> None:
        """Set a step output."""
        text = _render(value)
        self.outputs[name] = text

        if self.output_path is None:
            logger.info("actions.output", name=name, value=text)
            return

        with open(self.output_path, "a", encoding="utf-8") as f:
            if "\n" in text:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
            else:
                f.write(f"{name}={text}\n")

    def set_failed(self, message: str) -> None:
        """Mark the step as failed with an error annotation."""
        self.failed = True
        self.failure_message = message
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        print(f"::error::{escaped}", file=self.stream, flush=True)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


def _render(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
