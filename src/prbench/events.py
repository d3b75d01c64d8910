import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import EventError

logger = logging.getLogger(__name__)

LABELED_ACTION = "labeled"


@dataclass(frozen=True)
class TriggerEvent:
    label: str
    number: int
    owner: str
    repo: str
    action: str = LABELED_ACTION

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TriggerEvent":
        """Build an event from a GitHub ``pull_request`` webhook payload."""
        label = payload.get("label") or {}
        label_name = label.get("name") if isinstance(label, dict) else None
        if not isinstance(label_name, str):
            raise EventError("event payload has no label.name")

        number = payload.get("number")
        pull_request = payload.get("pull_request")
        if number is None and isinstance(pull_request, dict):
            number = pull_request.get("number")
        if not isinstance(number, int) or isinstance(number, bool):
            raise EventError("event payload has no pull request number")

        repository = payload.get("repository")
        if not isinstance(repository, dict):
            raise EventError("event payload has no repository object")
        owner_obj = repository.get("owner")
        owner = owner_obj.get("login") if isinstance(owner_obj, dict) else None
        repo = repository.get("name")
        if not isinstance(owner, str) or not owner or not isinstance(repo, str) or not repo:
            raise EventError("event payload has no repository.owner.login / repository.name")

        return cls(
            label=label_name,
            number=number,
            owner=owner,
            repo=repo,
            action=payload.get("action") or LABELED_ACTION,
        )


def load_event(path: str | Path) -> TriggerEvent:
    """Read a webhook payload file (``$GITHUB_EVENT_PATH``) into a TriggerEvent."""
    event_path = Path(path)
    try:
        payload = json.loads(event_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise EventError(f"cannot read event payload {event_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise EventError(f"event payload {event_path} is not a JSON object")
    return TriggerEvent.from_payload(payload)


def should_run(event: TriggerEvent, marker: str) -> bool:
    """Label gate: run only when the marker label was just added.

    The comparison is exact. Removal events never qualify.
    """
    if event.action != LABELED_ACTION:
        logger.info("Skipping %s: action is %r", event.slug, event.action)
        return False
    if event.label != marker:
        logger.info("Skipping %s: label %r is not %r", event.slug, event.label, marker)
        return False
    return True
