from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ContextError


def _load_event() -> Dict[str, Any]:
    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        return {}
    try:
        event = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    return event if isinstance(event, dict) else {}


def _coerce_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class InvocationContext:
    """Immutable description of the CI run asking for a decision."""

    # Repository
    repo_owner: str
    repo_name: str

    # Event: pull_request, push, workflow_dispatch, ...
    event_name: str

    # None on non-PR events
    pr_number: Optional[int]

    sha: str
    ref: str
    head_ref: Optional[str]

    # Workflow run
    workflow: str
    job: str
    run_id: Optional[int]

    @classmethod
    def from_environment(cls) -> "InvocationContext":
        """Load context from GitHub Actions environment."""
        event = _load_event()

        repo_full_name = os.environ.get("GITHUB_REPOSITORY", "")
        owner, _, name = repo_full_name.partition("/")
        if not owner or not name:
            raise ContextError(
                "GITHUB_REPOSITORY must be set to 'owner/repo' "
                f"(got {repo_full_name!r})"
            )

        pr = event.get("pull_request") or {}

        return cls(
            repo_owner=owner,
            repo_name=name,
            event_name=os.environ.get("GITHUB_EVENT_NAME", ""),
            pr_number=_coerce_int(pr.get("number")),
            sha=os.environ.get("GITHUB_SHA", ""),
            ref=os.environ.get("GITHUB_REF", ""),
            head_ref=os.environ.get("GITHUB_HEAD_REF"),
            workflow=os.environ.get("GITHUB_WORKFLOW", ""),
            job=os.environ.get("GITHUB_JOB", ""),
            run_id=_coerce_int(os.environ.get("GITHUB_RUN_ID")),
        )

    def with_pr_override(self, pr_number: Optional[int]) -> "InvocationContext":
        """Return a copy using an explicit PR number, if one was given."""
        if pr_number is None:
            return self
        return replace(self, pr_number=pr_number)

    @property
    def repo_full_name(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"
