from __future__ import annotations

import json
import os
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator


def escape_workflow_command(value: Any) -> str:
    """
    Escape a string for GitHub workflow commands (annotation messages).

    See: https://docs.github.com/actions/using-workflows/workflow-commands-for-github-actions
    """
    if value is None:
        return ""
    return str(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionLogger:
    """Structured JSON logger with GitHub Actions integration."""

    def __init__(self, run_id: str):
        self.run_id = run_id
        self.debug_enabled = os.environ.get("RUNNER_DEBUG") == "1"

    def debug(self, message: str, **kwargs: Any) -> None:
        if self.debug_enabled:
            self._emit("debug", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._emit("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._emit("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._emit("error", message, **kwargs)

    def mask(self, value: str) -> None:
        """Register a secret with the runner so it is redacted from all log output."""
        if not value:
            return
        for line in value.splitlines():
            if line.strip():
                sys.stdout.write(f"::add-mask::{escape_workflow_command(line)}\n")
        sys.stdout.flush()

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Context manager that tracks stage timing."""
        start = datetime.now(timezone.utc)
        self.debug("stage_start", stage=name)
        status = "ok"
        try:
            yield
        except Exception as exc:
            status = "error"
            self.debug("stage_error", stage=name, error=str(exc))
            raise
        finally:
            duration_ms = int((datetime.now(timezone.utc) - start).total_seconds() * 1000)
            self.debug("stage_end", stage=name, duration_ms=duration_ms, status=status)

    def _emit(self, level: str, message: str, **kwargs: Any) -> None:
        """Emit structured JSON log + GitHub annotation for warnings and errors."""
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "run_id": self.run_id,
            "message": message,
        }
        payload.update(self._sanitize(kwargs))

        sys.stderr.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
        sys.stderr.flush()

        if level in ("error", "warning"):
            sys.stderr.write(f"::{level}::{escape_workflow_command(message)}\n")
            sys.stderr.flush()

    @staticmethod
    def _sanitize(fields: Dict[str, Any]) -> Dict[str, Any]:
        redacted: Dict[str, Any] = {}
        for key, value in fields.items():
            if ActionLogger._is_sensitive_key(key):
                redacted[key] = "***"
            else:
                redacted[key] = value
        return redacted

    @staticmethod
    def _is_sensitive_key(key: str) -> bool:
        lowered = key.lower()
        return any(token in lowered for token in ("token", "secret", "password", "api_key", "apikey"))
