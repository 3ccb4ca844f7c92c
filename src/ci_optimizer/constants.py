from __future__ import annotations

from enum import Enum

from . import __version__

CALLER_NAME = "graphite-ci-action"
CALLER_VERSION = __version__

OPTIMIZER_PATH = "/api/v1/ci/optimizer"
CONTEXT_KIND = "GITHUB_ACTIONS"

DEFAULT_ENDPOINT = "https://api.graphite.dev"
DEFAULT_TIMEOUT_SECONDS = 30

WORKFLOW_DISPATCH_EVENT = "workflow_dispatch"


class ExitCode(int, Enum):
    """Process exit codes."""

    SUCCESS = 0
    FAILURE = 1
