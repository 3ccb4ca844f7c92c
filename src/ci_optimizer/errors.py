from __future__ import annotations

from .constants import ExitCode


class CiOptimizerError(Exception):
    """Base exception for all CI optimizer action errors."""

    exit_code: ExitCode = ExitCode.FAILURE


class ConfigError(CiOptimizerError):
    """Action inputs failed validation."""


class ContextError(CiOptimizerError):
    """GitHub Actions environment is missing or malformed."""
