from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import Field, SecretStr, conint, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT_SECONDS, OPTIMIZER_PATH

_LEADING_INT = re.compile(r"[+-]?\d+")


class OptimizerConfig(BaseSettings):
    """Configuration loaded from GitHub Actions inputs."""

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        frozen=True,
        extra="ignore",
    )

    graphite_token: SecretStr = Field(
        default="",
        description="Graphite CI token, forwarded to the optimizer as-is",
    )
    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        description="Base URL of the Graphite API",
    )
    timeout: conint(gt=0) = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        description="Upper bound in seconds for the optimizer request",
    )
    pr_number: str = Field(
        default="",
        description="Pull request number; overrides the one in the event payload",
    )

    @field_validator("endpoint", mode="before")
    @classmethod
    def _normalize_endpoint(cls, value: Any) -> Any:
        if isinstance(value, str):
            trimmed = value.strip().rstrip("/")
            if not trimmed:
                return DEFAULT_ENDPOINT
            if not trimmed.startswith(("http://", "https://")):
                raise ValueError("endpoint must be an http:// or https:// URL")
            return trimmed
        return value

    @field_validator("timeout", mode="before")
    @classmethod
    def _blank_timeout_uses_default(cls, value: Any) -> Any:
        if isinstance(value, str):
            trimmed = value.strip()
            return trimmed or DEFAULT_TIMEOUT_SECONDS
        return value

    @field_validator("pr_number", mode="before")
    @classmethod
    def _pr_number_as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def pr_override(self) -> Optional[int]:
        """
        Leading integer of the pr_number input, None when blank or not numeric.

        Invalid input never fails the step; the event payload PR is used instead.
        """
        match = _LEADING_INT.match(self.pr_number)
        return int(match.group(0)) if match else None

    @property
    def optimizer_url(self) -> str:
        return f"{self.endpoint}{OPTIMIZER_PATH}"

    @property
    def timeout_ms(self) -> int:
        return self.timeout * 1000
