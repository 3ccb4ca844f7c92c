from __future__ import annotations

import os
import uuid
from typing import Union

OutputValue = Union[str, int, bool]


def _render(value: OutputValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def set_output(name: str, value: OutputValue) -> None:
    """
    Write a GitHub Actions step output.

    Uses the GITHUB_OUTPUT file protocol; multi-line values are written
    with a heredoc delimiter. Does nothing outside a runner (no GITHUB_OUTPUT).
    """
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return

    rendered = _render(value)
    with open(output_path, "a", encoding="utf-8") as f:
        if "\n" in rendered or "\r" in rendered:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{rendered}\n{delimiter}\n")
        else:
            f.write(f"{name}={rendered}\n")
