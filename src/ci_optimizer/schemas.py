from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr

from .constants import CALLER_NAME, CALLER_VERSION, CONTEXT_KIND
from .context import InvocationContext


def build_request_payload(token: str, ctx: InvocationContext) -> Dict[str, Any]:
    """
    Build the optimizer request body.

    `pr` and `head_ref` are omitted when unknown; `run.run` is null when
    the runner did not provide a numeric run id.
    """
    context: Dict[str, Any] = {
        "kind": CONTEXT_KIND,
        "repository": {
            "owner": ctx.repo_owner,
            "name": ctx.repo_name,
        },
    }
    if ctx.pr_number is not None:
        context["pr"] = ctx.pr_number
    context["sha"] = ctx.sha
    context["ref"] = ctx.ref
    if ctx.head_ref is not None:
        context["head_ref"] = ctx.head_ref
    context["run"] = {
        "workflow": ctx.workflow,
        "job": ctx.job,
        "run": ctx.run_id,
    }

    return {
        "token": token,
        "caller": {
            "name": CALLER_NAME,
            "version": CALLER_VERSION,
        },
        "context": context,
    }


class DecisionResult(BaseModel):
    """Body of a successful optimizer response."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    skip: StrictBool
    reason: StrictStr
