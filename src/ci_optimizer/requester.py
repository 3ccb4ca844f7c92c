from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Protocol

import httpx

from .config import OptimizerConfig
from .constants import WORKFLOW_DISPATCH_EVENT
from .context import InvocationContext
from .logging import ActionLogger
from .schemas import DecisionResult, build_request_payload

SKIP_NOTICE = "Skipping Graphite checks."


class DecisionSource(str, Enum):
    """Which branch of the decision policy produced the outcome."""

    SERVICE = "service"
    UNAUTHENTICATED = "unauthenticated"
    PLAN_REQUIRED = "plan_required"
    WORKFLOW_DISPATCH = "workflow_dispatch"
    UNEXPECTED_STATUS = "unexpected_status"
    MALFORMED_BODY = "malformed_body"


@dataclass(frozen=True)
class DecisionOutcome:
    skip: bool
    reason: str
    source: DecisionSource
    status_code: int

    @property
    def fail_open(self) -> bool:
        return self.source != DecisionSource.SERVICE


class DecisionClient(Protocol):
    async def post_decision(self, payload: Dict[str, Any]) -> httpx.Response: ...


def _fail_open(source: DecisionSource, reason: str, status_code: int) -> DecisionOutcome:
    return DecisionOutcome(skip=False, reason=reason, source=source, status_code=status_code)


async def request_decision(
    config: OptimizerConfig,
    ctx: InvocationContext,
    *,
    client: DecisionClient,
    logger: ActionLogger,
) -> DecisionOutcome:
    """
    Ask the CI optimizer whether this run's checks can be skipped.

    Every application-level anomaly (401, 402, other non-200 statuses,
    an unparseable body) and every workflow_dispatch run resolves to
    skip=False. Transport failures are not caught here.
    """
    pr_override = config.pr_override
    if config.pr_number and pr_override is None:
        logger.warning(
            f"Ignoring pr_number input {config.pr_number!r}: not an integer. "
            "Using the pull request from the triggering event."
        )
    ctx = ctx.with_pr_override(pr_override)
    payload = build_request_payload(config.graphite_token.get_secret_value(), ctx)

    logger.debug(
        "Requesting CI optimizer decision",
        url=config.optimizer_url,
        timeout_ms=config.timeout_ms,
        repo=ctx.repo_full_name,
        pr_number=ctx.pr_number,
        sha=ctx.sha,
    )
    response = await client.post_decision(payload)
    status = response.status_code

    if status == 401:
        reason = f"Invalid authentication. {SKIP_NOTICE}"
        logger.warning(reason)
        return _fail_open(DecisionSource.UNAUTHENTICATED, reason, status)

    if status == 402:
        reason = (
            "Your Graphite plan does not support the CI Optimizer. "
            "Please upgrade your plan to use this feature."
        )
        logger.warning(reason)
        return _fail_open(DecisionSource.PLAN_REQUIRED, reason, status)

    # Evaluated after the auth/plan checks, so dispatch runs still pay the round trip.
    if ctx.event_name == WORKFLOW_DISPATCH_EVENT:
        reason = f"Workflow dispatch event detected. {SKIP_NOTICE}"
        logger.info(reason)
        return _fail_open(DecisionSource.WORKFLOW_DISPATCH, reason, status)

    if status != 200:
        body = json.dumps(payload, separators=(",", ":"))
        logger.warning(f"Request body: {body}")
        logger.warning(f"Response status: {status}")
        logger.warning(f"{ctx.repo_owner}/{ctx.repo_name}/{_display_pr(ctx.pr_number)}")
        reason = f"Response returned a non-200 status. {SKIP_NOTICE}"
        logger.warning(reason)
        return _fail_open(DecisionSource.UNEXPECTED_STATUS, reason, status)

    try:
        result = DecisionResult.model_validate(response.json())
    except ValueError as exc:
        reason = f"Failed to parse response body. {SKIP_NOTICE}"
        logger.warning(reason, error=str(exc))
        return _fail_open(DecisionSource.MALFORMED_BODY, reason, status)

    logger.info(result.reason)
    return DecisionOutcome(
        skip=result.skip,
        reason=result.reason,
        source=DecisionSource.SERVICE,
        status_code=status,
    )


def _display_pr(pr_number: Optional[int]) -> str:
    return str(pr_number) if pr_number is not None else "unknown"
