from __future__ import annotations

import asyncio
import os
import sys
import uuid
from typing import Optional

from pydantic import ValidationError

from .client import OptimizerClient
from .config import OptimizerConfig
from .constants import CALLER_NAME, CALLER_VERSION, ExitCode
from .context import InvocationContext
from .errors import CiOptimizerError, ConfigError
from .logging import ActionLogger
from .outputs import set_output
from .requester import request_decision


def _error_message(exc: BaseException) -> str:
    """Message used to fail the step; falls back to the exception type."""
    message = str(exc).strip()
    return message or type(exc).__name__


def load_config() -> OptimizerConfig:
    try:
        return OptimizerConfig()
    except ValidationError as exc:
        raise ConfigError(f"Invalid action inputs: {exc}") from exc


def main() -> int:
    """Main entry point."""
    return asyncio.run(async_main())


async def async_main(client: Optional[OptimizerClient] = None) -> int:
    """
    Run the action once and return the process exit code.

    Only failures that happen before a decision is made (bad inputs, missing
    GitHub environment, transport errors) fail the step, and in that case
    no `skip` output is written.
    """
    run_id = os.environ.get("GITHUB_RUN_ID") or str(uuid.uuid4())
    logger = ActionLogger(run_id)

    try:
        config = load_config()
        logger.mask(config.graphite_token.get_secret_value())

        ctx = InvocationContext.from_environment()
        logger.debug(
            "CI optimizer action starting",
            caller=f"{CALLER_NAME}@{CALLER_VERSION}",
            repo=ctx.repo_full_name,
            event_name=ctx.event_name,
            endpoint=config.endpoint,
        )

        if client is None:
            client = OptimizerClient(config.endpoint, config.timeout)

        with logger.stage("decision"):
            async with client:
                outcome = await request_decision(config, ctx, client=client, logger=logger)
    except CiOptimizerError as exc:
        logger.error(_error_message(exc))
        return int(exc.exit_code)
    except Exception as exc:
        logger.error(_error_message(exc), error_type=type(exc).__name__)
        return int(ExitCode.FAILURE)

    set_output("skip", outcome.skip)
    return int(ExitCode.SUCCESS)


if __name__ == "__main__":
    sys.exit(main())
