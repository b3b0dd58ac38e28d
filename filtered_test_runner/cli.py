"""CLI entry point for filtered test runs and results analysis."""

import argparse
import asyncio
import json
import logging
import sys
from contextlib import AsyncExitStack
from typing import Any

from filtered_test_runner.commands.context import CommandContext
from filtered_test_runner.commands.registry import COMMANDS, dispatch
from filtered_test_runner.commands.response import Response
from filtered_test_runner.coverage.base import CoverageService
from filtered_test_runner.coverage.unavailable import UnavailableCoverageService
from filtered_test_runner.engines.base import ExecutionEngine
from filtered_test_runner.engines.loading import load_engine_manifest
from filtered_test_runner.results.locator import ResultsLocatorConfig

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "skipped": "⏭️",
    "inconclusive": "❔",
}


def log_results_summary(log: logging.Logger, response: Response) -> None:
    """Log a formatted summary of the tests and failures in a response."""
    log.info("=" * 80)
    log.info("%s: %s", response.status.capitalize(), response.message)
    log.info("=" * 80)

    data: dict[str, Any] = response.data if isinstance(response.data, dict) else {}

    for result in data.get("results", []):
        symbol = STATUS_SYMBOLS.get(result["status"], "?")
        log.info(
            "%s %s: %s (%.2fs)",
            symbol,
            result["fullName"],
            result["status"],
            result["duration"],
        )

    for detail in data.get("failedTestDetails", []):
        log.info("Failed: %s", detail["testName"])
        if detail["failureMessage"]:
            log.info("  Message: %s", detail["failureMessage"])


async def run(
    command: str,
    params_json: str = "{}",
    engine_key: str | None = None,
    engine_config_json: str = "{}",
    results_config_json: str = "{}",
    run_timeout: float | None = None,
) -> int:
    """Run a command and return exit code."""
    log = logging.getLogger("filtered_test_runner")

    params = json.loads(params_json)
    locator = ResultsLocatorConfig(**json.loads(results_config_json))

    async with AsyncExitStack() as stack:
        engine: ExecutionEngine | None = None
        coverage: CoverageService = UnavailableCoverageService()

        if engine_key:
            log.info("Loading engine: %s", engine_key)
            manifest = load_engine_manifest(engine_key)
            config = manifest.config_cls(**json.loads(engine_config_json))
            engine = await stack.enter_async_context(manifest.engine_factory(config))
            if manifest.coverage_factory is not None:
                coverage = manifest.coverage_factory(config)

        context = CommandContext(
            engine=engine,
            coverage=coverage,
            locator=locator,
            run_timeout=run_timeout,
        )
        log.info("Running command: %s", command)
        response = await dispatch(command, params, context)

    log_results_summary(log, response)
    print(json.dumps(response.model_dump(mode="json"), indent=2))

    return 0 if response.ok else 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run filtered tests and analyse test results"
    )
    parser.add_argument(
        "command",
        choices=sorted(COMMANDS),
        help="Command to run",
    )
    parser.add_argument(
        "--params",
        default="{}",
        help="JSON object with the command parameters",
    )
    parser.add_argument(
        "--engine",
        default=None,
        help="Execution engine key (e.g. scripted)",
    )
    parser.add_argument(
        "--engine-config",
        default="{}",
        help="JSON configuration for the engine",
    )
    parser.add_argument(
        "--results-config",
        default="{}",
        help="JSON configuration for locating the test results file",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Maximum seconds to wait for a test run",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            command=args.command,
            params_json=args.params,
            engine_key=args.engine,
            engine_config_json=args.engine_config,
            results_config_json=args.results_config,
            run_timeout=args.timeout,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
