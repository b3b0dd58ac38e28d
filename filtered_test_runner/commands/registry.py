"""Command registry and dispatch."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from filtered_test_runner.commands.context import CommandContext
from filtered_test_runner.commands.coverage import (
    enable_code_coverage,
    get_coverage_settings,
    start_coverage_recording,
    stop_coverage_recording,
)
from filtered_test_runner.commands.params import Params, json_type_name
from filtered_test_runner.commands.response import Response
from filtered_test_runner.commands.results import get_test_results_file, parse_results
from filtered_test_runner.commands.runs import run_filtered_tests
from filtered_test_runner.errors import InvalidArgumentError, NotAvailableError

log = logging.getLogger(__name__)

type Handler = Callable[[Params, CommandContext], Awaitable[Response]]


@dataclass(frozen=True, kw_only=True)
class Command:
    """A named operation and the handler implementing it."""

    name: str
    operation: str
    handler: Handler


COMMANDS: Mapping[str, Command] = {
    command.name: command
    for command in (
        Command(
            name="run_filtered_tests",
            operation="run filtered tests",
            handler=run_filtered_tests,
        ),
        Command(
            name="parse_test_results",
            operation="parse test results",
            handler=parse_results,
        ),
        Command(
            name="get_test_results_file",
            operation="get test results file",
            handler=get_test_results_file,
        ),
        Command(
            name="enable_code_coverage",
            operation="enable/disable code coverage",
            handler=enable_code_coverage,
        ),
        Command(
            name="get_coverage_settings",
            operation="get coverage settings",
            handler=get_coverage_settings,
        ),
        Command(
            name="start_coverage_recording",
            operation="start coverage recording",
            handler=start_coverage_recording,
        ),
        Command(
            name="stop_coverage_recording",
            operation="stop coverage recording",
            handler=stop_coverage_recording,
        ),
    )
}


async def dispatch(
    name: str, params: Mapping[str, Any] | None, context: CommandContext
) -> Response:
    """Run a command by name and wrap any failure in an error response.

    Args:
        name: Command name (e.g. "run_filtered_tests")
        params: Decoded parameter object, None for no parameters
        context: Collaborators available to the command

    Returns:
        The command's response; never raises for command failures

    """
    command = COMMANDS.get(name)
    if command is None:
        return Response.error(
            f"Unknown command '{name}'. Available commands: {sorted(COMMANDS)}"
        )

    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        return Response.error(
            f"Parameters must be an object, got: {json_type_name(params)}"
        )

    try:
        return await command.handler(Params(params), context)
    except InvalidArgumentError as e:
        return Response.error(f"Invalid parameters: {e}")
    except NotAvailableError as e:
        return Response.error(f"Not available: {e}", {"available": False})
    except Exception as e:
        log.error("Command %s failed: %s", name, e, exc_info=e)
        return Response.error(f"Failed to {command.operation}: {e}")
