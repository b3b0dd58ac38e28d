"""Command running a filtered selection of tests."""

import logging

from filtered_test_runner.bridge import ExecutionBridge
from filtered_test_runner.commands.context import CommandContext
from filtered_test_runner.commands.formatting import format_run_outcome, run_message
from filtered_test_runner.commands.params import Params
from filtered_test_runner.commands.response import Response
from filtered_test_runner.filtering import compile_filter, parse_mode, select_tests
from filtered_test_runner.models.filter import FilterSpec
from filtered_test_runner.models.result import RunOutcome

log = logging.getLogger(__name__)


def build_filter_spec(params: Params) -> FilterSpec:
    """Build selection criteria from command parameters.

    Parameters:
    - mode (string, required): "edit" or "play"
    - namePattern (string, optional): substring or regex on full names
    - categories (string[], optional): categories to include
    - assemblies (string[], optional): assembly names to include
    - fullNames (string[], optional): exact full names, overrides namePattern
    """
    mode = parse_mode(params.require_str("mode"))
    full_names = params.optional_str_list("fullNames")

    return FilterSpec(
        mode=mode,
        name_pattern=params.optional_str("namePattern") or None,
        categories=frozenset(params.optional_str_list("categories") or ()),
        assemblies=frozenset(params.optional_str_list("assemblies") or ()),
        explicit_names=tuple(full_names) if full_names else None,
    )


async def run_filtered_tests(params: Params, context: CommandContext) -> Response:
    """Select tests matching the parameters and run them."""
    spec = build_filter_spec(params)
    engine = context.require_engine()

    try:
        tree = await engine.retrieve_test_tree(spec.mode)
    except Exception as e:
        log.error("Failed to retrieve test tree: %s", e, exc_info=e)
        return Response.error(f"Failed to retrieve test tree: {e}")

    selection = select_tests(tree, compile_filter(spec))
    if not selection:
        return Response.success(
            "No tests matched the filter criteria",
            format_run_outcome(RunOutcome.empty()),
        )

    log.info("Running %d filtered tests in %s mode", len(selection), spec.mode)

    bridge = ExecutionBridge(engine=engine)
    try:
        outcome = await bridge.run(selection, timeout=context.run_timeout)
    except TimeoutError:
        return Response.error(
            f"Test execution did not complete within {context.run_timeout} seconds"
        )
    except Exception as e:
        log.error("Test execution failed: %s", e, exc_info=e)
        return Response.error(f"Test execution failed: {e}")

    return Response.success(run_message(outcome), format_run_outcome(outcome))
