"""Commands reading persisted test results."""

import asyncio
from datetime import datetime

from filtered_test_runner.commands.context import CommandContext
from filtered_test_runner.commands.formatting import (
    format_results_summary,
    summary_message,
)
from filtered_test_runner.commands.params import Params
from filtered_test_runner.commands.response import Response
from filtered_test_runner.errors import MalformedDocumentError
from filtered_test_runner.results.locator import locate_results_file, read_results_file
from filtered_test_runner.results.parser import parse_test_results

NOT_FOUND_HINT = (
    "Ensure tests have been run and that the company and product names "
    "of the results location are configured."
)


async def get_test_results_file(params: Params, context: CommandContext) -> Response:
    """Locate the results file and optionally return its content.

    Parameters:
    - includeContent (bool, optional): include the raw XML, default false
    """
    include_content = params.optional_bool("includeContent")

    path = await asyncio.to_thread(locate_results_file, context.locator)
    if path is None:
        return Response.error(f"Test results file not found. {NOT_FOUND_HINT}")

    try:
        stat = path.stat()
        content = (
            await asyncio.to_thread(read_results_file, context.locator, path)
            if include_content
            else None
        )
    except FileNotFoundError as e:
        return Response.error(f"Test results file not found: {e}")
    except OSError as e:
        return Response.error(f"Failed to read test results file: {e}")

    data = {
        "filePath": str(path),
        "fileExists": True,
        "lastModified": datetime.fromtimestamp(stat.st_mtime).strftime(
            "%Y-%m-%d %H:%M:%S"
        ),
        "fileSizeBytes": stat.st_size,
        "content": content,
    }
    message = (
        f"Test results file located and read: {path}"
        if include_content
        else f"Test results file located: {path}"
    )
    return Response.success(message, data)


async def parse_results(params: Params, context: CommandContext) -> Response:
    """Read the most recent results file and summarise it."""
    try:
        document = await asyncio.to_thread(read_results_file, context.locator)
    except FileNotFoundError as e:
        return Response.error(
            f"Test results file not found: {e}. Run the tests first."
        )
    except OSError as e:
        return Response.error(f"Failed to read test results file: {e}")

    try:
        outcome = parse_test_results(document)
    except MalformedDocumentError as e:
        return Response.error(f"Failed to parse test results XML: {e}")

    return Response.success(summary_message(outcome), format_results_summary(outcome))
