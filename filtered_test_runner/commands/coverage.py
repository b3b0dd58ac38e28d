"""Commands controlling code coverage recording."""

import logging

from filtered_test_runner.commands.context import CommandContext
from filtered_test_runner.commands.formatting import format_path
from filtered_test_runner.commands.params import Params
from filtered_test_runner.commands.response import Response
from filtered_test_runner.errors import CoverageNotEnabledError

log = logging.getLogger(__name__)


async def enable_code_coverage(params: Params, context: CommandContext) -> Response:
    """Enable or disable coverage.

    Parameters:
    - enabled (bool, required)
    - autoGenerateReport (bool, optional): report whenever recording stops
    """
    enabled = params.require_bool("enabled")
    auto_generate_report = params.optional_bool("autoGenerateReport")

    context.coverage.set_enabled(enabled, auto_generate_report)

    data = {
        "enabled": enabled,
        "autoGenerateReport": auto_generate_report,
        "coverageResultsPath": format_path(context.coverage.results_path()),
    }
    message = (
        f"Code coverage enabled. Auto-generate report: {auto_generate_report}"
        if enabled
        else "Code coverage disabled"
    )
    return Response.success(message, data)


async def get_coverage_settings(params: Params, context: CommandContext) -> Response:
    """Report coverage availability and settings."""
    coverage = context.coverage
    available = coverage.is_available()
    enabled = coverage.is_enabled()

    data = {
        "coveragePackageInstalled": available,
        "enabled": enabled,
        "autoGenerateReport": coverage.auto_generate_report(),
        "coverageResultsPath": format_path(coverage.results_path()),
        "recording": coverage.is_recording(),
    }

    if not available:
        return Response.success(
            "Code coverage backend is not installed. "
            "Use an engine that provides coverage support.",
            data,
        )

    message = "Code coverage is enabled" if enabled else "Code coverage is disabled"
    return Response.success(message, data)


async def start_coverage_recording(
    params: Params, context: CommandContext
) -> Response:
    """Start recording; coverage must be enabled first."""
    coverage = context.coverage
    if coverage.is_available() and not coverage.is_enabled():
        return Response.error(
            "Code coverage is not enabled. "
            "Call enable_code_coverage with enabled=true first."
        )

    try:
        coverage.start_recording()
    except CoverageNotEnabledError as e:
        return Response.error(f"Cannot start recording: {e}")

    return Response.success(
        "Code coverage recording started",
        {
            "recording": True,
            "coverageResultsPath": format_path(coverage.results_path()),
        },
    )


async def stop_coverage_recording(params: Params, context: CommandContext) -> Response:
    """Stop recording and optionally generate a report.

    Parameters:
    - generateReport (bool, optional): generate an HTML report after stopping

    A report failure does not turn the call into an error: recording did
    stop, so the response is a success carrying ``reportError``.
    """
    generate_report = params.optional_bool("generateReport")
    coverage = context.coverage

    coverage.stop_recording()
    results_path = format_path(coverage.results_path())

    if not generate_report:
        return Response.success(
            "Code coverage recording stopped",
            {
                "recording": False,
                "reportGenerated": False,
                "coverageResultsPath": results_path,
            },
        )

    try:
        report_path = await coverage.generate_report()
    except Exception as e:
        log.warning("Coverage report generation failed: %s", e, exc_info=e)
        return Response.success(
            "Code coverage recording stopped, but report generation failed",
            {
                "recording": False,
                "reportGenerated": False,
                "reportError": str(e),
                "coverageResultsPath": results_path,
            },
        )

    return Response.success(
        "Code coverage recording stopped and report generated",
        {
            "recording": False,
            "reportGenerated": True,
            "reportPath": str(report_path),
            "coverageResultsPath": results_path,
        },
    )
