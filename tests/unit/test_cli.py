"""Tests for CLI module."""

import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest

from filtered_test_runner.cli import log_results_summary, main, run
from filtered_test_runner.commands.response import Response
from filtered_test_runner.engines.loading import EngineNotFoundError


def test_log_results_summary_run(caplog: pytest.LogCaptureFixture) -> None:
    """Logs each test result with its status symbol."""
    response = Response.success(
        "Executed 2 tests: 1 passed, 1 failed, 0 skipped",
        {
            "results": [
                {"fullName": "Game.A", "status": "passed", "duration": 0.5},
                {"fullName": "Game.B", "status": "failed", "duration": 1.25},
            ],
            "failedTestDetails": [
                {"testName": "Game.B", "failureMessage": "Expected 1 but was 2"}
            ],
        },
    )

    with caplog.at_level(logging.INFO):
        log_results_summary(logging.getLogger(), response)

    assert "Success: Executed 2 tests" in caplog.text
    assert "✅ Game.A: passed (0.50s)" in caplog.text
    assert "❌ Game.B: failed (1.25s)" in caplog.text
    assert "Failed: Game.B" in caplog.text
    assert "Message: Expected 1 but was 2" in caplog.text


def test_log_results_summary_without_data(caplog: pytest.LogCaptureFixture) -> None:
    """Logs only the message when there is no data."""
    with caplog.at_level(logging.INFO):
        log_results_summary(logging.getLogger(), Response.error("Unknown command"))

    assert "Error: Unknown command" in caplog.text


class TestRun:
    """Tests for run function."""

    @pytest.fixture
    def mock_engine(self) -> Mock:
        """Create mock engine."""
        return Mock()

    @pytest.fixture
    def mock_context_manager(self, mock_engine: Mock) -> AsyncMock:
        """Create mock async context manager that yields the engine."""
        cm = AsyncMock()
        cm.__aenter__.return_value = mock_engine
        cm.__aexit__.return_value = None
        return cm

    async def test_returns_zero_on_success(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Prints the response and returns 0 for a successful command."""
        exit_code = await run("get_coverage_settings")

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["status"] == "success"
        assert output["data"]["coveragePackageInstalled"] is False

    async def test_returns_one_on_error(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Returns 1 when the command fails."""
        exit_code = await run("run_filtered_tests", params_json='{"mode": "edit"}')

        assert exit_code == 1
        output = json.loads(capsys.readouterr().out)
        assert output["message"].startswith("Not available:")

    async def test_builds_engine_from_manifest(
        self,
        mock_context_manager: AsyncMock,
        mock_engine: Mock,
    ) -> None:
        """Builds the engine and coverage service from the manifest."""
        coverage = Mock()

        with (
            patch("filtered_test_runner.cli.load_engine_manifest") as mock_load,
            patch(
                "filtered_test_runner.cli.dispatch",
                new_callable=AsyncMock,
                return_value=Response.success("done"),
            ) as mock_dispatch,
        ):
            config = Mock()
            mock_manifest = Mock()
            mock_manifest.config_cls = Mock(return_value=config)
            mock_manifest.engine_factory = Mock(return_value=mock_context_manager)
            mock_manifest.coverage_factory = Mock(return_value=coverage)
            mock_load.return_value = mock_manifest

            exit_code = await run(
                "run_filtered_tests",
                params_json='{"mode": "play"}',
                engine_key="custom",
                engine_config_json='{"setting": 1}',
                run_timeout=30,
            )

        assert exit_code == 0
        mock_load.assert_called_once_with("custom")
        mock_manifest.config_cls.assert_called_once_with(setting=1)
        mock_manifest.engine_factory.assert_called_once_with(config)
        mock_context_manager.__aexit__.assert_awaited_once()

        name, params, context = mock_dispatch.call_args.args
        assert name == "run_filtered_tests"
        assert params == {"mode": "play"}
        assert context.engine is mock_engine
        assert context.coverage is coverage
        assert context.run_timeout == 30

    async def test_passes_results_config(self, tmp_path: Path) -> None:
        """The results locator is configured from JSON."""
        with patch(
            "filtered_test_runner.cli.dispatch",
            new_callable=AsyncMock,
            return_value=Response.success("done"),
        ) as mock_dispatch:
            await run(
                "parse_test_results",
                results_config_json=json.dumps(
                    {"company_name": "Acme", "search_roots": [str(tmp_path)]}
                ),
            )

        context = mock_dispatch.call_args.args[2]
        assert context.locator.company_name == "Acme"
        assert list(context.locator.search_roots) == [tmp_path]

    async def test_unknown_engine_raises(self) -> None:
        """An unknown engine key is not swallowed."""
        with (
            patch(
                "filtered_test_runner.cli.load_engine_manifest",
                side_effect=EngineNotFoundError("Engine 'x' not found"),
            ),
            pytest.raises(EngineNotFoundError),
        ):
            await run("get_coverage_settings", engine_key="x")


class TestMain:
    """Tests for main CLI entry point."""

    def test_exits_with_run_result(self) -> None:
        """Main function exits with the result from run()."""
        with (
            patch(
                "sys.argv",
                [
                    "cli",
                    "run_filtered_tests",
                    "--params",
                    '{"mode": "edit"}',
                    "--engine",
                    "scripted",
                    "--timeout",
                    "10",
                ],
            ),
            patch("filtered_test_runner.cli.asyncio.run", return_value=0) as mock_run,
            pytest.raises(SystemExit) as exc_info,
        ):
            main()

        assert exc_info.value.code == 0
        mock_run.assert_called_once()
        mock_run.call_args.args[0].close()

    def test_exits_with_failure_code(self) -> None:
        """Main function exits with code 1 on command failures."""
        with (
            patch("sys.argv", ["cli", "parse_test_results"]),
            patch("filtered_test_runner.cli.asyncio.run", return_value=1) as mock_run,
            pytest.raises(SystemExit) as exc_info,
        ):
            main()

        assert exc_info.value.code == 1
        mock_run.call_args.args[0].close()

    def test_rejects_unknown_command(self) -> None:
        """Argparse rejects commands that are not registered."""
        with (
            patch("sys.argv", ["cli", "explode"]),
            pytest.raises(SystemExit) as exc_info,
        ):
            main()

        assert exc_info.value.code == 2
