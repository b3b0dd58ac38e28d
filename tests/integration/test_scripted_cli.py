"""End to end runs through the CLI with the scripted engine."""

import json
from pathlib import Path
from typing import Any

import pytest

from filtered_test_runner.cli import run

ENGINE_CONFIG = {
    "tree": {
        "id": "root",
        "full_name": "Game",
        "children": [
            {
                "id": "1",
                "full_name": "Game.Tests.Inventory",
                "children": [
                    {
                        "id": "2",
                        "full_name": "Game.Tests.Inventory.Adds",
                        "categories": ["Unit"],
                    },
                    {
                        "id": "3",
                        "full_name": "Game.Tests.Inventory.Removes",
                        "categories": ["Unit"],
                    },
                ],
            },
            {
                "id": "4",
                "full_name": "Game.Tests.World.Loads",
                "mode": "play",
            },
        ],
    },
    "outcomes": {
        "Game.Tests.Inventory.Removes": {
            "outcome": "Failed",
            "message": "Expected: 0 But was: 1",
            "duration_seconds": 0.2,
        }
    },
    "event_interval": 0.01,
}


async def run_command(
    command: str, params: dict[str, Any], capsys: pytest.CaptureFixture[str]
) -> tuple[int, dict[str, Any]]:
    exit_code = await run(
        command,
        params_json=json.dumps(params),
        engine_key="scripted",
        engine_config_json=json.dumps(ENGINE_CONFIG),
        run_timeout=10,
    )
    return exit_code, json.loads(capsys.readouterr().out)


async def test_runs_filtered_tests(capsys: pytest.CaptureFixture[str]) -> None:
    """Runs the edit mode unit tests and reports the scripted failure."""
    exit_code, output = await run_command(
        "run_filtered_tests",
        {"mode": "edit", "categories": ["Unit"]},
        capsys,
    )

    assert exit_code == 0
    assert output["message"] == "Executed 2 tests: 1 passed, 1 failed, 0 skipped"
    data = output["data"]
    assert [r["fullName"] for r in data["results"]] == [
        "Game.Tests.Inventory.Adds",
        "Game.Tests.Inventory.Removes",
    ]
    assert data["failedTestDetails"][0]["testSuite"] == "Game.Tests.Inventory"
    assert data["failedTestDetails"][0]["failureMessage"] == "Expected: 0 But was: 1"


async def test_runs_explicit_names(capsys: pytest.CaptureFixture[str]) -> None:
    """Explicit full names select exactly those tests."""
    exit_code, output = await run_command(
        "run_filtered_tests",
        {"mode": "play", "fullNames": ["Game.Tests.World.Loads"]},
        capsys,
    )

    assert exit_code == 0
    assert output["data"]["totalTests"] == 1
    assert output["data"]["passedTests"] == 1


async def test_no_matching_tests(capsys: pytest.CaptureFixture[str]) -> None:
    """A filter that matches nothing does not run the engine."""
    exit_code, output = await run_command(
        "run_filtered_tests",
        {"mode": "play", "namePattern": "Inventory"},
        capsys,
    )

    assert exit_code == 0
    assert output["message"] == "No tests matched the filter criteria"


async def test_invalid_mode(capsys: pytest.CaptureFixture[str]) -> None:
    """An invalid mode is reported as invalid parameters."""
    exit_code, output = await run_command(
        "run_filtered_tests", {"mode": "runtime"}, capsys
    )

    assert exit_code == 1
    assert output["message"].startswith("Invalid parameters: Invalid test mode")


async def test_parses_results_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Parses a persisted results file found under a search root."""
    results = tmp_path / "Acme" / "Game" / "TestResults.xml"
    results.parent.mkdir(parents=True)
    results.write_text(
        '<test-run total="2" passed="2" failed="0" duration="0.75" />',
        encoding="utf-8",
    )

    exit_code = await run(
        "parse_test_results",
        results_config_json=json.dumps(
            {
                "company_name": "Acme",
                "product_name": "Game",
                "search_roots": [str(tmp_path)],
            }
        ),
    )

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["message"] == "All 2 tests passed! Duration: 0.75s"
    assert output["data"]["successRate"] == 100.0
