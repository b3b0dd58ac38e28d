"""Locate and read persisted test results files."""

import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from pydantic import BaseModel, Field

log = logging.getLogger(__name__)


class ResultsLocatorConfig(BaseModel):
    """Where to look for the test results file."""

    company_name: str = ""
    product_name: str = ""
    file_name: str = "TestResults.xml"
    # Takes precedence over every search root when set
    results_file: Path | None = None
    search_roots: Sequence[Path] = Field(default_factory=tuple)


def platform_roots(
    platform: str = sys.platform,
    home: Path | None = None,
    environ: Mapping[str, str] = os.environ,
) -> Sequence[Path]:
    """Return the per-user directories test runners persist results under.

    - Linux: ~/.config/unity3d
    - macOS: ~/Library/Application Support
    - Windows: %APPDATA%/../LocalLow
    """
    home = home if home is not None else Path.home()

    if platform.startswith("win"):
        appdata = environ.get("APPDATA")
        if appdata:
            return [Path(appdata).parent / "LocalLow"]
        return [home / "AppData" / "LocalLow"]

    if platform == "darwin":
        return [home / "Library" / "Application Support"]

    return [home / ".config" / "unity3d"]


def candidate_paths(
    config: ResultsLocatorConfig, roots: Sequence[Path] | None = None
) -> Sequence[Path]:
    """List the paths that may hold the results file, most specific first.

    Without a company and product name, every ``<root>/*/*/<file_name>``
    is a candidate.
    """
    roots = roots if roots is not None else platform_roots()
    candidates: list[Path] = []

    if config.results_file is not None:
        candidates.append(config.results_file)

    for root in [*config.search_roots, *roots]:
        if config.company_name and config.product_name:
            candidates.append(
                root / config.company_name / config.product_name / config.file_name
            )
        elif root.is_dir():
            candidates.extend(sorted(root.glob(f"*/*/{config.file_name}")))

    return candidates


def locate_results_file(
    config: ResultsLocatorConfig, roots: Sequence[Path] | None = None
) -> Path | None:
    """Return the most recently written results file, or None if none exists."""
    existing = [path for path in candidate_paths(config, roots) if path.is_file()]
    if not existing:
        log.info("No test results file found")
        return None

    latest = max(existing, key=lambda path: path.stat().st_mtime)
    log.info("Located test results file: %s", latest)
    return latest


def read_results_file(
    config: ResultsLocatorConfig,
    path: Path | None = None,
    roots: Sequence[Path] | None = None,
) -> str:
    """Read the raw content of the results file.

    Args:
        config: Locator configuration
        path: Explicit file to read instead of locating one
        roots: Search roots overriding the platform defaults

    Raises:
        FileNotFoundError: If no results file can be found
        OSError: If the file cannot be read

    """
    if path is None:
        path = locate_results_file(config, roots)
    if path is None:
        raise FileNotFoundError("No test results file found in any search location")
    if not path.is_file():
        raise FileNotFoundError(f"Test results file does not exist: {path}")

    # Results written on Windows usually start with a byte order mark
    return path.read_text(encoding="utf-8-sig")
