"""
Root conftest.py: registers custom markers.

Markers:
  @pytest.mark.integration: spawns the CLI in a subprocess; skipped unless
                             INTEGRATION_TESTS=1 or --integration is given
"""
from __future__ import annotations

import os

import pytest


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as spawning the CLI (run with INTEGRATION_TESTS=1 or --integration flag)",
    )


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.integration",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip @pytest.mark.integration tests unless --integration flag or INTEGRATION_TESTS=1 is set."""
    run_integration = config.getoption("--integration") or os.environ.get(
        "INTEGRATION_TESTS", ""
    ).lower() in ("1", "true", "yes")
    skip = pytest.mark.skip(reason="Integration test; run with --integration or INTEGRATION_TESTS=1")
    for item in items:
        if "integration" in item.keywords and not run_integration:
            item.add_marker(skip)
