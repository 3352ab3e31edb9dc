"""Pytest fixtures shared across benchart tests."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

TESTDATA_DIR = Path(__file__).parent / "testdata"


@pytest.fixture
def testdata_dir() -> Path:
    """Return the directory holding golden benchstat inputs."""

    return TESTDATA_DIR


@pytest.fixture
def input_csv(testdata_dir: Path) -> Path:
    """Return the sample benchstat CSV file."""

    return testdata_dir / "input.csv"


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django or file IO.
    - `integration`: tests touching Django, management commands, or IO.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
