#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Pytest configuration and shared fixtures for the difftrail test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from difftrail.options import HighlightMarkers, HighlightOptions

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=300, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=100)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

# Neutral markers that never occur in the test inputs
BEGIN = b"{"
END = b"}"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture
def neutral_options() -> HighlightOptions:
    """Highlight options using ``{`` and ``}`` as markers."""
    return HighlightOptions(markers=HighlightMarkers(BEGIN, END))


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with an empty cwd and home so no real config file is discovered."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setattr("pathlib.Path.home", lambda: home)
    monkeypatch.delenv("DIFFTRAIL_CONFIG", raising=False)
    monkeypatch.delenv("DIFFTRAIL_PAGER", raising=False)
    return work
