"""Pytest configuration and shared fixtures for the structedit test suite.

This module registers the Hypothesis profiles and custom markers, and provides
fixtures shared by the unit tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings
from prosemirror.model import Schema
from utils import schema as test_schema

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def schema() -> Schema:
    """Provide the schema the test documents are built with.

    Returns
    -------
    Schema
        Schema with paragraphs, blockquotes, tables and atom nodes.

    """
    return test_schema
