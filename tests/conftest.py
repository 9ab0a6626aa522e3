"""Pytest configuration and shared fixtures for the htmldown test suite.

This module provides shared fixtures and test configuration that are used
across the entire test suite.
"""

import os

import pytest

from htmldown import HtmlToMarkdown, MarkdownOptions

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using hypothesis")


@pytest.fixture
def default_options() -> MarkdownOptions:
    """Provide default translation options."""
    return MarkdownOptions()


@pytest.fixture
def converter() -> HtmlToMarkdown:
    """Provide a converter built with default options."""
    return HtmlToMarkdown()
