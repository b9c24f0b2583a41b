"""Pytest configuration and shared fixtures for uffgraph tests."""

import pytest

from uffgraph.metadata import OperatorMetadata


@pytest.fixture
def metadata():
    """Bundled operator metadata."""
    return OperatorMetadata.load()
