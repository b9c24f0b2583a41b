"""Shared pytest configuration and fixtures for uffgraph unit tests.

This module provides:
- Model file fixtures (binary and text containers)
"""

import pytest
from google.protobuf import text_format

from tests.test_units.test_uffgraph.fixtures.synthetic_models import SyntheticUFFModels

# ===== Binary Model Fixtures =====


@pytest.fixture
def conv_model(tmp_path):
    """Create and save Input -> Conv -> MarkOutput binary UFF model."""
    path = tmp_path / "conv.uff"
    path.write_bytes(SyntheticUFFModels.create_conv_model().SerializeToString())
    return str(path)


@pytest.fixture
def const_model(tmp_path):
    """Create and save binary UFF model with a foldable Const node."""
    path = tmp_path / "const.uff"
    path.write_bytes(SyntheticUFFModels.create_const_model().SerializeToString())
    return str(path)


@pytest.fixture
def shared_const_model(tmp_path):
    """Create and save binary UFF model with a Const node used twice."""
    path = tmp_path / "shared_const.pb"
    path.write_bytes(SyntheticUFFModels.create_shared_const_model().SerializeToString())
    return str(path)


@pytest.fixture
def reference_model(tmp_path):
    """Create and save binary UFF model with referenced Const data."""
    path = tmp_path / "reference.uff"
    path.write_bytes(SyntheticUFFModels.create_reference_model().SerializeToString())
    return str(path)


@pytest.fixture
def truncated_const_model(tmp_path):
    """Create and save binary UFF model with an elided Const payload."""
    path = tmp_path / "truncated.uff"
    path.write_bytes(SyntheticUFFModels.create_truncated_const_model().SerializeToString())
    return str(path)


# ===== Text Model Fixtures =====


@pytest.fixture
def conv_text_model(tmp_path):
    """Create and save Input -> Conv -> MarkOutput text UFF model."""
    path = tmp_path / "conv.pbtxt"
    path.write_text(text_format.MessageToString(SyntheticUFFModels.create_conv_model()))
    return str(path)


@pytest.fixture
def const_text_model(tmp_path):
    """Create and save text UFF model with a foldable Const node."""
    path = tmp_path / "const.uff.txt"
    path.write_text(text_format.MessageToString(SyntheticUFFModels.create_const_model()))
    return str(path)
