"""Tests for tensor and type construction.

Test Coverage:
- TestTensorType: Data type codes and shape formats
- TestTensor: Value formats and the truncation placeholder
- TestTensorConversion: numpy and PyTorch views of tensor payloads
"""

import numpy as np
import pytest
import torch

from uffgraph.build import make_tensor, make_tensor_shape, make_tensor_type
from uffgraph.build.types import TensorShape, TensorType
from uffgraph.decode import FieldValue, ValueKind
from uffgraph.decode.schema import DataType
from uffgraph.errors import UnsupportedDataType, UnsupportedShapeFormat, UnsupportedValuesFormat

SHAPE_1X3 = FieldValue(ValueKind.I_LIST, [1, 3])

TRUNCATED = bytes([0x28, 0x2E, 0x2E, 0x2E]) + b"123456789" + bytes([0x2E, 0x2E, 0x2E, 0x29])


class TestTensorType:
    """Test tensor type construction."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            (DataType.DT_INT8, "int8"),
            (DataType.DT_INT16, "int16"),
            (DataType.DT_INT32, "int32"),
            (DataType.DT_INT64, "int64"),
            (DataType.DT_FLOAT16, "float16"),
            (DataType.DT_FLOAT32, "float32"),
            (7, "?"),
        ],
    )
    def test_known_codes(self, code, expected):
        """Test that each supported code maps to its semantic tag."""
        assert make_tensor_type(code).data_type == expected

    def test_unknown_code(self):
        """Test that an unknown code is rejected."""
        with pytest.raises(UnsupportedDataType):
            make_tensor_type(99)

    def test_invalid_code(self):
        """Test that the DT_INVALID code is rejected."""
        with pytest.raises(UnsupportedDataType):
            make_tensor_type(DataType.DT_INVALID)

    def test_shape(self):
        """Test that an int64 list shape becomes a tensor shape."""
        tensor_type = make_tensor_type(DataType.DT_INT32, SHAPE_1X3)
        assert tensor_type == TensorType("int32", TensorShape([1, 3]))
        assert str(tensor_type) == "int32[1,3]"

    def test_scalar_shape(self):
        """Test that an empty shape is a scalar."""
        tensor_type = make_tensor_type(DataType.DT_FLOAT32, FieldValue(ValueKind.I_LIST, []))
        assert tensor_type.shape.dimensions == []
        assert str(tensor_type) == "float32"

    def test_no_shape(self):
        """Test that a missing shape stays unknown."""
        tensor_type = make_tensor_type(DataType.DT_FLOAT32)
        assert tensor_type.shape is None
        assert str(tensor_type) == "float32"

    def test_unsupported_shape_format(self):
        """Test that shapes not encoded as int64 lists are rejected."""
        with pytest.raises(UnsupportedShapeFormat):
            make_tensor_shape(FieldValue(ValueKind.D_LIST, [1.0, 3.0]))
        with pytest.raises(UnsupportedShapeFormat):
            make_tensor_type(DataType.DT_FLOAT32, FieldValue(ValueKind.REF, "shape"))


class TestTensor:
    """Test constant tensor construction."""

    def test_blob_values(self):
        """Test that blob values are kept as bytes."""
        payload = np.array([1.0, 2.0, 3.0], dtype="<f4").tobytes()
        tensor = make_tensor(DataType.DT_FLOAT32, SHAPE_1X3, FieldValue(ValueKind.BLOB, payload))
        assert tensor.values == payload
        assert tensor.type == TensorType("float32", TensorShape([1, 3]))

    def test_unsupported_values_format(self):
        """Test that non-blob values are rejected."""
        with pytest.raises(UnsupportedValuesFormat):
            make_tensor(DataType.DT_FLOAT32, SHAPE_1X3, FieldValue(ValueKind.D_LIST, [1.0]))

    def test_truncation_placeholder(self):
        """Test that an elided payload placeholder yields no values."""
        tensor = make_tensor(DataType.DT_FLOAT32, SHAPE_1X3, FieldValue(ValueKind.BLOB, TRUNCATED))
        assert tensor.values is None

    def test_short_placeholder_is_kept(self):
        """Test that payloads of 8 bytes or fewer are never placeholders."""
        payload = b"(......)"
        assert len(payload) == 8
        tensor = make_tensor(DataType.DT_INT8, SHAPE_1X3, FieldValue(ValueKind.BLOB, payload))
        assert tensor.values == payload

    def test_missing_closing_marker_is_kept(self):
        """Test that a payload without the trailing marker is real data."""
        payload = b"(...123456789..."
        tensor = make_tensor(DataType.DT_INT8, SHAPE_1X3, FieldValue(ValueKind.BLOB, payload))
        assert tensor.values == payload


class TestTensorConversion:
    """Test numpy and PyTorch views of tensors."""

    def test_to_numpy(self):
        """Test decoding a float32 payload into a shaped array."""
        data = np.array([[1.0, 2.0, 3.0]], dtype="<f4")
        tensor = make_tensor(
            DataType.DT_FLOAT32, SHAPE_1X3, FieldValue(ValueKind.BLOB, data.tobytes())
        )
        np.testing.assert_array_equal(tensor.to_numpy(), data)

    def test_to_numpy_int64(self):
        """Test decoding an int64 payload."""
        data = np.array([4, -1], dtype="<i8")
        tensor = make_tensor(
            DataType.DT_INT64,
            FieldValue(ValueKind.I_LIST, [2]),
            FieldValue(ValueKind.BLOB, data.tobytes()),
        )
        assert tensor.to_numpy().tolist() == [4, -1]

    def test_to_numpy_elided(self):
        """Test that elided payloads have no array."""
        tensor = make_tensor(DataType.DT_FLOAT32, SHAPE_1X3, FieldValue(ValueKind.BLOB, TRUNCATED))
        assert tensor.to_numpy() is None
        assert tensor.to_torch() is None

    def test_to_numpy_unknown_type(self):
        """Test that payloads of unknown type have no array."""
        tensor = make_tensor(7, SHAPE_1X3, FieldValue(ValueKind.BLOB, b"\x00\x01\x02"))
        assert tensor.to_numpy() is None

    def test_to_torch(self):
        """Test decoding a payload into a PyTorch tensor."""
        data = np.array([[1.0, 2.0, 3.0]], dtype="<f4")
        tensor = make_tensor(
            DataType.DT_FLOAT32, SHAPE_1X3, FieldValue(ValueKind.BLOB, data.tobytes())
        )
        result = tensor.to_torch()
        assert result.dtype == torch.float32
        assert torch.equal(result, torch.tensor([[1.0, 2.0, 3.0]]))
