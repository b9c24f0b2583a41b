"""Stage 2: Tensor and Type Construction.

Converts data type codes, shape fields and value blobs into semantic tensor types.
"""

__docformat__ = "restructuredtext"
__all__ = ["make_tensor", "make_tensor_shape", "make_tensor_type"]

from uffgraph.build.types import Tensor, TensorShape, TensorType
from uffgraph.decode.records import FieldValue, ValueKind
from uffgraph.decode.schema import DataType
from uffgraph.errors import UnsupportedDataType, UnsupportedShapeFormat, UnsupportedValuesFormat

# Code 7 marks an explicitly unknown element type.
UNKNOWN_DATA_TYPE_CODE = 7

DATA_TYPE_NAMES: dict[int, str] = {
    DataType.DT_INT8: "int8",
    DataType.DT_INT16: "int16",
    DataType.DT_INT32: "int32",
    DataType.DT_INT64: "int64",
    DataType.DT_FLOAT16: "float16",
    DataType.DT_FLOAT32: "float32",
    UNKNOWN_DATA_TYPE_CODE: "?",
}

# Exporters write "(...<size>...)" in place of payloads too large to embed.
TRUNCATED_PREFIX = b"(..."
TRUNCATED_SUFFIX = b"...)"
_MIN_TRUNCATED_LENGTH = len(TRUNCATED_PREFIX) + len(TRUNCATED_SUFFIX)


def make_tensor_shape(shape: FieldValue) -> TensorShape:
    """Build a tensor shape from a shape field.

    :param shape: Shape field value (must be an int64 list)
    :return: Tensor shape
    :raises UnsupportedShapeFormat: If the shape is not an int64 list
    """
    if shape.kind is not ValueKind.I_LIST:
        kind = shape.kind.value if shape.kind is not None else None
        raise UnsupportedShapeFormat(f"Unsupported shape format {kind!r}.")
    return TensorShape(list(shape.payload))


def make_tensor_type(data_type: int | None, shape: FieldValue | None = None) -> TensorType:
    """Build a tensor type from a data type code and optional shape field.

    :param data_type: UFF data type code
    :param shape: Shape field value (None if unknown)
    :return: Tensor type
    :raises UnsupportedDataType: If the code is not a supported data type
    """
    name = DATA_TYPE_NAMES.get(data_type) if isinstance(data_type, int) else None
    if name is None:
        raise UnsupportedDataType(f"Unsupported data type {data_type!r}.")
    return TensorType(name, make_tensor_shape(shape) if shape is not None else None)


def _is_truncated(values: bytes) -> bool:
    return (
        len(values) > _MIN_TRUNCATED_LENGTH
        and values.startswith(TRUNCATED_PREFIX)
        and values.endswith(TRUNCATED_SUFFIX)
    )


def make_tensor(data_type: int | None, shape: FieldValue | None, values: FieldValue) -> Tensor:
    """Build a constant tensor.

    :param data_type: UFF data type code
    :param shape: Shape field value
    :param values: Values field value (must be a blob)
    :return: Tensor (values None if the payload is a truncation placeholder)
    :raises UnsupportedValuesFormat: If the values are not a blob
    """
    tensor_type = make_tensor_type(data_type, shape)
    if values.kind is not ValueKind.BLOB:
        kind = values.kind.value if values.kind is not None else None
        raise UnsupportedValuesFormat(f"Unsupported values format {kind!r}.")
    payload = bytes(values.payload)
    return Tensor(tensor_type, None if _is_truncated(payload) else payload)
