"""Stage 2: Semantic Graph Type Definitions.

Defines the typed graph model built from decoded UFF records.
Values are shared by name; arguments reference them and never copy them.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "Argument",
    "Attribute",
    "Graph",
    "Model",
    "Node",
    "Tensor",
    "TensorShape",
    "TensorType",
    "Value",
]

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import torch

from uffgraph.errors import InvalidValueIdentifier
from uffgraph.metadata import OperatorDescriptor

# Semantic data type -> numpy dtype (UFF payloads are little-endian)
_NUMPY_DTYPES = {
    "int8": np.dtype("<i1"),
    "int16": np.dtype("<i2"),
    "int32": np.dtype("<i4"),
    "int64": np.dtype("<i8"),
    "float16": np.dtype("<f2"),
    "float32": np.dtype("<f4"),
}


@dataclass(frozen=True)
class TensorShape:
    """Tensor dimensions (empty for a scalar)."""

    dimensions: list[int]

    def __str__(self) -> str:
        if self.dimensions:
            return "[" + ",".join(str(dim) for dim in self.dimensions) + "]"
        return ""


@dataclass(frozen=True)
class TensorType:
    """Element type and optional shape of a tensor.

    :param data_type: One of int8, int16, int32, int64, float16, float32, or "?"
    :param shape: Tensor shape (None if unknown)
    """

    data_type: str
    shape: TensorShape | None = None

    def __str__(self) -> str:
        return self.data_type + (str(self.shape) if self.shape is not None else "")


@dataclass(frozen=True)
class Tensor:
    """Constant tensor.

    :param type: Tensor type
    :param values: Raw little-endian payload, or None if the payload was elided
    """

    type: TensorType
    values: bytes | None

    def to_numpy(self) -> np.ndarray | None:
        """Decode the payload into a numpy array.

        :return: Array shaped like the tensor, or None if the payload was elided
            or the data type is unknown
        """
        dtype = _NUMPY_DTYPES.get(self.type.data_type)
        if self.values is None or dtype is None:
            return None
        array = np.frombuffer(self.values, dtype=dtype)
        if self.type.shape is not None:
            dims = tuple(self.type.shape.dimensions)
            if math.prod(dims) == array.size:
                array = array.reshape(dims)
        return array

    def to_torch(self) -> torch.Tensor | None:
        """Decode the payload into a PyTorch tensor.

        :return: Tensor, or None when :meth:`to_numpy` returns None
        """
        array = self.to_numpy()
        if array is None:
            return None
        return torch.from_numpy(array.astype(array.dtype.newbyteorder("="), copy=True))


@dataclass(frozen=True)
class Value:
    """Named graph value (node output, free input, or edge).

    :param name: Unique name within the graph
    :param type: Tensor type (None if unknown)
    :param initializer: Constant data (set for folded Const nodes)
    """

    name: str
    type: TensorType | None = None
    initializer: Tensor | None = None

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise InvalidValueIdentifier(f"Invalid value identifier {self.name!r}.")


@dataclass(frozen=True)
class Argument:
    """Named role holding one or more values."""

    name: str
    value: list[Value]


@dataclass(frozen=True)
class Attribute:
    """Normalized node field.

    :param name: Field key
    :param type: Semantic type tag (None for blob and dimension order values)
    :param value: Normalized payload
    """

    name: str
    type: str | None
    value: Any


@dataclass(frozen=True)
class Node:
    """Computation node.

    :param name: Originating node id
    :param type: Operator descriptor
    :param inputs: Bound input arguments, in order
    :param outputs: Single "output" argument
    :param attributes: Normalized fields, in declaration order
    """

    name: str
    type: OperatorDescriptor
    inputs: list[Argument]
    outputs: list[Argument]
    attributes: list[Attribute]


@dataclass(frozen=True)
class Graph:
    """Semantic graph.

    :param name: Graph id
    :param inputs: Graph inputs (one per Input node)
    :param outputs: Graph outputs (one per MarkOutput node)
    :param nodes: Computation nodes, in declaration order
    :param values: Deduplicated value table (name -> Value)
    """

    name: str
    inputs: list[Argument]
    outputs: list[Argument]
    nodes: list[Node]
    values: dict[str, Value] = field(default_factory=dict)


@dataclass(frozen=True)
class Model:
    """Loaded UFF model.

    :param format: Display string ("UFF" or "UFF v<version>")
    :param imports: Imported descriptors as "<id> v<version>"
    :param graphs: Built graphs
    """

    format: str
    imports: list[str]
    graphs: list[Graph]
