"""Stage 2: Semantic Graph Construction.

This module builds typed graphs from decoded UFF records.
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
    "bind_arguments",
    "build_attribute",
    "build_graph",
    "build_model",
    "build_node",
    "build_reference_table",
    "make_tensor",
    "make_tensor_shape",
    "make_tensor_type",
    "resolve_references",
]

from uffgraph.build.builder import build_graph, build_model
from uffgraph.build.nodes import bind_arguments, build_attribute, build_node
from uffgraph.build.resolver import build_reference_table, resolve_references
from uffgraph.build.tensors import make_tensor, make_tensor_shape, make_tensor_type
from uffgraph.build.types import (
    Argument,
    Attribute,
    Graph,
    Model,
    Node,
    Tensor,
    TensorShape,
    TensorType,
    Value,
)
