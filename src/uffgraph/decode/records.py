"""Stage 1: Decoded Record Types.

Plain dataclasses mirroring the ``uff.MetaGraph`` message tree. Protobuf
messages are converted here and never reach the build stage.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "DescriptorRecord",
    "FieldRecord",
    "FieldValue",
    "GraphRecord",
    "MetaGraphRecord",
    "NodeRecord",
    "ValueKind",
    "meta_graph_from_proto",
]

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueKind(Enum):
    """Variants of the field value union, keyed by their wire tag."""

    S = "s"
    S_LIST = "s_list"
    D = "d"
    D_LIST = "d_list"
    B = "b"
    B_LIST = "b_list"
    I = "i"  # noqa: E741
    I_LIST = "i_list"
    BLOB = "blob"
    REF = "ref"
    DTYPE = "dtype"
    DTYPE_LIST = "dtype_list"
    DIM_ORDERS = "dim_orders"
    DIM_ORDERS_LIST = "dim_orders_list"


@dataclass(frozen=True)
class FieldValue:
    """A single field value union.

    :param kind: Variant tag (None when the wire value set no variant)
    :param payload: Python-native payload (list for ``*_list`` variants,
        bytes for ``blob``, str key for ``ref``, int code for ``dtype``,
        ``{order: dims}`` dict for ``dim_orders``)
    """

    kind: ValueKind | None
    payload: Any = None


@dataclass(frozen=True)
class FieldRecord:
    """Key/value pair of a node field or reference table entry."""

    key: str
    value: FieldValue


@dataclass(frozen=True)
class NodeRecord:
    """Raw UFF node.

    :param id: Node identifier, unique within its graph
    :param operation: Operation tag (e.g. "Conv", "Const", "Input")
    :param inputs: Names of consumed values, in order
    :param fields: Node fields, in declaration order
    """

    id: str
    operation: str
    inputs: list[str]
    fields: list[FieldRecord]


@dataclass(frozen=True)
class GraphRecord:
    id: str
    nodes: list[NodeRecord]


@dataclass(frozen=True)
class DescriptorRecord:
    id: str
    version: int


@dataclass(frozen=True)
class MetaGraphRecord:
    """Top-level decoded UFF container.

    :param version: UFF version (None when unset)
    :param descriptors: Imported operation sets
    :param referenced_data: Reference table entries, in order
    :param graphs: Raw graphs
    """

    version: int | None
    descriptors: list[DescriptorRecord]
    referenced_data: list[FieldRecord]
    graphs: list[GraphRecord]


def _orders(message) -> dict[int, list[int]]:
    return {entry.key: list(entry.value.val) for entry in message.orders}


# Payload readers per variant; unlisted variants are scalars taken as-is.
_READ_PAYLOAD_MAP: dict[ValueKind, Callable[[Any], Any]] = {
    ValueKind.S_LIST: lambda x: list(x.val),
    ValueKind.D_LIST: lambda x: list(x.val),
    ValueKind.B_LIST: lambda x: list(x.val),
    ValueKind.I_LIST: lambda x: list(x.val),
    ValueKind.BLOB: bytes,
    ValueKind.DTYPE: int,
    ValueKind.DTYPE_LIST: lambda x: [int(code) for code in x.val],
    ValueKind.DIM_ORDERS: _orders,
    ValueKind.DIM_ORDERS_LIST: lambda x: [_orders(orders) for orders in x.val],
}


def _field_value_from_proto(data) -> FieldValue:
    """Convert a ``uff.Data`` message to a field value union.

    :param data: ``uff.Data`` message
    :return: Field value (kind None if no variant is set)
    """
    which = data.WhichOneof("data_oneof")
    if which is None:
        return FieldValue(None)
    kind = ValueKind(which)
    payload = getattr(data, which)
    read = _READ_PAYLOAD_MAP.get(kind)
    return FieldValue(kind, read(payload) if read is not None else payload)


def _fields_from_proto(entries) -> list[FieldRecord]:
    return [FieldRecord(entry.key, _field_value_from_proto(entry.value)) for entry in entries]


def _node_from_proto(node) -> NodeRecord:
    return NodeRecord(
        id=node.id,
        operation=node.operation,
        inputs=list(node.inputs),
        fields=_fields_from_proto(node.fields),
    )


def meta_graph_from_proto(meta_graph) -> MetaGraphRecord:
    """Convert a decoded ``uff.MetaGraph`` message to records.

    :param meta_graph: ``uff.MetaGraph`` message
    :return: Record tree
    """
    return MetaGraphRecord(
        version=meta_graph.version or None,
        descriptors=[
            DescriptorRecord(descriptor.id, descriptor.version)
            for descriptor in meta_graph.descriptors
        ],
        referenced_data=_fields_from_proto(meta_graph.referenced_data),
        graphs=[
            GraphRecord(graph.id, [_node_from_proto(node) for node in graph.nodes])
            for graph in meta_graph.graphs
        ],
    )
