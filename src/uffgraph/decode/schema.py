"""Stage 1: UFF Protobuf Schema.

Declares the ``uff`` protobuf package (``uff.proto``) in Python and builds the
message classes at import time, so no generated ``_pb2`` module is required.

Map fields of the UFF schema (``Node.fields``, ``MetaGraph.referenced_data``,
``DimensionOrders.orders``) are declared as repeated key/value entry messages.
The wire encoding is identical, and the entries keep their declaration order.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "Data",
    "DataType",
    "Descriptor",
    "DimensionOrders",
    "FieldEntry",
    "Graph",
    "ListBool",
    "ListDataType",
    "ListDimensionOrders",
    "ListDouble",
    "ListInt64",
    "ListString",
    "MetaGraph",
    "Node",
    "OrderEntry",
]

from enum import IntEnum

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_PACKAGE = "uff"

_FieldProto = descriptor_pb2.FieldDescriptorProto

_OPTIONAL = _FieldProto.LABEL_OPTIONAL
_REPEATED = _FieldProto.LABEL_REPEATED

_STRING = _FieldProto.TYPE_STRING
_DOUBLE = _FieldProto.TYPE_DOUBLE
_BOOL = _FieldProto.TYPE_BOOL
_INT32 = _FieldProto.TYPE_INT32
_INT64 = _FieldProto.TYPE_INT64
_BYTES = _FieldProto.TYPE_BYTES
_ENUM = _FieldProto.TYPE_ENUM
_MESSAGE = _FieldProto.TYPE_MESSAGE


class DataType(IntEnum):
    """Tensor element type codes: (kind << 16) | bit width.

    Kind 1 is signed integer, kind 2 is floating point.
    """

    DT_INVALID = 0
    DT_INT8 = 0x10008
    DT_INT16 = 0x10010
    DT_INT32 = 0x10020
    DT_INT64 = 0x10040
    DT_FLOAT16 = 0x20010
    DT_FLOAT32 = 0x20020


# (name, number, label, type, type_name)
# Message type names are relative to the ``uff`` package.
_MESSAGES: dict[str, list[tuple]] = {
    "ListString": [("val", 1, _REPEATED, _STRING, None)],
    "ListDouble": [("val", 1, _REPEATED, _DOUBLE, None)],
    "ListBool": [("val", 1, _REPEATED, _BOOL, None)],
    "ListInt64": [("val", 1, _REPEATED, _INT64, None)],
    "ListDataType": [("val", 1, _REPEATED, _ENUM, "DataType")],
    "OrderEntry": [
        ("key", 1, _OPTIONAL, _INT32, None),
        ("value", 2, _OPTIONAL, _MESSAGE, "ListInt64"),
    ],
    "DimensionOrders": [("orders", 1, _REPEATED, _MESSAGE, "OrderEntry")],
    "ListDimensionOrders": [("val", 1, _REPEATED, _MESSAGE, "DimensionOrders")],
    "Data": [
        ("s", 1, _OPTIONAL, _STRING, None),
        ("s_list", 2, _OPTIONAL, _MESSAGE, "ListString"),
        ("d", 3, _OPTIONAL, _DOUBLE, None),
        ("d_list", 4, _OPTIONAL, _MESSAGE, "ListDouble"),
        ("b", 5, _OPTIONAL, _BOOL, None),
        ("b_list", 6, _OPTIONAL, _MESSAGE, "ListBool"),
        ("i", 7, _OPTIONAL, _INT64, None),
        ("i_list", 8, _OPTIONAL, _MESSAGE, "ListInt64"),
        ("blob", 9, _OPTIONAL, _BYTES, None),
        ("ref", 100, _OPTIONAL, _STRING, None),
        ("dtype", 101, _OPTIONAL, _ENUM, "DataType"),
        ("dtype_list", 102, _OPTIONAL, _MESSAGE, "ListDataType"),
        ("dim_orders", 103, _OPTIONAL, _MESSAGE, "DimensionOrders"),
        ("dim_orders_list", 104, _OPTIONAL, _MESSAGE, "ListDimensionOrders"),
    ],
    "FieldEntry": [
        ("key", 1, _OPTIONAL, _STRING, None),
        ("value", 2, _OPTIONAL, _MESSAGE, "Data"),
    ],
    "Descriptor": [
        ("id", 1, _OPTIONAL, _STRING, None),
        ("version", 2, _OPTIONAL, _INT64, None),
    ],
    "Node": [
        ("id", 1, _OPTIONAL, _STRING, None),
        ("inputs", 2, _REPEATED, _STRING, None),
        ("operation", 3, _OPTIONAL, _STRING, None),
        ("fields", 4, _REPEATED, _MESSAGE, "FieldEntry"),
        ("extra_fields", 5, _REPEATED, _MESSAGE, "FieldEntry"),
    ],
    "Graph": [
        ("id", 1, _OPTIONAL, _STRING, None),
        ("nodes", 2, _REPEATED, _MESSAGE, "Node"),
        ("extra_fields", 100, _REPEATED, _MESSAGE, "FieldEntry"),
    ],
    "MetaGraph": [
        ("version", 1, _OPTIONAL, _INT64, None),
        ("descriptor_core_version", 2, _OPTIONAL, _INT64, None),
        ("descriptors", 3, _REPEATED, _MESSAGE, "Descriptor"),
        ("graphs", 4, _REPEATED, _MESSAGE, "Graph"),
        ("referenced_data", 5, _REPEATED, _MESSAGE, "FieldEntry"),
        ("extra_fields", 100, _REPEATED, _MESSAGE, "FieldEntry"),
    ],
}

# Every field of ``Data`` belongs to this oneof.
_ONEOF_MESSAGES = {"Data": "data_oneof"}


def _build_file_proto() -> descriptor_pb2.FileDescriptorProto:
    """Assemble the ``uff.proto`` file descriptor.

    :return: File descriptor proto for the ``uff`` package
    """
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="uff/uff.proto", package=_PACKAGE, syntax="proto3"
    )

    enum_proto = file_proto.enum_type.add(name="DataType")
    for member in DataType:
        enum_proto.value.add(name=member.name, number=member.value)

    for message_name, fields in _MESSAGES.items():
        message_proto = file_proto.message_type.add(name=message_name)
        oneof_name = _ONEOF_MESSAGES.get(message_name)
        if oneof_name is not None:
            message_proto.oneof_decl.add(name=oneof_name)
        for name, number, label, field_type, type_name in fields:
            field_proto = message_proto.field.add(
                name=name, number=number, label=label, type=field_type
            )
            if type_name is not None:
                field_proto.type_name = f".{_PACKAGE}.{type_name}"
            if oneof_name is not None:
                field_proto.oneof_index = 0

    return file_proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_build_file_proto().SerializeToString())


def _message_class(name: str) -> type:
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{_PACKAGE}.{name}"))


ListString = _message_class("ListString")
ListDouble = _message_class("ListDouble")
ListBool = _message_class("ListBool")
ListInt64 = _message_class("ListInt64")
ListDataType = _message_class("ListDataType")
OrderEntry = _message_class("OrderEntry")
DimensionOrders = _message_class("DimensionOrders")
ListDimensionOrders = _message_class("ListDimensionOrders")
Data = _message_class("Data")
FieldEntry = _message_class("FieldEntry")
Descriptor = _message_class("Descriptor")
Node = _message_class("Node")
Graph = _message_class("Graph")
MetaGraph = _message_class("MetaGraph")
