"""Stage 2: Node and Attribute Normalization.

Binds raw node inputs to named arguments using operator metadata and maps
field value unions to typed attributes.
"""

__docformat__ = "restructuredtext"
__all__ = ["bind_arguments", "build_attribute", "build_node"]

from collections.abc import Callable
from typing import Any

from uffgraph.build.tensors import make_tensor_type
from uffgraph.build.types import Argument, Attribute, Node, Value
from uffgraph.decode.records import FieldRecord, NodeRecord, ValueKind
from uffgraph.errors import UnsupportedAttributeValue
from uffgraph.metadata import OperatorDescriptor, OperatorMetadata

OUTPUT_ARGUMENT = "output"
FIRST_EXTRA_INPUT = "input"


def _data_type_name(code: int) -> str:
    return make_tensor_type(code).data_type


# Variant -> (semantic type, payload normalizer)
ATTRIBUTE_TYPE_MAP: dict[ValueKind, tuple[str | None, Callable[[Any], Any]]] = {
    ValueKind.S: ("string", lambda x: x),
    ValueKind.S_LIST: ("string[]", list),
    ValueKind.D: ("float64", lambda x: x),
    ValueKind.D_LIST: ("float64[]", list),
    ValueKind.B: ("boolean", lambda x: x),
    ValueKind.B_LIST: ("boolean[]", list),
    ValueKind.I: ("int64", lambda x: x),
    ValueKind.I_LIST: ("int64[]", list),
    ValueKind.BLOB: (None, lambda x: x),
    ValueKind.REF: ("ref", lambda x: x),
    ValueKind.DTYPE: ("uff.DataType", _data_type_name),
    ValueKind.DTYPE_LIST: ("uff.DataType[]", lambda x: [_data_type_name(code) for code in x]),
    ValueKind.DIM_ORDERS: (None, lambda x: x),
    ValueKind.DIM_ORDERS_LIST: (None, list),
}


def build_attribute(field: FieldRecord) -> Attribute:
    """Normalize a node field into an attribute.

    :param field: Raw node field
    :return: Typed attribute
    :raises UnsupportedAttributeValue: If the value variant is not supported
    """
    mapping = ATTRIBUTE_TYPE_MAP.get(field.value.kind)
    if mapping is None:
        raise UnsupportedAttributeValue(
            f"Unsupported attribute '{field.key}' value {field.value!r}."
        )
    attribute_type, normalize = mapping
    return Attribute(field.key, attribute_type, normalize(field.value.payload))


def bind_arguments(
    descriptor: OperatorDescriptor,
    input_names: list[str],
    value: Callable[[str], Value],
) -> list[Argument]:
    """Bind a node's raw input names to arguments.

    Declared slots consume a prefix of the inputs in order: a list slot takes
    all remaining inputs, any other slot takes one. An optional slot is skipped
    when no inputs remain. Leftover inputs become positional arguments named
    "input" (position 0) or by their position.

    :param descriptor: Operator descriptor
    :param input_names: Raw input value names
    :param value: Name -> Value lookup
    :return: Input arguments
    """
    arguments: list[Argument] = []
    if not input_names:
        return arguments

    index = 0
    for slot in descriptor.inputs:
        if index < len(input_names) or not slot.optional:
            count = len(input_names) - index if slot.list else 1
            values = [value(name) for name in input_names[index : index + count]]
            index += count
            arguments.append(Argument(slot.name, values))

    for position, name in enumerate(input_names[index:], start=index):
        argument_name = FIRST_EXTRA_INPUT if position == 0 else str(position)
        arguments.append(Argument(argument_name, [value(name)]))

    return arguments


def build_node(
    metadata: OperatorMetadata,
    record: NodeRecord,
    value: Callable[[str], Value],
) -> Node:
    """Build a semantic node from a raw node.

    :param metadata: Operator metadata
    :param record: Raw node
    :param value: Name -> Value lookup
    :return: Semantic node
    """
    descriptor = metadata.type(record.operation) or OperatorDescriptor(name=record.operation)
    return Node(
        name=record.id,
        type=descriptor,
        inputs=bind_arguments(descriptor, record.inputs, value),
        outputs=[Argument(OUTPUT_ARGUMENT, [value(record.id)])],
        attributes=[build_attribute(field) for field in record.fields],
    )
