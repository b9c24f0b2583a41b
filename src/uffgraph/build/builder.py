"""Stage 2: Semantic Graph Builder.

Builds semantic graphs from decoded UFF records:
- Deduplicates values by name
- Folds single-consumer Const nodes into initializers
- Turns Input and MarkOutput nodes into graph inputs and outputs
"""

__docformat__ = "restructuredtext"
__all__ = ["build_graph", "build_model"]

from collections import Counter

from uffgraph.build.nodes import build_node
from uffgraph.build.resolver import build_reference_table, resolve_references
from uffgraph.build.tensors import make_tensor, make_tensor_type
from uffgraph.build.types import Argument, Graph, Model, Value
from uffgraph.decode.records import FieldValue, GraphRecord, MetaGraphRecord, NodeRecord, ValueKind
from uffgraph.metadata import OperatorMetadata

CONST_OPERATION = "Const"
INPUT_OPERATION = "Input"
OUTPUT_OPERATION = "MarkOutput"

_TENSOR_FIELDS = ("dtype", "shape", "values")


def _collect_values(nodes: list[NodeRecord]) -> tuple[dict[str, Value], Counter]:
    """Create one value per name and count how often each name is consumed.

    :param nodes: Raw nodes
    :return: Value table and name -> consumer count
    """
    values: dict[str, Value] = {}
    counts: Counter = Counter()
    for node in nodes:
        for name in node.inputs:
            counts[name] += 1
            values.setdefault(name, Value(name))
        values.setdefault(node.id, Value(node.id))
    return values, counts


def _field_table(node: NodeRecord) -> dict[str, FieldValue]:
    return {field.key: field.value for field in node.fields}


def _data_type_code(value: FieldValue) -> int | None:
    return value.payload if value.kind is ValueKind.DTYPE else None


def _fold_nodes(nodes: list[NodeRecord], values: dict[str, Value], counts: Counter) -> set[int]:
    """Rebind the values of Const and Input nodes.

    A Const node without inputs, consumed exactly once and carrying dtype,
    shape and values fields becomes an initializer and is dropped.
    An Input node without inputs gets its declared type.

    :param nodes: Raw nodes
    :param values: Value table, updated in place
    :param counts: Name -> consumer count
    :return: Indices of dropped nodes
    """
    folded: set[int] = set()
    for index in reversed(range(len(nodes))):
        node = nodes[index]
        if node.inputs:
            continue

        if node.operation == CONST_OPERATION and counts[node.id] == 1:
            fields = _field_table(node)
            if all(key in fields for key in _TENSOR_FIELDS):
                tensor = make_tensor(
                    _data_type_code(fields["dtype"]), fields["shape"], fields["values"]
                )
                values[node.id] = Value(node.id, tensor.type, tensor)
                folded.add(index)

        elif node.operation == INPUT_OPERATION:
            fields = _field_table(node)
            tensor_type = None
            if "dtype" in fields and "shape" in fields:
                tensor_type = make_tensor_type(_data_type_code(fields["dtype"]), fields["shape"])
            values[node.id] = Value(node.id, tensor_type)

    return folded


def build_graph(graph: GraphRecord, metadata: OperatorMetadata) -> Graph:
    """Build a semantic graph from a raw graph.

    :param graph: Raw graph (references already resolved)
    :param metadata: Operator metadata
    :return: Semantic graph
    """
    values, counts = _collect_values(graph.nodes)
    folded = _fold_nodes(graph.nodes, values, counts)

    inputs: list[Argument] = []
    outputs: list[Argument] = []
    nodes = []
    for index, node in enumerate(graph.nodes):
        if index in folded:
            continue
        if node.operation == INPUT_OPERATION:
            inputs.append(Argument(node.id, [values[node.id]]))
            continue
        if node.operation == OUTPUT_OPERATION and len(node.inputs) == 1:
            outputs.append(Argument(node.id, [values[node.inputs[0]]]))
            continue
        nodes.append(build_node(metadata, node, values.__getitem__))

    return Graph(name=graph.id, inputs=inputs, outputs=outputs, nodes=nodes, values=values)


def build_model(meta_graph: MetaGraphRecord, metadata: OperatorMetadata) -> Model:
    """Build a semantic model from a decoded UFF container.

    :param meta_graph: Decoded model
    :param metadata: Operator metadata
    :return: Semantic model
    """
    version = meta_graph.version
    model_format = f"UFF v{version}" if version else "UFF"
    imports = [f"{descriptor.id} v{descriptor.version}" for descriptor in meta_graph.descriptors]

    references = build_reference_table(meta_graph)
    meta_graph = resolve_references(meta_graph, references)

    graphs = [build_graph(graph, metadata) for graph in meta_graph.graphs]
    return Model(format=model_format, imports=imports, graphs=graphs)
