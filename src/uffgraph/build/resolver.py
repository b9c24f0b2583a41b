"""Stage 2: Reference Resolution.

Replaces ``ref`` field values with the entries of the model's reference table.
"""

__docformat__ = "restructuredtext"
__all__ = ["build_reference_table", "resolve_references"]

import warnings
from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType

from uffgraph.decode.records import (
    FieldRecord,
    FieldValue,
    GraphRecord,
    MetaGraphRecord,
    NodeRecord,
    ValueKind,
)


def build_reference_table(meta_graph: MetaGraphRecord) -> Mapping[str, FieldValue]:
    """Build the read-only reference table of a model.

    :param meta_graph: Decoded model
    :return: Reference key -> field value (later entries win on duplicate keys)
    """
    return MappingProxyType({item.key: item.value for item in meta_graph.referenced_data})


def _resolve_field(
    field: FieldRecord, references: Mapping[str, FieldValue], unresolved: list[str]
) -> FieldRecord:
    if field.value.kind is not ValueKind.REF:
        return field
    resolved = references.get(field.value.payload)
    if resolved is None:
        unresolved.append(field.value.payload)
        return field
    return replace(field, value=resolved)


def _resolve_node(
    node: NodeRecord, references: Mapping[str, FieldValue], unresolved: list[str]
) -> NodeRecord:
    fields = [_resolve_field(field, references, unresolved) for field in node.fields]
    return replace(node, fields=fields)


def resolve_references(
    meta_graph: MetaGraphRecord, references: Mapping[str, FieldValue]
) -> MetaGraphRecord:
    """Resolve ``ref`` field values across all graphs.

    References missing from the table are left in place as ``ref`` values.

    :param meta_graph: Decoded model
    :param references: Reference table
    :return: Model whose node fields carry the referenced values
    """
    unresolved: list[str] = []
    graphs = [
        GraphRecord(graph.id, [_resolve_node(node, references, unresolved) for node in graph.nodes])
        for graph in meta_graph.graphs
    ]

    if unresolved:
        warnings.warn(
            f"{len(unresolved)} field reference(s) not found in referenced data "
            f"(e.g. '{unresolved[0]}'). Keeping them as 'ref' values.",
            UserWarning,
            stacklevel=2,
        )

    return replace(meta_graph, graphs=graphs)
