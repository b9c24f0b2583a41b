"""Stage 1: Record Decoding.

This module decodes binary and text UFF containers into plain record trees.
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
    "decode_binary",
    "decode_text",
    "detect_format",
    "load_meta_graph",
    "meta_graph_from_proto",
]

from uffgraph.decode.reader import decode_binary, decode_text, detect_format, load_meta_graph
from uffgraph.decode.records import (
    DescriptorRecord,
    FieldRecord,
    FieldValue,
    GraphRecord,
    MetaGraphRecord,
    NodeRecord,
    ValueKind,
    meta_graph_from_proto,
)
