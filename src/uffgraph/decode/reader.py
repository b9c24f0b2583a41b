"""Stage 1: UFF Record Decoding.

Reads binary (``uff.pb``) and text (``uff.pbtxt``) UFF containers into
``MetaGraphRecord`` trees.
"""

__docformat__ = "restructuredtext"
__all__ = ["decode_binary", "decode_text", "detect_format", "load_meta_graph"]

from pathlib import Path

from google.protobuf import empty_pb2, message, text_format, unknown_fields

from uffgraph.decode import schema
from uffgraph.decode.records import MetaGraphRecord, meta_graph_from_proto
from uffgraph.errors import DecodeError

BINARY_FORMAT = "uff.pb"
TEXT_FORMAT = "uff.pbtxt"

BINARY_EXTENSIONS = ("uff", "pb")
TEXT_EXTENSIONS = ("pbtxt",)
TEXT_SUFFIX = ".uff.txt"

# Top-level MetaGraph wire layout: field number -> wire type.
# version and descriptor_core_version are varints, descriptors and graphs are
# length-delimited, referenced_data (optional) is length-delimited.
_WIRE_VARINT = 0
_WIRE_LENGTH_DELIMITED = 2

_REQUIRED_BINARY_TAGS = {
    1: _WIRE_VARINT,
    2: _WIRE_VARINT,
    3: _WIRE_LENGTH_DELIMITED,
    4: _WIRE_LENGTH_DELIMITED,
}
_OPTIONAL_BINARY_TAGS = {5: _WIRE_LENGTH_DELIMITED}

_REQUIRED_TEXT_KEYS = {"version", "descriptors", "graphs"}
_TEXT_OPENERS = ("{", "<", "[")
_TEXT_CLOSERS = ("}", ">", "]")
_TEXT_SEPARATORS = (",", ";")


def decode_binary(data: bytes) -> MetaGraphRecord:
    """Decode a binary UFF container.

    :param data: Serialized ``uff.MetaGraph``
    :return: Decoded record tree
    :raises DecodeError: If the bytes do not parse as ``uff.MetaGraph``
    """
    meta_graph = schema.MetaGraph()
    try:
        meta_graph.ParseFromString(data)
    except message.DecodeError as error:
        reason = str(error).removesuffix(".")
        raise DecodeError(f"File format is not uff.MetaGraph ({reason}).") from error
    return meta_graph_from_proto(meta_graph)


def decode_text(text: str) -> MetaGraphRecord:
    """Decode a text UFF container.

    :param text: ``uff.MetaGraph`` in protobuf text format
    :return: Decoded record tree
    :raises DecodeError: If the text does not parse as ``uff.MetaGraph``
    """
    meta_graph = schema.MetaGraph()
    try:
        text_format.Parse(text, meta_graph)
    except text_format.ParseError as error:
        raise DecodeError(f"File text format is not uff.MetaGraph ({error}).") from error
    return meta_graph_from_proto(meta_graph)


def _scan_wire_tags(data: bytes) -> dict[int, int]:
    """Collect top-level field numbers and wire types of a protobuf message.

    :param data: Serialized message
    :return: Field number -> wire type (empty if the bytes are not a message)
    """
    try:
        parsed = empty_pb2.Empty.FromString(data)
    except message.DecodeError:
        return {}
    return {field.field_number: field.wire_type for field in unknown_fields.UnknownFieldSet(parsed)}


def _skip_text_value(tokenizer: text_format.Tokenizer) -> None:
    """Advance past one field value, including nested messages and lists."""
    depth = 0
    while not tokenizer.AtEnd():
        token = tokenizer.token
        if token in _TEXT_OPENERS:
            depth += 1
        elif token in _TEXT_CLOSERS:
            depth -= 1
        tokenizer.NextToken()
        # Adjacent string literals form a single value.
        if depth == 0 and tokenizer.token[:1] not in ('"', "'"):
            return


def _scan_text_keys(text: str) -> set[str]:
    """Collect the field names used at the top level of a text message.

    :param text: Message in protobuf text format
    :return: Top-level field names seen before the first syntax error
    """
    keys = set()
    tokenizer = text_format.Tokenizer(text.split("\n"))
    try:
        while not tokenizer.AtEnd():
            keys.add(tokenizer.ConsumeIdentifier())
            tokenizer.TryConsume(":")
            _skip_text_value(tokenizer)
            for separator in _TEXT_SEPARATORS:
                tokenizer.TryConsume(separator)
    except text_format.ParseError:
        # Malformed text is reported by decode_text, not here.
        return keys
    return keys


def _is_binary_meta_graph(data: bytes) -> bool:
    tags = _scan_wire_tags(data)
    if not tags:
        return False
    if any(tags.get(number) != wire_type for number, wire_type in _REQUIRED_BINARY_TAGS.items()):
        return False
    return all(
        number not in tags or tags[number] == wire_type
        for number, wire_type in _OPTIONAL_BINARY_TAGS.items()
    )


def detect_format(path: str | Path) -> str | None:
    """Detect which UFF container a file holds.

    :param path: Model file path
    :return: "uff.pb", "uff.pbtxt", or None if the file is not a UFF model
    """
    path = Path(path)
    name = path.name.lower()
    extension = name.rsplit(".", 1)[-1]

    if extension in BINARY_EXTENSIONS and _is_binary_meta_graph(path.read_bytes()):
        return BINARY_FORMAT

    if extension in TEXT_EXTENSIONS or name.endswith(TEXT_SUFFIX):
        text = path.read_text(encoding="utf-8", errors="replace")
        if _REQUIRED_TEXT_KEYS <= _scan_text_keys(text):
            return TEXT_FORMAT

    return None


def load_meta_graph(path: str | Path, target: str | None = None) -> MetaGraphRecord:
    """Load a UFF model file into records.

    :param path: Model file path
    :param target: Container format ("uff.pb" or "uff.pbtxt"); detected if None
    :return: Decoded record tree
    :raises DecodeError: If the format is unknown or the file does not decode
    """
    path = Path(path)
    if target is None:
        target = detect_format(path)
        if target is None:
            raise DecodeError(f"File '{path.name}' is not a UFF model.")

    if target == BINARY_FORMAT:
        return decode_binary(path.read_bytes())
    if target == TEXT_FORMAT:
        return decode_text(path.read_text(encoding="utf-8"))
    raise DecodeError(f"Unsupported UFF format '{target}'.")
