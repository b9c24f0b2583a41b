"""Operator metadata lookup.

Maps UFF operation names to their declared input slots.
"""

__docformat__ = "restructuredtext"
__all__ = ["InputSlot", "OperatorDescriptor", "OperatorMetadata"]

import json
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

DEFAULT_METADATA_RESOURCE = "uff-metadata.json"


@dataclass(frozen=True)
class InputSlot:
    """Declared input of an operator.

    :param name: Argument name
    :param optional: Slot may be left unbound when no inputs remain
    :param list: Slot consumes all remaining inputs
    """

    name: str
    optional: bool = False
    list: bool = False


@dataclass(frozen=True)
class OperatorDescriptor:
    """Operator type of a node.

    :param name: Operation name
    :param category: Display category (e.g. "Layer", "Activation")
    :param inputs: Declared input slots, in order
    """

    name: str
    category: str | None = None
    inputs: list[InputSlot] = field(default_factory=list)


def _descriptor_from_json(entry: dict) -> OperatorDescriptor:
    inputs = [
        InputSlot(
            name=slot["name"],
            optional=slot.get("optional", False),
            list=slot.get("list", False),
        )
        for slot in entry.get("inputs", [])
    ]
    return OperatorDescriptor(name=entry["name"], category=entry.get("category"), inputs=inputs)


class OperatorMetadata:
    """Operation name -> operator descriptor lookup."""

    def __init__(self, descriptors: list[OperatorDescriptor] | None = None):
        self._types = {descriptor.name: descriptor for descriptor in descriptors or []}

    def type(self, operation: str) -> OperatorDescriptor | None:
        """Look up the descriptor of an operation.

        :param operation: Operation name
        :return: Descriptor, or None if the operation is unknown
        """
        return self._types.get(operation)

    def __contains__(self, operation: str) -> bool:
        return operation in self._types

    def __len__(self) -> int:
        return len(self._types)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "OperatorMetadata":
        """Load operator metadata from a JSON list.

        :param path: JSON file path (None = bundled uff-metadata.json)
        :return: Metadata lookup
        """
        if path is None:
            text = (
                resources.files("uffgraph.metadata")
                .joinpath(DEFAULT_METADATA_RESOURCE)
                .read_text(encoding="utf-8")
            )
        else:
            text = Path(path).read_text(encoding="utf-8")
        return cls([_descriptor_from_json(entry) for entry in json.loads(text)])
