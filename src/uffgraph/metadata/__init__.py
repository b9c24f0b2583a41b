"""Operator metadata for UFF operations."""

__docformat__ = "restructuredtext"
__all__ = ["InputSlot", "OperatorDescriptor", "OperatorMetadata"]

from uffgraph.metadata.store import InputSlot, OperatorDescriptor, OperatorMetadata
