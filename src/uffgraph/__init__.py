__docformat__ = "restructuredtext"
__version__ = "2026.1.0"
__all__ = [
    "Model",
    "OperatorMetadata",
    "UFFError",
    "UFFGraph",
]

from uffgraph._uffgraph import UFFGraph
from uffgraph.build import Model
from uffgraph.errors import UFFError
from uffgraph.metadata import OperatorMetadata
