__docformat__ = "restructuredtext"
__all__ = ["UFFGraph"]

from pathlib import Path

from uffgraph.build import Model
from uffgraph.decode import MetaGraphRecord
from uffgraph.errors import DecodeError
from uffgraph.metadata import OperatorMetadata


class UFFGraph:
    def __init__(self, verbose: bool = False, metadata_path: str | None = None):
        self.verbose = verbose
        self.metadata_path = metadata_path
        self._metadata: OperatorMetadata | None = None

    @property
    def metadata(self) -> OperatorMetadata:
        """Operator metadata, loaded on first use."""
        if self._metadata is None:
            self._metadata = OperatorMetadata.load(self.metadata_path)
        return self._metadata

    def load(self, model_path: str, target: str | None = None) -> Model:
        """Load a UFF model file into a semantic model.

        :param model_path: Path to a binary (.uff/.pb) or text (.pbtxt/.uff.txt) model
        :param target: Container format ("uff.pb" or "uff.pbtxt"); detected if None
        :return: Semantic model
        """
        # Stage 1: Decode records
        from uffgraph.decode import detect_format, load_meta_graph

        if target is None:
            target = detect_format(model_path)
            if target is None:
                raise DecodeError(f"File '{Path(model_path).name}' is not a UFF model.")
        meta_graph = load_meta_graph(model_path, target=target)

        if self.verbose:
            print(f"Decoded {Path(model_path).name} as {target}")

        # Stage 2: Build semantic graphs
        return self.build(meta_graph)

    def build(self, meta_graph: MetaGraphRecord) -> Model:
        """Build a semantic model from decoded records.

        :param meta_graph: Decoded UFF container
        :return: Semantic model
        """
        from uffgraph.build import build_model

        model = build_model(meta_graph, self.metadata)

        if self.verbose:
            for graph in model.graphs:
                print(
                    f"Built {model.format} graph '{graph.name}': "
                    f"{len(graph.inputs)} input(s), {len(graph.outputs)} output(s), "
                    f"{len(graph.nodes)} node(s)"
                )

        return model
