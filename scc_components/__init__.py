from scc_components.core.graph import (
    SccGraph,
    AdjacencyList,
    AdjacencyMap,
    GraphIO,
    as_graph,
)
from scc_components.core.datastructures.components import Components, depths
from scc_components.core.tarjan import scc, strongly_connected_components

__all__ = [
    "SccGraph",
    "AdjacencyList",
    "AdjacencyMap",
    "GraphIO",
    "as_graph",
    "Components",
    "depths",
    "scc",
    "strongly_connected_components",
]
