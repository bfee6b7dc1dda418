import yaml
from typing import (
    Any,
    Dict,
    Generic,
    Hashable,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from scc_components.core.datastructures.components import Components

V = TypeVar("V", bound=Hashable)


class SccGraph(Generic[V]):
    """Graph on which strongly connected components can be computed.

    Subclasses describe the structure of a directed graph by enumerating
    its vertices and the successors of any given vertex. Vertices are
    opaque to the library: they only need to be hashable and comparable
    for equality.

    Both methods may be called more than once for the same graph, the
    returned iterables must therefore be restartable (or freshly created
    on each call).
    """

    def vertices(self) -> Iterable[V]:
        """Returns the vertices from which the traversal starts.

        Vertices that are only reachable through edges from these are
        still discovered.

        Returns
        -------
        vertices: Iterable[V]
            A finite iterable over the vertices of the graph.
        """
        raise NotImplementedError

    def successors(self, v: V) -> Iterable[V]:
        """Returns the successors of the given vertex.

        Parameters
        ----------
        v: V
            The vertex whose successors are requested.

        Returns
        -------
        successors: Iterable[V]
            A finite iterable over the vertices directly reachable from `v`
            through a single edge.
        """
        raise NotImplementedError

    def strongly_connected_components(self) -> "Components[V]":
        """Computes the strongly connected components of the graph.

        Internally forwards the graph to
        `scc_components.core.tarjan.scc()`.

        Returns
        -------
        components: Components
            The strongly connected components of this graph.
        """
        from scc_components.core.tarjan import scc

        return scc(self)


class AdjacencyList(SccGraph[int]):
    """Graph given as a sequence of successor collections.

    Vertex `i` is the `i`-th entry of the sequence and its successors are
    the integers stored in that entry.

    Attributes
    ----------
    adjacency: Sequence[Iterable[int]]
        Successors of each vertex, indexed by vertex.
    """

    def __init__(self, adjacency: Sequence[Iterable[int]]) -> None:
        self.adjacency = adjacency

    def vertices(self) -> Iterable[int]:
        return range(len(self.adjacency))

    def successors(self, v: int) -> Iterable[int]:
        return self.adjacency[v]

    def __len__(self) -> int:
        return len(self.adjacency)


class AdjacencyMap(SccGraph[V]):
    """Graph given as a mapping from a vertex to its successors.

    Vertices are enumerated in the iteration order of the mapping. A vertex
    that only appears as an edge target has no successors.

    Attributes
    ----------
    adjacency: Mapping[V, Iterable[V]]
        Successors of each vertex, keyed by vertex.
    """

    def __init__(self, adjacency: Mapping[V, Iterable[V]]) -> None:
        self.adjacency = adjacency

    def vertices(self) -> Iterable[V]:
        return self.adjacency.keys()

    def successors(self, v: V) -> Iterable[V]:
        return self.adjacency.get(v, ())

    def __len__(self) -> int:
        return len(self.adjacency)

    @staticmethod
    def from_yaml(yaml_string: str) -> "AdjacencyMap[Any]":
        """Creates an AdjacencyMap from a YAML description.

        Internally forwards the `yaml_string` to `GraphIO.from_yaml()`.

        See also
        --------
        scc_components.core.graph.GraphIO.from_yaml()
        """
        return GraphIO.from_yaml(yaml_string)

    @staticmethod
    def from_dict(graph_dict: Dict[str, Any]) -> "AdjacencyMap[Any]":
        """Creates an AdjacencyMap from a dictionary description.

        Internally forwards the `graph_dict` to `GraphIO.from_dict()`.

        See also
        --------
        scc_components.core.graph.GraphIO.from_dict()
        """
        return GraphIO.from_dict(graph_dict)

    def to_yaml(self) -> str:
        """Converts the graph to its YAML description.

        See also
        --------
        scc_components.core.graph.GraphIO.to_yaml()
        """
        return GraphIO.to_yaml(self)

    def to_dict(self) -> Dict[str, Any]:
        """Converts the graph to its dictionary description.

        See also
        --------
        scc_components.core.graph.GraphIO.to_dict()
        """
        return GraphIO.to_dict(self)


def as_graph(graph: Any) -> SccGraph[Any]:
    """Coerces the given object into an `SccGraph`.

    Parameters
    ----------
    graph: SccGraph, Mapping or Sequence
        An `SccGraph` is returned as is. A mapping is wrapped in an
        `AdjacencyMap` and a sequence in an `AdjacencyList`.

    Returns
    -------
    graph: SccGraph
        The graph capability for the given object.
    """
    if isinstance(graph, SccGraph):
        return graph
    if isinstance(graph, Mapping):
        return AdjacencyMap(graph)
    if isinstance(graph, Sequence) and not isinstance(graph, (str, bytes)):
        return AdjacencyList(graph)
    raise TypeError(f"Cannot use object of type {type(graph)} as a graph.")


class GraphIO:
    """Helper class for `AdjacencyMap` transformation to and from various
    other formats. Currently supports YAML and dictionary format.

    The description has an `edges` mapping from each vertex to the list of
    its successors and an optional `vertices` list that fixes the
    enumeration order::

        vertices: ['a', 'b', 'c']
        edges:
            'a': ['b']
            'b': ['a', 'c']
    """

    @staticmethod
    def from_yaml(yaml_string: str) -> AdjacencyMap[Any]:
        """Static helper method that creates an AdjacencyMap from a YAML
        representation.

        Parameters
        ----------
        yaml_string: str
            The input YAML string from which the graph is to be constructed.

        Return
        ------
        graph: AdjacencyMap
            The corresponding graph.
        """
        data = yaml.safe_load(yaml_string)
        return GraphIO.from_dict(data)

    @staticmethod
    def from_dict(graph_dict: Dict[str, Any]) -> AdjacencyMap[Any]:
        """Static helper method that creates an AdjacencyMap from a
        dictionary representation.

        Parameters
        ----------
        graph_dict: dict
            The input dictionary from which the graph is to be constructed.

        Return
        ------
        graph: AdjacencyMap
            The corresponding graph. Every vertex listed in `vertices` or
            used as an edge source or target is a key of the adjacency
            mapping.
        """
        if not isinstance(graph_dict, Mapping):
            raise ValueError("Graph description must be a mapping.")
        unknown = set(graph_dict.keys()) - {"vertices", "edges"}
        if unknown:
            raise ValueError(f"Unknown graph description keys: {unknown}")

        edges = graph_dict.get("edges") or {}
        if not isinstance(edges, Mapping):
            raise ValueError("Graph 'edges' must be a mapping.")
        vertices: Optional[List[Any]] = graph_dict.get("vertices")
        if vertices is None:
            vertices = []
        elif not isinstance(vertices, list):
            raise ValueError("Graph 'vertices' must be a list.")

        adjacency: Dict[Any, List[Any]] = {v: [] for v in vertices}
        for source, targets in edges.items():
            if targets is None:
                targets = []
            if not isinstance(targets, list):
                raise ValueError(
                    f"Successors of {source!r} must be a list, "
                    f"got {type(targets).__name__}."
                )
            adjacency.setdefault(source, []).extend(targets)
        for targets in list(adjacency.values()):
            for target in targets:
                adjacency.setdefault(target, [])

        return AdjacencyMap(adjacency)

    @staticmethod
    def to_yaml(graph: SccGraph[Any]) -> str:
        """Helper method to convert a graph to a YAML string
        representation.

        Parameters
        ----------
        graph: SccGraph
            The graph to be transformed.

        Returns
        -------
        yaml: str
            A YAML string describing the graph.
        """
        graph_dict = GraphIO.to_dict(graph)
        for v in graph_dict["vertices"]:
            GraphIO.check_vertex(v)
            for w in graph_dict["edges"][v]:
                GraphIO.check_vertex(w)

        return yaml.safe_dump(
            graph_dict, default_flow_style=None, sort_keys=False
        )

    @staticmethod
    def check_vertex(v: Any) -> None:
        """Checks that `v` reads back from YAML as an equal vertex.

        Raises
        ------
        ValueError
            If `v` is not a string, a number, a boolean or None.
        """
        if v is not None and not isinstance(v, (str, int, float)):
            raise ValueError(
                f"Vertex {v!r} of type {type(v).__name__} cannot be "
                "written to YAML."
            )

    @staticmethod
    def to_dict(graph: SccGraph[Any]) -> Dict[str, Any]:
        """Helper method to convert a graph to a dictionary representation.

        Parameters
        ----------
        graph: SccGraph
            The graph to be transformed.

        Returns
        -------
        graph_dict: dict
            A dictionary with the `vertices` list and the `edges` mapping.
        """
        vertices = list(graph.vertices())
        edges = {v: list(graph.successors(v)) for v in vertices}
        return {"vertices": vertices, "edges": edges}
