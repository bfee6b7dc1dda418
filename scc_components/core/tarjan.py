"""
Tarjan's strongly connected components algorithm.

See: https://en.wikipedia.org/wiki/Tarjan%27s_strongly_connected_components_algorithm # noqa

The traversal is iterative: every frame of the depth-first search is kept on
an explicit work stack together with the iterator over the remaining
successors of its vertex, so arbitrarily deep graphs do not hit the
interpreter's recursion limit.
"""

from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    FrozenSet,
    Generic,
    Iterator,
    List,
    Tuple,
)

from scc_components.core.graph import SccGraph, V, as_graph
from scc_components.core.datastructures.components import Components
from scc_components.core.utils import _logger, _LogWrap, _format_vertices


@dataclass
class _VertexData:
    """Discovery record of a visited vertex.

    Attributes
    ----------
    index: int
        Discovery index, assigned in visitation order.
    lowlink: int
        Smallest discovery index reachable from the vertex through the
        current search path and back-edges.
    on_stack: bool
        Whether the vertex is on the open stack.
    component: int
        Index of the owning component, valid once the vertex is popped.
    """

    index: int
    lowlink: int
    on_stack: bool = True
    component: int = -1


class TarjanSCC(Generic[V]):
    """Single-use traversal context for Tarjan's algorithm.

    Parameters
    ----------
    graph: SccGraph
        The graph whose components are to be computed.
    """

    def __init__(self, graph: SccGraph[V]) -> None:
        self.graph = graph
        self.data: Dict[V, _VertexData] = {}
        self.stack: List[V] = []
        self.components: List[Tuple[V, ...]] = []

    def run(self) -> Components[V]:
        """Runs the traversal and builds the `Components` result.

        Returns
        -------
        components: Components
            The strongly connected components of the graph.
        """
        for v in self.graph.vertices():
            if v not in self.data:
                self.strong_connect(v)
        assert not self.stack

        vertex_to_component = {v: d.component for v, d in self.data.items()}
        successors = tuple(
            self.component_successors(component, vertex_to_component)
            for component in self.components
        )
        _logger.debug(
            "Found %d components over %d vertices",
            len(self.components),
            len(vertex_to_component),
        )
        return Components(
            components=tuple(self.components),
            vertex_to_component=vertex_to_component,
            _successors=successors,
        )

    def visit(self, v: V) -> Iterator[V]:
        index = len(self.data)
        self.data[v] = _VertexData(index=index, lowlink=index)
        self.stack.append(v)
        return iter(self.graph.successors(v))

    def strong_connect(self, root: V) -> None:
        """Depth-first search from `root`, finishing every component whose
        root is found along the way.

        Parameters
        ----------
        root: V
            An unvisited vertex to start the search from.
        """
        work = [(root, self.visit(root))]
        while work:
            v, successors = work[-1]
            v_data = self.data[v]
            for w in successors:
                w_data = self.data.get(w)
                if w_data is None:
                    # Suspend v and descend into w, v resumes with the
                    # remaining successors once w is done.
                    work.append((w, self.visit(w)))
                    break
                if w_data.on_stack:
                    # w.index, not w.lowlink, as in Tarjan's paper.
                    v_data.lowlink = min(v_data.lowlink, w_data.index)
            else:
                work.pop()
                if v_data.lowlink == v_data.index:
                    self.pop_component(v)
                if work:
                    parent = self.data[work[-1][0]]
                    parent.lowlink = min(parent.lowlink, v_data.lowlink)

    def pop_component(self, v: V) -> None:
        """Pops the open stack through `v` into a new component.

        Parameters
        ----------
        v: V
            The root of the component, its lowlink equals its index.
        """
        index = len(self.components)
        component = []
        while True:
            w = self.stack.pop()
            w_data = self.data[w]
            w_data.on_stack = False
            w_data.component = index
            component.append(w)
            if w == v:
                break
        self.components.append(tuple(component))
        _logger.debug(
            "Component %d: %s",
            index,
            _LogWrap(lambda: _format_vertices(component)),
        )

    def component_successors(
        self, component: Tuple[V, ...], vertex_to_component: Dict[V, int]
    ) -> FrozenSet[int]:
        return frozenset(
            vertex_to_component[w]
            for v in component
            for w in self.graph.successors(v)
        )


def scc(graph: SccGraph[V]) -> Components[V]:
    """Computes the strongly connected components of `graph`.

    Components are numbered in completion order: a component always comes
    after every component reachable from it, so the indices form a reverse
    topological order of the condensation graph.

    Parameters
    ----------
    graph: SccGraph
        The graph capability.

    Returns
    -------
    components: Components
        The strongly connected components and their condensation edges.
    """
    return TarjanSCC(graph).run()


def strongly_connected_components(graph: Any) -> Components[Any]:
    """Computes the strongly connected components of any supported graph.

    Parameters
    ----------
    graph: SccGraph, Mapping or Sequence
        The graph, plain mappings and sequences are wrapped with
        `scc_components.core.graph.as_graph()`.

    Returns
    -------
    components: Components
        The strongly connected components of the graph.
    """
    return scc(as_graph(graph))
