from collections.abc import Sized
from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    FrozenSet,
    Generic,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    AbstractSet,
)

from scc_components.core.graph import V


@dataclass(frozen=True)
class Components(Sized, Generic[V]):
    """Strongly connected components of a graph.

    The Components class is the immutable result of
    `scc_components.core.tarjan.scc()`. Components are numbered in the order
    the traversal finished them, which is a reverse topological order of the
    condensation graph: every component reachable from component `i` has
    an index lower than `i`.

    Attributes
    ----------
    components: Tuple[Tuple[V, ...], ...]
        The components, each a non-empty tuple of vertices.

    vertex_to_component: Mapping[V, int]
        Index of the component owning each discovered vertex.

    _successors: Tuple[FrozenSet[int], ...]
        Condensation edges: for each component, the indices of the
        components reached by a single edge from one of its vertices.
        A component is its own successor iff it is cyclic.
    """

    components: Tuple[Tuple[V, ...], ...]

    vertex_to_component: Mapping[V, int]

    _successors: Tuple[FrozenSet[int], ...]

    def __post_init__(self) -> None:
        assert len(self.components) == len(self._successors)
        assert len(self.vertex_to_component) == sum(
            len(c) for c in self.components
        )

    def __len__(self) -> int:
        """
        Returns
        -------
        Number of strongly connected components
        """
        return len(self.components)

    def __iter__(self) -> Iterator[Tuple[V, ...]]:
        """Returns an iterator over the components in construction order."""
        return iter(self.components)

    def __reversed__(self) -> Iterator[Tuple[V, ...]]:
        return reversed(self.components)

    def __contains__(self, v: object) -> bool:
        return v in self.vertex_to_component

    def is_empty(self) -> bool:
        """Checks if there are no components."""
        return not self.components

    def _in_range(self, i: int) -> bool:
        return 0 <= i < len(self.components)

    def vertex_component_index(self, v: V) -> Optional[int]:
        """Returns the index of the given vertex's component.

        Parameters
        ----------
        v: V
            The vertex to look up.

        Returns
        -------
        index: Optional[int]
            The component index, or None if the vertex was never discovered.
        """
        return self.vertex_to_component.get(v)

    def get_by_index(self, i: int) -> Optional[Tuple[V, ...]]:
        """Returns the component with the given index.

        Parameters
        ----------
        i: int
            The component index.

        Returns
        -------
        component: Optional[Tuple[V, ...]]
            The vertices of the component, or None if `i` is out of range.
        """
        if not self._in_range(i):
            return None
        return self.components[i]

    def get(self, v: V) -> Optional[Tuple[V, ...]]:
        """Returns the component containing the given vertex, or None if
        the vertex was never discovered.
        """
        i = self.vertex_component_index(v)
        if i is None:
            return None
        return self.get_by_index(i)

    def successors(self, i: int) -> Optional[FrozenSet[int]]:
        """Returns the successors of component `i` in the condensation
        graph.

        Parameters
        ----------
        i: int
            The component index.

        Returns
        -------
        successors: Optional[FrozenSet[int]]
            The distinct successor indices, including `i` itself when the
            component is cyclic, or None if `i` is out of range.
        """
        if not self._in_range(i):
            return None
        return self._successors[i]

    def is_cyclic(self, i: int) -> Optional[bool]:
        """Checks whether component `i` contains a cycle.

        A component is cyclic when it holds more than one vertex, or a
        single vertex with an edge to itself.

        Returns
        -------
        cyclic: Optional[bool]
            True if the component is its own successor, None if `i` is out
            of range.
        """
        successors = self.successors(i)
        if successors is None:
            return None
        return i in successors

    def _reachable_from(self, j: int, seen: Set[int]) -> Iterator[int]:
        # Components reachable from `j` through one or more non-self edges,
        # skipping those whose successors were already expanded.
        stack = [j]
        while stack:
            c = stack.pop()
            if c in seen:
                continue
            seen.add(c)
            for s in self._successors[c]:
                if s != c:
                    yield s
                    stack.append(s)

    def direct_successors(self, i: int) -> Optional[Set[int]]:
        """Returns the direct successors of component `i`.

        A direct successor is a successor of `i` that cannot also be reached
        through another successor of `i`, i.e. the outgoing edges of `i`
        after a local transitive reduction. Component `i` itself is never
        included, even when it is cyclic.

        Parameters
        ----------
        i: int
            The component index.

        Returns
        -------
        direct_successors: Optional[Set[int]]
            The direct successor indices, or None if `i` is out of range.
        """
        successors = self.successors(i)
        if successors is None:
            return None

        result = set(successors)
        result.discard(i)
        seen = {i}
        for j in successors:
            if j != i:
                result.difference_update(self._reachable_from(j, seen))
        return result

    def predecessors(self) -> List[Set[int]]:
        """Returns the predecessors of every component.

        Returns
        -------
        predecessors: List[Set[int]]
            For each component, the indices of the components having it as
            a successor. This is the exact inverse of `successors()`, so a
            cyclic component is its own predecessor.
        """
        predecessors: List[Set[int]] = [set() for _ in self.components]
        for i, successors in enumerate(self._successors):
            for j in successors:
                predecessors[j].add(i)
        return predecessors

    def depths(self) -> List[int]:
        """Returns the depth of each component.

        The depth of a component is the maximum of the depth of its
        predecessors plus 1, ignoring self edges. A component with no
        predecessors has depth 0.

        Returns
        -------
        depths: List[int]
            Depth of each component, indexed by component.
        """
        return _longest_path_depths(self._successors)

    def order_by_depth(self) -> List[int]:
        """Orders components by depth.

        The order among components of equal depth is unspecified.

        Returns
        -------
        ordered: List[int]
            All component indices, sorted by ascending depth.
        """
        depth = self.depths()
        return sorted(range(len(self.components)), key=depth.__getitem__)

    def to_dict(self) -> Dict[str, Any]:
        """Converts the components to a dictionary for inspection.

        Returns
        -------
        components_dict: Dict[str, Any]
            The `components` as lists, the sorted `successors` of each
            component and their `depths`.
        """
        return {
            "components": [list(c) for c in self.components],
            "successors": [sorted(s) for s in self._successors],
            "depths": self.depths(),
        }


def _longest_path_depths(edges: Sequence[AbstractSet[int]]) -> List[int]:
    # Worklist relaxation of the longest path from any source, along
    # `edges` with self edges skipped. On an acyclic graph no depth reaches
    # the number of nodes.
    n = len(edges)
    depth = [-1] * n
    stack = [(i, 0) for i in range(n)]

    while stack:
        i, new_depth = stack.pop()
        if new_depth <= depth[i]:
            continue
        if new_depth >= n:
            raise ValueError("Depths are undefined on a cyclic graph.")
        depth[i] = new_depth
        for c in edges[i]:
            if c != i:
                stack.append((c, new_depth + 1))

    return depth


def depths(predecessors: Sequence[AbstractSet[int]]) -> List[int]:
    """Returns the depth of each component from its predecessors.

    The depth of a component is the maximum of the depth of its
    predecessors plus 1, ignoring self edges. A component with no
    predecessors has depth 0. Given the result of
    `Components.predecessors()` this agrees with `Components.depths()`.

    Parameters
    ----------
    predecessors: Sequence[AbstractSet[int]]
        For each component, the indices of its predecessors.

    Returns
    -------
    depths: List[int]
        Depth of each component, indexed by component.

    Raises
    ------
    ValueError
        If the predecessor relation contains a cycle other than a self
        edge.
    """
    successors: List[Set[int]] = [set() for _ in predecessors]
    for i, preds in enumerate(predecessors):
        for p in preds:
            successors[p].add(i)
    return _longest_path_depths(successors)
