from abc import abstractmethod
from typing import Any, Hashable, Optional, Tuple

from graphviz import Digraph

from scc_components.core.datastructures.components import Components
from scc_components.core.graph import as_graph
from scc_components.core.tarjan import scc


node_style_kwargs = {"shape": "rect", "style": "rounded"}
self_edge_style_kwargs = {
    "style": "dashed",
    "color": "grey",
    "constraint": "0",
}


def component_name(i: int) -> str:
    return f"component_{i}"


def vertex_name(components: Components[Any], v: Hashable) -> str:
    # Position based, distinct vertices may print the same.
    i = components.vertex_component_index(v)
    assert i is not None
    k = components.components[i].index(v)
    return f"v{i}_{k}"


class BaseRenderer:
    """Base Renderer class.

    This is the base class for the renderers of strongly connected
    components. It defines how a single component is rendered and how the
    rendered graph is viewed.
    """

    g: "Digraph"

    @abstractmethod
    def render_component(
        self,
        digraph: "Digraph",
        i: int,
        component: Tuple[Hashable, ...],
        cyclic: bool,
    ) -> None:
        """ """

    def view(self, name: Optional[str] = None) -> None:
        """Method used to view the rendered graph as an external graphviz
        generated PDF file.

        Parameters
        ----------
        name: str
            Name to be given to the external graphviz generated PDF file.
        """
        self.g.view(name)


class ComponentsRenderer(BaseRenderer):
    """The `ComponentsRenderer` class is used to render the condensation
    graph of a `Components` object.

    Every component becomes one node labelled with its vertices. Cyclic
    components get a dashed grey edge to themselves.

    Parameters
    ----------
    components: Components
        The components to render.
    direct_only: bool
        If True, only the edges to direct successors are rendered, which
        gives the transitive reduction of the condensation graph.

    Attributes
    ----------
    g: Digraph
        The graphviz Digraph object that represents the condensation graph.
    """

    def __init__(
        self, components: Components[Any], direct_only: bool = False
    ):
        self.g = Digraph()
        # render nodes
        for i, component in enumerate(components):
            self.render_component(
                self.g, i, component, bool(components.is_cyclic(i))
            )
        self.render_edges(components, direct_only)

    def render_component(
        self,
        digraph: "Digraph",
        i: int,
        component: Tuple[Hashable, ...],
        cyclic: bool,
    ) -> None:
        name = component_name(i)
        label = [name, r"\n", ", ".join(str(v) for v in component)]
        digraph.node(name, label="".join(label), **node_style_kwargs)

    def render_edges(
        self, components: Components[Any], direct_only: bool
    ) -> None:
        """Renders the condensation edges.

        Parameters
        ----------
        components: Components
            The components whose edges are to be rendered.
        direct_only: bool
            Whether to restrict the edges to direct successors.
        """
        for i in range(len(components)):
            if direct_only:
                targets = components.direct_successors(i)
            else:
                targets = components.successors(i)
            assert targets is not None
            src = component_name(i)
            for j in sorted(targets):
                if j != i:
                    self.g.edge(src, component_name(j))
            if components.is_cyclic(i):
                self.g.edge(src, src, **self_edge_style_kwargs)

    def render_components(self) -> "Digraph":
        """Return the graphviz Digraph that contains the rendered
        condensation graph."""
        return self.g


class GraphRenderer(BaseRenderer):
    """The `GraphRenderer` class is used to render a graph with its
    vertices grouped by strongly connected component.

    Parameters
    ----------
    graph: SccGraph, Mapping or Sequence
        The graph to render.
    components: Components, optional
        The components of `graph`, computed if not given.

    Attributes
    ----------
    g: Digraph
        The graphviz Digraph object that represents the entire graph.
    """

    def __init__(
        self, graph: Any, components: Optional[Components[Any]] = None
    ):
        graph = as_graph(graph)
        if components is None:
            components = scc(graph)

        self.g = Digraph()
        for i, component in enumerate(components):
            self.render_component(
                self.g, i, component, bool(components.is_cyclic(i))
            )
        for component in components:
            for v in component:
                for w in graph.successors(v):
                    self.g.edge(
                        vertex_name(components, v), vertex_name(components, w)
                    )

    def render_component(
        self,
        digraph: "Digraph",
        i: int,
        component: Tuple[Hashable, ...],
        cyclic: bool,
    ) -> None:
        # render subgraph
        name = component_name(i)
        with digraph.subgraph(name=f"cluster_{name}") as subg:
            color = "#DC267F" if cyclic else "#648FFF"
            subg.attr(color=color, label=name, **node_style_kwargs)
            for k, v in enumerate(component):
                subg.node(f"v{i}_{k}", label=str(v), **node_style_kwargs)

    def render_graph(self) -> "Digraph":
        """Return the graphviz Digraph that contains the rendered graph."""
        return self.g


def render_components(components: Components[Any]) -> None:
    """The `render_components` function renders the condensation graph of
    the given components and views it as a document named "components".

    Parameters
    ----------
    components: Components
        The strongly connected components to be rendered.
    """
    ComponentsRenderer(components).view("components")


def render_graph(graph: Any) -> None:
    """The `render_graph` function computes the strongly connected
    components of `graph` and views the graph, clustered by component, as a
    document named "graph".

    Parameters
    ----------
    graph: SccGraph, Mapping or Sequence
        The graph to be rendered.
    """
    GraphRenderer(graph).view("graph")
