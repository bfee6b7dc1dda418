# mypy: ignore-errors

from textwrap import dedent
from unittest import main, TestCase

from scc_components import (
    AdjacencyList,
    AdjacencyMap,
    GraphIO,
    SccGraph,
    as_graph,
    strongly_connected_components,
)


class TestAdapters(TestCase):
    def test_adjacency_list(self):
        graph = AdjacencyList([{1}, {0, 2}, set()])

        self.assertEqual(list(graph.vertices()), [0, 1, 2])
        self.assertEqual(set(graph.successors(1)), {0, 2})
        self.assertEqual(len(graph), 3)

    def test_adjacency_map(self):
        graph = AdjacencyMap({"a": {"b"}, "b": set()})

        self.assertEqual(list(graph.vertices()), ["a", "b"])
        self.assertEqual(set(graph.successors("a")), {"b"})
        # Vertices only reached through edges have no successors
        self.assertEqual(list(graph.successors("z")), [])

    def test_as_graph(self):
        graph = AdjacencyMap({})
        self.assertIs(as_graph(graph), graph)
        self.assertIsInstance(as_graph({}), AdjacencyMap)
        self.assertIsInstance(as_graph([]), AdjacencyList)
        self.assertIsInstance(as_graph(([1], [0])), AdjacencyList)
        for bad in ("abc", 12, None):
            with self.assertRaises(TypeError):
                as_graph(bad)

    def test_abstract_graph(self):
        graph = SccGraph()
        with self.assertRaises(NotImplementedError):
            graph.vertices()
        with self.assertRaises(NotImplementedError):
            graph.successors(0)


class TestGraphIO(TestCase):
    def test_from_yaml(self):
        graph = AdjacencyMap.from_yaml(
            dedent(
                """
                vertices: ['c']
                edges:
                    'a': ['b']
                    'b': ['a', 'c', 'd']
                """
            )
        )

        self.assertEqual(list(graph.vertices()), ["c", "a", "b", "d"])
        self.assertEqual(list(graph.successors("b")), ["a", "c", "d"])
        self.assertEqual(list(graph.successors("c")), [])

        components = strongly_connected_components(graph)
        self.assertEqual(list(components), [("c",), ("d",), ("b", "a")])

    def test_from_yaml_integer_vertices(self):
        graph = GraphIO.from_yaml(
            dedent(
                """
                edges:
                    0: [1]
                    1: [0, 2]
                    2:
                """
            )
        )

        self.assertEqual(graph.adjacency, {0: [1], 1: [0, 2], 2: []})

    def test_from_dict(self):
        graph = AdjacencyMap.from_dict({"edges": {"a": ["a"]}})

        self.assertEqual(
            graph.to_dict(), {"vertices": ["a"], "edges": {"a": ["a"]}}
        )

    def test_empty(self):
        graph = GraphIO.from_yaml("edges:\n")

        self.assertEqual(len(graph), 0)
        self.assertTrue(strongly_connected_components(graph).is_empty())

    def test_yaml_conversion(self):
        cases = [
            {
                "vertices": ["a", "b", "c"],
                "edges": {"a": ["b", "c"], "b": ["a"], "c": []},
            },
            {
                "vertices": [0, 1, 2, 3],
                "edges": {0: [1], 1: [2], 2: [0, 3], 3: [3]},
            },
            {"vertices": [], "edges": {}},
        ]

        for case in cases:
            graph = GraphIO.from_dict(case)
            self.assertEqual(graph.to_dict(), case)
            dumped = graph.to_yaml()
            self.assertEqual(GraphIO.from_yaml(dumped).to_dict(), case)

    def test_yaml_conversion_scalar_vertices(self):
        case = {
            "vertices": [None, "a", 1, "1", "null", False, 2.5],
            "edges": {
                None: ["a", "null"],
                "a": [None],
                1: ["1"],
                "1": [],
                "null": [False],
                False: [2.5],
                2.5: [],
            },
        }

        dumped = GraphIO.from_dict(case).to_yaml()
        graph = GraphIO.from_yaml(dumped)

        self.assertEqual(graph.to_dict(), case)
        self.assertEqual(list(graph.successors(None)), ["a", "null"])
        self.assertEqual(list(graph.successors(1)), ["1"])
        self.assertEqual(list(graph.successors("1")), [])

    def test_yaml_rejects_tuple_vertices(self):
        graphs = [
            AdjacencyMap({(1, 2): [(3, 4)], (3, 4): []}),
            AdjacencyMap({"a": [(1, 2)]}),
            AdjacencyMap({None: [("a",)]}),
        ]

        for graph in graphs:
            with self.assertRaises(ValueError):
                graph.to_yaml()

    def test_to_dict_any_graph(self):
        graph = AdjacencyList([[1], [0]])

        self.assertEqual(
            GraphIO.to_dict(graph),
            {"vertices": [0, 1], "edges": {0: [1], 1: [0]}},
        )

    def test_invalid_descriptions(self):
        cases = [
            "- a\n- b\n",
            "nodes: ['a']\n",
            "edges: ['a', 'b']\n",
            "edges:\n    'a': 'b'\n",
            "vertices: 'a'\n",
        ]

        for case in cases:
            with self.assertRaises(ValueError):
                GraphIO.from_yaml(case)


if __name__ == "__main__":
    main()
