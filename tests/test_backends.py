import unittest

import pytest

import zxnet
from zxnet import backends
from zxnet.backends import (
    Graph,
    available_backends,
    backend_class,
    get_default_backend,
    load_backend,
    set_default_backend,
)
from zxnet.backends.incidence import IncidenceGraph
from zxnet.backends.networkx import NxGraph
from zxnet.core import BaseGraph, VertexKind
from zxnet.errors import UnknownBackendError


class TestRegistry(unittest.TestCase):
    def test_available(self):
        self.assertEqual(available_backends(), {"networkx": True, "incidence": True})

    def test_lookup(self):
        self.assertIs(backend_class("networkx"), NxGraph)
        self.assertIs(backend_class("Incidence"), IncidenceGraph)
        self.assertIsInstance(load_backend("incidence", n=4), IncidenceGraph)

    def test_unknown_backend(self):
        with self.assertRaises(UnknownBackendError):
            load_backend("quantum-magic")
        with self.assertRaises(ValueError):
            set_default_backend("quantum-magic")
        self.assertEqual(get_default_backend(), "networkx")

    def test_default_backend(self):
        self.assertIsInstance(Graph(), NxGraph)
        set_default_backend("incidence")
        try:
            self.assertIsInstance(Graph(), IncidenceGraph)
            self.assertIsInstance(Graph("networkx"), NxGraph)
        finally:
            set_default_backend("networkx")

    def test_top_level_exports(self):
        self.assertIs(zxnet.Graph, backends.Graph)
        self.assertIs(zxnet.NxGraph, NxGraph)
        self.assertIs(zxnet.VertexKind, VertexKind)
        with self.assertRaises(AttributeError):
            zxnet.not_a_symbol

    def test_backend_identity(self):
        self.assertEqual(NxGraph.BACKEND, "networkx")
        self.assertEqual(IncidenceGraph.BACKEND, "incidence")
        self.assertTrue(issubclass(NxGraph, BaseGraph))

    def test_contract_is_abstract(self):
        with self.assertRaises(TypeError):
            BaseGraph()


class TestIncidenceStorage(unittest.TestCase):
    def test_presized_capacity(self):
        g = IncidenceGraph(n=16, e=32)
        self.assertEqual(g._matrix.shape, (16, 32))
        g.add_vertices(20)
        self.assertGreaterEqual(g._matrix.shape[0], 20)

    def test_incidence_matrix(self):
        g = IncidenceGraph()
        a, b = g.add_vertices(2)
        e = g.add_edge(a, b)
        loop = g.add_edge(b, b)
        M = g.incidence_matrix()
        self.assertEqual(M.shape, (2, 2))
        self.assertEqual(M[a.index, e.index], 1)
        self.assertEqual(M[b.index, e.index], 1)
        self.assertEqual(M[b.index, loop.index], 2)
        self.assertEqual(list(M.sum(axis=1).A1), [1, 3])

        g.remove_edge(e)
        M = g.incidence_matrix()
        self.assertEqual(M[a.index, e.index], 0)
        self.assertEqual(g.vertex_degree(b), 2)

    def test_queries_do_not_convert_the_matrix(self):
        a = IncidenceGraph()
        ai = a.add_vertex(VertexKind.BOUNDARY)
        prev = ai
        for _ in range(50):
            s = a.add_vertex(VertexKind.Z)
            a.add_edge(prev, s)
            prev = s
        ao = a.add_vertex(VertexKind.BOUNDARY)
        a.add_edge(prev, ao)
        a.set_input(ai)
        a.set_output(ao)
        b = a.copy()

        a.compose(b)
        for v in a.vertices():
            list(a.neighbours(v))
            a.vertex_degree(v)
        self.assertIsNone(a._csr)
        self.assertEqual(a.num_vertices(), 102)
        self.assertEqual(a.num_edges(), 101)

    def test_row_index_mirrors_matrix(self):
        g = IncidenceGraph()
        vs = g.add_vertices(5)
        es = [g.add_edge(vs[k], vs[(k + 1) % 5]) for k in range(5)]
        g.add_edge(vs[2], vs[2])
        g.add_edge(vs[0], vs[1])
        g.remove_edge(es[1])
        g.remove_vertex(vs[3])
        M = g.incidence_matrix()
        for v in g.vertices():
            row = M.getrow(v.index)
            self.assertEqual(dict(zip(row.indices.tolist(), row.data.tolist())), g._rows[v.index])
            self.assertEqual(int(row.sum()), g.vertex_degree(v))


class TestNetworkXStorage(unittest.TestCase):
    def test_slots_key_the_multigraph(self):
        g = NxGraph()
        a, b = g.add_vertices(2)
        e = g.add_edge(b, a)
        self.assertEqual(set(g._g.nodes), {a.index, b.index})
        self.assertTrue(g._g.has_edge(a.index, b.index, key=e.index))
        g.remove_vertex(a)
        self.assertEqual(g._g.number_of_edges(), 0)


@pytest.mark.slow
@pytest.mark.parametrize("name", ["networkx", "incidence"])
def test_larger_graph_consistency(name):
    g = load_backend(name, history=False)
    vs = [g.add_vertex(VertexKind.Z) for _ in range(300)]
    for k, v in enumerate(vs):
        g.add_edge(v, vs[(k * 7 + 3) % len(vs)])
    g.remove_vertices(vs[::5])
    assert g.num_vertices() == 240
    assert sum(g.vertex_degree(v) for v in g.vertices()) == 2 * g.num_edges()
    for v in g.vertices():
        assert g.vertex_degree(v) == len(list(g.neighbours(v)))
