import pytest

from zxnet.backends import backend_class
from zxnet.core import EdgeKind, VertexKind

BACKENDS = ["networkx", "incidence"]


@pytest.fixture(params=BACKENDS)
def graph_cls(request):
    return backend_class(request.param)


@pytest.fixture
def g(graph_cls):
    return graph_cls()


def make_wire(cls, kind=VertexKind.Z, phase=0, in_kind=EdgeKind.REGULAR, out_kind=EdgeKind.REGULAR):
    """input -- spider -- output; returns (graph, (input, spider, output))."""
    g = cls()
    i = g.add_vertex(VertexKind.BOUNDARY)
    s = g.add_vertex(kind, phase)
    o = g.add_vertex(VertexKind.BOUNDARY)
    g.add_edge(i, s, in_kind)
    g.add_edge(s, o, out_kind)
    g.set_input(i)
    g.set_output(o)
    return g, (i, s, o)
