import unittest

from zxnet.core import EdgeData, EdgeIx, EdgeKind, Phase, SlotTable, VertexData, VertexIx, VertexKind


class TestKinds(unittest.TestCase):
    def test_defaults(self):
        self.assertIs(VertexKind.default(), VertexKind.BOUNDARY)
        self.assertIs(EdgeKind.default(), EdgeKind.REGULAR)

    def test_spider_flag(self):
        self.assertTrue(VertexKind.Z.is_spider)
        self.assertTrue(VertexKind.X.is_spider)
        self.assertFalse(VertexKind.BOUNDARY.is_spider)
        self.assertFalse(VertexKind.H_BOX.is_spider)

    def test_wire_kind_composition(self):
        R, H = EdgeKind.REGULAR, EdgeKind.HADAMARD
        self.assertIs(EdgeKind.compose(R, R), R)
        self.assertIs(EdgeKind.compose(R, H), H)
        self.assertIs(EdgeKind.compose(H, R), H)
        self.assertIs(EdgeKind.compose(H, H), R)

    def test_string_values(self):
        self.assertIs(VertexKind("z"), VertexKind.Z)
        self.assertIs(EdgeKind("hadamard"), EdgeKind.HADAMARD)


class TestPayloads(unittest.TestCase):
    def test_vertex_defaults(self):
        d = VertexData()
        self.assertIs(d.kind, VertexKind.BOUNDARY)
        self.assertEqual(d.phase, Phase(0))
        self.assertFalse(d.ground)
        self.assertEqual((d.qubit, d.row), (-1, -1))

    def test_writes_are_coerced(self):
        d = VertexData()
        d.phase = 5
        d.kind = "x"
        self.assertIsInstance(d.phase, Phase)
        self.assertEqual(d.phase, Phase(1))
        self.assertIs(d.kind, VertexKind.X)
        with self.assertRaises(ValueError):
            d.kind = "not-a-kind"

    def test_copy_is_detached(self):
        d = VertexData(VertexKind.Z, Phase(1, 2), qubit=1, row=3)
        c = d.copy()
        self.assertEqual(c, d)
        c.phase = 1
        self.assertEqual(d.phase, Phase(1, 2))
        self.assertNotEqual(c, d)

    def test_edge_payload(self):
        e = EdgeData()
        self.assertIs(e.kind, EdgeKind.REGULAR)
        e.kind = EdgeKind.HADAMARD
        self.assertEqual(e.copy(), EdgeData(EdgeKind.HADAMARD))


class TestSlotTable(unittest.TestCase):
    def test_dense_allocation(self):
        t = SlotTable(VertexIx)
        hs = [t.allocate() for _ in range(3)]
        self.assertEqual([h.index for h in hs], [0, 1, 2])
        self.assertEqual(len(t), 3)
        self.assertEqual(list(t), hs)

    def test_reuse_bumps_generation(self):
        t = SlotTable(VertexIx)
        a, b, _ = (t.allocate() for _ in range(3))
        self.assertTrue(t.release(b))
        self.assertFalse(t.release(b))
        self.assertFalse(t.is_live(b))
        b2 = t.allocate()
        self.assertEqual(b2.index, b.index)
        self.assertNotEqual(b2, b)
        self.assertTrue(t.is_live(b2))
        self.assertFalse(t.is_live(b))
        self.assertTrue(t.is_live(a))

    def test_lowest_free_slot_first(self):
        t = SlotTable(EdgeIx)
        hs = [t.allocate() for _ in range(4)]
        t.release(hs[3])
        t.release(hs[1])
        self.assertEqual(t.allocate().index, 1)
        self.assertEqual(t.allocate().index, 3)
        self.assertEqual(t.allocate().index, 4)

    def test_foreign_handles_are_not_live(self):
        t = SlotTable(VertexIx)
        t.allocate()
        self.assertFalse(t.is_live(EdgeIx(0, 0)))
        self.assertFalse(t.is_live((0, 0)))
        self.assertFalse(t.is_live(VertexIx(5, 0)))
        self.assertFalse(t.is_live(VertexIx(-1, 0)))

    def test_clear(self):
        t = SlotTable(VertexIx)
        hs = [t.allocate() for _ in range(2)]
        t.clear()
        self.assertEqual(len(t), 0)
        self.assertFalse(any(t.is_live(h) for h in hs))
        self.assertEqual(t.allocate().index, 0)


if __name__ == "__main__":
    unittest.main()
