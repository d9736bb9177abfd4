import numpy as np
import pytest

from fecore.analysis.finite_elements import (
    GCellSet,
    Hex8,
    Line2,
    Point1,
    Quad4,
    Tet4,
    Tri3,
    gcellset_class,
    list_types,
    register_gcellset,
)
from fecore.exceptions import FecoreError, GCellSetError
from fecore.geometry import HYPERCUBE, SIMPLEX, hypercube, simplex

STRIP = [[0, 1, 4, 3], [1, 2, 5, 4]]
CUBE = [[0, 1, 2, 3, 4, 5, 6, 7]]

PARAM_POINTS = {
    Line2: [[-1.0], [0.3], [0.9]],
    Quad4: [[0.0, 0.0], [0.2, -0.7], [-1.0, 1.0]],
    Hex8: [[0.0, 0.0, 0.0], [0.1, -0.5, 0.8], [1.0, 1.0, -1.0]],
    Tri3: [[0.0, 0.0], [0.2, 0.3], [1.0 / 3.0, 1.0 / 3.0]],
    Tet4: [[0.0, 0.0, 0.0], [0.1, 0.2, 0.3], [0.25, 0.25, 0.25]],
}


def test_identity():
    cells = Quad4(STRIP)
    assert (cells.dim, cells.cell_size, cells.cell_type) == (2, 4, "Q4")
    assert cells.family == HYPERCUBE
    assert (Tet4.DIM, Tet4.CELL_SIZE, Tet4.TYPE) == (3, 4, "T4")
    assert Tri3([[0, 1, 2]]).family == SIMPLEX


def test_registry():
    assert gcellset_class("Q4") is Quad4
    assert gcellset_class("P1") is Point1
    assert set(list_types()) >= {"P1", "L2", "T3", "Q4", "T4", "H8"}
    with pytest.raises(GCellSetError):
        gcellset_class("Q9")


def test_register_rejects_inconsistent_type():
    class Broken:
        TYPE = "Q4"
        DIM = 2
        CELL_SIZE = 3
        FAMILY = HYPERCUBE

    with pytest.raises(TypeError):
        register_gcellset(Broken)

    class Incomplete:
        TYPE = "Q4"

    with pytest.raises(TypeError):
        register_gcellset(Incomplete)


def test_gcellset_is_abstract():
    with pytest.raises(TypeError):
        GCellSet([[0, 1]])


def test_partition_of_unity_at_center():
    np.testing.assert_allclose(Line2.bfun([0.0]), [[0.5], [0.5]])
    np.testing.assert_allclose(Quad4.bfun([0.0, 0.0]), np.full((4, 1), 0.25))
    np.testing.assert_allclose(Hex8.bfun([0.0, 0.0, 0.0]), np.full((8, 1), 0.125))
    np.testing.assert_allclose(Point1.bfun(), [[1.0]])


@pytest.mark.parametrize("cls", list(PARAM_POINTS))
def test_basis_functions_sum_to_one(cls):
    for point in PARAM_POINTS[cls]:
        values = cls.bfun(point)
        assert values.shape == (cls.CELL_SIZE, 1)
        assert values.sum() == pytest.approx(1.0)


@pytest.mark.parametrize("cls", list(PARAM_POINTS))
def test_derivative_columns_sum_to_zero(cls):
    for point in PARAM_POINTS[cls]:
        nder = cls.bfundpar(point)
        assert nder.shape == (cls.CELL_SIZE, cls.DIM)
        np.testing.assert_allclose(nder.sum(axis=0), np.zeros(cls.DIM), atol=1e-14)


def test_basis_functions_interpolate_corners():
    corners = np.array([[-1, -1, -1], [1, -1, -1], [1, 1, -1], [-1, 1, -1],
                        [-1, -1, 1], [1, -1, 1], [1, 1, 1], [-1, 1, 1]], dtype=float)
    for i, corner in enumerate(corners):
        expected = np.zeros((8, 1))
        expected[i] = 1.0
        np.testing.assert_allclose(Hex8.bfun(corner), expected)


def test_hex_derivatives_match_finite_differences():
    point = np.array([0.1, -0.4, 0.6])
    h = 1e-6
    nder = Hex8.bfundpar(point)
    for axis in range(3):
        step = np.zeros(3)
        step[axis] = h
        numeric = (Hex8.bfun(point + step) - Hex8.bfun(point - step)) / (2 * h)
        np.testing.assert_allclose(nder[:, axis], numeric.ravel(), atol=1e-8)


def test_missing_parametric_coordinates():
    with pytest.raises(FecoreError):
        Quad4.bfun([0.0])
    with pytest.raises(FecoreError):
        Hex8.bfundpar([0.0, 0.0])


def test_construction_requires_conn_or_topology():
    with pytest.raises(GCellSetError):
        Quad4()
    with pytest.raises(GCellSetError):
        Quad4(STRIP, topology=hypercube(STRIP, 2))
    with pytest.raises(GCellSetError):
        Quad4(topology=[[0, 1, 2, 3]])


def test_construction_rejects_mismatched_topology():
    with pytest.raises(GCellSetError):
        Quad4(topology=simplex([[0, 1, 2]], 2))
    with pytest.raises(GCellSetError):
        Quad4(topology=hypercube([[0, 1]], 1))
    with pytest.raises(FecoreError):
        Quad4([[0, 1, 2]])


def test_construction_rejects_foreign_family():
    with pytest.raises(GCellSetError):
        Quad4([[0, 1, 2]], family=SIMPLEX)


def test_construction_rejects_bad_other_dimension():
    with pytest.raises(GCellSetError):
        Line2([[0, 1]], other_dimension="thick")


def test_every_instance_has_its_own_id():
    assert Line2([[0, 1]]).id != Line2([[0, 1]]).id


def test_other_dimension_callable():
    cells = Line2([[0, 1]], other_dimension=lambda conn, N, x: 2.5)
    assert cells.other_dimension() == 2.5
    assert Line2([[0, 1]], other_dimension=3).other_dimension() == 3.0


def test_count_and_nfens():
    cells = Quad4(STRIP)
    assert cells.count() == 2
    assert cells.nfens() == 6
    np.testing.assert_array_equal(cells.conn(), STRIP)
    np.testing.assert_array_equal(cells.vertices(), np.arange(6))


def test_visualization_helpers():
    quad = Quad4([[0, 1, 2, 3]])
    np.testing.assert_array_equal(quad.triangles(), [[0, 1, 2], [2, 3, 0]])
    assert quad.edges().shape == (4, 2)
    assert Hex8(CUBE).triangles().shape == (12, 3)
    assert Line2([[0, 1]]).triangles().shape == (0, 3)
    assert Point1([[0], [1]]).edges().shape == (0, 2)
    assert Tet4([[0, 1, 2, 3]]).triangles().shape == (4, 3)


def test_boundary_of_quads():
    boundary = Quad4(STRIP).boundary()
    assert isinstance(boundary, Line2)
    assert boundary.count() == 6
    assert Quad4(STRIP).boundary_cell_type() == "L2"


def test_boundary_of_lines():
    boundary = Line2([[0, 1], [1, 2]]).boundary()
    assert isinstance(boundary, Point1)
    np.testing.assert_array_equal(boundary.conn(), [[0], [2]])


def test_boundary_of_hex_and_simplices():
    assert isinstance(Hex8(CUBE).boundary(), Quad4)
    assert Hex8(CUBE).boundary().count() == 6

    tri_boundary = Tri3([[0, 1, 2]]).boundary()
    assert isinstance(tri_boundary, Line2)
    assert tri_boundary.family == SIMPLEX
    assert tri_boundary.count() == 3

    tet_boundary = Tet4([[0, 1, 2, 3]]).boundary()
    assert isinstance(tet_boundary, Tri3)
    assert tet_boundary.count() == 4


def test_boundary_of_points_fails():
    with pytest.raises(GCellSetError):
        Point1([[0]]).boundary()
    with pytest.raises(GCellSetError):
        Point1([[0]]).boundary_gcellset_class()


def test_boundary_keeps_options():
    boundary = Quad4(STRIP, axis_symm=True, other_dimension=0.2).boundary()
    assert boundary.axis_symm is True
    assert boundary.other_dimension() == 0.2


def test_extrude_lines():
    cells = Line2([[0, 1], [1, 2]], other_dimension=0.5).extrude([True, False, True])
    assert isinstance(cells, Quad4)
    assert cells.count() == 4
    assert cells.other_dimension() == 0.5


def test_extrude_chain():
    assert isinstance(Point1([[0], [1]]).extrude([True]), Line2)
    assert isinstance(Quad4([[0, 1, 2, 3]]).extrude([True]), Hex8)
    assert Line2([[0, 1]]).extruded_gcellset_class() is Quad4
    assert Line2([[0, 1]], family=SIMPLEX).extruded_gcellset_class() is Tri3


def test_extrude_past_the_chain_fails():
    with pytest.raises(GCellSetError):
        Hex8(CUBE).extrude([True])
    with pytest.raises(GCellSetError):
        Tet4([[0, 1, 2, 3]]).extruded_gcellset_class()
    with pytest.raises(FecoreError):
        Tri3([[0, 1, 2]]).extrude([True])


def test_subset():
    cells = Line2([[0, 1], [1, 2], [2, 3]], axis_symm=True)
    subset = cells.subset([0, 2])
    assert isinstance(subset, Line2)
    assert subset.axis_symm is True
    np.testing.assert_array_equal(subset.conn(), [[0, 1], [2, 3]])
    assert cells.subset([]).count() == 0


def test_clone_round_trip():
    cells = Quad4(STRIP, other_dimension=2.0)
    clone = cells.clone()
    assert clone.equals(cells)
    assert clone == cells
    assert clone.id != cells.id
    assert not np.shares_memory(clone.conn(), cells.conn())


def test_connectivity_cannot_be_mutated_in_place():
    cells = Quad4(STRIP)
    with pytest.raises(ValueError):
        cells.conn()[0, 0] = 7


def test_equals_compares_options():
    assert not Quad4(STRIP).equals(Quad4(STRIP, axis_symm=True))
    assert not Quad4(STRIP).equals(Quad4(STRIP, other_dimension=2.0))
    assert not Quad4(STRIP).equals(Quad4([[0, 1, 4, 3]]))
    assert Quad4(STRIP).equals(Quad4([[4, 3, 0, 1], [5, 4, 1, 2]]))
    assert not Line2([[0, 1]]).equals(Point1([[0]]))


def test_box_select_all_nodes(strip_nodes):
    cells = Quad4(STRIP)
    assert cells.box_select(strip_nodes, [0.0, 1.0, 0.0, 1.0]) == [0]
    assert cells.box_select(strip_nodes, [0.0, 1.0, 0.0, 1.0], any_node=True) == [0, 1]


def test_box_select_inflate(strip_nodes):
    cells = Quad4(STRIP)
    assert cells.box_select(strip_nodes, [0.0, 1.0, 0.0, 1.0], inflate=1.0) == [0, 1]
    assert cells.box_select(strip_nodes, [0.0, 1.0, 0.0, 1.0], inflate=[1.0, 0.0]) == [0, 1]
    assert cells.box_select(strip_nodes, [0.0, 1.0, 0.0, 1.0], inflate=-0.1) == []


def test_box_select_missing_axis_counts_as_zero(strip_nodes):
    cells = Quad4(STRIP)
    assert cells.box_select(strip_nodes, [0.0, 1.0, 0.0, 1.0, -1.0, 1.0]) == [0]
    assert cells.box_select(strip_nodes, [0.0, 1.0, 0.0, 1.0, 0.5, 1.0], any_node=True) == []


def test_box_select_rejects_bad_input(strip_nodes):
    cells = Quad4(STRIP)
    with pytest.raises(GCellSetError):
        cells.box_select(strip_nodes, [0.0, 1.0, 0.0])
    with pytest.raises(GCellSetError):
        cells.box_select([[0.0, 0.0]], [0.0, 1.0])


def test_boundary_conn_matches_boundary_cells():
    cells = Quad4(STRIP)
    np.testing.assert_array_equal(cells.boundary_conn(), cells.topology.boundary_conn())
    np.testing.assert_array_equal(cells.boundary().conn(), cells.boundary_conn())


def test_hex_triangles_cover_each_face_once():
    triangles = Hex8(CUBE).triangles()
    faces = [(0, 1, 2, 3), (0, 1, 5, 4), (1, 2, 6, 5), (2, 3, 7, 6), (0, 3, 7, 4), (4, 5, 6, 7)]
    for k, face in enumerate(faces):
        pair = triangles[2 * k:2 * k + 2]
        assert set(pair.ravel().tolist()) == set(face)
        # the two triangles of a quad meet along a diagonal, not along an edge
        shared = set(pair[0].tolist()) & set(pair[1].tolist())
        assert len(shared) == 2
        first, second = sorted(face.index(node) for node in shared)
        assert second - first == 2
