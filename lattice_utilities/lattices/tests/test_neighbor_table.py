"""
Tests for neighbor table construction, canonical ordering, site maps and
adjacency matrices.
"""

import pytest
import numpy as np
import scipy.sparse as sp
from lattice_utilities.lattices import (
    UnitCell, Lattice, Bond, ConfigurationError, SiteNeighbors,
    build_neighbor_table, sorted_neighbor_table_perm, canonicalize,
    map_neighbor_table, adjacency_matrix, num_sites,
)

# -------------------------------------------------------------------

@pytest.fixture
def chain():
    return UnitCell(np.eye(1)), Lattice([4], [True])

@pytest.fixture
def square():
    return UnitCell(np.eye(2)), Lattice([3, 3], [True, True])

SQUARE_BONDS = [Bond((1, 1), (1, 0)), Bond((1, 1), (0, 1))]

def _is_canonical(table):
    pairs = [tuple(c) for c in table.T]
    return all(a <= b for a, b in pairs) and pairs == sorted(pairs)

# -------------------------------------------------------------------

class TestBuildNeighborTable:

    def test_periodic_chain(self, chain):
        table = build_neighbor_table(Bond((1, 1), (1,)), *chain)
        assert table.dtype.kind == "i"
        assert np.array_equal(table, [[1, 2, 3, 4], [2, 3, 4, 1]])

    def test_open_chain_drops_last_cell(self):
        cell  = UnitCell(np.eye(1))
        lat   = Lattice([4], [False])
        table = build_neighbor_table(Bond((1, 1), (1,)), cell, lat)
        assert np.array_equal(table, [[1, 2, 3], [2, 3, 4]])

    def test_open_square_counts(self):
        cell  = UnitCell(np.eye(2))
        lat   = Lattice([3, 3], [False, False])
        table = build_neighbor_table(Bond((1, 1), (1, 0)), cell, lat)
        assert table.shape == (2, 6)

    def test_bonds_concatenate_in_order(self, chain):
        bonds = [Bond((1, 1), (1,)), Bond((1, 1), (2,))]
        table = build_neighbor_table(bonds, *chain)
        assert table.shape == (2, 8)
        assert np.array_equal(table[:, :4], build_neighbor_table(bonds[0], *chain))
        assert np.array_equal(table[:, 4:], build_neighbor_table(bonds[1], *chain))

    def test_no_deduplication(self, chain):
        bond  = Bond((1, 1), (1,))
        table = build_neighbor_table([bond, bond], *chain)
        assert table.shape == (2, 8)

    def test_two_orbital_cell(self):
        cell  = UnitCell(np.eye(1), [[0.0], [0.5]])
        lat   = Lattice([3], [False])
        table = build_neighbor_table([Bond((1, 2), (0,)), Bond((2, 1), (1,))], cell, lat)
        assert np.array_equal(table, [[1, 3, 5, 2, 4], [2, 4, 6, 3, 5]])

    def test_empty(self):
        cell  = UnitCell(np.eye(1))
        lat   = Lattice([1], [False])
        table = build_neighbor_table(Bond((1, 1), (1,)), cell, lat)
        assert table.shape == (2, 0)
        assert build_neighbor_table([], cell, lat).shape == (2, 0)

    def test_inconsistent_bond(self, chain):
        with pytest.raises(ConfigurationError):
            build_neighbor_table(Bond((1, 2), (1,)), *chain)
        with pytest.raises(ConfigurationError):
            build_neighbor_table(Bond((1, 1), (1, 0)), *chain)
        with pytest.raises(ConfigurationError):
            build_neighbor_table([(1, 1)], *chain)

# -------------------------------------------------------------------

class TestCanonicalize:

    def test_chain_example(self, chain):
        table = build_neighbor_table(Bond((1, 1), (1,)), *chain)
        inv   = canonicalize(table)
        assert np.array_equal(table, [[1, 1, 2, 3], [2, 4, 3, 4]])
        assert np.array_equal(inv, [0, 2, 3, 1])

    def test_canonical_form(self, square):
        table = build_neighbor_table(SQUARE_BONDS, *square)
        canonicalize(table)
        assert table.shape == (2, 18)
        assert _is_canonical(table)

    def test_inverse_permutation_realigns(self, square):
        table    = build_neighbor_table(SQUARE_BONDS, *square)
        original = table.copy()
        inv      = canonicalize(table)
        normed   = np.sort(original, axis=0)
        for b in range(original.shape[1]):
            assert np.array_equal(table[:, inv[b]], normed[:, b])

        side            = np.arange(original.shape[1]) * 10
        side_new        = np.empty_like(side)
        side_new[inv]   = side
        assert np.array_equal(side_new[inv[5]], side[5])

        # new position -> original column
        back = np.argsort(inv)
        for b in range(original.shape[1]):
            assert np.array_equal(table[:, b], normed[:, back[b]])

    def test_idempotent(self, square):
        table = build_neighbor_table(SQUARE_BONDS, *square)
        canonicalize(table)
        once  = table.copy()
        inv2  = canonicalize(table)
        assert np.array_equal(table, once)
        assert np.array_equal(inv2, np.arange(table.shape[1]))

    def test_sorted_perm_does_not_reorder(self, chain):
        table = build_neighbor_table(Bond((1, 1), (1,)), *chain)
        perm  = sorted_neighbor_table_perm(table)
        # rows are normalized, columns stay in place
        assert np.array_equal(table, [[1, 2, 3, 1], [2, 3, 4, 4]])
        assert np.array_equal(perm, [0, 3, 1, 2])
        assert _is_canonical(table[:, perm])

    def test_stable_with_duplicates(self):
        table = np.array([[2, 1, 2, 1], [1, 2, 1, 3]])
        inv   = canonicalize(table)
        assert np.array_equal(table, [[1, 1, 1, 1], [2, 2, 2, 3]])
        assert np.array_equal(inv, [0, 1, 2, 3])

    def test_empty(self):
        table = np.empty((2, 0), dtype=np.int64)
        assert canonicalize(table).shape == (0,)

    @pytest.mark.parametrize("table", [
        np.zeros((3, 2), dtype=np.int64),
        np.ones((2, 2), dtype=float),
        np.array([[0, 1], [1, 2]]),
        [[1, 2], [2, 3]],
    ])
    def test_invalid(self, table):
        with pytest.raises(ConfigurationError):
            canonicalize(table)

# -------------------------------------------------------------------

class TestNeighborTableMap:

    def test_chain_map(self, chain):
        table = build_neighbor_table(Bond((1, 1), (1,)), *chain)
        canonicalize(table)
        nmap  = map_neighbor_table(table)
        assert len(nmap) == 4
        assert nmap.ncolumns == 4
        assert nmap[1] == SiteNeighbors((0, 1), (2, 4))
        assert nmap[4].bonds == (1, 3)
        assert nmap[4].neighbors == (1, 3)
        assert nmap.degree(2) == 2

    def test_snapshot_and_read_only(self, chain):
        table = build_neighbor_table(Bond((1, 1), (1,)), *chain)
        nmap  = map_neighbor_table(table)
        table[1, 0] = 3
        assert nmap[1].neighbors == (2, 4)
        with pytest.raises(TypeError):
            nmap[5] = SiteNeighbors((), ())

    def test_missing_sites(self):
        cell  = UnitCell(np.eye(1))
        lat   = Lattice([4], [False])
        nmap  = map_neighbor_table(build_neighbor_table(Bond((1, 1), (2,)), cell, lat))
        assert sorted(nmap) == [1, 2, 3, 4]
        table = np.array([[1], [3]])
        nmap  = map_neighbor_table(table)
        assert 2 not in nmap
        assert nmap.degree(2) == 0

    def test_self_loop_listed_once(self):
        cell  = UnitCell(np.eye(1))
        lat   = Lattice([1], [True])
        table = build_neighbor_table(Bond((1, 1), (1,)), cell, lat)
        assert np.array_equal(table, [[1], [1]])
        assert map_neighbor_table(table)[1] == SiteNeighbors((0,), (1,))

# -------------------------------------------------------------------

class TestAdjacency:

    def test_ring(self, chain):
        table = build_neighbor_table(Bond((1, 1), (1,)), *chain)
        A     = adjacency_matrix(table, *chain)
        assert sp.issparse(A)
        dense = A.toarray()
        assert np.array_equal(dense, dense.T)
        assert np.array_equal(dense.sum(axis=1), [2, 2, 2, 2])
        assert dense[0, 3] == 1 and dense[0, 2] == 0

    def test_dense_and_multiplicity(self):
        cell  = UnitCell(np.eye(1))
        lat   = Lattice([2], [True])
        table = build_neighbor_table(Bond((1, 1), (1,)), cell, lat)
        A     = adjacency_matrix(table, cell, lat, sparse=False)
        assert isinstance(A, np.ndarray)
        assert np.array_equal(A, [[0, 2], [2, 0]])

    def test_square_degree(self, square):
        table = build_neighbor_table(SQUARE_BONDS, *square)
        A     = adjacency_matrix(table, *square)
        assert A.shape == (num_sites(*square), num_sites(*square))
        assert np.array_equal(np.asarray(A.sum(axis=1)).ravel(), np.full(9, 4))

    def test_sites_beyond_lattice(self, chain):
        with pytest.raises(ConfigurationError):
            adjacency_matrix(np.array([[1], [5]]), *chain)
