"""
Tests for the Lattice unit-cell indexing and the site-level index functions.

Validates:
- periodic reduction and open-boundary detection,
- the unit-cell index <-> location bijection (row-major order),
- the site index <-> (location, orbital) decomposition,
- displacements, the open-boundary sentinel and the minimum-image convention.
"""

import pytest
import numpy as np
from lattice_utilities.lattices import (
    UnitCell, Lattice, LatticeBC, NO_SITE,
    ConfigurationError, SiteIndexError, BoundaryError,
    num_sites, valid_site, site_to_unitcell, site_to_orbital, site_to_location,
    site_index, displace, sites_to_displacement,
)

# -------------------------------------------------------------------

class TestLatticeConstruction:

    def test_basic_properties(self):
        lat = Lattice([2, 3, 4], [True, False, True])
        assert lat.D == 3
        assert lat.L == (2, 3, 4)
        assert lat.N == 24
        assert lat.periodic == (True, False, True)
        assert lat.strides == (12, 4, 1)

    def test_periodic_defaults_and_labels(self):
        assert Lattice([3, 3]).periodic == (True, True)
        assert Lattice([3, 3, 3], False).periodic == (False, False, False)
        assert Lattice([3, 3], "obc").periodic == (False, False)
        assert Lattice([3, 3], LatticeBC.MBC).periodic == (True, False)
        assert Lattice([3, 3], "sbc").periodic == (False, True)

    @pytest.mark.parametrize("L, periodic", [
        ([],            []),
        ([1, 1, 1, 1],  None),
        ([0],           [True]),
        ([4, -2],       [True, True]),
        ([2.5],         [True]),
        ([2, 2],        [True]),
        ([2],           "xyz"),
    ])
    def test_invalid(self, L, periodic):
        with pytest.raises(ConfigurationError):
            Lattice(L, periodic)

    def test_repr(self):
        assert repr(Lattice([4], [False])) == "Lattice(D=1, N=4, L=[4], periodic=[False])"

# -------------------------------------------------------------------

class TestBoundaries:

    def test_periodic_wraparound(self):
        lat = Lattice([4], [True])
        assert lat.pbc([-1]) == [3]
        assert lat.pbc([4]) == [0]
        assert lat.pbc([-9]) == [3]

    def test_pbc_in_place(self):
        lat = Lattice([4, 3], [True, True])
        l   = np.array([5, -1])
        res = lat.pbc(l)
        assert res is l
        assert np.array_equal(l, [1, 2])

    def test_pbc_tuple_is_copied(self):
        lat = Lattice([4, 3], [True, True])
        assert np.array_equal(lat.pbc((5, -1)), [1, 2])

    def test_pbc_open_boundary(self):
        lat = Lattice([4, 3], [True, False])
        assert lat.pbc([-1, 2]) == [3, 2]
        with pytest.raises(BoundaryError):
            lat.pbc([0, 3])
        with pytest.raises(BoundaryError):
            lat.pbc([0, -1])

    def test_valid_location(self):
        lat = Lattice([4, 3], [True, False])
        l   = [-1, 1]
        assert lat.valid_location(l)
        assert l == [3, 1]
        assert not lat.valid_location([0, 3])
        assert not lat.valid_location([7, -1])

# -------------------------------------------------------------------

class TestUnitCellIndex:

    @pytest.mark.parametrize("L, periodic", [
        ([5],           [True]),
        ([3, 4],        [True, False]),
        ([2, 3, 4],     [False, True, True]),
    ])
    def test_bijection(self, L, periodic):
        lat = Lattice(L, periodic)
        for u in range(1, lat.N + 1):
            assert lat.unitcell_index(lat.location(u)) == u
        for l in lat.locations():
            assert np.array_equal(lat.location(lat.unitcell_index(l)), l)

    def test_row_major_order(self):
        lat = Lattice([2, 3])
        assert np.array_equal(lat.location(2), [0, 1])
        assert np.array_equal(lat.location(4), [1, 0])
        for l in lat.locations():
            assert lat.unitcell_index(l) - 1 == np.ravel_multi_index(tuple(l), lat.L)

    def test_locations_order(self):
        lat  = Lattice([2, 2, 3])
        locs = lat.locations()
        assert locs.shape == (12, 3)
        for u in range(1, lat.N + 1):
            assert np.array_equal(locs[u - 1], lat.location(u))

    def test_unitcell_index_does_not_mutate(self):
        lat = Lattice([2, 3])
        l   = np.array([-1, 0])
        assert lat.unitcell_index(l) == 4
        assert np.array_equal(l, [-1, 0])

    def test_unitcell_index_open_boundary(self):
        lat = Lattice([2, 3], [True, False])
        with pytest.raises(BoundaryError):
            lat.unitcell_index([0, 3])

    def test_location_out_of_range(self):
        lat = Lattice([2, 3])
        with pytest.raises(SiteIndexError):
            lat.location(0)
        with pytest.raises(IndexError):
            lat.location(7)

    def test_location_out_buffer(self):
        lat = Lattice([2, 3])
        out = np.zeros(2, dtype=int)
        assert lat.location(6, out=out) is out
        assert np.array_equal(out, [1, 2])

# -------------------------------------------------------------------

class TestSimplify:

    def test_examples(self):
        lat = Lattice([4, 5], [True, True])
        assert np.array_equal(lat.simplify([3, -3]), [-1, 2])
        assert np.array_equal(lat.simplify([-2, 0]), [-2, 0])
        assert np.array_equal(lat.simplify([9, -7]), [1, -2])

    def test_open_axis_untouched(self):
        lat = Lattice([4, 4], [True, False])
        assert np.array_equal(lat.simplify([3, 3]), [-1, 3])

    def test_returns_new_array(self):
        lat = Lattice([4])
        dl  = np.array([3])
        assert lat.simplify(dl) is not dl
        assert dl[0] == 3

    @pytest.mark.parametrize("L", [1, 2, 4, 5])
    def test_minimum_image_law(self, L):
        lat = Lattice([L], [True])
        for x in range(-L, L + 1):
            y = lat.simplify([x])[0]
            assert abs(y) <= abs(x)
            assert 2 * abs(y) <= L
            assert (y - x) % L == 0

# -------------------------------------------------------------------

@pytest.fixture
def cell_2d():
    return UnitCell(np.eye(2), [[0.0, 0.0], [0.5, 0.5]])

class TestSiteIndex:

    def test_num_sites(self, cell_2d):
        assert num_sites(cell_2d, Lattice([3, 2])) == 12

    def test_dimension_mismatch(self, cell_2d):
        with pytest.raises(ConfigurationError):
            num_sites(cell_2d, Lattice([4]))
        with pytest.raises(ConfigurationError):
            site_index(1, 1, cell_2d, Lattice([4]))

    def test_site_decomposition(self, cell_2d):
        lat = Lattice([3, 2], [True, False])
        n   = cell_2d.n
        for s in range(1, num_sites(cell_2d, lat) + 1):
            u = site_to_unitcell(s, cell_2d, lat)
            o = site_to_orbital(s, cell_2d, lat)
            assert n * (u - 1) + o == s
            assert site_index(u, o, cell_2d, lat) == s

            l, o2 = site_to_location(s, cell_2d, lat)
            assert o2 == o
            assert np.array_equal(l, lat.location(u))
            assert site_index(l, o2, cell_2d, lat) == s

    def test_orbitals_vary_fastest(self, cell_2d):
        lat = Lattice([3, 2])
        assert site_index(1, 2, cell_2d, lat) == 2
        assert site_index(2, 1, cell_2d, lat) == 3
        assert site_index([0, 1], 1, cell_2d, lat) == 3

    def test_valid_site(self, cell_2d):
        lat = Lattice([3, 2])
        assert valid_site(1, cell_2d, lat)
        assert valid_site(12, cell_2d, lat)
        assert not valid_site(0, cell_2d, lat)
        assert not valid_site(13, cell_2d, lat)

    def test_out_of_range(self, cell_2d):
        lat = Lattice([3, 2])
        with pytest.raises(SiteIndexError):
            site_to_unitcell(0, cell_2d, lat)
        with pytest.raises(SiteIndexError):
            site_to_location(13, cell_2d, lat)
        with pytest.raises(IndexError):
            site_index(7, 1, cell_2d, lat)
        with pytest.raises(IndexError):
            site_index(1, 3, cell_2d, lat)

    def test_location_wraps_without_mutation(self):
        cell = UnitCell(np.eye(1), [[0.0], [0.5]])
        lat  = Lattice([4], [True])
        l    = np.array([5])
        assert site_index(l, 1, cell, lat) == 3
        assert l[0] == 5

    def test_location_beyond_open_boundary(self):
        cell = UnitCell(np.eye(1))
        lat  = Lattice([4], [False])
        assert site_index([4], 1, cell, lat) == NO_SITE
        assert site_index([-1], 1, cell, lat) == 0

# -------------------------------------------------------------------

class TestDisplacements:

    def test_open_boundary_drop(self):
        cell = UnitCell(np.eye(1))
        lat  = Lattice([4], [False])
        assert displace(4, [1], 1, cell, lat) == 0
        assert displace(3, [1], 1, cell, lat) == 4

    def test_periodic_wrap(self):
        cell = UnitCell(np.eye(1), [[0.0], [0.5]])
        lat  = Lattice([4], [True])
        assert displace(site_index(4, 2, cell, lat), [1], 1, cell, lat) == 1
        assert displace(1, [-1], 2, cell, lat) == 8

    def test_displace_errors(self):
        cell = UnitCell(np.eye(1))
        lat  = Lattice([4])
        with pytest.raises(SiteIndexError):
            displace(5, [1], 1, cell, lat)
        with pytest.raises(SiteIndexError):
            displace(1, [1], 2, cell, lat)

    def test_sites_to_displacement_minimum_image(self):
        cell = UnitCell(np.eye(2))
        lat  = Lattice([4, 4])
        s2   = site_index([3, 1], 1, cell, lat)
        o1, o2, dl = sites_to_displacement(1, s2, cell, lat)
        assert (o1, o2) == (1, 1)
        assert np.array_equal(dl, [-1, 1])
        assert displace(1, dl, o2, cell, lat) == s2

    def test_sites_to_displacement_inverts_displace(self, cell_2d):
        lat = Lattice([3, 2], [True, False])
        ns  = num_sites(cell_2d, lat)
        for s1 in range(1, ns + 1):
            for s2 in range(1, ns + 1):
                o1, o2, dl = sites_to_displacement(s1, s2, cell_2d, lat)
                assert o1 == site_to_orbital(s1, cell_2d, lat)
                assert displace(s1, dl, o2, cell_2d, lat) == s2

    def test_sites_to_displacement_errors(self, cell_2d):
        lat = Lattice([3, 2])
        with pytest.raises(IndexError):
            sites_to_displacement(0, 1, cell_2d, lat)
