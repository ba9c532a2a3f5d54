"""
Lattices: unit cells, finite lattices, bonds and the tools built on them.

This module exposes the geometry classes together with the site indexing,
neighbor table, k-space and correlation helpers so that a typical setup is a
single import:

>>> import numpy as np
>>> from lattice_utilities.lattices import UnitCell, Lattice, Bond, build_neighbor_table
>>> cell    = UnitCell(np.eye(2))
>>> lat     = Lattice([4, 4], [True, False])
>>> table   = build_neighbor_table([Bond((1, 1), (1, 0)), Bond((1, 1), (0, 1))], cell, lat)
"""

from .unit_cell import UnitCell
from .bond      import Bond
from .lattice   import Lattice
from .tools     import (
    NO_SITE,
    LatticeDirection,
    LatticeBC,
    LatticeErrorMsg,
    LatticeError,
    ConfigurationError,
    SiteIndexError,
    BoundaryError,
    handle_boundary_conditions,
    num_sites,
    valid_site,
    site_to_unitcell,
    site_to_orbital,
    site_to_location,
    site_index,
    displace,
    sites_to_displacement,
    build_neighbor_table,
    sorted_neighbor_table_perm,
    canonicalize,
    SiteNeighbors,
    NeighborTableMap,
    map_neighbor_table,
    adjacency_matrix,
    k_grid_shape,
    calc_k_point,
    calc_k_points,
    translational_avg,
)

__all__ = [
    "UnitCell",
    "Bond",
    "Lattice",
    "NO_SITE",
    "LatticeDirection",
    "LatticeBC",
    "LatticeErrorMsg",
    "LatticeError",
    "ConfigurationError",
    "SiteIndexError",
    "BoundaryError",
    "handle_boundary_conditions",
    "num_sites",
    "valid_site",
    "site_to_unitcell",
    "site_to_orbital",
    "site_to_location",
    "site_index",
    "displace",
    "sites_to_displacement",
    "build_neighbor_table",
    "sorted_neighbor_table_perm",
    "canonicalize",
    "SiteNeighbors",
    "NeighborTableMap",
    "map_neighbor_table",
    "adjacency_matrix",
    "k_grid_shape",
    "calc_k_point",
    "calc_k_points",
    "translational_avg",
]
