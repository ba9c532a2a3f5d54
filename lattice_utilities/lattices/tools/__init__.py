"""Public lattice-tool exports for convenient one-line imports.

Examples
--------
from lattice_utilities.lattices.tools import (
    LatticeBC, NO_SITE, site_index, displace,
    build_neighbor_table, canonicalize, calc_k_points, translational_avg,
)
"""

from .lattice_tools import (
    NO_SITE,
    LatticeDirection,
    LatticeBC,
    LatticeErrorMsg,
    LatticeError,
    ConfigurationError,
    SiteIndexError,
    BoundaryError,
    handle_boundary_conditions,
    handle_boundary_conditions_detailed,
    handle_periodic,
)
from .lattice_index import (
    num_sites,
    valid_site,
    check_site,
    site_to_unitcell,
    site_to_orbital,
    site_to_location,
    site_index,
    displace,
    sites_to_displacement,
)
from .neighbor_table import (
    build_neighbor_table,
    sorted_neighbor_table_perm,
    canonicalize,
    SiteNeighbors,
    NeighborTableMap,
    map_neighbor_table,
    adjacency_matrix,
)
from .lattice_kspace import k_grid_shape, calc_k_point, calc_k_points
from .lattice_correlation import translational_avg

__all__ = [
    "NO_SITE",
    "LatticeDirection",
    "LatticeBC",
    "LatticeErrorMsg",
    "LatticeError",
    "ConfigurationError",
    "SiteIndexError",
    "BoundaryError",
    "handle_boundary_conditions",
    "handle_boundary_conditions_detailed",
    "handle_periodic",
    "num_sites",
    "valid_site",
    "check_site",
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
