"""
Site indexing on a lattice with a multi-orbital unit cell.

Sites are numbered from 1 to ``n * N``, orbitals varying fastest:

    s = n * (u - 1) + o,        u in [1, N],  o in [1, n]

where ``u`` is the unit-cell index of :meth:`Lattice.unitcell_index`. A lookup
that leaves the lattice through an open boundary returns :data:`NO_SITE`
instead of raising, so that callers can drop broken bonds.

Example
-------
>>> cell = UnitCell(np.eye(1), [[0.0], [0.5]])
>>> lat  = Lattice([4], [True])
>>> displace(site_index(4, 2, cell, lat), [1], 1, cell, lat)
1

--------------------------------
File            : lattices/tools/lattice_index.py
Date            : 2025-02-01
--------------------------------
"""

from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

import numpy as np

from .lattice_tools import (
    NO_SITE, ConfigurationError, SiteIndexError, LatticeErrorMsg, as_int_vector, is_integer
)

if TYPE_CHECKING:
    from ..unit_cell import UnitCell
    from ..lattice import Lattice

__all__ = [
    "num_sites", "valid_site", "check_site",
    "site_to_unitcell", "site_to_orbital", "site_to_location",
    "site_index", "displace", "sites_to_displacement",
]

# -----------------------------------------------------------------------------------------------------------

def _check_dims(unit_cell: "UnitCell", lattice: "Lattice"):
    if unit_cell.D != lattice.D:
        raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH,
                                f"Unit cell (D={unit_cell.D}) and lattice (D={lattice.D}) disagree on the dimension.")

def num_sites(unit_cell: "UnitCell", lattice: "Lattice") -> int:
    ''' Total number of sites, ``n * N``. '''
    _check_dims(unit_cell, lattice)
    return unit_cell.n * lattice.N

def valid_site(s: int, unit_cell: "UnitCell", lattice: "Lattice") -> bool:
    return is_integer(s) and 1 <= s <= num_sites(unit_cell, lattice)

def check_site(s: int, unit_cell: "UnitCell", lattice: "Lattice") -> int:
    ''' Return ``s`` as an int if it is a site of the lattice, raise ``SiteIndexError`` otherwise. '''
    if not valid_site(s, unit_cell, lattice):
        raise SiteIndexError(LatticeErrorMsg.SITE_OUT_OF_RANGE,
                            f"Site must be in [1, {num_sites(unit_cell, lattice)}]; got {s!r}.")
    return int(s)

# -----------------------------------------------------------------------------------------------------------
#! Site decomposition
# -----------------------------------------------------------------------------------------------------------

def site_to_unitcell(s: int, unit_cell: "UnitCell", lattice: "Lattice") -> int:
    ''' Unit cell containing site ``s``. '''
    s = check_site(s, unit_cell, lattice)
    return (s - 1) // unit_cell.n + 1

def site_to_orbital(s: int, unit_cell: "UnitCell", lattice: "Lattice") -> int:
    ''' Orbital of site ``s`` within its unit cell. '''
    s = check_site(s, unit_cell, lattice)
    return (s - 1) % unit_cell.n + 1

def site_to_location(s           : int,
                    unit_cell   : "UnitCell",
                    lattice     : "Lattice",
                    out         : Optional[np.ndarray] = None) -> Tuple[np.ndarray, int]:
    '''
    Unit-cell location and orbital of site ``s``.

    Returns:
        ``(l, o)``, with ``l`` written into ``out`` when given
    Raises:
        SiteIndexError: if ``s`` is not in ``[1, n * N]``.
    '''
    u, o = divmod(check_site(s, unit_cell, lattice) - 1, unit_cell.n)
    return lattice.location(u + 1, out=out), o + 1

# -----------------------------------------------------------------------------------------------------------
#! Site composition
# -----------------------------------------------------------------------------------------------------------

def site_index(u_or_l    : Union[int, Sequence[int]],
               o         : int,
               unit_cell : "UnitCell",
               lattice   : "Lattice") -> int:
    '''
    Site index of orbital ``o`` in a unit cell.

    The unit cell is given either by its index ``u`` or by its location ``l``.
    A location may be un-reduced along periodic axes; it is reduced on a copy.

    Args:
        u_or_l      : unit-cell index (int) or location (length D)
        o           : orbital, 1-based
    Returns:
        site index, or ``NO_SITE`` if the location lies beyond an open boundary
    Raises:
        SiteIndexError: if ``u`` or ``o`` is out of range.
    '''
    _check_dims(unit_cell, lattice)
    o = unit_cell.check_orbital(o)

    if is_integer(u_or_l):
        u = lattice.check_unitcell(u_or_l)
    else:
        loc = as_int_vector(u_or_l, lattice.D, "location")
        if not lattice.valid_location(loc):
            return NO_SITE
        u = lattice.unitcell_index(loc)
    return unit_cell.n * (u - 1) + o

def displace(s1: int, dl: Sequence[int], o2: int, unit_cell: "UnitCell", lattice: "Lattice") -> int:
    '''
    Site reached from ``s1`` by moving ``dl`` unit cells and switching to orbital ``o2``.

    Returns:
        the displaced site, or ``NO_SITE`` when an open boundary is crossed
    Raises:
        SiteIndexError: if ``s1`` or ``o2`` is out of range.
    '''
    l1, _   = site_to_location(s1, unit_cell, lattice)
    l1     += as_int_vector(dl, lattice.D, "displacement")
    return site_index(l1, o2, unit_cell, lattice)

def sites_to_displacement(s1: int, s2: int, unit_cell: "UnitCell", lattice: "Lattice") -> Tuple[int, int, np.ndarray]:
    '''
    Orbitals and minimum-image unit-cell displacement connecting ``s1`` to ``s2``.

    Returns:
        ``(o1, o2, dl)`` such that ``displace(s1, dl, o2) == s2``.
        Along open axes ``dl`` is the plain difference of locations.
    '''
    l1, o1 = site_to_location(s1, unit_cell, lattice)
    l2, o2 = site_to_location(s2, unit_cell, lattice)
    return o1, o2, lattice.simplify(l2 - l1)

# -----------------------------------------------------------------------------------------------------------
#! EOF
# -----------------------------------------------------------------------------------------------------------
