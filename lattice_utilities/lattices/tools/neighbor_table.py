"""
Neighbor tables.

A neighbor table is a ``2 x M`` integer array whose column ``b`` holds the two
sites ``(s1, s2)`` joined by one instance of a :class:`Bond`. Column (bond)
indices are 0-based array positions, site entries are 1-based site indices.

The module provides:
- :func:`build_neighbor_table`      : apply bonds at every unit cell,
- :func:`canonicalize`              : in-place sort into ``s1 <= s2``, lexicographic order,
- :func:`map_neighbor_table`        : site -> incident bonds and neighbors,
- :func:`adjacency_matrix`          : (sparse) site adjacency with bond multiplicities.

--------------------------------
File            : lattices/tools/neighbor_table.py
Date            : 2025-02-01
--------------------------------
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, NamedTuple, Tuple, Union

import numpy as np
import scipy.sparse as sp

from ...common.config import PY_NP_INT_TYPE
from ...common.flog import get_global_logger
from .lattice_tools import NO_SITE, ConfigurationError, LatticeErrorMsg
from .lattice_index import num_sites, site_index, displace

if TYPE_CHECKING:
    from ..bond import Bond
    from ..unit_cell import UnitCell
    from ..lattice import Lattice

__all__ = [
    "build_neighbor_table", "sorted_neighbor_table_perm", "canonicalize",
    "SiteNeighbors", "NeighborTableMap", "map_neighbor_table", "adjacency_matrix",
]

# -----------------------------------------------------------------------------------------------------------
#! Builder
# -----------------------------------------------------------------------------------------------------------

def _build_single(bond: "Bond", unit_cell: "UnitCell", lattice: "Lattice") -> np.ndarray:
    bond.check(unit_cell, lattice)
    o1, o2  = bond.orbitals
    columns = []
    for u in range(1, lattice.N + 1):
        s1 = site_index(u, o1, unit_cell, lattice)
        s2 = displace(s1, bond.displacement, o2, unit_cell, lattice)
        if s2 != NO_SITE:
            columns.append((s1, s2))

    get_global_logger().debug(f"Neighbor table: {bond} kept {len(columns)}, dropped {lattice.N - len(columns)}.", lvl=2)
    if not columns:
        return np.empty((2, 0), dtype=PY_NP_INT_TYPE)
    return np.array(columns, dtype=PY_NP_INT_TYPE).T

def build_neighbor_table(bonds      : Union["Bond", Iterable["Bond"]],
                        unit_cell   : "UnitCell",
                        lattice     : "Lattice") -> np.ndarray:
    '''
    Neighbor table obtained by applying ``bonds`` at every unit cell.

    For each bond ``(o1, o2, dl)`` and each unit cell ``u = 1..N`` the column
    ``(site_index(u, o1), displace(s1, dl, o2))`` is appended, unless the second
    site lies beyond an open boundary. Several bonds are concatenated in the
    order given; nothing is merged or de-duplicated.

    Args:
        bonds       : a single Bond or an iterable of Bonds
    Returns:
        ``2 x M`` integer array (``2 x 0`` when nothing survives)
    Raises:
        ConfigurationError: if a bond does not match the unit cell or the lattice.
    '''
    from ..bond import Bond

    bond_list = [bonds] if isinstance(bonds, Bond) else list(bonds)
    for bond in bond_list:
        if not isinstance(bond, Bond):
            raise ConfigurationError(LatticeErrorMsg.INCONSISTENT_BOND, f"Expected Bond instances; got {type(bond).__name__}.")

    tables = [_build_single(bond, unit_cell, lattice) for bond in bond_list]
    if not tables:
        return np.empty((2, 0), dtype=PY_NP_INT_TYPE)
    table = np.concatenate(tables, axis=1)
    get_global_logger().debug(f"Neighbor table: {len(bond_list)} bond(s), {table.shape[1]} column(s) on {lattice!r}.", lvl=1)
    return table

# -----------------------------------------------------------------------------------------------------------
#! Canonical form
# -----------------------------------------------------------------------------------------------------------

def _check_table(table: np.ndarray):
    if not isinstance(table, np.ndarray) or table.ndim != 2 or table.shape[0] != 2:
        shape = getattr(table, "shape", None)
        raise ConfigurationError(LatticeErrorMsg.INVALID_TABLE, f"A neighbor table must be a 2 x M array; got shape {shape}.")
    if table.dtype.kind not in "iu":
        raise ConfigurationError(LatticeErrorMsg.INVALID_TABLE, f"A neighbor table must hold integers; got dtype {table.dtype}.")
    if table.size and table.min() < 1:
        raise ConfigurationError(LatticeErrorMsg.INVALID_TABLE, "Neighbor table entries are 1-based site indices.")

def sorted_neighbor_table_perm(table: np.ndarray) -> np.ndarray:
    '''
    Put the smaller site of every column in the first row (in place) and return
    the stable permutation ``perm`` sorting the columns lexicographically,
    i.e. ``table[:, perm]`` is sorted. The column order itself is not changed.
    '''
    _check_table(table)
    if table.shape[1] == 0:
        return np.empty(0, dtype=np.intp)

    swap                        = table[0] > table[1]
    table[0, swap], table[1, swap] = table[1, swap], table[0, swap]

    max_index   = np.int64(table.max())
    keys        = max_index * table[0].astype(np.int64) + table[1].astype(np.int64)
    return np.argsort(keys, kind="stable")

def canonicalize(table: np.ndarray) -> np.ndarray:
    '''
    Sort a neighbor table in place into canonical form.

    After the call ``table[0, b] <= table[1, b]`` for every column and the columns
    are in lexicographic ``(s1, s2)`` order. The returned ``inv_perm`` maps each
    original column to its new position, ``table[:, inv_perm[b]]`` is the original
    column ``b`` (with its rows possibly swapped). Data kept per column realigns as
    ``x_new[inv_perm] = x``. A second call returns the identity.
    The opposite map, from new position to original column, is
    ``np.argsort(inv_perm)`` (the ``perm`` of :func:`sorted_neighbor_table_perm`),
    so ``table[:, b]`` came from original column ``np.argsort(inv_perm)[b]``.

    Raises:
        ConfigurationError: if ``table`` is not a ``2 x M`` integer array.
    '''
    perm        = sorted_neighbor_table_perm(table)
    table[:]    = table[:, perm]
    return np.argsort(perm, kind="stable")

# -----------------------------------------------------------------------------------------------------------
#! Site map
# -----------------------------------------------------------------------------------------------------------

class SiteNeighbors(NamedTuple):
    ''' Incident columns of a site and the sites at their other ends, in column order. '''
    bonds       : Tuple[int, ...]
    neighbors   : Tuple[int, ...]

class NeighborTableMap(Mapping):
    '''
    Read-only map ``site -> SiteNeighbors`` of a neighbor table.

    It is a snapshot: mutating or rebuilding the table does not update the map,
    request a new one with :func:`map_neighbor_table`. Sites without bonds are
    absent.
    '''

    def __init__(self, entries: Dict[int, SiteNeighbors], ncolumns: int):
        self._entries   = entries
        self._ncolumns  = ncolumns

    def __getitem__(self, site: int) -> SiteNeighbors:
        return self._entries[site]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def ncolumns(self) -> int:      return self._ncolumns

    def degree(self, site: int) -> int:
        ''' Number of incident columns (0 for sites absent from the map). '''
        entry = self._entries.get(site)
        return 0 if entry is None else len(entry.bonds)

    def __repr__(self):
        return f"NeighborTableMap(sites={len(self)}, columns={self._ncolumns})"

def map_neighbor_table(table: np.ndarray) -> NeighborTableMap:
    '''
    Build the site map of ``table`` in one pass over its columns.

    A column ``b = (s1, s2)`` is listed under both ``s1`` (neighbor ``s2``) and
    ``s2`` (neighbor ``s1``); a self-loop is listed once.
    '''
    _check_table(table)
    bonds       : Dict[int, List[int]] = {}
    neighbors   : Dict[int, List[int]] = {}

    for b in range(table.shape[1]):
        s1, s2 = int(table[0, b]), int(table[1, b])
        bonds.setdefault(s1, []).append(b)
        neighbors.setdefault(s1, []).append(s2)
        if s2 != s1:
            bonds.setdefault(s2, []).append(b)
            neighbors.setdefault(s2, []).append(s1)

    entries = {s: SiteNeighbors(tuple(bonds[s]), tuple(neighbors[s])) for s in sorted(bonds)}
    return NeighborTableMap(entries, table.shape[1])

# -----------------------------------------------------------------------------------------------------------
#! Adjacency
# -----------------------------------------------------------------------------------------------------------

def adjacency_matrix(table      : np.ndarray,
                    unit_cell   : "UnitCell",
                    lattice     : "Lattice",
                    sparse      : bool = True) -> Union[sp.csr_matrix, np.ndarray]:
    r'''
    Symmetric site adjacency matrix of a neighbor table,

    $$
        A_{ij} = \#\{ b : \{s_1^b, s_2^b\} = \{i+1, j+1\} \},
    $$

    so rows and columns are 0-based site positions and repeated columns add up.

    Args:
        sparse      : return a scipy.sparse CSR matrix if True, a dense array otherwise
    Returns:
        ``n N x n N`` integer matrix
    '''
    _check_table(table)
    ns = num_sites(unit_cell, lattice)
    if table.size and table.max() > ns:
        raise ConfigurationError(LatticeErrorMsg.INVALID_TABLE, f"Neighbor table refers to sites beyond {ns}.")

    s1, s2  = table[0] - 1, table[1] - 1
    offdiag = s1 != s2
    rows    = np.concatenate([s1, s2[offdiag]])
    cols    = np.concatenate([s2, s1[offdiag]])
    data    = np.ones(rows.shape[0], dtype=PY_NP_INT_TYPE)

    A = sp.csr_matrix((data, (rows, cols)), shape=(ns, ns))
    A.sum_duplicates()
    return A if sparse else A.toarray()

# -----------------------------------------------------------------------------------------------------------
#! EOF
# -----------------------------------------------------------------------------------------------------------
