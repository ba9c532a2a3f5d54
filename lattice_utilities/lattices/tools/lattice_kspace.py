'''
Reciprocal-space sampling of a finite lattice.

We define the k-points in units of the reciprocal lattice vectors:
    k = f1 * b1 + f2 * b2 + f3 * b3,
with f_d = i_d / g_d and i_d = 0, 1, ..., g_d - 1. The number of samples g_d is
L_d along periodic axes and 1 along open ones, so an open axis contributes only
the origin.

--------------------------------
File            : lattices/tools/lattice_kspace.py
--------------------------------
'''

from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

import numpy as np

from ...common.config import PY_NP_FLOAT_TYPE
from .lattice_tools import ConfigurationError, SiteIndexError, LatticeErrorMsg, as_int_vector

if TYPE_CHECKING:
    from ..unit_cell import UnitCell
    from ..lattice import Lattice

__all__ = ["k_grid_shape", "calc_k_point", "calc_k_points"]

# -----------------------------------------------------------------------------------------------------------

def k_grid_shape(lattice: Lattice) -> Tuple[int, ...]:
    ''' Number of k-point samples per reciprocal direction. '''
    return tuple(L if p else 1 for L, p in zip(lattice.L, lattice.periodic))

def _check_dims(unit_cell: UnitCell, lattice: Lattice):
    if unit_cell.D != lattice.D:
        raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH,
                                f"Unit cell (D={unit_cell.D}) and lattice (D={lattice.D}) disagree on the dimension.")

# -----------------------------------------------------------------------------------------------------------

def calc_k_point(k_loc      : Sequence[int],
                unit_cell   : UnitCell,
                lattice     : Lattice,
                out         : Optional[np.ndarray] = None) -> np.ndarray:
    """
    Cartesian k-point at grid coordinates ``k_loc``.

    Parameters
    ----------
    k_loc : Sequence[int]
        Integer grid coordinates, ``0 <= k_loc[d] < g[d]``.
    out : np.ndarray, optional
        Output array of length D.

    Returns
    -------
    np.ndarray
        ``sum_d (k_loc[d] / g[d]) * reciprocal_vecs[:, d]``

    Raises
    ------
    SiteIndexError
        If a coordinate lies outside the grid.
    """
    _check_dims(unit_cell, lattice)
    g   = k_grid_shape(lattice)
    loc = as_int_vector(k_loc, lattice.D, "k-point location")
    for d in range(lattice.D):
        if not 0 <= loc[d] < g[d]:
            raise SiteIndexError(LatticeErrorMsg.KPOINT_OUT_OF_RANGE,
                                f"k-point coordinate {d} must be in [0, {g[d]}); got {loc[d]}.")

    if out is None:
        out = np.empty(lattice.D, dtype=PY_NP_FLOAT_TYPE)
    frac = loc / np.asarray(g, dtype=PY_NP_FLOAT_TYPE)
    np.matmul(unit_cell.reciprocal_vecs, frac, out=out)
    return out

def calc_k_points(unit_cell: UnitCell, lattice: Lattice, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Full k-point grid.

    Returns
    -------
    np.ndarray, shape (D, g[0], ..., g[D-1])
        ``k_points[:, i_0, ..., i_{D-1}]`` is ``calc_k_point((i_0, ..., i_{D-1}))``.
        The grid axes are enumerated in row-major order, the same order as the
        unit-cell locations.
    """
    _check_dims(unit_cell, lattice)
    g       = k_grid_shape(lattice)
    shape   = (lattice.D,) + g
    if out is None:
        out = np.empty(shape, dtype=PY_NP_FLOAT_TYPE)
    elif out.shape != shape:
        raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH, f"k-point buffer must have shape {shape}; got {out.shape}.")

    # fractional coordinates f_d = i_d / g_d, stacked along the first axis
    frac    = np.indices(g, dtype=PY_NP_FLOAT_TYPE) / np.asarray(g, dtype=PY_NP_FLOAT_TYPE).reshape((-1,) + (1,) * lattice.D)
    out[...] = np.tensordot(unit_cell.reciprocal_vecs, frac, axes=(1, 0))
    return out

# -----------------------------------------------------------------------------------------------------------
#! EOF
# -----------------------------------------------------------------------------------------------------------
