"""
Unit cell geometry.

A :class:`UnitCell` holds the primitive lattice vectors, the reciprocal vectors
derived from them and the positions of the ``n`` orbitals inside the cell.
All vectors are stored as **columns**:

- ``lattice_vecs[:, d]``    : primitive vector a_{d+1}
- ``reciprocal_vecs[:, d]`` : reciprocal vector b_{d+1}, ``reciprocal_vecs = 2 pi inv(lattice_vecs)``
- ``basis_vecs[:, s]``      : position of orbital s+1 relative to the cell origin

Orbitals are numbered from 1 to n, as are sites of a lattice.

--------------------------------
File            : lattices/unit_cell.py
Date            : 2025-02-01
--------------------------------
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import numpy as np

from ..common.config import PY_NP_FLOAT_TYPE
from .bond import Bond
from .tools.lattice_tools import (
    ConfigurationError, SiteIndexError, LatticeErrorMsg, as_int_vector, is_integer
)

VectorsLike = Union[np.ndarray, Sequence[Sequence[float]]]

# -----------------------------------------------------------------------------------------------------------

def _as_columns(vecs: VectorsLike, name: str) -> np.ndarray:
    '''
    Return a two-dimensional float array whose columns are the vectors.

    A numpy array is taken as a matrix with vectors in its columns. Any other
    sequence is taken as a list of vectors and stacked column-wise.
    '''
    try:
        if isinstance(vecs, np.ndarray):
            arr = np.array(vecs, dtype=PY_NP_FLOAT_TYPE)
        else:
            arr = np.column_stack([np.asarray(v, dtype=PY_NP_FLOAT_TYPE).reshape(-1) for v in vecs])
    except (TypeError, ValueError) as e:
        raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH, f"Could not interpret {name}: {e}") from e

    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH, f"{name} must be two-dimensional; got shape {arr.shape}.")
    return arr

# -----------------------------------------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class UnitCell:
    '''
    Immutable description of one repeating cell of a lattice.

    Parameters
    ----------
    lattice_vecs : array-like
        ``D x D`` matrix with the lattice vectors as columns, or a list of ``D`` vectors.
    basis_vecs : array-like, optional
        ``D x n`` matrix with the orbital positions as columns, or a list of ``n``
        vectors. Defaults to a single orbital at the cell origin.

    Example
    -------
    >>> cell = UnitCell([[1.0, 0.0], [0.5, np.sqrt(3) / 2]], [[0.0, 0.0], [0.5, np.sqrt(3) / 6]])
    >>> cell.D, cell.n
    (2, 2)

    A list is read as a list of vectors, a numpy array as a matrix with the
    vectors in its columns, so the same cell is

    >>> same = UnitCell(np.array([[1.0, 0.5], [0.0, np.sqrt(3) / 2]]), np.array([[0.0, 0.5], [0.0, np.sqrt(3) / 6]]))
    >>> np.allclose(same.lattice_vecs, cell.lattice_vecs)
    True
    '''

    lattice_vecs    : np.ndarray
    basis_vecs      : Optional[np.ndarray]  = None
    D               : int                   = field(init=False)
    n               : int                   = field(init=False)
    reciprocal_vecs : np.ndarray            = field(init=False, repr=False)

    def __post_init__(self):
        lattice_vecs = _as_columns(self.lattice_vecs, "lattice_vecs")
        D            = lattice_vecs.shape[0]

        if not 1 <= D <= 3:
            raise ConfigurationError(LatticeErrorMsg.INVALID_DIMENSION, f"Only 1D, 2D, and 3D unit cells are supported; got D={D}.")
        if lattice_vecs.shape[1] != D:
            raise ConfigurationError(LatticeErrorMsg.NON_SQUARE_MATRIX, f"lattice_vecs must be square; got shape {lattice_vecs.shape}.")

        if self.basis_vecs is None:
            basis_vecs = np.zeros((D, 1), dtype=PY_NP_FLOAT_TYPE)
        else:
            basis_vecs = _as_columns(self.basis_vecs, "basis_vecs")
        if basis_vecs.shape[0] != D:
            raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH,
                                    f"basis_vecs must have {D} rows to match lattice_vecs; got shape {basis_vecs.shape}.")
        if basis_vecs.shape[1] < 1:
            raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH, "A unit cell needs at least one orbital.")

        try:
            reciprocal_vecs = 2.0 * np.pi * np.linalg.inv(lattice_vecs)
        except np.linalg.LinAlgError as e:
            raise ConfigurationError(LatticeErrorMsg.SINGULAR_MATRIX, f"lattice_vecs is singular: {e}") from e
        if not np.all(np.isfinite(reciprocal_vecs)):
            raise ConfigurationError(LatticeErrorMsg.SINGULAR_MATRIX, "lattice_vecs is numerically singular.")
        reciprocal_vecs = np.ascontiguousarray(reciprocal_vecs, dtype=PY_NP_FLOAT_TYPE)

        for arr in (lattice_vecs, basis_vecs, reciprocal_vecs):
            arr.flags.writeable = False

        object.__setattr__(self, "lattice_vecs",    lattice_vecs)
        object.__setattr__(self, "basis_vecs",      basis_vecs)
        object.__setattr__(self, "reciprocal_vecs", reciprocal_vecs)
        object.__setattr__(self, "D",               D)
        object.__setattr__(self, "n",               basis_vecs.shape[1])

    # ------------------------------------------------------------------

    def __repr__(self):
        return f"UnitCell(D={self.D}, n={self.n})"

    @property
    def dim(self):          return self.D
    @property
    def norbitals(self):    return self.n

    # ------------------------------------------------------------------
    #! Orbitals
    # ------------------------------------------------------------------

    def check_orbital(self, o: int) -> int:
        '''
        Return ``o`` if it is an orbital of this cell, raise otherwise.

        Raises
        ------
        SiteIndexError
            If ``o`` is not in ``[1, n]``.
        '''
        if not is_integer(o) or not 1 <= o <= self.n:
            raise SiteIndexError(LatticeErrorMsg.ORBITAL_OUT_OF_RANGE, f"Orbital must be in [1, {self.n}]; got {o!r}.")
        return int(o)

    # ------------------------------------------------------------------
    #! Positions
    # ------------------------------------------------------------------

    def position(self, l: Sequence[int], site: Optional[int] = None, out: Optional[np.ndarray] = None) -> np.ndarray:
        r'''
        Real-space position of the unit cell at location ``l``:

        $$
            r = \sum_d l_d a_d \; (+ \, b_{site}),
        $$

        optionally shifted by the basis vector of orbital ``site`` (1-based).

        Args:
            l       : unit-cell location (length D, integers)
            site    : orbital whose basis vector is added
            out     : optional output array of length D
        Returns:
            position vector (``out`` when given)
        '''
        loc = as_int_vector(l, self.D, "location")
        if out is None:
            out = np.empty(self.D, dtype=PY_NP_FLOAT_TYPE)
        np.matmul(self.lattice_vecs, loc.astype(PY_NP_FLOAT_TYPE), out=out)
        if site is not None:
            out += self.basis_vecs[:, self.check_orbital(site) - 1]
        return out

    def displacement_to_vec(self, dl: Sequence[int], o1: int, o2: int, out: Optional[np.ndarray] = None) -> np.ndarray:
        r'''
        Real-space displacement from orbital ``o1`` to orbital ``o2`` in a cell ``dl``
        lattice vectors away:

        $$
            \Delta r = \sum_d \Delta l_d a_d + b_{o_2} - b_{o_1}.
        $$
        '''
        o1  = self.check_orbital(o1)
        o2  = self.check_orbital(o2)
        out = self.position(dl, out=out)
        out += self.basis_vecs[:, o2 - 1] - self.basis_vecs[:, o1 - 1]
        return out

    def bond_vector(self, bond: Bond, out: Optional[np.ndarray] = None) -> np.ndarray:
        '''
        Real-space displacement vector associated with ``bond``.

        Raises
        ------
        ConfigurationError
            If the bond dimension or orbitals do not match this cell.
        '''
        bond.check(self)
        o1, o2 = bond.orbitals
        return self.displacement_to_vec(bond.displacement, o1, o2, out=out)

# -----------------------------------------------------------------------------------------------------------
#! EOF
# -----------------------------------------------------------------------------------------------------------
