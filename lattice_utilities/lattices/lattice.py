"""
Finite lattice of unit cells.

A :class:`Lattice` is a ``L[0] x ... x L[D-1]`` block of unit cells, periodic or
open independently along each lattice-vector direction. It knows nothing about
the content of a unit cell; site-level indexing lives in
:mod:`lattice_utilities.lattices.tools.lattice_index`.

Unit cells are indexed from 1 to N in row-major order (the last axis varies
fastest), which is the same order numpy uses for an array of shape ``L``:

- 2D, L = (2, 3):

        u = 1 (0,0)    2 (0,1)    3 (0,2)
        u = 4 (1,0)    5 (1,1)    6 (1,2)

so that ``u - 1 == np.ravel_multi_index(l, L)``.

None of the routines keep scratch state on the instance: a lattice can be shared
between threads.

--------------------------------
File            : lattices/lattice.py
Date            : 2025-02-01
--------------------------------
"""

from typing import MutableSequence, Optional, Sequence, Tuple, Union

import numpy as np

from ..common.config import PY_NP_INT_TYPE
from ..common.flog import get_global_logger
from .tools.lattice_tools import (
    LatticeBC, ConfigurationError, SiteIndexError, BoundaryError, LatticeErrorMsg,
    handle_periodic, as_int_vector, is_integer
)

############################################## GENERAL LATTICE ##############################################

class Lattice:
    '''
    Finite lattice of unit cells with per-axis periodicity.

    Parameters
    ----------
    L : sequence of int
        Number of unit cells along each lattice vector (1 to 3 entries, all positive).
    periodic : sequence of bool, bool, str or LatticeBC, optional
        Periodicity of each axis. A single bool applies to every axis; a label
        ('pbc', 'obc', 'mbc', 'sbc') is expanded per axis. Defaults to fully periodic.

    Example
    -------
    >>> lat = Lattice([4], [True])
    >>> lat.pbc([-1])
    [3]
    >>> lat.location(lat.unitcell_index([2]))
    array([2])
    '''

    def __init__(self,
                L           : Sequence[int],
                periodic    : Union[Sequence[bool], bool, str, LatticeBC, None] = None):

        L = tuple(L) if not np.isscalar(L) else (L,)
        if not 1 <= len(L) <= 3:
            raise ConfigurationError(LatticeErrorMsg.INVALID_DIMENSION, f"Only 1D, 2D, and 3D lattices are supported; got L={L}.")
        if not all(is_integer(x) for x in L):
            raise ConfigurationError(LatticeErrorMsg.INVALID_EXTENT, f"Lattice extents must be integers; got L={L}.")
        if any(x <= 0 for x in L):
            raise ConfigurationError(LatticeErrorMsg.INVALID_EXTENT, f"Lattice extents must be positive; got L={L}.")

        flags = handle_periodic(periodic, len(L))
        if len(flags) != len(L):
            raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH,
                                    f"Expected {len(L)} periodicity flags to match L={L}; got {len(flags)}.")

        self._dim       = len(L)
        self._L         = tuple(int(x) for x in L)
        self._periodic  = flags
        self._nc        = int(np.prod(self._L))
        # multiplier of each axis in the row-major unit-cell index
        self._strides   = tuple(int(np.prod(self._L[d + 1:])) for d in range(self._dim))

        get_global_logger().debug(f"Lattice: created {self!r}.", lvl=1)

    # -----------------------------------------------------------------------------

    def __repr__(self):
        return f"Lattice(D={self._dim}, N={self._nc}, L={list(self._L)}, periodic={list(self._periodic)})"

    def __str__(self):
        return self.__repr__()

    ################################### GETTERS ###################################

    @property
    def D(self) -> int:                         return self._dim
    @property
    def dim(self) -> int:                       return self._dim
    @property
    def L(self) -> Tuple[int, ...]:             return self._L
    @property
    def N(self) -> int:                         return self._nc
    @property
    def periodic(self) -> Tuple[bool, ...]:     return self._periodic
    @property
    def strides(self) -> Tuple[int, ...]:       return self._strides
    @property
    def shape(self) -> Tuple[int, ...]:         return self._L

    def is_periodic(self, d: int) -> bool:
        ''' Whether axis ``d`` (0-based) wraps around. '''
        return self._periodic[d]

    # -----------------------------------------------------------------------------
    #! BOUNDARY CONDITIONS HELPERS
    # -----------------------------------------------------------------------------

    def _check_length(self, loc: Sequence[int], name: str = "location"):
        if len(loc) != self._dim:
            raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH, f"{name} must have length {self._dim}; got {len(loc)}.")

    def _reduce(self, loc: MutableSequence[int]) -> MutableSequence[int]:
        # floor modulo keeps negative displacements inside [0, L)
        for d in range(self._dim):
            if self._periodic[d]:
                loc[d] = loc[d] % self._L[d]
        return loc

    def _in_range(self, loc: Sequence[int]) -> bool:
        return all(0 <= loc[d] < self._L[d] for d in range(self._dim))

    def pbc(self, l: MutableSequence[int]) -> MutableSequence[int]:
        '''
        Apply periodic boundary conditions to the unit-cell location ``l`` in place.

        Every periodic axis is reduced into ``[0, L[d])``; open axes are left untouched.
        Tuples cannot be modified, they are copied into an integer array instead.

        Returns:
            the reduced location
        Raises:
            BoundaryError: if an open axis is outside ``[0, L[d])`` afterwards.
        '''
        self._check_length(l)
        if isinstance(l, tuple):
            l = np.array(l, dtype=PY_NP_INT_TYPE)
        self._reduce(l)
        if not self._in_range(l):
            raise BoundaryError(LatticeErrorMsg.OPEN_BOUNDARY_CROSSED,
                                f"Location {list(l)} lies outside the open boundaries of {self!r}.")
        return l

    def valid_location(self, l: MutableSequence[int]) -> bool:
        '''
        Apply the periodic reduction to ``l`` (in place for mutable sequences) and
        report whether it is a location inside the lattice.
        '''
        self._check_length(l)
        if isinstance(l, tuple):
            l = list(l)
        return self._in_range(self._reduce(l))

    # -----------------------------------------------------------------------------
    #! UNIT CELL INDEXING
    # -----------------------------------------------------------------------------

    def unitcell_index(self, l: Sequence[int]) -> int:
        '''
        1-based index of the unit cell at location ``l``.

        ``l`` may be an un-reduced displacement along periodic axes; it is reduced
        on a copy, the caller's sequence is not modified.

        Raises:
            BoundaryError: if ``l`` is outside the lattice along an open axis.
        '''
        loc = self.pbc(as_int_vector(l, self._dim, "location"))
        return 1 + int(np.dot(loc, self._strides))

    def location(self, u: int, out: Optional[np.ndarray] = None) -> np.ndarray:
        '''
        Location of the unit cell with 1-based index ``u``.

        Args:
            u   : unit-cell index in ``[1, N]``
            out : optional integer array of length D to write into
        Raises:
            SiteIndexError: if ``u`` is outside ``[1, N]``.
        '''
        self.check_unitcell(u)
        if out is None:
            out = np.empty(self._dim, dtype=PY_NP_INT_TYPE)
        r = int(u) - 1
        for d in range(self._dim - 1, -1, -1):
            r, out[d] = divmod(r, self._L[d])
        return out

    def check_unitcell(self, u: int) -> int:
        ''' Return ``u`` if it is a unit-cell index of this lattice, raise otherwise. '''
        if not is_integer(u) or not 1 <= u <= self._nc:
            raise SiteIndexError(LatticeErrorMsg.UNITCELL_OUT_OF_RANGE, f"Unit cell must be in [1, {self._nc}]; got {u!r}.")
        return int(u)

    def locations(self) -> np.ndarray:
        '''
        All unit-cell locations, shape ``(N, D)``; row ``u - 1`` is ``location(u)``.
        '''
        return np.indices(self._L, dtype=PY_NP_INT_TYPE).reshape(self._dim, -1).T

    # -----------------------------------------------------------------------------
    #! DISPLACEMENTS
    # -----------------------------------------------------------------------------

    def simplify(self, dl: Sequence[int]) -> np.ndarray:
        '''
        Minimum-image form of the displacement ``dl``.

        Along every periodic axis with ``|dl[d]| > L[d]/2`` the displacement is
        replaced by ``dl[d] - sign(dl[d]) * L[d]`` (after dropping whole windings
        when ``|dl[d]| > L[d]``). Open axes are returned unchanged.

        Returns:
            new integer array, ``|result[d]| <= L[d]/2`` on periodic axes
        '''
        out = as_int_vector(dl, self._dim, "displacement").copy()
        for d in range(self._dim):
            if not self._periodic[d]:
                continue
            x, Ld = int(out[d]), self._L[d]
            if abs(x) > Ld:
                x = x % Ld if x > 0 else -((-x) % Ld)
            if 2 * abs(x) > Ld:
                x -= int(np.sign(x)) * Ld
            out[d] = x
        return out

####################################################################################################
#! EOF
####################################################################################################
