"""
Bond definitions.

A :class:`Bond` is a translationally repeated connection template: it joins
orbital ``o1`` of every unit cell to orbital ``o2`` of the unit cell displaced
by ``displacement`` (in units of the lattice vectors).

--------------------------------
File            : lattices/bond.py
--------------------------------
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

import numpy as np

from .tools.lattice_tools import ConfigurationError, LatticeErrorMsg, as_int_vector, is_integer

if TYPE_CHECKING:
    from .unit_cell import UnitCell
    from .lattice import Lattice

@dataclass(frozen=True)
class Bond:
    '''
    Orbital pair plus integer unit-cell displacement.

    Example
    -------
    >>> b = Bond((1, 2), (0, 1))    # orbital 1 -> orbital 2 one cell along a2
    >>> b.D
    2
    '''

    orbitals        : Tuple[int, int]
    displacement    : Tuple[int, ...]

    def __post_init__(self):
        orbitals = tuple(self.orbitals)
        if len(orbitals) != 2 or not all(is_integer(o) for o in orbitals):
            raise ConfigurationError(LatticeErrorMsg.INCONSISTENT_BOND, f"A bond joins exactly two integer orbitals; got {self.orbitals!r}.")
        if min(orbitals) < 1:
            raise ConfigurationError(LatticeErrorMsg.INCONSISTENT_BOND, f"Orbitals are numbered from 1; got {orbitals}.")

        dl = np.asarray(self.displacement)
        if dl.ndim == 0:
            dl = dl.reshape(1)
        if not 1 <= dl.shape[0] <= 3:
            raise ConfigurationError(LatticeErrorMsg.INVALID_DIMENSION, f"Bond displacement must have 1 to 3 components; got {self.displacement!r}.")
        dl = as_int_vector(dl, dl.shape[0], "bond displacement")

        object.__setattr__(self, "orbitals",        tuple(int(o) for o in orbitals))
        object.__setattr__(self, "displacement",    tuple(int(x) for x in dl))

    # ------------------------------------------------------------------

    @property
    def D(self) -> int:         return len(self.displacement)
    @property
    def dim(self) -> int:       return len(self.displacement)

    def reversed(self) -> "Bond":
        ''' The same connection traversed from ``o2`` back to ``o1``. '''
        return Bond((self.orbitals[1], self.orbitals[0]), tuple(-x for x in self.displacement))

    def check(self, unit_cell: "UnitCell", lattice: "Lattice" = None) -> "Bond":
        '''
        Validate the bond against a unit cell (and optionally a lattice).

        Raises
        ------
        ConfigurationError
            If the dimensions disagree or an orbital exceeds ``unit_cell.n``.
        '''
        if self.D != unit_cell.D or (lattice is not None and self.D != lattice.D):
            dims = f"unit cell D={unit_cell.D}" + (f", lattice D={lattice.D}" if lattice is not None else "")
            raise ConfigurationError(LatticeErrorMsg.INCONSISTENT_BOND, f"Bond has D={self.D} but {dims}.")
        if max(self.orbitals) > unit_cell.n:
            raise ConfigurationError(LatticeErrorMsg.INCONSISTENT_BOND,
                                    f"Bond orbitals {self.orbitals} exceed the {unit_cell.n} orbital(s) of the unit cell.")
        return self

    def __str__(self):
        return f"Bond({self.orbitals[0]}->{self.orbitals[1]}, dl={list(self.displacement)})"

# -----------------------------------------------------------------------------------------------------------
#! EOF
# -----------------------------------------------------------------------------------------------------------
