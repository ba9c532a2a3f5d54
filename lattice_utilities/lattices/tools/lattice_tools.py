"""
Lattice Tools Module

Enumerations, error types and small normalization helpers shared by the lattice
modules.

--------------------------------
File            : lattices/tools/lattice_tools.py
--------------------------------
"""

from enum   import Enum, auto
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np

from ...common.config import PY_NP_INT_TYPE

# -----------------------------------------------------------------------------------------------------------
# SENTINELS
# -----------------------------------------------------------------------------------------------------------

NO_SITE     = 0     # returned by site lookups that cross an open boundary, never a valid site

# -----------------------------------------------------------------------------------------------------------
# LATTICE ENUMERATIONS
# -----------------------------------------------------------------------------------------------------------

class LatticeDirection(Enum):
    '''
    Enumeration for the lattice directions (axes of the lattice vectors).
    '''
    X = 0
    Y = 1
    Z = 2

    def __str__(self):      return str(self.name).lower()
    def __repr__(self):     return f"LatticeDirection.{self.name}"

# -----------------------------------------------------------------------------------------------------------

class LatticeBC(Enum):
    '''
    Enumeration for the boundary conditions of a finite lattice.
    '''
    PBC         = auto()    # Periodic Boundary Conditions
    OBC         = auto()    # Open Boundary Conditions
    MBC         = auto()    # Mixed Boundary Conditions     - periodic in X direction, open in Y direction
    SBC         = auto()    # Special Boundary Conditions   - periodic in Y direction, open in X direction

    def __str__(self):      return str(self.name).lower()
    def __repr__(self):     return self.__str__()

# -----------------------------------------------------------------------------------------------------------
#! Errors
# -----------------------------------------------------------------------------------------------------------

class LatticeErrorMsg(Enum):
    '''
    Error codes raised by the lattice modules.
    '''
    INVALID_DIMENSION       = 101
    NON_SQUARE_MATRIX       = 102
    SHAPE_MISMATCH          = 103
    SINGULAR_MATRIX         = 104
    INVALID_EXTENT          = 105
    INCONSISTENT_BOND       = 106
    SITE_OUT_OF_RANGE       = 107
    UNITCELL_OUT_OF_RANGE   = 108
    ORBITAL_OUT_OF_RANGE    = 109
    KPOINT_OUT_OF_RANGE     = 110
    OPEN_BOUNDARY_CROSSED   = 111
    INVALID_TABLE           = 112
    INVALID_ARRAY           = 113
    INVALID_BC              = 114

    def __str__(self):
        return self.name.replace('_', ' ').title()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}: '{str(self)}'>"

class LatticeError(Exception):
    '''
    Base class for exceptions in the lattice modules.
    '''
    def __init__(self, code: LatticeErrorMsg, message: Optional[str] = None):
        self.code       = code
        self.message    = message if message else str(code)
        super().__init__(self.message)

    def __str__(self):
        return f"[{self.__class__.__name__} {self.code.name} ({self.code.value})]: {self.message}"

    def __repr__(self):
        return self.__str__()

class ConfigurationError(LatticeError, ValueError):
    '''
    Malformed unit cell, lattice, bond or array inputs. Raised before anything is built.
    '''

class SiteIndexError(LatticeError, IndexError):
    '''
    Out-of-range site, unit-cell, orbital or k-point index passed to a query.
    '''

class BoundaryError(LatticeError):
    '''
    A location is still outside the lattice after periodic reduction,
    i.e. an open boundary was crossed by a routine assuming a valid location.
    '''

# -----------------------------------------------------------------------------------------------------------
#! Boundary Conditions, Dimensions
# -----------------------------------------------------------------------------------------------------------

def handle_boundary_conditions(bc: Union[LatticeBC, Any]) -> LatticeBC:
    """
    Handles and normalizes the input for boundary conditions.

    Parameters:
    -----------
        bc (str, LatticeBC, or None):
            The boundary condition to handle. Can be a string
            ("pbc", "obc", "mbc", "sbc"), an instance of LatticeBC, or None (PBC).
    Returns:
    --------
        LatticeBC: The corresponding LatticeBC enum value.
    Raises:
        ConfigurationError: If the boundary condition is not recognized.
    """
    if bc is None:
        return LatticeBC.PBC
    if isinstance(bc, LatticeBC):
        return bc
    if isinstance(bc, str):
        try:
            return LatticeBC[bc.upper()]
        except KeyError:
            pass
    raise ConfigurationError(LatticeErrorMsg.INVALID_BC, f"Unknown boundary condition: {bc!r}")

def handle_boundary_conditions_detailed(bc: Union[LatticeBC, Any]) -> dict:
    """
    Periodicity of each direction implied by a boundary-condition label.

    Returns
    -------
    dict
        ``{'x': bool, 'y': bool, 'z': bool}``
    """
    bc = handle_boundary_conditions(bc)
    if bc == LatticeBC.PBC:
        return {"x": True,  "y": True,  "z": True   }
    elif bc == LatticeBC.OBC:
        return {"x": False, "y": False, "z": False  }
    elif bc == LatticeBC.MBC:
        return {"x": True,  "y": False, "z": True   }
    return {"x": False, "y": True,  "z": True   }

def handle_periodic(periodic: Union[LatticeBC, str, bool, Sequence[bool], None], dim: int) -> Tuple[bool, ...]:
    """
    Normalize the periodicity argument of a lattice into a tuple of ``dim`` booleans.

    Accepts a per-axis sequence of booleans, a single boolean applied to every axis,
    or a boundary-condition label (see :func:`handle_boundary_conditions_detailed`).
    The length of an explicit sequence is not checked here.
    """
    if periodic is None or isinstance(periodic, (LatticeBC, str)):
        flags = handle_boundary_conditions_detailed(periodic)
        return tuple(flags[str(direction)] for direction in list(LatticeDirection)[:dim])
    if isinstance(periodic, (bool, np.bool_)):
        return (bool(periodic),) * dim
    return tuple(bool(p) for p in periodic)

# -----------------------------------------------------------------------------------------------------------
#! Integer vectors
# -----------------------------------------------------------------------------------------------------------

def as_int_vector(vec: Sequence[int], dim: int, name: str = "vector") -> np.ndarray:
    """
    Copy ``vec`` into a one-dimensional integer array of length ``dim``.

    Raises
    ------
    ConfigurationError
        If ``vec`` has the wrong length or holds non-integer values.
    """
    arr = np.asarray(vec)
    if arr.ndim != 1 or arr.shape[0] != dim:
        raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH,
                                f"{name} must have length {dim}; got shape {arr.shape}.")
    if arr.dtype.kind not in "iu":
        if arr.dtype.kind == "b" or not np.all(np.mod(arr, 1) == 0):
            raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH, f"{name} must hold integers; got {vec!r}.")
    return arr.astype(PY_NP_INT_TYPE)

def is_integer(value: Any) -> bool:
    ''' True for Python and numpy integers (booleans excluded). '''
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))

# -----------------------------------------------------------------------------------------------------------
#! END OF FILE
# -----------------------------------------------------------------------------------------------------------
