# lattice_utilities/__init__.py

"""
Lattice Utilities - indexing, neighbor tables and reciprocal-space tools for
finite crystal lattices.

A lattice is a finite (possibly periodic) block of unit cells, each holding
``n`` orbitals. The package maps between linear site indices and
(unit-cell location, orbital) coordinates, builds neighbor tables from bond
templates, samples the k-point grid and computes translational averages.

Modules:
--------
- common    : Logging and environment-driven configuration
- lattices  : Unit cells, lattices, bonds and the tools built on them

Examples:
---------
>>> import numpy as np
>>> from lattice_utilities.lattices import UnitCell, Lattice, Bond, build_neighbor_table
>>> cell    = UnitCell(np.eye(1))
>>> lat     = Lattice([4], [True])
>>> build_neighbor_table(Bond((1, 1), (1,)), cell, lat)
array([[1, 2, 3, 4],
       [2, 3, 4, 1]])

File    : lattice_utilities/__init__.py
Version : 0.1.0
License : MIT
"""

import importlib

# Package metadata
__version__         = "0.1.0"
__license__         = "MIT"

MODULE_DESCRIPTION  = "Lattice indexing, neighbor tables, k-point grids and translational averages."

# List of available modules (not imported by default)
__all__             = ["common", "lattices"]

def get_module_description(module_name):
    """
    Get the description of a specific module in the lattice_utilities package.

    Parameters
    ----------
    module_name : str
        The name of the module.

    Returns
    -------
    str
        The description of the module.
    """
    descriptions = {
        "common"    : "Logging and environment-driven configuration shared by all modules.",
        "lattices"  : "Unit cells, finite lattices, bonds, site indexing, neighbor tables, k-points and correlations.",
    }
    return descriptions.get(module_name, "Module not found.")

def list_available_modules():
    """
    List all available modules in the lattice_utilities package.
    """
    return __all__

# Lazy import subpackages on attribute access (PEP 562)
def __getattr__(name):  # pragma: no cover - simple indirection
    if name in __all__:
        return importlib.import_module(f".{name}", __name__)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

def __dir__():  # pragma: no cover
    return sorted(list(globals().keys()) + __all__)
