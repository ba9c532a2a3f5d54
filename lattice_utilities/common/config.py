'''
Environment-driven configuration for the lattice utilities.

All values are read once, at import time, from the process environment and then
written back, so child processes inherit the resolved settings.

- PY_FLOATING_POINT : "float64" (default) or "float32"; precision of geometry,
                      k-points and correlation arrays.
- PY_INT_TYPE       : "int64" (default) or "int32"; integer type of locations
                      and neighbor tables.
- PY_LOG_LEVEL      : name of the level of the global logger (default "INFO").

-------------------------------------------------------
file        :   lattice_utilities/common/config.py
date        :   2025-05-01
-------------------------------------------------------
'''

import os
import logging
from typing import Type

import numpy as np

# ---------------------------------------------------------------------
#! Environment variable names
# ---------------------------------------------------------------------

PY_FLOATING_POINT_STR   : str               = "PY_FLOATING_POINT"
PY_INT_TYPE_STR         : str               = "PY_INT_TYPE"
PY_LOG_LEVEL_STR        : str               = "PY_LOG_LEVEL"

# ---------------------------------------------------------------------

DEFAULT_FLOATING_POINT  : str               = "float64"
DEFAULT_INT_TYPE        : str               = "int64"
DEFAULT_LOG_LEVEL       : str               = "INFO"

# ---------------------------------------------------------------------
#! SET VARIABLES
# ---------------------------------------------------------------------

PREFER_32BIT            : bool              = os.environ.get(PY_FLOATING_POINT_STR, DEFAULT_FLOATING_POINT).lower() in ["32bit", "32", "float32", "float"]
PY_FLOATING_POINT       : str               = "float32" if PREFER_32BIT else "float64"
os.environ[PY_FLOATING_POINT_STR]           = PY_FLOATING_POINT

PREFER_32BIT_INT        : bool              = os.environ.get(PY_INT_TYPE_STR, DEFAULT_INT_TYPE).lower() in ["32bit", "32", "int32"]
PY_INT_TYPE             : str               = "int32" if PREFER_32BIT_INT else "int64"
os.environ[PY_INT_TYPE_STR]                 = PY_INT_TYPE

PY_NP_INT_TYPE          : Type              = np.int32 if PREFER_32BIT_INT else np.int64
PY_NP_FLOAT_TYPE        : Type              = np.float32 if PREFER_32BIT else np.float64
PY_NP_CPX_TYPE          : Type              = np.complex64 if PREFER_32BIT else np.complex128

def _resolve_log_level(name: str) -> int:
    '''
    Translate a level name (or number) into a logging level, falling back to INFO.
    '''
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO

PY_LOG_LEVEL            : int               = _resolve_log_level(os.environ.get(PY_LOG_LEVEL_STR, DEFAULT_LOG_LEVEL))

# ---------------------------------------------------------------------

def get_config() -> dict:
    '''
    Return a snapshot of the resolved configuration.
    '''
    return {
        PY_FLOATING_POINT_STR   : PY_FLOATING_POINT,
        PY_INT_TYPE_STR         : PY_INT_TYPE,
        PY_LOG_LEVEL_STR        : logging.getLevelName(PY_LOG_LEVEL),
    }

# ---------------------------------------------------------------------
#! EOF
# ---------------------------------------------------------------------
