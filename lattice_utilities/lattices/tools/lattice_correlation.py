r'''
Translational averages of lattice-indexed arrays.

For two arrays defined on the unit-cell locations of a fully periodic lattice,

$$
    (f \star g)(r) = \frac{1}{N} \sum_i f(i) \, g(i - r),
$$

with every index taken modulo the extent of its axis. The sum is evaluated with
FFTs: if F and G are the transforms of f and g, the transform of the average
is F(k) G(-k) / N.

--------------------------------
File            : lattices/tools/lattice_correlation.py
--------------------------------
'''

from typing import Optional

import numpy as np

from .lattice_tools import ConfigurationError, LatticeErrorMsg

__all__ = ["translational_avg"]

# -----------------------------------------------------------------------------------------------------------

def _check_array(x: np.ndarray, name: str):
    if not isinstance(x, np.ndarray):
        raise ConfigurationError(LatticeErrorMsg.INVALID_ARRAY, f"{name} must be a numpy array; got {type(x).__name__}.")
    if not np.iscomplexobj(x):
        raise ConfigurationError(LatticeErrorMsg.INVALID_ARRAY, f"{name} must be complex; got dtype {x.dtype}.")

def translational_avg(f         : np.ndarray,
                      g         : np.ndarray,
                      restore   : bool                  = True,
                      fg        : Optional[np.ndarray]  = None) -> np.ndarray:
    r'''
    Circular translational average ``fg[r] = (1/N) sum_i f[i] g[i - r]``.

    ``f`` and ``g`` are Fourier transformed in place. With ``restore=True`` they are
    transformed back before returning and hold their original values (up to
    round-off). With ``restore=False`` they are left in k-space, and the caller
    must not use them as location-space arrays any more.

    Args:
        f, g    : complex arrays of identical shape, one axis per lattice direction
        restore : transform ``f`` and ``g`` back after the average
        fg      : optional complex output buffer of the same shape
    Returns:
        ``fg``
    Raises:
        ConfigurationError: on non-complex, aliased or mismatched inputs.

    Example
    -------
    >>> f = np.zeros((4, 4), dtype=complex); f[0, 0] = 1.0
    >>> translational_avg(f, f.copy())[0, 0]
    (0.0625+0j)
    '''
    _check_array(f, "f")
    _check_array(g, "g")
    if f.shape != g.shape:
        raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH, f"f and g must have the same shape; got {f.shape} and {g.shape}.")
    if np.shares_memory(f, g):
        raise ConfigurationError(LatticeErrorMsg.INVALID_ARRAY, "f and g are transformed in place and must not share memory; pass a copy.")
    if fg is not None:
        _check_array(fg, "fg")
        if fg.shape != f.shape:
            raise ConfigurationError(LatticeErrorMsg.SHAPE_MISMATCH, f"fg must have shape {f.shape}; got {fg.shape}.")
        if np.shares_memory(fg, f) or np.shares_memory(fg, g):
            raise ConfigurationError(LatticeErrorMsg.INVALID_ARRAY, "fg must not share memory with f or g.")
    if f.size == 0:
        raise ConfigurationError(LatticeErrorMsg.INVALID_ARRAY, "Cannot average empty arrays.")

    N       = f.size
    axes    = tuple(range(f.ndim))

    f[...]  = np.fft.fftn(f)
    g[...]  = np.fft.fftn(g)

    # G(-k): reverse every axis, then shift by one so that k = 0 stays in place
    g_minus = np.roll(g[(slice(None, None, -1),) * f.ndim], 1, axis=axes)

    if fg is None:
        fg = np.empty_like(f)
    fg[...] = np.fft.ifftn(f * g_minus / N)

    if restore:
        f[...] = np.fft.ifftn(f)
        g[...] = np.fft.ifftn(g)
    return fg

# -----------------------------------------------------------------------------------------------------------
#! EOF
# -----------------------------------------------------------------------------------------------------------
