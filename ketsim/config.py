# ketsim/config.py
from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

import numpy as np

DEFAULT_DTYPE = np.complex128

# unitarity tolerance for gate matrices
UNITARY_ATOL = 1e-9

# tolerance for |psi|^2 == 1 checks
NORM_ATOL = 1e-6

BACKENDS = ("serial", "numpy", "numba")

_TRUE = ("1", "true", "yes", "on")

_backend: str = os.getenv("KETSIM_BACKEND", "serial").lower()
_debug_enabled: bool = os.getenv("KETSIM_DEBUG", "0").lower() in _TRUE

def default_backend() -> str:
    return _backend

def set_default_backend(name: str) -> None:
    global _backend
    name = name.lower()
    if name not in BACKENDS:
        raise ValueError(f"Unknown backend {name!r}; expected one of {BACKENDS}")
    _backend = name

def is_debug_enabled() -> bool:
    return _debug_enabled

def set_debug_enabled(enabled: bool) -> None:
    global _debug_enabled
    _debug_enabled = bool(enabled)

@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """Temporarily toggle the per-gate normalization check."""
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev
