# ketsim/validate.py
import operator
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .bits import is_power_of_two
from .config import UNITARY_ATOL
from .errors import InvalidTargetError

@dataclass(frozen=True)
class Check:
    """Outcome of a validation; falsy on rejection, with the reason attached."""
    ok: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.ok

PASS = Check(True)

def is_square_pow2(matrix) -> bool:
    m = np.asarray(matrix)
    return m.ndim == 2 and m.shape[0] == m.shape[1] and m.shape[0] >= 2 and is_power_of_two(m.shape[0])

def is_unitary(matrix, atol: float = UNITARY_ATOL) -> bool:
    """True if every column pair (i, j) has inner product delta_ij within atol.

    Real and imaginary parts are compared separately.
    """
    m = np.asarray(matrix, dtype=np.complex128)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        return False
    gram = m.conj().T @ m
    dev = gram - np.eye(m.shape[0])
    return bool(np.all(np.abs(dev.real) <= atol) and np.all(np.abs(dev.imag) <= atol))

def check_gate_matrix(matrix, atol: float = UNITARY_ATOL) -> Check:
    m = np.asarray(matrix)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        return Check(False, f"gate matrix must be square, got shape {m.shape}")
    if not is_square_pow2(m):
        return Check(False, f"gate dimension must be 2^k with k >= 1, got {m.shape[0]}")
    if not np.all(np.isfinite(m)):
        return Check(False, "gate matrix has non-finite entries")
    if not is_unitary(m, atol):
        return Check(False, f"gate matrix is not unitary within {atol:g}")
    return PASS

def as_qubits(targets, label: str = "target") -> Tuple[int, ...]:
    # operator.index refuses floats instead of truncating them
    try:
        return tuple(operator.index(q) for q in targets)
    except TypeError as e:
        raise InvalidTargetError(f"{label}: qubit indices must be integers, got {tuple(targets)!r}") from e

def check_targets(targets: Sequence[int], k: int, n: Optional[int] = None) -> Check:
    """Validate an ordered target list for a k-qubit gate (and an n-qubit register)."""
    if len(targets) != k:
        return Check(False, f"gate acts on {k} qubit(s) but {len(targets)} target(s) given: {tuple(targets)}")
    if len(set(targets)) != len(targets):
        return Check(False, f"duplicate target qubits: {tuple(targets)}")
    for q in targets:
        if q < 0:
            return Check(False, f"target qubit {q} is negative")
        if n is not None and q >= n:
            return Check(False, f"target qubit {q} out of range for {n}-qubit register")
    return PASS
