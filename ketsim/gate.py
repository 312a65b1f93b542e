# ketsim/gate.py
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from . import config
from .bits import qubit_count
from .errors import InvalidGateError, InvalidTargetError
from .logging import get_logger
from .state import State
from .validate import as_qubits, check_gate_matrix, check_targets

logger = get_logger(__name__)

Kernel = Callable[[State, np.ndarray, Tuple[int, ...]], State]

def get_kernel(backend: Optional[str] = None) -> Kernel:
    backend = (backend or config.default_backend()).lower()
    if backend == "serial":
        from .apply_serial import apply_matrix
    elif backend == "numpy":
        from .apply_numpy import apply_matrix
    elif backend == "numba":
        try:
            from .apply_numba import apply_matrix
        except ImportError as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
    else:
        raise NotImplementedError(f"Unknown backend: {backend}")
    return apply_matrix

@dataclass(frozen=True, eq=False)
class GateMatrix:
    """Read-only 2^k x 2^k unitary.

    Local basis bit p corresponds to the p-th target passed to ``on``, so
    ``CX.on(0, 1)`` uses qubit 0 as control and qubit 1 as target.
    """
    name: str
    matrix: np.ndarray

    def __post_init__(self):
        m = np.array(self.matrix, dtype=np.complex128)
        chk = check_gate_matrix(m, config.UNITARY_ATOL)
        if not chk:
            raise InvalidGateError(f"{self.name}: {chk.reason}")
        m.setflags(write=False)
        object.__setattr__(self, "matrix", m)

    @property
    def dim(self) -> int:
        return self.matrix.shape[0]

    @property
    def qubits(self) -> int:
        return qubit_count(self.dim)

    def dagger(self) -> "GateMatrix":
        name = self.name[:-1] if self.name.endswith("†") else self.name + "†"
        return GateMatrix(name, self.matrix.conj().T)

    def on(self, *targets: int, n_qubits: Optional[int] = None) -> "GateOp":
        return GateOp(self, targets, n_qubits)

    def allclose(self, other: "GateMatrix", atol: float = 1e-12) -> bool:
        return self.dim == other.dim and np.allclose(self.matrix, other.matrix, atol=atol, rtol=0)

    def __repr__(self) -> str:
        return f"GateMatrix({self.name!r}, qubits={self.qubits})"

@dataclass(frozen=True, eq=False)
class GateOp:
    """A gate matrix bound to ordered target qubits.

    Target count, duplicates and negative indices are rejected here. When
    ``n_qubits`` is given the targets are also range-checked against it;
    ``apply`` repeats the range check against the incoming state before any
    amplitude is read.
    """
    gate: GateMatrix
    targets: Tuple[int, ...]
    n_qubits: Optional[int] = None

    def __post_init__(self):
        targets = as_qubits(self.targets, self.gate.name)
        object.__setattr__(self, "targets", targets)
        chk = check_targets(targets, self.gate.qubits, self.n_qubits)
        if not chk:
            raise InvalidTargetError(f"{self.gate.name}: {chk.reason}")

    @property
    def name(self) -> str:
        return self.gate.name

    def bind(self, n_qubits: int) -> "GateOp":
        """Same operation, range-checked against an n-qubit register."""
        if self.n_qubits == n_qubits:
            return self
        return GateOp(self.gate, self.targets, n_qubits)

    def inverse(self) -> "GateOp":
        return GateOp(self.gate.dagger(), self.targets, self.n_qubits)

    def apply(self, state: State, backend: Optional[str] = None) -> State:
        chk = check_targets(self.targets, self.gate.qubits, state.n)
        if not chk:
            raise InvalidTargetError(f"{self.gate.name}: {chk.reason}")
        kernel = get_kernel(backend)
        logger.debug("apply %s on %s (n=%d)", self.gate.name, self.targets, state.n)
        out = kernel(state, self.gate.matrix, self.targets)
        if config.is_debug_enabled():
            out.check_normalized()
        return out

    __call__ = apply

    def __repr__(self) -> str:
        return f"{self.gate.name}{self.targets}"
