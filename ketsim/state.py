# ketsim/state.py
import numpy as np
from dataclasses import dataclass
from typing import Sequence

from .bits import as_amplitudes, norm_squared
from .config import DEFAULT_DTYPE, NORM_ATOL
from .errors import DegenerateStateError, InvalidStateError, InvalidTargetError, NormalizationError
from .validate import as_qubits, check_targets

COMPLEX_DTYPES = (np.complex64, np.complex128)

def check_dtype(dtype):
    dtype = np.dtype(dtype)
    if dtype not in COMPLEX_DTYPES:
        raise InvalidStateError(f"amplitudes must be complex64 or complex128, got {dtype}")
    return dtype

@dataclass
class State:
    """Dense amplitudes of an n-qubit register.

    Index i is the basis state whose qubit q equals bit q of i (qubit 0 is
    the least significant bit).
    """
    n: int
    psi: np.ndarray  # shape (2**n,), complex64/128

    def __post_init__(self):
        if self.n < 0:
            raise InvalidStateError(f"n must be >= 0, got {self.n}")
        if self.psi.shape != (1 << self.n,):
            raise InvalidStateError(f"expected {1 << self.n} amplitudes for {self.n} qubits, got shape {self.psi.shape}")
        check_dtype(self.psi.dtype)

    @staticmethod
    def zeros(n: int, dtype=DEFAULT_DTYPE) -> "State":
        # raw, unnormalized; only used while building other states
        return State(n=n, psi=np.zeros(1 << n, dtype=check_dtype(dtype)))

    @staticmethod
    def zero(n: int, dtype=DEFAULT_DTYPE) -> "State":
        return State.basis(n, 0, dtype=dtype)

    @staticmethod
    def basis(n: int, index: int, dtype=DEFAULT_DTYPE) -> "State":
        st = State.zeros(n, dtype=dtype)
        if not 0 <= index < st.dim:
            raise ValueError(f"basis index {index} out of range for {n} qubits")
        st.psi[index] = 1.0 + 0.0j
        return st

    @staticmethod
    def from_amplitudes(data, normalize: bool = False, dtype=DEFAULT_DTYPE) -> "State":
        psi = as_amplitudes(data, dtype=check_dtype(dtype))
        N = psi.shape[0]
        if N == 0 or N & (N - 1):
            raise ValueError(f"amplitude count must be a power of two, got {N}")
        st = State(n=N.bit_length() - 1, psi=psi)
        return st.normalized() if normalize else st

    @property
    def dtype(self):
        return self.psi.dtype

    @property
    def dim(self) -> int:
        return self.psi.shape[0]

    def __len__(self) -> int:
        return self.dim

    def __getitem__(self, index: int):
        return self.psi[index]

    def __setitem__(self, index: int, value):
        self.psi[index] = value

    def norm2(self) -> float:
        return float(np.vdot(self.psi, self.psi).real)

    def normalized(self) -> "State":
        """Return a copy scaled to unit norm.

        A zero state has no direction to keep, so it raises
        DegenerateStateError instead of dividing by zero.
        """
        n2 = self.norm2()
        if n2 <= 0.0:
            raise DegenerateStateError("cannot normalize a state with zero norm")
        return State(self.n, (self.psi / np.sqrt(n2)).astype(self.dtype))

    def check_normalized(self, tol=None):
        tol = NORM_ATOL if tol is None else tol
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise NormalizationError(f"Normalization failed: ||psi||^2={n2}")

    def probabilities(self) -> np.ndarray:
        return norm_squared(self.psi).astype(np.float64)

    def marginal_probabilities(self, qubits: Sequence[int]) -> np.ndarray:
        """Probability of each assignment of ``qubits``, summing out the rest.

        Entry r collects every basis state whose bit qubits[b] equals bit b
        of r. An empty selection gives the total probability.
        """
        qubits = as_qubits(qubits, "marginal")
        chk = check_targets(qubits, len(qubits), self.n)
        if not chk:
            raise InvalidTargetError(chk.reason)
        idx = np.arange(self.dim, dtype=np.int64)
        reduced = np.zeros(self.dim, dtype=np.int64)
        for b, q in enumerate(qubits):
            reduced |= ((idx >> q) & 1) << b
        return np.bincount(reduced, weights=self.probabilities(), minlength=1 << len(qubits))

    def copy(self) -> "State":
        return State(self.n, self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        return self.psi
