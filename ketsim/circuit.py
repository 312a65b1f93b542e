# ketsim/circuit.py
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

import numpy as np

from . import config
from . import gates as G
from .config import DEFAULT_DTYPE
from .gate import GateMatrix, GateOp
from .logging import get_logger
from .state import State

logger = get_logger(__name__)

GateLike = Union[GateMatrix, str, np.ndarray, Sequence]

class CircuitExecutor:
    """Runs a sequence of gate operations on |0...0>.

    All operations are checked against the register size before the state
    is allocated; after that, execution cannot fail on a domain error. The
    executor keeps nothing but the current state, exposed read-only.
    """

    def __init__(self, n: int, ops: Sequence[GateOp], backend: Optional[str] = None,
                 dtype=DEFAULT_DTYPE, num_threads: Optional[int] = None):
        bound = [op.bind(n) for op in ops]
        backend = (backend or config.default_backend()).lower()

        if num_threads is not None and backend == "numba":
            from .apply_numba import set_threads
            set_threads(int(num_threads))

        logger.info("executing %d gate(s) on %d qubit(s) [%s]", len(bound), n, backend)
        st = State.zero(n, dtype=dtype)
        for op in bound:
            st = op.apply(st, backend=backend)
        st.psi.setflags(write=False)
        self._state = st
        logger.debug("final norm^2 = %.12f", st.norm2())

    @property
    def n(self) -> int:
        return self._state.n

    @property
    def state(self) -> State:
        return self._state

    def probabilities(self, qubits: Optional[Sequence[int]] = None) -> np.ndarray:
        if qubits is None:
            return self._state.probabilities()
        return self._state.marginal_probabilities(qubits)

    def probability_table(self, qubits: Optional[Sequence[int]] = None, precision: int = 10) -> str:
        from .report import format_probability_table
        return format_probability_table(self.probabilities(qubits), precision=precision)

@dataclass
class Circuit:
    n: int
    ops: List[GateOp] = field(default_factory=list)

    def __post_init__(self):
        if self.n < 1:
            raise ValueError(f"n must be >= 1, got {self.n}")
        self.ops = [op.bind(self.n) for op in self.ops]

    @staticmethod
    def empty(n: int) -> "Circuit":
        return Circuit(n, [])

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self):
        return iter(self.ops)

    def append(self, op: GateOp) -> "Circuit":
        self.ops.append(op.bind(self.n))
        return self

    def gate(self, gate: GateLike, *targets: int) -> "Circuit":
        if isinstance(gate, str):
            gate = G.by_name(gate)
        elif not isinstance(gate, GateMatrix):
            gate = GateMatrix("U", gate)
        return self.append(gate.on(*targets, n_qubits=self.n))

    def h(self, k:int): return self.gate(G.H, k)
    def x(self, k:int): return self.gate(G.X, k)
    def y(self, k:int): return self.gate(G.Y, k)
    def z(self, k:int): return self.gate(G.Z, k)
    def s(self, k:int): return self.gate(G.S, k)
    def t(self, k:int): return self.gate(G.T, k)
    def cnot(self, c:int, t:int): return self.gate(G.CX, c, t)
    cx = cnot
    def cz(self, c:int, t:int): return self.gate(G.CZ, c, t)
    def ccx(self, c0:int, c1:int, t:int): return self.gate(G.CCX, c0, c1, t)
    toffoli = ccx
    def swap(self, a:int, b:int): return self.gate(G.SWAP, a, b)
    def rx(self, k:int, theta:float): return self.gate(G.rx(theta), k)
    def ry(self, k:int, theta:float): return self.gate(G.ry(theta), k)
    def rz(self, k:int, theta:float): return self.gate(G.rz(theta), k)
    def phase(self, k:int, phi:float): return self.gate(G.phase(phi), k)
    def qft(self, *qubits:int): return self.gate(G.qft(len(qubits)), *qubits)
    def iqft(self, *qubits:int): return self.gate(G.iqft(len(qubits)), *qubits)

    def inverse(self) -> "Circuit":
        return Circuit(self.n, [op.inverse() for op in reversed(self.ops)])

    def gate_counts(self) -> Counter:
        return Counter(op.name for op in self.ops)

    def execute(self, backend: Optional[str] = None, dtype=DEFAULT_DTYPE,
                num_threads: Optional[int] = None) -> CircuitExecutor:
        return CircuitExecutor(self.n, self.ops, backend=backend, dtype=dtype, num_threads=num_threads)

    def run(self, backend: Optional[str] = None, dtype=DEFAULT_DTYPE, check_norm=True,
            num_threads=None, check_norm_tol=None) -> State:
        st = self.execute(backend=backend, dtype=dtype, num_threads=num_threads).state
        if check_norm:
            st.check_normalized(tol=check_norm_tol)
        return st
