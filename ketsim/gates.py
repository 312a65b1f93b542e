# ketsim/gates.py
# multi-qubit gates are control-first: for CX.on(c, t) local bit 0 is the control
import numpy as np

from .gate import GateMatrix

INV_SQRT2 = 1.0 / np.sqrt(2.0)

def identity(k: int = 1) -> GateMatrix:
    return GateMatrix(f"I{k}" if k > 1 else "I", np.eye(1 << k))

def controlled_x(k: int) -> GateMatrix:
    """C^(k-1)X on k qubits: local bits 0..k-2 control, bit k-1 is flipped."""
    if k < 2:
        raise ValueError(f"controlled_x needs at least 2 qubits, got {k}")
    mat = np.eye(1 << k)
    i0 = (1 << (k - 1)) - 1     # all controls 1, target 0
    i1 = i0 | (1 << (k - 1))    # all controls 1, target 1
    mat[i0, i0] = 0; mat[i1, i1] = 0
    mat[i0, i1] = 1; mat[i1, i0] = 1
    return GateMatrix("C" * (k - 1) + "X", mat)

def rx(theta: float) -> GateMatrix:
    c = np.cos(theta/2.0)
    s = -1j*np.sin(theta/2.0)
    return GateMatrix(f"RX({theta:g})", [[c, s],
                                          [s, c]])

def ry(theta: float) -> GateMatrix:
    c = np.cos(theta/2.0)
    s = np.sin(theta/2.0)
    return GateMatrix(f"RY({theta:g})", [[c, -s],
                                          [s,  c]])

def rz(theta: float) -> GateMatrix:
    return GateMatrix(f"RZ({theta:g})", [[np.exp(-0.5j*theta), 0],
                                          [0, np.exp(+0.5j*theta)]])

def phase(phi: float) -> GateMatrix:
    return GateMatrix(f"P({phi:g})", [[1, 0],
                                       [0, np.exp(1j*phi)]])

def _fourier(k: int, sign: float) -> np.ndarray:
    N = 1 << k
    j = np.arange(N)
    return np.exp(sign * 2j * np.pi * np.outer(j, j) / N) / np.sqrt(N)

def qft(k: int) -> GateMatrix:
    return GateMatrix(f"QFT{k}", _fourier(k, +1.0))

def iqft(k: int) -> GateMatrix:
    """Inverse QFT: U[j, l] = exp(-2 pi i j l / N) / sqrt(N)."""
    return GateMatrix(f"IQFT{k}", _fourier(k, -1.0))

I = identity(1)
X = GateMatrix("X", [[0, 1],
                     [1, 0]])
Y = GateMatrix("Y", [[0, -1j],
                     [1j, 0]])
Z = GateMatrix("Z", [[1, 0],
                     [0, -1]])
H = GateMatrix("H", [[INV_SQRT2, INV_SQRT2],
                     [INV_SQRT2, -INV_SQRT2]])
S = GateMatrix("S", [[1, 0],
                     [0, 1j]])
T = GateMatrix("T", [[1, 0],
                     [0, np.exp(0.25j*np.pi)]])

# 4x4 in order 00,01,10,11 of (local bit 1, local bit 0)
SWAP = GateMatrix("SWAP", [[1, 0, 0, 0],
                           [0, 0, 1, 0],
                           [0, 1, 0, 0],
                           [0, 0, 0, 1]])
CX = controlled_x(2)
CNOT = CX
CZ = GateMatrix("CZ", np.diag([1, 1, 1, -1]))
CCX = controlled_x(3)
TOFFOLI = CCX
CCCX = controlled_x(4)

CATALOGUE = {g.name: g for g in (I, X, Y, Z, H, S, T, SWAP, CX, CZ, CCX, CCCX)}
CATALOGUE.update(CNOT=CX, TOFFOLI=CCX)

def by_name(name: str) -> GateMatrix:
    try:
        return CATALOGUE[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown gate {name}") from None
