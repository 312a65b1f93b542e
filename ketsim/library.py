# ketsim/library.py
import numpy as np

from .circuit import Circuit

def bell_pair() -> Circuit:
    # (|00> + |11>)/sqrt(2)
    return Circuit.empty(2).h(0).cnot(0, 1)

def ghz(n: int = 3) -> Circuit:
    """(|0...0> + |1...1>)/sqrt(2) via a CNOT ladder."""
    if n < 2:
        raise ValueError(f"GHZ needs at least 2 qubits, got {n}")
    c = Circuit.empty(n).h(0)
    for k in range(n - 1):
        c.cnot(k, k + 1)
    return c

def toffoli_and() -> Circuit:
    # classical AND: qubit 2 <- q0 & q1 with both controls set
    return Circuit.empty(3).x(0).x(1).ccx(0, 1, 2)

def quantum_dice() -> Circuit:
    """Six equiprobable outcomes on 3 qubits (indices 2..7).

    Qubit 2 gets weight 2/3 on |1>, qubits 2 and 1 are then shaped into three
    branches of 1/3 each, and a Hadamard on qubit 0 splits each branch in two.
    """
    theta = 2.0 * np.arcsin(np.sqrt(1.0 / 3.0))    # P(|1>) = sin^2(theta/2) = 1/3
    return (Circuit.empty(3)
            .ry(2, theta)
            .x(2)
            .ry(1, np.pi / 4)
            .cnot(2, 1)
            .ry(1, -np.pi / 4)
            .cnot(2, 1)
            .x(1)
            .h(0))

def shor_21_2() -> Circuit:
    """Order-finding skeleton for N=21, a=2 on 8 qubits.

    Qubits 0..2 are the phase register, 3..7 the work register. Each phase
    qubit drives a CX/Toffoli ladder over the work register, then an inverse
    QFT acts on the phase register.
    """
    c = Circuit.empty(8)
    for q in (0, 1, 2):
        c.h(q)
    c.x(3)
    for ctrl in (0, 1, 2):
        for w in range(3, 7):
            c.cnot(ctrl, w)
            c.ccx(ctrl, w, w + 1)
    return c.iqft(0, 1, 2)
