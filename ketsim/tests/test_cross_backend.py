# ketsim/tests/test_cross_backend.py
import numpy as np
from ketsim.circuit import Circuit
from ketsim.gate import GateMatrix
from ketsim.state import State

BACKENDS = ("serial", "numpy", "numba")

def max_abs_diff(a, b):
    return float(np.max(np.abs(a - b)))

def random_unitary(k, rng):
    d = 1 << k
    z = rng.normal(size=(d, d)) + 1j * rng.normal(size=(d, d))
    q, r = np.linalg.qr(z)
    return q * (np.diag(r) / np.abs(np.diag(r)))

def test_backends_agree_small():
    # 3-qubit mixed circuit
    c = Circuit.empty(3).h(0).x(1).cnot(1,2).h(2).cnot(0,1).x(2).ccx(2,0,1).ry(1, 0.4)
    states = [c.run(backend=b).as_numpy() for b in BACKENDS]
    for st in states[1:]:
        assert max_abs_diff(states[0], st) < 1e-12

def test_random_circuits_match():
    rng = np.random.default_rng(123)
    n = 5
    for depth in (5, 10, 20):
        c = Circuit.empty(n)
        for _ in range(depth):
            k = int(rng.integers(1, 4))
            targets = [int(q) for q in rng.permutation(n)[:k]]
            c.gate(random_unitary(k, rng), *targets)
        s = c.run(backend="serial")
        for b in ("numpy", "numba"):
            t = c.run(backend=b, num_threads=2 if b == "numba" else None)
            assert np.allclose(s.as_numpy(), t.as_numpy(), atol=1e-10, rtol=0)

def test_complex64_states():
    c = Circuit.empty(4).h(0).cnot(0,3).h(2).swap(2,1).ccx(0,1,2)
    s = c.run(backend="serial", dtype=np.complex64)
    t = c.run(backend="numba", dtype=np.complex64)
    assert s.dtype == np.complex64 and t.dtype == np.complex64
    assert max_abs_diff(s.as_numpy(), t.as_numpy()) < 1e-5

def test_matches_dense_kron_operator():
    rng = np.random.default_rng(7)
    n, q = 4, 2
    U = random_unitary(1, rng)
    psi = rng.normal(size=1 << n) + 1j * rng.normal(size=1 << n)
    psi /= np.linalg.norm(psi)
    # qubit q is bit q, so qubits above q sit on the left of the kron
    full = np.kron(np.kron(np.eye(1 << (n - q - 1)), U), np.eye(1 << q))
    st = State(n, psi.copy())
    for b in BACKENDS:
        out = GateMatrix("U", U).on(q).apply(st, backend=b)
        assert np.allclose(out.as_numpy(), full @ psi, atol=1e-12, rtol=0)
