# ketsim/tests/test_gates.py
import numpy as np
import pytest
from ketsim import gates as G
from ketsim.circuit import Circuit

def test_controlled_x_family_matches_constants():
    assert G.controlled_x(2).allclose(G.CX)
    assert G.controlled_x(3).allclose(G.TOFFOLI)
    assert G.CNOT is G.CX
    # control-first: local |c=1,t=0> = index 1 swaps with |c=1,t=1> = index 3
    assert G.CX.matrix[3, 1] == 1 and G.CX.matrix[1, 3] == 1
    assert G.CCX.matrix[7, 3] == 1
    assert G.CCCX.qubits == 4
    with pytest.raises(ValueError):
        G.controlled_x(1)

def test_cccx_flips_only_with_all_controls():
    c = Circuit.empty(4).x(0).x(1).x(2).gate(G.CCCX, 0, 1, 2, 3)
    assert np.allclose(c.run().probabilities()[0b1111], 1.0)
    c = Circuit.empty(4).x(0).x(2).gate(G.CCCX, 0, 1, 2, 3)
    assert np.allclose(c.run().probabilities()[0b0101], 1.0)

def test_identity():
    assert G.identity(2).qubits == 2
    assert np.array_equal(G.I.matrix, np.eye(2))

def test_pauli_relations():
    # XY = iZ
    assert np.allclose(G.X.matrix @ G.Y.matrix, 1j * G.Z.matrix)
    assert np.allclose(G.H.matrix @ G.Z.matrix @ G.H.matrix, G.X.matrix)
    assert np.allclose(G.T.matrix @ G.T.matrix, G.S.matrix)

def test_rotations():
    theta = 2.0 * np.arcsin(np.sqrt(1.0 / 3.0))
    p = Circuit.empty(1).ry(0, theta).run().probabilities()
    assert np.allclose(p, [2/3, 1/3])
    assert np.allclose(G.rx(np.pi).matrix, -1j * G.X.matrix)
    assert np.allclose(G.rz(np.pi).matrix, -1j * G.Z.matrix)
    assert np.allclose(G.phase(np.pi / 2).matrix, G.S.matrix)

def test_iqft_matrix_entries():
    m = G.iqft(2).matrix
    N = 4
    for j in range(N):
        for l in range(N):
            assert m[j, l] == pytest.approx(np.exp(-2j * np.pi * j * l / N) / 2)

def test_qft_then_iqft_is_identity():
    st = Circuit.empty(3).x(1).qft(0, 1, 2).iqft(0, 1, 2).run()
    assert np.allclose(st.probabilities()[0b010], 1.0)

def test_iqft_of_uniform_is_zero():
    # H on every qubit gives the uniform state = QFT|0>
    st = Circuit.empty(3).h(0).h(1).h(2).iqft(0, 1, 2).run()
    assert np.allclose(st.probabilities()[0], 1.0)

def test_by_name():
    assert G.by_name("h") is G.H
    assert G.by_name("Toffoli") is G.CCX
    assert G.by_name("cnot") is G.CX
    with pytest.raises(ValueError, match="Unknown gate"):
        G.by_name("FOO")
