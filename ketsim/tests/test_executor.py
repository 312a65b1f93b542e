# ketsim/tests/test_executor.py
import logging
import sys
import numpy as np
import pytest
from ketsim import config
from ketsim import gates as G
from ketsim.circuit import Circuit, CircuitExecutor
from ketsim.errors import InvalidTargetError
from ketsim.logging import configure_logging, get_logger, set_log_level

def test_executor_applies_ops_in_order():
    # X then H gives |->, H then X gives |+>; both 50/50 but amplitudes differ
    a = CircuitExecutor(1, [G.X.on(0), G.H.on(0)]).state.as_numpy()
    b = CircuitExecutor(1, [G.H.on(0), G.X.on(0)]).state.as_numpy()
    assert np.allclose(a, [2**-0.5, -2**-0.5])
    assert np.allclose(b, [2**-0.5, 2**-0.5])

def test_empty_circuit_is_zero_state():
    ex = Circuit.empty(3).execute()
    assert ex.n == 3
    assert np.allclose(ex.probabilities(), np.eye(8)[0])

def test_validation_happens_before_execution():
    with pytest.raises(InvalidTargetError):
        CircuitExecutor(2, [G.H.on(0), G.CX.on(0, 2)])

def test_final_state_is_read_only():
    ex = Circuit.empty(2).h(0).execute()
    assert not ex.state.as_numpy().flags.writeable
    with pytest.raises(ValueError):
        ex.state[0] = 1
    # a copy can be edited freely
    cp = ex.state.copy()
    cp[0] = 0

def test_marginal_probabilities():
    ex = Circuit.empty(3).h(0).cnot(0, 1).cnot(1, 2).execute()
    assert np.allclose(ex.probabilities([0, 2]), [0.5, 0, 0, 0.5])
    assert np.allclose(ex.probabilities([1]), [0.5, 0.5])

def test_circuit_inverse_restores_zero():
    c = Circuit.empty(3).h(0).ry(1, 0.3).ccx(0, 1, 2).swap(0, 2).t(1)
    inv = c.inverse()
    assert [op.name for op in inv][0] == "T†"
    st = c.run()
    for op in inv:
        st = op.apply(st)
    assert np.allclose(st.probabilities()[0], 1.0)

def test_gate_by_name_and_raw_matrix():
    c = Circuit.empty(2).gate("h", 0).gate([[0, 1], [1, 0]], 1)
    assert [op.name for op in c] == ["H", "U"]
    assert np.allclose(c.run().probabilities(), [0, 0, 0.5, 0.5])

def test_invalid_register_size():
    with pytest.raises(ValueError):
        Circuit.empty(0)

def test_unknown_backend():
    with pytest.raises(NotImplementedError):
        Circuit.empty(1).h(0).run(backend="gpu")

def test_loggers_are_namespaced_and_cached():
    log = get_logger("ketsim.gate")
    assert log is get_logger("gate")
    assert log.name == "ketsim.gate"
    assert get_logger().name == "ketsim"

def test_executor_logs_at_info(capsys):
    get_logger("ketsim.circuit")
    try:
        set_log_level("INFO")
        configure_logging(level=logging.INFO)
        Circuit.empty(1).h(0).execute()
        err = capsys.readouterr().err
        assert "[INFO] ketsim.circuit: executing 1 gate(s) on 1 qubit(s)" in err
    finally:
        configure_logging(level=logging.WARNING, stream=sys.__stderr__)

def test_num_threads_follows_default_backend(monkeypatch):
    from ketsim import apply_numba
    pool = apply_numba.numba_config.NUMBA_NUM_THREADS
    monkeypatch.setattr(config, "_backend", "numba")
    try:
        apply_numba.set_threads(pool)
        Circuit.empty(2).h(0).execute(num_threads=1)
        assert apply_numba.get_threads() == 1
    finally:
        apply_numba.set_threads(pool)
