# ketsim/tests/test_report.py
import os
import numpy as np
from ketsim.circuit import Circuit
from ketsim.report import HEADER, format_probability_table, format_state, ket_label, probability_rows
from ketsim.state import State

def test_ket_label_is_msb_first():
    # qubit 0 is the rightmost character
    assert ket_label(1, 3) == "001"
    assert ket_label(0b110, 3) == "110"
    assert ket_label(0, 0) == ""

def test_excited_qubit0_prints_on_the_right():
    st = Circuit.empty(3).x(0).run()
    rows = probability_rows(st.probabilities())
    hot = [label for label, _, pct in rows if pct > 50]
    assert hot == ["001"]

def test_rows():
    rows = probability_rows([0.25, 0.75])
    assert rows == [("0", 0, 25.0), ("1", 1, 75.0)]

def test_bell_table():
    ex = Circuit.empty(2).h(0).cnot(0, 1).execute()
    table = ex.probability_table()
    lines = table.splitlines()
    assert lines[0] == HEADER
    assert len(lines) == 2 + 4
    assert "|00| 0 | 50.0000000000 % |" in lines
    assert "|01| 1 | 0.0000000000 % |" in lines
    assert "|11| 3 | 50.0000000000 % |" in lines

def test_precision():
    table = format_probability_table([1.0, 0.0], precision=2)
    assert "|0| 0 | 100.00 % |" in table

def test_format_state_marginal():
    st = State.basis(3, 0b100)
    table = format_state(st, qubits=[2], precision=1)
    assert "|1| 1 | 100.0 % |" in table
    assert len(table.splitlines()) == 4

def test_plot_probabilities(tmp_path):
    from ketsim.plot import plot_probabilities
    path = plot_probabilities(np.array([0.5, 0, 0, 0.5]), str(tmp_path / "bell.png"))
    assert os.path.getsize(path) > 0
