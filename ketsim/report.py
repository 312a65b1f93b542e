# ketsim/report.py
# ket labels print the most significant qubit first, so qubit 0 is the rightmost character
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .state import State

HEADER = "| Binary | Decimal | Probability (%) |"
RULE = "|--------|---------|----------------|"

def ket_label(index: int, width: int) -> str:
    if width == 0:
        return ""
    return format(index, f"0{width}b")

def probability_rows(probs) -> List[Tuple[str, int, float]]:
    probs = np.asarray(probs, dtype=np.float64)
    width = probs.shape[0].bit_length() - 1
    return [(ket_label(i, width), i, float(p) * 100.0) for i, p in enumerate(probs)]

def format_probability_table(probs, precision: int = 10) -> str:
    lines = [HEADER, RULE]
    for label, i, pct in probability_rows(probs):
        lines.append(f"|{label}| {i} | {pct:.{precision}f} % |")
    return "\n".join(lines) + "\n"

def format_state(state: State, qubits: Optional[Sequence[int]] = None, precision: int = 10) -> str:
    """Table of the marginal distribution over ``qubits`` (all qubits if None)."""
    probs = state.probabilities() if qubits is None else state.marginal_probabilities(qubits)
    return format_probability_table(probs, precision=precision)
