# ketsim/apply_serial.py
import numpy as np
from .state import State
from .bits import target_mask, local_offsets

def apply_matrix(state: State, U: np.ndarray, targets) -> State:
    """Apply a 2^k x 2^k matrix U to qubits ``targets`` (little-endian).

    Local bit p of U addresses global qubit targets[p]. Returns a new State;
    ``state`` is left untouched.
    """
    psi = state.psi
    N = psi.shape[0]
    U = np.asarray(U, dtype=state.dtype)
    mask = target_mask(targets)
    offsets = local_offsets(targets)
    dim = offsets.shape[0]
    assert U.shape == (dim, dim)

    out = np.empty_like(psi)
    local = np.empty(dim, dtype=psi.dtype)
    # one block per base index with every targeted bit cleared
    for base in range(N):
        if base & mask:
            continue
        for l in range(dim):
            local[l] = psi[base | offsets[l]]
        res = U @ local
        for l in range(dim):
            out[base | offsets[l]] = res[l]
    return State(state.n, out)
