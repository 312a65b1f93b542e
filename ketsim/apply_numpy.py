# ketsim/apply_numpy.py
import numpy as np
from .state import State
from .bits import target_mask, local_offsets, block_bases

def apply_matrix(state: State, U: np.ndarray, targets) -> State:
    """Vectorized gather/scatter: all blocks at once via fancy indexing."""
    U = np.asarray(U, dtype=state.dtype)
    offsets = local_offsets(targets)
    bases = block_bases(state.n, target_mask(targets))
    idx = bases[:, None] | offsets[None, :]   # (blocks, 2^k) global indices
    out = np.empty_like(state.psi)
    # out[b, i] = sum_j U[i, j] * psi[b, j]
    out[idx] = state.psi[idx] @ U.T
    return State(state.n, out)
