# ketsim/apply_numba.py
import numpy as np
from numba import config as numba_config, njit, prange, set_num_threads, get_num_threads
from .state import State
from .bits import target_mask, local_offsets
from .logging import get_logger

logger = get_logger(__name__)

# ---------- low-level kernel (Numba JIT) ----------

@njit(parallel=True, fastmath=True)
def _block_kernel(psi, out, U, offsets, mask):
    N = psi.shape[0]
    dim = offsets.shape[0]
    # blocks are disjoint, so bases can run in parallel; reads come from psi only
    for p in prange(N):
        base = np.int64(p)   # prange index may be unsigned; keep int64 bit ops
        if (base & mask) == 0:
            for i in range(dim):
                acc = 0j
                for j in range(dim):
                    acc += U[i, j] * psi[base | offsets[j]]
                out[base | offsets[i]] = acc

# ---------- user-facing helpers ----------

def set_threads(n: int):
    pool = numba_config.NUMBA_NUM_THREADS
    if not 1 <= n <= pool:
        logger.warning("requested %d threads, numba pool has %d; clamping", n, pool)
    set_num_threads(max(1, min(n, pool)))

def get_threads() -> int:
    return get_num_threads()

def apply_matrix(state: State, U: np.ndarray, targets) -> State:
    out = np.empty_like(state.psi)
    _block_kernel(state.psi, out, np.ascontiguousarray(U, dtype=state.dtype),
                  local_offsets(targets), np.int64(target_mask(targets)))
    return State(state.n, out)
