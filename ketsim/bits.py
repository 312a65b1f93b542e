# ketsim/bits.py
import numpy as np

def is_power_of_two(x: int) -> bool:
    return x > 0 and (x & (x - 1)) == 0

def qubit_count(dim: int) -> int:
    """Number of qubits k for a dimension 2^k. Raises on non powers of two."""
    if not is_power_of_two(dim):
        raise ValueError(f"dimension {dim} is not a power of two")
    return dim.bit_length() - 1

def target_mask(targets) -> int:
    mask = 0
    for q in targets:
        mask |= 1 << q
    return mask

def local_offsets(targets) -> np.ndarray:
    """Global bit pattern for every local index of a k-qubit gate.

    Entry l has bit targets[p] set for every set bit p of l, so the global
    index of local state l inside the block based at b is b | offsets[l].
    """
    k = len(targets)
    offsets = np.zeros(1 << k, dtype=np.int64)
    for l in range(1 << k):
        g = 0
        for p in range(k):
            if (l >> p) & 1:
                g |= 1 << targets[p]
        offsets[l] = g
    return offsets

def block_bases(n: int, mask: int) -> np.ndarray:
    # every index with all targeted bits clear: one representative per block
    idx = np.arange(1 << n, dtype=np.int64)
    return idx[(idx & mask) == 0]

# amplitude helpers (numpy complex scalars/arrays)

def norm_squared(a):
    a = np.asarray(a)
    return a.real * a.real + a.imag * a.imag

def as_amplitudes(data, dtype=np.complex128) -> np.ndarray:
    """Copy data into a 1-D complex array, rejecting NaN/Inf."""
    psi = np.array(data, dtype=dtype).reshape(-1)
    if not np.all(np.isfinite(psi)):
        raise ValueError("amplitudes must be finite")
    return psi
