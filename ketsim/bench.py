# ketsim/bench.py
import argparse, csv, os, socket, subprocess, time, platform
from datetime import datetime
import numpy as np
from .circuit import Circuit
from . import gates as G
from .logging import get_logger, set_log_level

logger = get_logger(__name__)

DATA_DIR = os.path.join(os.getcwd(), "data")

def backend_dir(backend, root=None):
    path = os.path.join(root or DATA_DIR, backend)
    os.makedirs(path, exist_ok=True)
    return path

def warmup(circ, backend):
    # one dummy run to JIT-compile & warm caches; no norm check
    _ = circ.run(backend=backend, check_norm=False)

# ---------------------------------------------------------------------

def git_commit() -> str:
    try:
        return subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                       stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        return ""

def meta_row():
    return {
        "hostname": socket.gethostname(),
        "commit": git_commit(),
        "dtype": "complex128",
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "python": platform.python_version(),
    }

HEADER = ["qubits","depth","arity","backend","threads","gates","wall_ms","hostname","commit","dtype","timestamp"]

def new_csv(path):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, row):
    m = meta_row()
    row = dict(row, hostname=m["hostname"], commit=m["commit"], dtype=m["dtype"], timestamp=m["timestamp"])
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER, extrasaction="ignore").writerow(row)

# ---------------------------------------------------------------------

def random_circuit(n, depth, arity=2, seed=0):
    """Alternating layers of random 1-qubit gates and random k-qubit C^(k-1)X gates."""
    rng = np.random.default_rng(seed)
    arity = min(arity, n)
    multi = G.controlled_x(arity) if arity >= 2 else G.H
    c = Circuit.empty(n)
    for layer in range(depth):
        if layer % 2 == 0:
            for k in range(n):
                c.gate(G.H if rng.integers(0, 2) == 0 else G.X, k)
        else:
            targets = rng.permutation(n)[:arity]
            c.gate(multi, *(int(q) for q in targets))
    return c

def time_run(circ, backend, threads=None):
    t0 = time.perf_counter()
    _ = circ.run(backend=backend, check_norm=False, num_threads=threads)
    return (time.perf_counter() - t0) * 1e3  # ms

def numba_max_threads():
    from .apply_numba import get_threads
    return get_threads()

# ---------------------------------------------------------------------
# individual experiments

def bench_qubits(ns, depth, backend, out_path):
    logger.info("Qubits scaling -> %s", out_path)
    new_csv(out_path)
    warmup(random_circuit(min(ns), depth, seed=42), backend)
    threads = numba_max_threads() if backend == "numba" else 0
    for n in ns:
        circ = random_circuit(n, depth, seed=42)
        wall = time_run(circ, backend)
        write_row(out_path, {"qubits": n, "depth": depth, "arity": 2, "backend": backend,
                             "threads": threads, "gates": len(circ), "wall_ms": f"{wall:.3f}"})
        logger.info("  n=%d  wall=%.2f ms", n, wall)

def bench_threads(n, depth, threads_list, out_path):
    logger.info("Thread scaling -> %s", out_path)
    new_csv(out_path)
    from .apply_numba import set_threads
    pool = numba_max_threads()
    circ = random_circuit(n, depth, seed=123)
    warmup(circ, "numba")
    t1 = time_run(circ, "numba", threads=1)
    logger.info("  pool=%d  T1=%.1f ms", pool, t1)
    for t in threads_list:
        tt = min(int(t), pool)
        if tt != t:
            logger.warning("requested t=%d > pool=%d; using t=%d", t, pool, tt)
        wall = time_run(circ, "numba", threads=tt)
        write_row(out_path, {"qubits": n, "depth": depth, "arity": 2, "backend": "numba",
                             "threads": tt, "gates": len(circ), "wall_ms": f"{wall:.3f}"})
        logger.info("  t=%d  wall=%.2f ms  speedup=%.2fx", tt, wall, t1 / wall if wall > 0 else float("nan"))
    set_threads(pool)

def bench_arity(n, depth, arities, backend, out_path):
    logger.info("Gate arity scaling -> %s", out_path)
    new_csv(out_path)
    warmup(random_circuit(n, 2, arity=min(arities), seed=7), backend)
    threads = numba_max_threads() if backend == "numba" else 0
    for k in arities:
        circ = random_circuit(n, depth, arity=k, seed=7)
        wall = time_run(circ, backend)
        write_row(out_path, {"qubits": n, "depth": depth, "arity": k, "backend": backend,
                             "threads": threads, "gates": len(circ), "wall_ms": f"{wall:.3f}"})
        logger.info("  k=%d  wall=%.2f ms", k, wall)

# ---------------------------------------------------------------------
def build_parser():
    p = argparse.ArgumentParser(description="ketsim benchmarks -> data/<backend>/*.csv")
    p.add_argument("--out", type=str, default=DATA_DIR)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_qubits = sub.add_parser("qubits")
    p_qubits.add_argument("--ns", type=str, required=True)
    p_qubits.add_argument("--depth", type=int, default=100)
    p_qubits.add_argument("--backend", type=str, default="numba", choices=["serial","numpy","numba"])

    p_threads = sub.add_parser("threads")
    p_threads.add_argument("--n", type=int, default=16)
    p_threads.add_argument("--depth", type=int, default=200)
    p_threads.add_argument("--threads", type=str, default="1,2,4,8,16")
    # threads always use numba backend
    p_threads.add_argument("--backend", type=str, default="numba", choices=["numba"])

    p_arity = sub.add_parser("arity")
    p_arity.add_argument("--n", type=int, default=12)
    p_arity.add_argument("--depth", type=int, default=50)
    p_arity.add_argument("--arities", type=str, default="1,2,3,4")
    p_arity.add_argument("--backend", type=str, default="numba", choices=["serial","numpy","numba"])
    return p

def main(argv=None):
    args = build_parser().parse_args(argv)
    set_log_level("INFO")
    base = backend_dir(args.backend, args.out)

    if args.cmd == "qubits":
        ns = [int(x) for x in args.ns.split(",")]
        bench_qubits(ns, args.depth, args.backend, os.path.join(base, "qubits.csv"))

    elif args.cmd == "threads":
        ts = [int(x) for x in args.threads.split(",")]
        bench_threads(args.n, args.depth, ts, os.path.join(base, "threads.csv"))

    elif args.cmd == "arity":
        ks = [int(x) for x in args.arities.split(",")]
        bench_arity(args.n, args.depth, ks, args.backend, os.path.join(base, "arity.csv"))

if __name__ == "__main__":
    main()
