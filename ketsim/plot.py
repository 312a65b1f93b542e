# ketsim/plot.py
import csv, os
from collections import defaultdict
from statistics import median
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .report import ket_label

def plot_probabilities(probs, path, title="Measurement probabilities"):
    """Bar chart of a (marginal) probability vector, ket labels MSB first."""
    probs = np.asarray(probs, dtype=np.float64)
    width = probs.shape[0].bit_length() - 1
    labels = [f"|{ket_label(i, width)}>" for i in range(probs.shape[0])]
    fig, ax = plt.subplots()
    ax.bar(range(len(probs)), probs)
    ax.set_xticks(range(len(probs)))
    ax.set_xticklabels(labels, rotation=90 if width > 3 else 0)
    ax.set_ylim(0, 1)
    ax.set_ylabel("Probability")
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(path, dpi=200)
    plt.close(fig)
    return path

def load_rows(path):
    rows = []
    with open(path, "r") as f:
        for row in csv.DictReader(f):
            for k in ("qubits", "depth", "arity", "threads"):
                row[k] = int(row[k])
            row["wall_ms"] = float(row["wall_ms"])
            rows.append(row)
    return rows

def median_by_key(rows, key_fields):
    buckets = defaultdict(list)
    for r in rows:
        buckets[tuple(r[k] for k in key_fields)].append(r["wall_ms"])
    agg = []
    for key, vals in buckets.items():
        out = dict(zip(key_fields, key))
        out["wall_ms"] = float(median(vals))
        agg.append(out)
    return sorted(agg, key=lambda r: tuple(r[k] for k in key_fields))

def _line_plot(xs, ys, xlabel, title, path, logy=False):
    fig, ax = plt.subplots()
    ax.plot(xs, ys, marker="o")
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Runtime (ms)")
    if logy:
        ax.set_yscale("log")
    ax.set_title(title)
    ax.grid(True, which="both", ls="--", lw=0.5)
    fig.tight_layout()
    fig.savefig(path, dpi=200)
    plt.close(fig)
    return path

def plot_bench(csv_path, out_dir=None):
    """Runtime chart for a bench CSV; the x axis depends on which file it is."""
    out_dir = out_dir or os.path.dirname(csv_path)
    tag = os.path.splitext(os.path.basename(csv_path))[0]
    rows = load_rows(csv_path)
    if not rows:
        return None
    backend = rows[0]["backend"]
    xkey = {"qubits": "qubits", "threads": "threads", "arity": "arity"}.get(tag, "qubits")
    pts = median_by_key(rows, [xkey])
    xs = [r[xkey] for r in pts]
    ys = [r["wall_ms"] for r in pts]
    path = os.path.join(out_dir, f"runtime_vs_{xkey}_{backend}.png")
    return _line_plot(xs, ys, xkey.capitalize(), f"Runtime vs {xkey} [{backend}]", path, logy=(xkey == "qubits"))
