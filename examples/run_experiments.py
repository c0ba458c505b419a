"""
numkit full experiment run
==========================

Runs every experiment at full resolution (524,288-point exports, the
1/8192 square-root sweep) and writes the CSV and gnuplot files to
results/. Expect several minutes, most of it in the least-squares fits
and the square-root sweep.

Usage:
  pip install -e .
  python examples/run_experiments.py

Author: Ricardo Vieitez Parra
"""

import json
import os
import sys
import time

from numkit import driver
from numkit.matrix import fast

# ── Config ──
RESULTS_DIR = "results"
os.makedirs(RESULTS_DIR, exist_ok=True)

print("Compiling matrix kernels...")
t0 = time.time()
fast.warmup()
print(f"  done [{time.time() - t0:.1f}s]")
sys.stdout.flush()

# ── Run ──
t0 = time.time()
out = driver.run_experiments(output_dir=RESULTS_DIR)
elapsed = time.time() - t0

# ── Summary ──
summary = {
    "elapsed_s": round(elapsed, 1),
    "bisection_iterations": [r.iterations for r in out["bisection"]],
    "newton_iterations": [r.iterations for r in out["newton"]],
    "newton_3_iterations": out["newton_3"].iterations,
    "altered_newton_3_iterations": out["altered_newton_3"].iterations,
    "interpolation_errors": {
        key: {str(order): error for order, error in out[key]}
        for key in ("lagrange", "piecewise_linear", "raised_cosine", "least_squares")
    },
    "square_root_failures": len(out["square_root_failures"]),
    "bonus_iterations": [(p.iterations, a.iterations) for p, a in out["bonus"]],
}
with open(os.path.join(RESULTS_DIR, "summary.json"), "w") as f:
    json.dump(summary, f, indent=2)

print(f"\nSaved to {RESULTS_DIR}/summary.json [{elapsed:.1f}s]")
