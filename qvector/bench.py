import argparse, csv, os, socket, subprocess, time, platform
from datetime import datetime
import numpy as np
from .strict import is_normalized
from . import lazy

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

def backend_dir(backend, data_dir=DATA_DIR):
    path = os.path.join(data_dir, backend)
    os.makedirs(path, exist_ok=True)
    return path

# ---------------------------------------------------------------------

def meta_row():
    commit = ""
    try:
        commit = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                         stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        pass
    return {
        "hostname": socket.gethostname(),
        "commit": commit,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "python": platform.python_version(),
        "machine": platform.machine(),
    }

HEADER = ["size","budget","backend","threads","wall_ms","normalized","hostname","commit","timestamp"]

def new_csv(path):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, row):
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writerow(row)

# ---------------------------------------------------------------------

def random_vector(size, seed=0):
    """Random normalized mapping {0..size-1 -> amplitude}."""
    rng = np.random.default_rng(seed)
    psi = rng.normal(size=size) + 1j*rng.normal(size=size)
    psi /= np.linalg.norm(psi)
    return {i: complex(a) for i, a in enumerate(psi)}

def time_call(fn, *args, **kwargs):
    t0 = time.perf_counter()
    out = fn(*args, **kwargs)
    return (time.perf_counter() - t0) * 1e3, out  # ms

def numba_threads():
    try:
        from .apply_numba import get_threads
    except ImportError:
        return 0
    return get_threads()

# ---------------------------------------------------------------------
# individual experiments

def bench_size(sizes, backend, out_path):
    print(f"[run] Eager validation vs size → {out_path}")
    new_csv(out_path)
    # one dummy run to JIT-compile & warm caches
    is_normalized(random_vector(min(sizes)), backend=backend)
    for size in sizes:
        m = random_vector(size, seed=42)
        wall, ok = time_call(is_normalized, m, backend=backend)
        meta = meta_row()
        write_row(out_path, {
            "size": size, "budget": "", "backend": backend,
            "threads": 0 if backend=="serial" else numba_threads(),
            "wall_ms": f"{wall:.3f}", "normalized": ok,
            "hostname": meta["hostname"], "commit": meta["commit"], "timestamp": meta["timestamp"]
        })
        print(f"  size={size}  wall={wall:.2f} ms  normalized={ok}")
    print("✓ done.\n")

def bench_budget(budgets, out_path):
    print(f"[run] Lazy validation vs budget → {out_path}")
    new_csv(out_path)
    qv = lazy.q_integer()
    for b in budgets:
        wall, ok = time_call(lazy.is_normalized, qv, budget=b)
        meta = meta_row()
        write_row(out_path, {
            "size": "", "budget": b, "backend": "lazy", "threads": 0,
            "wall_ms": f"{wall:.3f}", "normalized": ok,
            "hostname": meta["hostname"], "commit": meta["commit"], "timestamp": meta["timestamp"]
        })
        print(f"  budget={b}  wall={wall:.2f} ms  normalized={ok}")
    print("✓ done.\n")

# ---------------------------------------------------------------------
def main(argv=None):
    p = argparse.ArgumentParser(description="qvector benchmarks → data/<backend>/*.csv (auto)")
    p.add_argument("--data-dir", type=str, default=DATA_DIR)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_size = sub.add_parser("size")
    p_size.add_argument("--sizes", type=str, default="10,1000,100000,1000000")
    p_size.add_argument("--backend", type=str, default="serial", choices=["serial","numba"])

    p_budget = sub.add_parser("budget")
    p_budget.add_argument("--budgets", type=str, default="10,100,1000,10000")

    args = p.parse_args(argv)

    if args.cmd == "size":
        sizes = [int(x) for x in args.sizes.split(",")]
        out_path = os.path.join(backend_dir(args.backend, args.data_dir), "size.csv")
        bench_size(sizes, args.backend, out_path)

    elif args.cmd == "budget":
        bs = [int(x) for x in args.budgets.split(",")]
        out_path = os.path.join(backend_dir("lazy", args.data_dir), "budget.csv")
        bench_budget(bs, out_path)

if __name__ == "__main__":
    main()
