import csv
import os
import pytest
from qvector import bench

def read_rows(path):
    with open(path, newline="") as f:
        return list(csv.DictReader(f))

def test_bench_size_writes_rows(tmp_path, capsys):
    bench.main(["--data-dir", str(tmp_path), "size", "--sizes", "8,512", "--backend", "serial"])
    rows = read_rows(os.path.join(tmp_path, "serial", "size.csv"))
    assert [r["size"] for r in rows] == ["8", "512"]
    assert all(r["normalized"] == "True" for r in rows)
    assert all(float(r["wall_ms"]) >= 0 for r in rows)
    assert "done" in capsys.readouterr().out

def test_bench_budget_writes_rows(tmp_path):
    bench.main(["--data-dir", str(tmp_path), "budget", "--budgets", "10,1000"])
    rows = read_rows(os.path.join(tmp_path, "lazy", "budget.csv"))
    # 10 terms of 1/2^i are not close enough to 1; 1000 are
    assert [r["normalized"] for r in rows] == ["False", "True"]

def test_bench_numba_backend(tmp_path):
    pytest.importorskip("numba")
    bench.main(["--data-dir", str(tmp_path), "size", "--sizes", "1000", "--backend", "numba"])
    rows = read_rows(os.path.join(tmp_path, "numba", "size.csv"))
    assert rows[0]["normalized"] == "True"
    assert int(rows[0]["threads"]) >= 1
