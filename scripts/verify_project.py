#!/usr/bin/env python
"""
Project sanity check for collapse-rcs

- Verifies required folders/files
- Runs a small collapse simulation through the example driver (idempotent)
- Runs unit tests
- Checks the written bitstring table
- Prints a compact status report and exits non-zero on failure
"""

from __future__ import annotations
import json, subprocess, sys
from pathlib import Path
from typing import Dict, Any

ROOT = Path(__file__).resolve().parents[1]
PY = sys.executable
sys.path.insert(0, str(ROOT))

from collapse import SimulationConfig, read_bitstrings, SinkError  # noqa: E402

REQ_DIRS = ["examples", "outputs", "outputs/figs", "tests", "collapse"]
REQ_FILES = ["pyproject.toml", "DESIGN.md", "examples/collapse_rcs.py"]

SMOKE_CONFIG = SimulationConfig(
    qubit_count=16,
    depth=8,
    sample_count=40,
    progress_every=10,
    output="outputs/verify_collapse_rcs.csv",
)
SMOKE_JSON = ROOT / "outputs" / "verify_config.json"

def run(cmd, cwd=ROOT) -> subprocess.CompletedProcess:
    return subprocess.run(cmd, cwd=cwd, text=True, capture_output=True)

def ensure_paths() -> Dict[str, Any]:
    missing = []
    for d in REQ_DIRS:
        (ROOT / d).mkdir(parents=True, exist_ok=True)
    for f in REQ_FILES:
        if not (ROOT / f).exists():
            missing.append(f)
    return {"ok": len(missing) == 0, "missing": missing}

def regenerate_outputs() -> Dict[str, Any]:
    SMOKE_JSON.write_text(json.dumps(SMOKE_CONFIG.to_dict(), indent=2))
    cmd = [PY, "examples/collapse_rcs.py", str(SMOKE_JSON)]
    p = run(cmd)
    log = {"cmd": " ".join(cmd), "rc": p.returncode, "stdout": p.stdout, "stderr": p.stderr}
    return {"ok": p.returncode == 0, "logs": [log]}

def run_tests() -> Dict[str, Any]:
    p = run([PY, "-m", "pytest", "-q"])
    return {"ok": p.returncode == 0, "rc": p.returncode, "stdout": p.stdout, "stderr": p.stderr}

def check_table() -> Dict[str, Any]:
    path = ROOT / SMOKE_CONFIG.output
    try:
        rows = read_bitstrings(path)
    except (SinkError, ValueError) as e:
        return {"ok": False, "error": str(e)}
    failures = []
    if len(rows) != SMOKE_CONFIG.sample_count:
        failures.append(f"expected {SMOKE_CONFIG.sample_count} rows, got {len(rows)}")
    if any(len(r) != SMOKE_CONFIG.qubit_count for r in rows):
        failures.append("row width differs from qubit_count")
    if len(set(rows)) > 1:
        failures.append("samples are not identical repeats")
    return {"ok": not failures, "failures": failures, "rows": len(rows)}

def main() -> int:
    report: Dict[str, Any] = {}

    # 1) Paths
    paths = ensure_paths()
    report["paths"] = paths
    if not paths["ok"]:
        print("[FAIL] Missing required files:", ", ".join(paths["missing"]))
        print(json.dumps(report, indent=2))
        return 2

    # 2) Regenerate outputs
    regen = regenerate_outputs()
    report["regenerate"] = {"ok": regen["ok"]}
    if not regen["ok"]:
        print("[FAIL] Example run encountered errors.")
        print(json.dumps(regen["logs"], indent=2))
        return 3

    # 3) Unit tests
    tests = run_tests()
    report["tests"] = {"ok": tests["ok"], "rc": tests["rc"]}
    if not tests["ok"]:
        print("[FAIL] Pytest failures.")
        print(tests["stdout"])
        print(tests["stderr"], file=sys.stderr)
        print(json.dumps(report, indent=2))
        return 4

    # 4) Output table
    table = check_table()
    report["table"] = table
    if not table["ok"]:
        print("[FAIL] Output table checks failed:")
        print(json.dumps(table, indent=2))
        return 5

    print("[OK] Project verified.")
    print("Table recap:", {"rows": table["rows"], "qubits": SMOKE_CONFIG.qubit_count})
    return 0

if __name__ == "__main__":
    sys.exit(main())
