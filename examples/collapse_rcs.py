#!/usr/bin/env python3
"""
Collapse RCS run: generate deterministic collapse bitstrings and write them out.

Usage:
    python examples/collapse_rcs.py [config.json]

Outputs (default config):
  - outputs/collapse_rcs_output.csv      (header "Bitstring", one row per sample)
  - outputs/collapse_rcs_frequencies.tsv (fraction of '1' per qubit)
  - outputs/figs/collapse_rcs_frequencies.png
"""

from __future__ import annotations
import sys
from pathlib import Path

import pandas as pd
import matplotlib.pyplot as plt

from collapse import SimulationConfig, SinkError, generate_from_config, write_bitstrings, bit_frequencies

FIG_DIR = Path("outputs/figs")


def load_config(argv) -> SimulationConfig:
    if len(argv) > 1:
        return SimulationConfig.from_json(argv[1])
    return SimulationConfig()


def print_progress(current: int, total: int) -> None:
    print(f"Progress: {current}/{total} samples")


def write_frequencies(bitstrings, out_csv: Path) -> tuple[Path, Path]:
    freqs = bit_frequencies(bitstrings)
    df = pd.DataFrame({"qubit": range(len(freqs)), "p_one": freqs})
    out_tsv = out_csv.with_name(out_csv.stem.replace("_output", "") + "_frequencies.tsv")
    df.to_csv(out_tsv, sep="\t", index=False)

    FIG_DIR.mkdir(parents=True, exist_ok=True)
    plt.figure(figsize=(6.6, 3.6))
    plt.bar(df["qubit"], df["p_one"])
    plt.xlabel("qubit index")
    plt.ylabel("fraction of '1'")
    plt.ylim(0.0, 1.0)
    plt.title("Collapse bit frequencies")
    out_png = FIG_DIR / "collapse_rcs_frequencies.png"
    plt.savefig(out_png, dpi=160, bbox_inches="tight")
    plt.close()
    return out_tsv, out_png


def main(argv=None) -> int:
    argv = sys.argv if argv is None else argv
    try:
        cfg = load_config(argv)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        print("Error loading config:", e)
        return 2
    print("Collapse Supremacy Simulation")
    print(f"Qubits: {cfg.qubit_count}, Depth: {cfg.depth}, Samples: {cfg.sample_count}")

    bitstrings = generate_from_config(cfg, progress=print_progress)

    try:
        out_csv = write_bitstrings(cfg.output, bitstrings)
    except SinkError as e:
        print("Error writing CSV:", e)
        return 1
    print(f"Collapse simulation complete. Output saved to {out_csv}")

    if bitstrings:
        try:
            out_tsv, out_png = write_frequencies(bitstrings, out_csv)
        except OSError as e:
            print("Error writing frequencies:", e)
            return 1
        print(f"Wrote {out_tsv} and {out_png}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
