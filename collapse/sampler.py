# collapse/sampler.py
"""
Sample generation: build a register of independent qubits, drive it through
`depth` rounds of deterministic phase gates, collapse every qubit to a bit.

    init -> evolve x depth -> collapse

A register is a plain list of Qubit objects owned by one sample and mutated in
place. Nothing is shared between samples, so a collection can be sharded over
worker processes and gathered back by sample index.
"""

from __future__ import annotations
from multiprocessing import Pool
from typing import Callable, List, Optional, Sequence

import numpy as np

from .qubit import Qubit

__all__ = [
    "gate_angle",
    "init_register",
    "evolve_register",
    "apply_round",
    "collapse_register",
    "generate_sample",
    "generate_collection",
    "generate_from_config",
    "norm_trace",
]

Register = List[Qubit]
ProgressFn = Callable[[int, int], None]

# ------------------ register primitives ------------------

def gate_angle(round_index: int, qubit_index: int, depth: int, qubit_count: int) -> float:
    """theta = 2*pi*(d + i)/(depth + qubit_count)."""
    return 2.0 * np.pi * float(round_index + qubit_index) / float(depth + qubit_count)

def init_register(qubit_count: int) -> Register:
    if qubit_count <= 0:
        raise ValueError("qubit_count must be positive.")
    return [Qubit.from_index(i, qubit_count) for i in range(qubit_count)]

def evolve_register(register: Register, depth: int, order: Optional[Sequence[int]] = None) -> None:
    """
    Apply `depth` rounds of gates in place. Rounds run strictly in order.
    `order` permutes the visiting order inside each round; the angle always
    follows the qubit's own index.
    """
    if depth < 0:
        raise ValueError("depth must be non-negative.")
    n = len(register)
    if order is None:
        order = range(n)
    elif sorted(order) != list(range(n)):
        raise ValueError(f"order must be a permutation of range({n})")
    for d in range(depth):
        apply_round(register, d, depth, order)

def apply_round(register: Register, round_index: int, depth: int, order: Optional[Sequence[int]] = None) -> None:
    """One round of gates; `depth` only enters through the angle divisor."""
    n = len(register)
    for i in (range(n) if order is None else order):
        register[i].apply_deterministic_gate(gate_angle(round_index, i, depth, n))

def collapse_register(register: Register) -> str:
    return "".join(q.collapse_bit() for q in register)

# ------------------ samples ------------------

def generate_sample(qubit_count: int, depth: int) -> str:
    """One full initialize -> evolve -> collapse run; returns a bitstring of length qubit_count."""
    register = init_register(qubit_count)
    evolve_register(register, depth)
    return collapse_register(register)

def _sample_task(args) -> str:
    qubit_count, depth = args
    return generate_sample(qubit_count, depth)

def generate_collection(
    qubit_count: int,
    depth: int,
    sample_count: int,
    progress: Optional[ProgressFn] = None,
    progress_every: int = 500,
    processes: Optional[int] = None,
) -> List[str]:
    """
    Run generate_sample `sample_count` times and return the bitstrings in
    sample-index order.

    progress(i, sample_count) is called for each i with i % progress_every == 0,
    as sample i becomes available.
    processes > 1 shards samples over a multiprocessing Pool; Pool.imap yields
    results in input order, so output is identical to the serial path.
    """
    if qubit_count <= 0:
        raise ValueError("qubit_count must be positive.")
    if depth < 0:
        raise ValueError("depth must be non-negative.")
    if sample_count < 0:
        raise ValueError("sample_count must be non-negative.")

    out: List[str] = [""] * sample_count

    def _report(i: int) -> None:
        if progress is not None and progress_every > 0 and i % progress_every == 0:
            progress(i, sample_count)

    if processes is not None and processes > 1 and sample_count > 1:
        tasks = [(qubit_count, depth)] * sample_count
        chunksize = sample_count // (4 * int(processes))
        if progress_every > 0:
            chunksize = min(chunksize, progress_every)
        chunksize = max(1, chunksize)
        with Pool(int(processes)) as pool:
            for i, bits in enumerate(pool.imap(_sample_task, tasks, chunksize=chunksize)):
                out[i] = bits
                _report(i)
        return out

    for i in range(sample_count):
        out[i] = generate_sample(qubit_count, depth)
        _report(i)
    return out

def generate_from_config(config, progress: Optional[ProgressFn] = None) -> List[str]:
    """generate_collection driven by a SimulationConfig."""
    return generate_collection(
        config.qubit_count,
        config.depth,
        config.sample_count,
        progress=progress,
        progress_every=config.progress_every,
        processes=config.processes,
    )

# ------------------ diagnostics ------------------

def norm_trace(qubit_count: int, depth: int) -> np.ndarray:
    """
    Per-qubit |alpha|^2 + |beta|^2 after init (row 0) and after each round.
    Shape (depth + 1, qubit_count).
    """
    if depth < 0:
        raise ValueError("depth must be non-negative.")
    register = init_register(qubit_count)
    rows = [[q.norm() for q in register]]
    for d in range(depth):
        apply_round(register, d, depth)
        rows.append([q.norm() for q in register])
    return np.asarray(rows, dtype=float)
