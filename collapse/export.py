# collapse/export.py
"""
Bitstring table I/O.

The table has one column, ``Bitstring``, and one row per sample in generation
order. Writes go to a temporary file next to the destination and are moved
into place with os.replace, so a failed write never leaves a partial table.
"""

from __future__ import annotations
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

__all__ = [
    "HEADER",
    "SinkError",
    "write_bitstrings",
    "read_bitstrings",
    "bit_frequencies",
]

HEADER = "Bitstring"


class SinkError(OSError):
    """Raised when the bitstring table cannot be written or read."""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = Path(path)


def _validate(bitstrings: Sequence[str]) -> None:
    width = None
    for k, b in enumerate(bitstrings):
        if not isinstance(b, str) or not b or set(b) - {"0", "1"}:
            raise ValueError(f"entry {k} is not a non-empty 0/1 string: {b!r}")
        if width is None:
            width = len(b)
        elif len(b) != width:
            raise ValueError(f"entry {k} has length {len(b)}, expected {width}")


def write_bitstrings(path: str | Path, bitstrings: Iterable[str], sep: str = ",") -> Path:
    """Write the full table atomically and return its path."""
    rows = list(bitstrings)
    _validate(rows)
    path = Path(path)
    df = pd.DataFrame({HEADER: pd.Series(rows, dtype=object)})

    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", newline="") as fh:
            df.to_csv(fh, sep=sep, index=False)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise SinkError(path, f"write failed: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
    return path


def read_bitstrings(path: str | Path, sep: str = ",") -> List[str]:
    """Read a table written by write_bitstrings; leading zeros are kept."""
    path = Path(path)
    try:
        df = pd.read_csv(path, sep=sep, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise SinkError(path, f"read failed: {e}") from e
    if list(df.columns) != [HEADER]:
        raise SinkError(path, f"expected a single '{HEADER}' column, got {list(df.columns)}")
    return df[HEADER].tolist()


def bit_frequencies(bitstrings: Sequence[str]) -> np.ndarray:
    """Fraction of '1' per qubit position across the collection."""
    if len(bitstrings) == 0:
        return np.zeros(0, dtype=float)
    _validate(bitstrings)
    bits = np.array([[c == "1" for c in b] for b in bitstrings], dtype=float)
    return bits.mean(axis=0)
