# collapse/config.py
from __future__ import annotations
import json
from dataclasses import dataclass, asdict, fields, replace as _replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

__all__ = ["SimulationConfig"]


def _check_int(name: str, value: Any, minimum: int) -> None:
    # bool is an int subclass; JSON true/false must not count as 1/0
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an int, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class SimulationConfig:
    """
    Run parameters for a collapse simulation. Defaults reproduce the reference
    run: 100 qubits, depth 50, 10000 samples, progress every 500 samples.
    """
    qubit_count: int = 100
    depth: int = 50
    sample_count: int = 10000
    progress_every: int = 500
    output: str = "outputs/collapse_rcs_output.csv"
    processes: Optional[int] = None

    def __post_init__(self):
        _check_int("qubit_count", self.qubit_count, 1)
        _check_int("depth", self.depth, 0)
        _check_int("sample_count", self.sample_count, 0)
        if not isinstance(self.progress_every, int) or isinstance(self.progress_every, bool):
            raise ValueError(f"progress_every must be an int, got {self.progress_every!r}")
        if self.processes is not None:
            _check_int("processes", self.processes, 1)

    # ---------- constructors ----------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        if not isinstance(data, Mapping):
            raise ValueError(f"config must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_json(cls, path: str | Path) -> "SimulationConfig":
        return cls.from_dict(json.loads(Path(path).read_text()))

    # ---------- helpers ----------
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def replace(self, **changes) -> "SimulationConfig":
        return _replace(self, **changes)
