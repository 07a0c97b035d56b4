from .qubit import Qubit, norm
from .sampler import (
    init_register,
    evolve_register,
    collapse_register,
    generate_sample,
    generate_collection,
    generate_from_config,
    norm_trace,
)
from .config import SimulationConfig
from .export import SinkError, write_bitstrings, read_bitstrings, bit_frequencies

__all__ = [
    "Qubit",
    "norm",
    "init_register",
    "evolve_register",
    "collapse_register",
    "generate_sample",
    "generate_collection",
    "generate_from_config",
    "norm_trace",
    "SimulationConfig",
    "SinkError",
    "write_bitstrings",
    "read_bitstrings",
    "bit_frequencies",
]
