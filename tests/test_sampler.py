# tests/test_sampler.py
import numpy as np
import pytest
from collapse.sampler import (
    gate_angle,
    init_register,
    evolve_register,
    apply_round,
    collapse_register,
    generate_sample,
    generate_collection,
    generate_from_config,
    norm_trace,
)
from collapse.config import SimulationConfig

def test_zero_depth_golden():
    # |alpha|^2 lands a hair under 0.5 for every index after normalization
    assert generate_sample(4, 0) == "1111"

def test_evolved_golden():
    # Bits sit within a few ulps of the 0.5 threshold, so this value follows the
    # platform libm sin/cos (glibc, numpy and cmath all agree on it).
    assert generate_sample(9, 4) == "011000011"

def test_sample_shape_and_alphabet():
    bits = generate_sample(37, 11)
    assert len(bits) == 37
    assert set(bits) <= {"0", "1"}

def test_sample_is_deterministic():
    for q, d in [(1, 0), (5, 3), (32, 16), (100, 50)]:
        assert generate_sample(q, d) == generate_sample(q, d)

def test_sample_matches_manual_pipeline():
    reg = init_register(9)
    for d in range(4):
        for i, q in enumerate(reg):
            q.apply_deterministic_gate(2 * np.pi * (d + i) / (4 + 9))
    assert collapse_register(reg) == generate_sample(9, 4)

def test_gate_angle():
    assert np.isclose(gate_angle(0, 0, 5, 3), 0.0)
    assert np.isclose(gate_angle(2, 1, 5, 3), 2 * np.pi * 3 / 8)

def test_shuffled_order_within_round_is_invisible():
    rng = np.random.default_rng(0)
    n, depth = 24, 12
    ref = generate_sample(n, depth)
    for _ in range(5):
        reg = init_register(n)
        evolve_register(reg, depth, order=rng.permutation(n))
        assert collapse_register(reg) == ref

def test_evolve_rejects_bad_order():
    reg = init_register(3)
    with pytest.raises(ValueError):
        evolve_register(reg, 2, order=[0, 0, 1])

def test_collection_length_order_and_repeatability():
    a = generate_collection(6, 4, 5)
    b = generate_collection(6, 4, 5)
    assert len(a) == 5
    assert all(len(s) == 6 for s in a)
    assert a == b
    assert a == [generate_sample(6, 4)] * 5

def test_empty_collection():
    assert generate_collection(3, 2, 0) == []

def test_progress_does_not_change_output():
    calls = []
    out = generate_collection(8, 3, 12, progress=lambda c, t: calls.append((c, t)), progress_every=5)
    assert out == generate_collection(8, 3, 12)
    assert calls == [(0, 12), (5, 12), (10, 12)]

def test_progress_disabled():
    calls = []
    generate_collection(4, 1, 6, progress=lambda c, t: calls.append(c), progress_every=0)
    assert calls == []

def test_parallel_matches_serial():
    serial = generate_collection(10, 6, 9)
    parallel = generate_collection(10, 6, 9, processes=2)
    assert parallel == serial

def test_from_config():
    cfg = SimulationConfig(qubit_count=5, depth=2, sample_count=3)
    assert generate_from_config(cfg) == generate_collection(5, 2, 3)

@pytest.mark.parametrize("q,d,s", [(0, 1, 1), (3, -1, 1), (3, 1, -1)])
def test_collection_rejects_bad_args(q, d, s):
    with pytest.raises(ValueError):
        generate_collection(q, d, s)

def test_norm_trace_conserved():
    trace = norm_trace(12, 20)
    assert trace.shape == (21, 12)
    assert np.allclose(trace, 1.0, atol=1e-9)

def test_pool_progress_reports_each_index():
    calls = []
    out = generate_collection(8, 3, 12, progress=lambda c, t: calls.append((c, t)),
                              progress_every=5, processes=2)
    assert out == generate_collection(8, 3, 12)
    assert calls == [(0, 12), (5, 12), (10, 12)]

def test_rounds_match_evolve_register():
    n, depth = 7, 5
    reg = init_register(n)
    for d in range(depth):
        apply_round(reg, d, depth)
    ref = init_register(n)
    evolve_register(ref, depth)
    assert [(q.alpha, q.beta) for q in reg] == [(q.alpha, q.beta) for q in ref]
    assert collapse_register(reg) == generate_sample(n, depth)
