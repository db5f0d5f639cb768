"""
Benchmark 4x3 matrix operations (single-matrix API vs batched Numba kernels).
"""

import time

import numpy as np

from affine43 import (
    TransformChain,
    chain,
    decompose_batched,
    decompose_matrix,
    invert,
    multiply,
    multiply_batched,
    rotation_yaw,
    scale,
    translation,
)

N = 100_000
NUM_ITERATIONS = 50
SINGLE_CALLS = 100_000


def timeit(fn, iterations):
    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        fn()
        times.append((time.perf_counter() - start) * 1000)
    return np.mean(times), np.std(times)


print("=" * 80)
print("4x3 MATRIX BENCHMARK")
print(f"Batched: {N:,} matrices, {NUM_ITERATIONS} iterations | Single: {SINGLE_CALLS:,} calls")
print("=" * 80)

rng = np.random.default_rng(0)
a = rng.uniform(-1.0, 1.0, (N, 12))
a[:, [0, 5, 10]] += 3.0
b = rng.uniform(-1.0, 1.0, (N, 12))
m = chain(scale(2.0), rotation_yaw(0.3), translation(1.0, 2.0, 3.0))

# Warmup (triggers JIT compilation)
print("\nWarming up...")
multiply(m, m)
invert(m)
decompose_matrix(m)
multiply_batched(a[:10], b[:10])
multiply_batched(a[:10], m)
decompose_batched(a[:10])

# Single-matrix calls
print("\n" + "=" * 80)
print("SINGLE-MATRIX API")
print("=" * 80)

for name, fn in (
    ("multiply", lambda: multiply(m, m)),
    ("invert", lambda: invert(m)),
    ("decompose_matrix", lambda: decompose_matrix(m)),
):
    start = time.perf_counter()
    for _ in range(SINGLE_CALLS):
        fn()
    elapsed = time.perf_counter() - start
    print(f"  {name:<20} {elapsed / SINGLE_CALLS * 1e6:8.3f} us/call")

start = time.perf_counter()
for _ in range(SINGLE_CALLS // 10):
    TransformChain().scale(2.0).yaw(0.3).translate(1.0, 2.0, 3.0).get_matrix()
elapsed = time.perf_counter() - start
print(f"  {'TransformChain':<20} {elapsed / (SINGLE_CALLS // 10) * 1e6:8.3f} us/call")

# Batched kernels
print("\n" + "=" * 80)
print("BATCHED KERNELS")
print("=" * 80)

for name, fn in (
    ("multiply_batched", lambda: multiply_batched(a, b)),
    ("multiply_batched[1]", lambda: multiply_batched(a, m)),
    ("decompose_batched", lambda: decompose_batched(a)),
):
    mean_time, std_time = timeit(fn, NUM_ITERATIONS)
    print(
        f"  {name:<20} {mean_time:7.3f} ms +/- {std_time:.3f} ms  "
        f"({N / mean_time * 1000 / 1e6:.1f}M matrices/sec)"
    )

# Compare against a pure NumPy einsum reference
print("\n" + "=" * 80)
print("NUMPY REFERENCE")
print("=" * 80)


def numpy_multiply(a, b):
    a3 = a.reshape(-1, 3, 4)
    out = np.einsum("nij,njk->nik", a3[:, :, :3], b.reshape(-1, 3, 4))
    out[:, :, 3] += a3[:, :, 3]
    return out.reshape(-1, 12)


mean_np, std_np = timeit(lambda: numpy_multiply(a, b), NUM_ITERATIONS)
mean_nb, _ = timeit(lambda: multiply_batched(a, b), NUM_ITERATIONS)
print(f"  numpy einsum         {mean_np:7.3f} ms +/- {std_np:.3f} ms")
print(f"  Speedup (Numba):     {mean_np / mean_nb:.2f}x")

print("\n" + "=" * 80)
print("BENCHMARK COMPLETE")
print("=" * 80)
