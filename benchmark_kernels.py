"""
Benchmark the reduction kernels available on this CPU.

Usage:
    python benchmark_kernels.py
    python benchmark_kernels.py --length 4096 --iters 50
"""
import argparse
import logging
import statistics
import time

import numpy as np

from src.infrastructure.kernels.dispatch import available_kernels, create_kernel
from src.infrastructure.logging import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Time every available dot-product kernel on random vectors."
    )
    parser.add_argument(
        "--length",
        type=int,
        default=500,
        help="Number of elements per vector (default: 500)",
    )
    parser.add_argument(
        "--iters",
        type=int,
        default=30,
        help="Timed iterations per kernel (default: 30)",
    )
    parser.add_argument(
        "--warmup",
        type=int,
        default=5,
        help="Untimed iterations per kernel (default: 5)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for the input vectors (default: 0)",
    )
    return parser.parse_args(argv)


def bench_once(fn, iters: int = 30, warmup: int = 5) -> dict:
    """
    Time a zero-argument callable.

    Returns
    -------
    dict
        ``best_ms``, ``median_ms`` and the number of timed iterations ``n``.
    """
    for _ in range(warmup):
        fn()

    times = []
    for _ in range(iters):
        start = time.perf_counter()
        fn()
        times.append((time.perf_counter() - start) * 1000.0)

    return {
        "best_ms": min(times),
        "median_ms": statistics.median(times),
        "n": iters,
    }


def run_benchmarks(length: int, iters: int, warmup: int, seed: int) -> dict[str, dict]:
    """Benchmark every available kernel and return the timings by kernel name."""
    rng = np.random.default_rng(seed)
    u = rng.random(length, dtype=np.float32)
    v = rng.random(length, dtype=np.float32)

    results = {}
    for name in available_kernels():
        kernel = create_kernel(name)
        timing = bench_once(lambda: kernel.dot(u, v), iters=iters, warmup=warmup)
        timing["value"] = kernel.dot(u, v)
        results[name] = timing
        logger.info(
            f"{name:>8}: best={timing['best_ms']:.3f} ms, "
            f"median={timing['median_ms']:.3f} ms, dot={timing['value']:.4f}"
        )
    return results


def main(argv=None):
    setup_logging()
    args = parse_args(argv)
    if args.length < 0:
        raise ValueError("--length must be non-negative")
    if args.iters < 1:
        raise ValueError("--iters must be at least 1")
    return run_benchmarks(args.length, args.iters, args.warmup, args.seed)


if __name__ == "__main__":
    main()
