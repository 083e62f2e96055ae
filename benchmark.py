"""
Benchmark suite for the trial-division factorization library.

Benchmarks:
1. Primality Testing: JIT trial division on primes of growing size
2. Candidate Generation: next_primes() batches at increasing bounds
3. Complete Factorization: recommended inputs and semiprimes
4. Batch Size: effect of the generator batch size on factorize()
5. Stress Test: random composites verified against their product
"""

import time
import sys
import random
import statistics
from typing import List, Callable

from factorization import (
    is_prime, next_primes, factorize, product_of, DEFAULT_BATCH_SIZE
)


# ============================================================================
# BENCHMARK UTILITIES
# ============================================================================

class BenchmarkResult:
    """Store benchmark results with statistics."""

    def __init__(self, name: str, times: List[float]):
        self.name = name
        self.times = sorted(times)

        self.min = min(times)
        self.max = max(times)
        self.mean = statistics.mean(times)
        self.median = statistics.median(times)
        self.stdev = statistics.stdev(times) if len(times) > 1 else 0

    def __str__(self):
        return (f"{self.name:40} | "
                f"Mean: {self.mean*1000:8.3f}ms | "
                f"Median: {self.median*1000:8.3f}ms | "
                f"StdDev: {self.stdev*1000:8.3f}ms | "
                f"Min: {self.min*1000:8.3f}ms | "
                f"Max: {self.max*1000:8.3f}ms")


def benchmark(func: Callable, *args, iterations: int = 5, **kwargs) -> BenchmarkResult:
    """
    Benchmark a function and return statistics.

    The first call is a warm-up, which also triggers JIT compilation.

    Args:
        func: Function to benchmark
        *args: Positional arguments to function
        iterations: Number of iterations to run
        **kwargs: Keyword arguments to function

    Returns:
        BenchmarkResult with timing statistics
    """
    times = []

    func(*args, **kwargs)

    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        times.append(elapsed)

    return BenchmarkResult(func.__name__, times)


# ============================================================================
# 1. PRIMALITY TESTING BENCHMARKS
# ============================================================================

def benchmark_primality():
    """Benchmark trial-division primality testing."""
    print("\n" + "="*100)
    print("PRIMALITY TESTING BENCHMARKS")
    print("="*100)

    test_primes = [
        (104729, "Small prime (6 digits)"),
        (15485863, "Medium prime (8 digits)"),
        (982451653, "Large prime (9 digits)"),
        (999999000001, "Very large prime (12 digits)"),
        (3037000493, "Half-width prime (10 digits)"),
    ]

    for prime, description in test_primes:
        result = benchmark(is_prime, prime, iterations=10)
        result.name = description
        print(result)


# ============================================================================
# 2. CANDIDATE GENERATION BENCHMARKS
# ============================================================================

def benchmark_next_primes():
    """Benchmark one generator batch at increasing lower bounds."""
    print("\n" + "="*100)
    print(f"CANDIDATE GENERATION BENCHMARKS (batch of {DEFAULT_BATCH_SIZE})")
    print("="*100)

    for bound in (1, 10**4, 10**6, 10**8, 10**9):
        result = benchmark(next_primes, bound, DEFAULT_BATCH_SIZE, iterations=5)
        result.name = f"Primes above {bound:,}"
        print(result)


# ============================================================================
# 3. COMPLETE FACTORIZATION BENCHMARKS
# ============================================================================

def benchmark_factorize():
    """Benchmark factorize() on the recommended inputs and semiprimes."""
    print("\n" + "="*100)
    print("COMPLETE FACTORIZATION BENCHMARKS")
    print("="*100)

    test_cases = [
        (600851475143, "71 * 839 * 1471 * 6857"),
        (35184372088832, "2^45"),
        (7653567865434567, "3 * 4297 * 593714053637"),
        (9967 * 9973, "Semiprime (4+4 digits)"),
        (1000003 * 1000033, "Semiprime (7+7 digits)"),
        (999999000001, "Prime (12 digits)"),
    ]

    for n, description in test_cases:
        result = benchmark(factorize, n, iterations=3)
        result.name = description
        print(result)


# ============================================================================
# 4. BATCH SIZE BENCHMARKS
# ============================================================================

def benchmark_batch_size():
    """Compare generator batch sizes on a semiprime that needs many batches."""
    print("\n" + "="*100)
    print("BATCH SIZE BENCHMARKS")
    print("="*100)

    n = 1000003 * 1000033
    for batch_size in (10, 100, 1000, 10000):
        result = benchmark(factorize, n, batch_size=batch_size, iterations=3)
        result.name = f"batch_size={batch_size}"
        print(result)


# ============================================================================
# 5. STRESS TEST
# ============================================================================

def benchmark_stress_test():
    """Stress test with random composites."""
    print("\n" + "="*100)
    print("STRESS TEST (20 Random Numbers)")
    print("="*100)

    test_numbers = [random.randint(2, 10**12) for _ in range(20)]

    times = []
    successful = 0

    start_total = time.perf_counter()

    for n in test_numbers:
        start = time.perf_counter()
        factors = factorize(n)
        elapsed = time.perf_counter() - start

        if product_of(factors) == n and all(is_prime(f) for f in factors):
            successful += 1
            times.append(elapsed)

    total_time = time.perf_counter() - start_total

    if times:
        result = BenchmarkResult("Stress test factorizations", times)
        print(result)
        print(f"Successful: {successful}/{len(test_numbers)}")
        print(f"Total time: {total_time:.3f}s")


# ============================================================================
# MAIN BENCHMARK SUITE
# ============================================================================

def run_all_benchmarks():
    """Run all benchmarks."""
    print("\n")
    print("╔" + "="*98 + "╗")
    print("║" + " "*24 + "TRIAL DIVISION FACTORIZATION BENCHMARK SUITE" + " "*30 + "║")
    print("╚" + "="*98 + "╝")

    try:
        benchmark_primality()
        benchmark_next_primes()
        benchmark_factorize()
        benchmark_batch_size()
        benchmark_stress_test()

        print("\n" + "="*100)
        print("BENCHMARK COMPLETE")
        print("="*100 + "\n")

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    run_all_benchmarks()
