"""
JIT-compiled kernels for trial-division factorization.

Every value handled here fits in a signed 64-bit integer, so the hot loops
are compiled with Numba and work on NumPy int64 arrays.

KERNELS:
1. Primality: odd trial division up to floor(sqrt(n))
2. Candidate generation: next `count` primes above a bound
3. Trial division: divide a batch of primes out of a cofactor
"""

import numpy as np
from typing import Tuple, List

from numba import njit


# ============================================================================
# PART 1: PRIMALITY (Numba JIT)
# ============================================================================

@njit
def _is_prime_simd(n: int) -> bool:
    """
    Trial-division primality test.

    Only odd divisors are tried. The loop condition `i <= n // i` is the
    same as `i <= floor(sqrt(n))` without squaring, so it cannot overflow
    int64 near the top of the range.
    """
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    i = 3
    while i <= n // i:
        if n % i == 0:
            return False
        i += 2
    return True


# ============================================================================
# PART 2: CANDIDATE GENERATION (Numba JIT)
# ============================================================================

@njit
def _next_primes_simd(lower_bound: int, count: int) -> np.ndarray:
    """
    Find the next `count` primes strictly greater than `lower_bound`.

    Args:
        lower_bound: Candidates start at lower_bound + 1
        count: Number of primes to collect

    Returns:
        Strictly increasing int64 array of length max(count, 0)
    """
    if count < 1:
        return np.empty(0, dtype=np.int64)
    primes = np.empty(count, dtype=np.int64)
    found = 0
    candidate = lower_bound
    while found < count:
        candidate += 1
        if _is_prime_simd(candidate):
            primes[found] = candidate
            found += 1
    return primes


# ============================================================================
# PART 3: TRIAL DIVISION (Numba JIT)
# ============================================================================

@njit
def _trial_division_simd(n: int, primes: np.ndarray) -> Tuple[List[int], int]:
    """
    Divide each prime of the batch out of n as many times as it divides.

    Stops as soon as n reaches 1, leaving the rest of the batch untouched.

    Args:
        n: Cofactor to reduce
        primes: NumPy array of primes in increasing order (int64)

    Returns:
        (list of factors found, remaining cofactor)
    """
    factors = []
    i = 0
    while n > 1 and i < len(primes):
        p = primes[i]
        if n % p == 0:
            factors.append(p)
            n //= p
        else:
            i += 1
    return factors, n


__all__: List[str] = [
    '_is_prime_simd',
    '_next_primes_simd',
    '_trial_division_simd',
]
