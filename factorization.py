"""
Integer factorization by trial division against a stream of prime candidates.

ALGORITHM:
1. Candidate generation: primes above a bound are produced one batch at a
   time by odd trial division (no sieve, nothing cached between batches)
2. Trial division: each batch is divided out of the remaining cofactor
3. Early exits: the search stops when the cofactor reaches 1, when the
   product of the factors found equals N, or when the last candidate tried
   already exceeds the square root of the remaining cofactor
4. Large-factor recovery: a positive integer has at most one prime factor
   above its square root; it equals N divided by the product of all the
   smaller factors

DOMAIN:
- 2 <= N < 2**63 - 1. Values outside are rejected by parse_input() before
  they reach the engine.

PERFORMANCE:
- Numbers with small factors finish in milliseconds
- The worst case, N = p * q with p and q near 3 * 10^9, has to test every
  prime below sqrt(N) and takes hours

DEPENDENCIES:
- NumPy: candidate batches are int64 arrays
- Numba: primality, candidate generation and trial division kernels
"""
import logging
import math
import re
import time

import numpy as np
from simd_operations import (
    _is_prime_simd,
    _next_primes_simd,
    _trial_division_simd,
)

logger = logging.getLogger(__name__)

# Largest signed 64-bit value; inputs must be strictly below it
N_LIMIT = 2**63 - 1

# Primes fetched per generator call
DEFAULT_BATCH_SIZE = 1000

# Batches between checks of the running product against N
PRODUCT_CHECK_INTERVAL = 100

_DIGITS = re.compile(r"[0-9]+")

_SUPERSCRIPTS = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")

INVALID_ENTRY_MESSAGE = "Invalid entry -- try again"
OUT_OF_RANGE_MESSAGE = f"Please enter a number between 2 and {N_LIMIT:,}"


class FactorizationError(Exception):
    pass


class InvalidInputError(FactorizationError, ValueError):
    """Raised when text cannot be handed to the engine."""


class FactorizationBusyError(FactorizationError):
    """Raised when a factorization is already running."""


class FactorizationCancelled(FactorizationError):
    """Raised from factorize() when its cancel event is set."""


# trial-division primality test
def is_prime(n: int) -> bool:
    """
    Primality by trial division against odd divisors up to floor(sqrt(n)).

    Any value below 2 is not prime.
    """
    if n < 2:
        return False
    return bool(_is_prime_simd(n))


def next_primes(lower_bound: int, count: int = DEFAULT_BATCH_SIZE) -> np.ndarray:
    """
    Find the next `count` primes greater than `lower_bound`.

    Args:
        lower_bound: Every returned prime is strictly greater than this
        count: How many primes to return

    Returns:
        Strictly increasing int64 array of primes
    """
    return _next_primes_simd(lower_bound, count)


def product_of(factors) -> int:
    result = 1
    for f in factors:
        result *= int(f)
    return result


def factorize(n: int, batch_size: int = DEFAULT_BATCH_SIZE, cancel_event=None) -> list[int]:
    """
    Factorize n into prime factors by batched trial division.

    A result with fewer than two elements means n is prime (one element) or
    n < 2 (empty list). An empty list is not evidence of primality.

    Args:
        n: Integer to factorize, 2 <= n < N_LIMIT
        batch_size: Primes fetched per generator call
        cancel_event: Optional threading.Event checked once per batch

    Returns:
        Prime factors of n with multiplicity, in non-decreasing order
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    factors: list[int] = []
    if n < 2:
        return factors

    limit = math.isqrt(n)
    cofactor = n
    bound = 1
    batches = 0

    while bound <= limit:
        primes = next_primes(bound, batch_size)
        found, cofactor = _trial_division_simd(cofactor, primes)
        factors.extend(int(p) for p in found)
        cofactor = int(cofactor)
        if cofactor == 1:
            break

        bound = int(primes[-1])
        batches += 1

        if batches % PRODUCT_CHECK_INTERVAL == 0:
            logger.debug("n=%d: %d batches, bound %d, cofactor %d", n, batches, bound, cofactor)
            if product_of(factors) == n:
                break

        # no prime <= bound divides the cofactor, so if bound is past its
        # square root the cofactor is prime
        if bound > math.isqrt(cofactor):
            break

        if cancel_event is not None and cancel_event.is_set():
            logger.info("n=%d: cancelled after %d batches at bound %d", n, batches, bound)
            raise FactorizationCancelled(f"factorization of {n} cancelled")

    # At most one prime factor of n exceeds sqrt(n); it is n / t where t is
    # the product of all the others.
    t = product_of(factors)
    if t != n and n % t == 0:
        logger.info("n=%d: recovered large factor %d", n, n // t)
        factors.append(n // t)

    return factors


def factor_frequencies(factors) -> list[tuple[int, int]]:
    """Group a factor list into (prime, multiplicity) pairs in order of first appearance."""
    counts: dict[int, int] = {}
    for f in factors:
        counts[f] = counts.get(f, 0) + 1
    return list(counts.items())


def to_superscript(k: int) -> str:
    return str(k).translate(_SUPERSCRIPTS)


def format_factors(factors, superscript: bool = True) -> str:
    """
    Render factors as `p^e * q * ...`.

    Primes get thousands separators and the exponent is left out when the
    multiplicity is 1. With superscript=True exponents use Unicode
    superscript digits (2⁴⁵), otherwise a caret (2^45).
    """
    terms = []
    for p, k in factor_frequencies(factors):
        term = f"{p:,}"
        if k > 1:
            term += to_superscript(k) if superscript else f"^{k}"
        terms.append(term)
    return " * ".join(terms)


def factor_report(n: int, batch_size: int = DEFAULT_BATCH_SIZE, cancel_event=None,
                  superscript: bool = True) -> str:
    """
    Factorize n and describe the result for display.

    Returns:
        Either a message stating n is prime, or the formatted factors
        followed by the elapsed time

    Raises:
        InvalidInputError: n is below 2, where an empty factor list says
            nothing about primality
    """
    if n < 2:
        raise InvalidInputError(OUT_OF_RANGE_MESSAGE)
    start = time.perf_counter()
    factors = factorize(n, batch_size=batch_size, cancel_event=cancel_event)

    if len(factors) < 2:
        return f"{n:,} is a prime number -- try again"

    elapsed_ms = int((time.perf_counter() - start) * 1000)

    return (f"The prime factors of {n:,} are: \n\n"
            f"{format_factors(factors, superscript=superscript)}\n\n"
            f"Calculated in approx. {elapsed_ms:,} ms")


def parse_input(text: str) -> int:
    """
    Validate user text and convert it to an engine input.

    Raises:
        InvalidInputError: text is not all decimal digits, or its value is
            outside [2, N_LIMIT)
    """
    text = text.strip()
    if not _DIGITS.fullmatch(text):
        raise InvalidInputError(INVALID_ENTRY_MESSAGE)
    try:
        n = int(text)
    except ValueError:
        # digit strings longer than the interpreter's conversion limit
        raise InvalidInputError(OUT_OF_RANGE_MESSAGE) from None
    if n < 2 or n >= N_LIMIT:
        raise InvalidInputError(OUT_OF_RANGE_MESSAGE)
    return n


# Example usage
if __name__ == "__main__":
    n = 600851475143  # test number
    print(factor_report(n))
