"""Core Key Generation Utility, mainly focusing on the bit-exact generation of random primes.

Generates RSA key pairs whose modulus has exactly the requested amount of bits. Multiplying two `k` bit primes gives
either `2k - 1` or `2k` bits, so rather than leaving that to chance both primes are drawn from the part of their
range whose products always land on the requested length.

All randomness is drawn from a `RandBits` callable, `secrets.randbits` unless another is supplied.

Typical usage example:

    n = random_key(256)
    p = generate_prime(512)
    (n, e), (n, d) = generate_key_pair(2048)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import secrets
from typing import Callable

logger = logging.getLogger(__name__)

RandBits = Callable[[int], int]

E_VAL: int = 65537
MR_ROUNDS: int = 40
MIN_KEY_BITS: int = 8
MAX_KEY_BITS: int = 8192

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0


class EntropyError(RuntimeError):
    """Raised when the random bit source cannot deliver."""


def random_bits(bits: int, source: RandBits | None = None) -> int:
    """Draws a uniformly random integer of at most `bits` bits.

    Args:
        bits: Amount of random bits. Must be >= 0.
        source: Random bit supplier. Defaults to `secrets.randbits`.

    Returns:
        An integer in range [0, 2**bits).

    Raises:
        EntropyError: If the system entropy source is unavailable.
    """
    if bits < 0:
        raise ValueError("bits must be >= 0")
    if source is None:
        source = secrets.randbits
    try:
        return source(bits)
    except OSError as exc:
        raise EntropyError("System entropy source unavailable.") from exc


def random_number(bits: int, source: RandBits | None = None) -> int:
    """Random integer of exactly `bits` bits, by forcing the leading bit."""
    if bits < 1:
        raise ValueError("bits must be >= 1")
    return random_bits(bits, source) | (1 << (bits - 1))


def random_key(bits: int, source: RandBits | None = None) -> int:
    """Random integer of exactly `bits` bits, resampled until the length is hit.

    Args:
        bits: Target bit length. Must be >= 1.
        source: Random bit supplier. Defaults to `secrets.randbits`.

    Returns:
        An integer whose `bit_length()` is `bits`.
    """
    if bits < 1:
        raise ValueError("bits must be >= 1")
    num = random_bits(bits, source)
    while num.bit_length() != bits:
        num = random_bits(bits, source)
    return num


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes on odd numbers only, sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = 10000) -> list[int]:
    """Get the small primes, sieving them on first use.

    The `_SMALL_PRIMES` list acts as cache, it is rebuilt only when a larger range than cached is requested.

    Args:
        n: The number up to which primes are needed. Defaults to 10000. Must be >= 0.

    Returns:
        List of primes in ascending order, covering at least all primes up to `n`.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Check the provided `no` against the known small primes.

    Fast pre-check before Miller-Rabin, running modulo division on the small primes up to `n`.

    Args:
         no: The number to check. Must be a non-negative integer.
         n: The number up to which to use small primes. Defaults to 10000.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, iters: int) -> bool:
    """Perform the Miller-Rabin primality test.

    Each round that passes cuts the chance of a composite slipping through by a factor of at least four.

    Args:
        w: Odd integer to be tested.
        iters: Number of Miller-Rabin rounds.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    if w <= 3:
        return w in (2, 3)
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(iters):
        b = secrets.randbelow(w - 3) + 2
        z = pow(b, m, w)
        if z in (1, tw):
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == tw:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def check_prime(candidate: int, iters: int = MR_ROUNDS) -> bool:
    """Probabilistic primality test: trial division by small primes followed by Miller-Rabin.

    Args:
        candidate: The number to test.
        iters: Number of Miller-Rabin rounds. Defaults to `MR_ROUNDS`, a false positive rate of at most 4**-40.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    if not _trial_division(candidate):
        return False
    return _miller_rabin(candidate, iters)


def _sample(size: int, accept: Callable[[int], bool], source: RandBits | None) -> int:
    """Rejection sampling loop shared by the prime generators."""
    rejected = 0
    while True:
        candidate = random_bits(size, source)
        if accept(candidate):
            logger.debug("Accepted %d bit candidate after %d rejections.", size, rejected)
            return candidate
        rejected += 1


def generate_prime(size: int, source: RandBits | None = None) -> int:
    """Generates a probable prime of exactly `size` bits.

    Args:
        size: Bit length of the prime. Must be >= 2.
        source: Random bit supplier. Defaults to `secrets.randbits`.

    Returns:
        A probable prime.
    """
    if size < 2:
        raise ValueError("No prime has fewer than 2 bits.")
    return _sample(size, lambda c: c.bit_length() == size and check_prime(c), source)


def _coprime_to_exponent(candidate: int) -> bool:
    return math.gcd(candidate - 1, E_VAL) == 1


def _generate_upper_prime(size: int, source: RandBits | None = None) -> int:
    """Prime of `size` bits in the upper half of the range, [1.5 * 2**(size-1), 2**size).

    The product of two such primes always has exactly `2 * size` bits.
    """
    return _sample(
        size,
        lambda c: c.bit_length() == size and (c // 3).bit_length() == size - 1 and _coprime_to_exponent(c) and
        check_prime(c),
        source,
    )


def _generate_lower_prime(size: int, source: RandBits | None = None) -> int:
    """Prime of `size` bits in the bottom third of the range, [2**(size-1), 2**(size+1) / 3).

    The product of two such primes always has exactly `2 * size - 1` bits.
    """
    return _sample(
        size,
        lambda c: c.bit_length() == size and (c * 3).bit_length() == size + 1 and _coprime_to_exponent(c) and
        check_prime(c),
        source,
    )


def generate_primes(size: int, source: RandBits | None = None) -> tuple[int, int]:
    """Generates a pair of primes whose product has exactly `size` bits.

    Even sizes use two `size / 2` bit primes from the top of their range, odd sizes two `(size + 1) / 2` bit primes
    from the bottom of theirs. The primes are drawn independently.

    Args:
        size: The modulus size in bits.
        source: Random bit supplier. Defaults to `secrets.randbits`.

    Returns:
        The prime pair.

    Raises:
        ValueError: If `size` is outside [MIN_KEY_BITS, MAX_KEY_BITS].
    """
    if not MIN_KEY_BITS <= size <= MAX_KEY_BITS:
        raise ValueError(f"Key size must be in range [{MIN_KEY_BITS}, {MAX_KEY_BITS}].")
    if size % 2 == 0:
        p = _generate_upper_prime(size // 2, source)
        q = _generate_upper_prime(size // 2, source)
    else:
        p = _generate_lower_prime((size + 1) // 2, source)
        q = _generate_lower_prime((size + 1) // 2, source)
    return p, q


def generate_key_pair(size: int, source: RandBits | None = None) -> tuple[tuple[int, int], tuple[int, int]]:
    """Generates an RSA key pair with a modulus of exactly `size` bits.

    The private exponent is the inverse of `E_VAL` modulo Carmichael's lambda, lcm(p - 1, q - 1).

    Args:
        size: The modulus size in bits.
        source: Random bit supplier. Defaults to `secrets.randbits`.

    Returns:
        A tuple of (public, private) sub-tuples (modulus, exponent).

    Raises:
        RuntimeError: If `E_VAL` has no inverse modulo lambda.
    """
    p, q = generate_primes(size, source)
    n = p * q
    lam = math.lcm(p - 1, q - 1)
    try:
        d = pow(E_VAL, -1, lam)
    except ValueError as exc:
        raise RuntimeError(f"Public exponent {E_VAL} is not invertible modulo lcm(p-1, q-1).") from exc
    logger.debug("Generated %d bit modulus.", n.bit_length())
    return (n, E_VAL), (n, d)
