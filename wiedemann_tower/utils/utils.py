# (C) 2024 Irreducible Inc.

import math
from typing import Sequence

Bits = tuple[bool, ...]


def is_power_of_two(x: int) -> bool:
    return x > 0 and x & (x - 1) == 0


def int_to_bits(x: int, n_bits: int) -> Bits:
    """Unpacks the n_bits least-significant bits of x, least-significant first."""
    return tuple((x >> i) & 1 == 1 for i in range(n_bits))


def bits_to_int(bits: Sequence[bool]) -> int:
    result = 0
    for i, bit in enumerate(bits):
        if bit:
            result |= 1 << i
    return result


def trial_divide(n):  # naivest possible factoring alg...
    # returns the smallest divisor of n which is > 1.
    for i in range(2, math.isqrt(n) + 1):
        if n % i == 0:
            return i
    return n


def factorize(n):
    factors = []
    while n > 1:
        factor = trial_divide(n)
        factors.append(factor)
        n //= factor
    return factors
