# (C) 2024 Irreducible Inc.

"""Bit-level arithmetic in the Wiedemann tower GF(2) ⊂ GF(2²) ⊂ GF(2⁴) ⊂ ⋯ ⊂ GF(2^(2^k)).

An element of the n-bit level is a tuple of n bools. Index 0 is the coefficient of 1. For n = 2m, the first m bits
are the low half a₀ and the last m bits the high half a₁, and the element is a₀ + a₁ ⋅ Xₖ₋₁. The polynomial modulus
for step k of the tower is Xₖ² + Xₖ₋₁ ⋅ Xₖ + 1, where X₋₁ is taken to be 1.

Every operation recurses on the halves until it reaches single bits, i.e. elements of GF(2).
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..utils.utils import Bits

logger = logging.getLogger(__name__)


class InvertingZeroError(ValueError):
    """Raised when asked for the multiplicative inverse of the zero element."""


def zero(n_bits: int) -> Bits:
    return (False,) * n_bits


def one(n_bits: int) -> Bits:
    """The multiplicative identity, [1, 0, ..., 0], of the n_bits-bit level."""
    return (True,) + (False,) * (n_bits - 1)


def is_zero(operand: Sequence[bool]) -> bool:
    return not any(operand)


def _split(operand: Sequence[bool]) -> tuple[Bits, Bits]:
    n = len(operand)
    assert n >= 2 and n % 2 == 0, f"bit length {n} is not a power of two"
    half_n = n // 2
    return tuple(operand[:half_n]), tuple(operand[half_n:])


def add(left: Sequence[bool], right: Sequence[bool]) -> Bits:
    """Field addition, which is bitwise XOR."""
    assert len(left) == len(right), f"cannot add elements of length {len(left)} and {len(right)}"
    return tuple(x != y for x, y in zip(left, right))


def rotate(operand: Sequence[bool]) -> Bits:
    """Multiplies by the generator Xₖ₋₁ adjoined at the top level of the operand's field.

    Xₖ₋₁ ⋅ (a₀ + a₁Xₖ₋₁) = a₁ + (a₀ + Xₖ₋₂ ⋅ a₁)Xₖ₋₁, using Xₖ₋₁² = Xₖ₋₂Xₖ₋₁ + 1.
    """
    if len(operand) == 1:  # base case: X₋₁ = 1
        return tuple(operand)
    a0, a1 = _split(operand)
    return a1 + add(a0, rotate(a1))


def multiply(left: Sequence[bool], right: Sequence[bool]) -> Bits:
    # (a₀ + a₁X)(b₀ + b₁X) = a₀b₀ + a₁b₁ + (a₀b₁ + a₁b₀ + X' ⋅ a₁b₁)X
    # four sub-multiplications; see karatsuba_multiply for the three-multiplication variant
    assert len(left) == len(right), f"cannot multiply elements of length {len(left)} and {len(right)}"
    if len(left) == 1:  # base case
        return (left[0] and right[0],)  # single-bit AND gate
    a0, a1 = _split(left)
    b0, b1 = _split(right)
    z00 = multiply(a0, b0)
    z01 = multiply(a0, b1)
    z10 = multiply(a1, b0)
    z11 = multiply(a1, b1)
    return add(z00, z11) + add(add(z01, z10), rotate(z11))


def karatsuba_multiply(left: Sequence[bool], right: Sequence[bool]) -> Bits:
    # recursive tower mult; uses 2×2 Karatsuba at each step
    # https://en.wikipedia.org/wiki/Karatsuba_algorithm
    assert len(left) == len(right), f"cannot multiply elements of length {len(left)} and {len(right)}"
    if len(left) == 1:
        return (left[0] and right[0],)
    a0, a1 = _split(left)
    b0, b1 = _split(right)
    z0 = karatsuba_multiply(a0, b0)
    z2 = karatsuba_multiply(a1, b1)
    z1 = add(add(karatsuba_multiply(add(a0, a1), add(b0, b1)), z0), z2)
    return add(z0, z2) + add(z1, rotate(z2))


def square(operand: Sequence[bool]) -> Bits:
    # the Frobenius map is additive, so the cross terms a₀a₁ cancel
    if len(operand) == 1:
        return tuple(operand)
    a0, a1 = _split(operand)
    z0 = square(a0)
    z2 = square(a1)
    return add(z0, z2) + rotate(z2)


def invert(operand: Sequence[bool]) -> Bits:
    """Returns the multiplicative inverse of a non-zero element.

    Fan and Paar. On Efficient Inversion in Tower Fields of Characteristic Two (1997).

    :raises InvertingZeroError: if the operand is zero
    """
    if is_zero(operand):
        logger.debug("refusing to invert the zero element of GF(2^%d)", len(operand))
        raise InvertingZeroError("zero has no multiplicative inverse")
    return _invert(operand)


def _invert(operand: Sequence[bool]) -> Bits:
    if len(operand) == 1:  # 1 is the only unit of GF(2)
        return tuple(operand)
    a0, a1 = _split(operand)
    intermediate = add(a0, rotate(a1))
    # the norm of the operand down to the subfield; non-zero whenever the operand is
    delta = add(multiply(a0, intermediate), multiply(a1, a1))
    delta_inv = _invert(delta)
    inv0 = multiply(delta_inv, intermediate)
    inv1 = multiply(delta_inv, a1)
    return inv0 + inv1
