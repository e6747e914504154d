# (C) 2024 Irreducible Inc.

"""Bit-string literals and operand shaping for callers of the tower arithmetic.

A literal such as ``0110`` lists the bits of an element from index 0 onwards, so ``1000`` is the identity of GF(2⁴)
and ``01`` is the generator X₀ of GF(2²). The arithmetic functions assume operands of one common power-of-two
length; pad_operands establishes that for operands read from user input.
"""

import logging
from typing import Sequence

from ..utils.utils import Bits, is_power_of_two

logger = logging.getLogger(__name__)


class BitstringError(ValueError):
    pass


class InvalidLengthError(ValueError):
    pass


def parse_bitstring(text: str) -> Bits:
    literal = text.strip()
    if not literal:
        raise BitstringError("expected a bitstring")
    for pos, char in enumerate(literal):
        if char not in "01":
            raise BitstringError(f"unexpected character {char!r} at position {pos + 1}")
    return tuple(char == "1" for char in literal)


def format_bitstring(bits: Sequence[bool]) -> str:
    return "".join("1" if bit else "0" for bit in bits)


def pad_to_length(bits: Sequence[bool], n_bits: int) -> Bits:
    if len(bits) > n_bits:
        raise ValueError(f"cannot pad {len(bits)} bits down to {n_bits}")
    return tuple(bits) + (False,) * (n_bits - len(bits))


def pad_operands(lhs: Sequence[bool], rhs: Sequence[bool]) -> tuple[Bits, Bits]:
    """Checks both operands have power-of-two lengths and pads the shorter with trailing zeros.

    Padding with trailing zeros is the embedding of a subfield element into the larger field.

    :raises InvalidLengthError: if either length is not a power of two
    """
    if not is_power_of_two(len(lhs)):
        raise InvalidLengthError(f"bitstrings must be of length 2^i, but LHS has length {len(lhs)}")
    if not is_power_of_two(len(rhs)):
        raise InvalidLengthError(f"bitstrings must be of length 2^i, but RHS has length {len(rhs)}")
    target = max(len(lhs), len(rhs))
    if len(lhs) != len(rhs):
        logger.debug("padding operands of lengths %d and %d to %d bits", len(lhs), len(rhs), target)
    return pad_to_length(lhs, target), pad_to_length(rhs, target)
