# (C) 2024 Irreducible Inc.

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import ClassVar, Self, Sequence, TypeVar

from ..utils.utils import Bits, bits_to_int, factorize, int_to_bits
from . import arithmetic
from .bitstrings import format_bitstring, parse_bitstring

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="TowerFieldElem")


class WiedemannTowerField:
    """
    The polynomial modulus for step n of the tower is Xₙ² + Xₙ₋₁ ⋅ Xₙ + 1.

    Elements are tuples of 2^height bools; see the arithmetic module for the layout.
    """

    subfield: WiedemannTowerField | None
    generators = {  # class member
        1: 0x1,
        2: 0x2,
        4: 0xB,
        8: 0x2D,
        16: 0xE2DE,
        32: 0x03E21CEA,
        64: 0x070F870DCD9C1D88,
        128: 0x2E895399AF449ACE499596F6E5FCCAFA,
    }

    def __init__(self, height: int) -> None:
        if height < 0:
            raise ValueError("tower height must be non-negative")
        self.height = height
        self._degree = 1 << height
        hexlen = (self._degree + 3) // 4
        self.fmt = f"WiedemannTowerField({{:#0{hexlen + 2:d}x}})"
        if height == 0:
            self.subfield = None
        else:
            self.subfield = WiedemannTowerField(height - 1)

    @property
    def characteristic(self) -> int:
        return 2

    @property
    def dimension(self) -> int:
        return self._degree

    @property
    def degree(self) -> int:
        """Alias of dimension, the degree of the field as an extension of GF(2)."""
        return self.dimension

    @property
    def bytes_len(self) -> int:
        return (self.dimension + 7) // 8

    def zero(self) -> Bits:
        return arithmetic.zero(self.degree)

    def one(self) -> Bits:
        return arithmetic.one(self.degree)

    def random(self) -> Bits:
        return self.from_int(random.randrange(1 << self.degree))

    def from_int(self, val: int) -> Bits:
        if val < 0 or val >> self.degree != 0:
            raise ValueError(f"{val:#x} does not fit in {self.degree} bits")
        return int_to_bits(val, self.degree)

    def to_int(self, elem: Bits) -> int:
        return bits_to_int(elem)

    def add(self, left: Bits, right: Bits) -> Bits:
        return arithmetic.add(left, right)

    def subtract(self, left: Bits, right: Bits) -> Bits:
        return arithmetic.add(left, right)

    def negate(self, operand: Bits) -> Bits:
        return tuple(operand)

    def multiply(self, left: Bits, right: Bits) -> Bits:
        return arithmetic.multiply(left, right)

    def multiply_generator(self, operand: Bits) -> Bits:
        return arithmetic.rotate(operand)

    def square(self, operand: Bits) -> Bits:
        return arithmetic.square(operand)

    def pow(self, base: Bits, exponent: int) -> Bits:
        acc = self.one()
        val = base

        while exponent:
            if exponent % 2:
                acc = self.multiply(acc, val)
            val = self.square(val)
            exponent >>= 1

        return acc

    def inverse(self, operand: Bits) -> Bits:
        return arithmetic.invert(operand)

    def divide(self, left: Bits, right: Bits) -> Bits:
        return self.multiply(left, self.inverse(right))

    def format_str(self, elem: Bits) -> str:
        return format_bitstring(elem)

    def format_repr(self, elem: Bits) -> str:
        return self.fmt.format(self.to_int(elem))

    def to_bytes(self, elem: Bits) -> bytes:
        return self.to_int(elem).to_bytes(self.bytes_len, byteorder="little")

    def from_bytes(self, serialized: bytes) -> Bits:
        if len(serialized) != self.bytes_len:
            raise ValueError(f"serialized element must be {self.bytes_len} bytes")
        return self.from_int(int.from_bytes(serialized, byteorder="little"))

    def to_subfield_tuple(self, elem: Bits) -> tuple[Bits, Bits]:
        if self.subfield is None:
            raise ValueError("there is no subfield of the base field")
        m = self.subfield.degree
        return tuple(elem[:m]), tuple(elem[m:])

    def from_subfield_tuple(self, elem: tuple[Bits, Bits]) -> Bits:
        if self.subfield is None:
            raise ValueError("there is no subfield of the base field")
        low, high = elem
        return tuple(low) + tuple(high)

    def _is_valid(self, elem: Sequence[bool]) -> bool:
        # an element of a bigger field lies in this one iff its bits above our degree are zero
        return not any(elem[self.degree :])

    def is_generator(self, elem: Bits) -> bool:
        if arithmetic.is_zero(elem):
            return False
        order = 2**self.dimension - 1
        factors = set(factorize(order))
        return not any(self.pow(elem, order // factor) == self.one() for factor in factors)

    def random_multiplicative_generator(self) -> Bits:
        while True:
            result = self.random()
            if self.is_generator(result):
                return result

    def multiplicative_generator(self) -> Bits:
        """Returns a generator of the multiplicative group of units.

        This method is very fast, essentially a lookup of precomputed constants.

        :raises NotImplementedError: if the multiplicative generator for this field is not precomputed
        """
        if self.degree not in self.generators:
            logger.debug("no precomputed multiplicative generator for %d bits", self.degree)
            raise NotImplementedError
        return self.from_int(self.generators[self.degree])


@dataclass(frozen=True)
class TowerFieldElem:
    """An element of one level of the tower.

    This class cannot be instantiated directly. Subclass it per tower level and set the field class variable to a
    WiedemannTowerField instance; then instantiate it with a sequence of bools, or use from_int / from_bitstring.
    """

    value: Bits
    field: ClassVar[WiedemannTowerField]

    def __post_init__(self) -> None:
        value = tuple(bool(bit) for bit in self.value)
        if len(value) != self.field.degree:
            raise ValueError(f"expected {self.field.degree} bits, got {len(value)}")
        object.__setattr__(self, "value", value)

    def __add__(self, other: Self) -> Self:
        return self.__class__(self.field.add(self.value, other.value))

    def __sub__(self, other: Self) -> Self:
        return self.__class__(self.field.subtract(self.value, other.value))

    def __mul__(self, other: Self) -> Self:
        return self.__class__(self.field.multiply(self.value, other.value))

    def __truediv__(self, other: Self) -> Self:
        return self.__class__(self.field.divide(self.value, other.value))

    def __neg__(self) -> Self:
        return self.__class__(self.field.negate(self.value))

    def __pow__(self, exponent: int) -> Self:
        return self.__class__(self.field.pow(self.value, exponent))

    def inverse(self) -> Self:
        return self.__class__(self.field.inverse(self.value))

    def square(self) -> Self:
        return self.__class__(self.field.square(self.value))

    def rotate(self) -> Self:
        return self.__class__(self.field.multiply_generator(self.value))

    def is_zero(self) -> bool:
        return arithmetic.is_zero(self.value)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __int__(self) -> int:
        return self.field.to_int(self.value)

    def __str__(self) -> str:
        return self.field.format_str(self.value)

    def __repr__(self) -> str:
        return self.field.format_repr(self.value)

    def __bytes__(self) -> bytes:
        return self.field.to_bytes(self.value)

    def to_subfield_tuple(self, subfield_ty: type[F]) -> tuple[F, F]:
        low, high = self.field.to_subfield_tuple(self.value)
        return subfield_ty(low), subfield_ty(high)

    @classmethod
    def from_subfield_tuple(cls, a: tuple[TowerFieldElem, TowerFieldElem]) -> Self:
        low, high = a
        return cls(cls.field.from_subfield_tuple((low.value, high.value)))

    def downcast(self, subfield_ty: type[F]) -> F:
        if self.field.degree < subfield_ty.field.degree:
            raise ValueError("cannot downcast to a bigger field")
        if not subfield_ty.field._is_valid(self.value):
            raise ValueError("not a subfield element")
        return subfield_ty(self.value[: subfield_ty.field.degree])

    def upcast(self, extfield_ty: type[F]) -> F:
        if extfield_ty.field.degree < self.field.degree:
            raise ValueError("cannot upcast to a smaller field")
        return extfield_ty(self.value + (False,) * (extfield_ty.field.degree - self.field.degree))

    @classmethod
    def zero(cls) -> Self:
        return cls(cls.field.zero())

    @classmethod
    def one(cls) -> Self:
        return cls(cls.field.one())

    @classmethod
    def random(cls) -> Self:
        return cls(cls.field.random())

    @classmethod
    def from_int(cls, val: int) -> Self:
        return cls(cls.field.from_int(val))

    @classmethod
    def from_bytes(cls, serialized: bytes) -> Self:
        return cls(cls.field.from_bytes(serialized))

    @classmethod
    def from_bitstring(cls, text: str) -> Self:
        bits = parse_bitstring(text)
        if len(bits) != cls.field.degree:
            raise ValueError(f"expected {cls.field.degree} bits, got {len(bits)}")
        return cls(bits)
