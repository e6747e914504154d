# (C) 2024 Irreducible Inc.

from typing import Generic, TypeVar, cast

import numpy as np
from galois import GF, GF2, FieldArray

from .tower import TowerFieldElem, WiedemannTowerField

F = TypeVar("F", bound=TowerFieldElem)


class Elem8b(TowerFieldElem):
    field = WiedemannTowerField(3)


GF2_8 = GF(2**8, irreducible_poly="x^8 + x^4 + x^3 + x + 1")


def root_to_matrix(root: TowerFieldElem) -> FieldArray:
    """The GF(2) matrix whose i-th column holds the tower bits of rootⁱ."""
    n_bits = root.field.degree
    accum = type(root).one()
    entries = []
    for _ in range(n_bits):
        entries.append([int(bit) for bit in accum.value])
        accum *= root
    return cast(FieldArray, np.transpose(GF2(entries)))


class MonomialBasisIsomorphism(Generic[F]):
    """Change of basis between a tower level and a galois field in the monomial basis.

    The tower value of `root` must be a root of the galois field's irreducible polynomial. galois orders vectors
    most-significant coefficient first while tower elements are least-significant first, hence the flips.
    """

    def __init__(self, elem_ty: type[F], gf: type[FieldArray], root: int) -> None:
        if elem_ty.field.degree != gf.degree:
            raise ValueError("the tower level and the galois field must have the same degree")
        self.elem_ty = elem_ty
        self.gf = gf
        self.monomial_to_tower = np.flip(root_to_matrix(elem_ty.from_int(root)), axis=(0, 1))
        self.tower_to_monomial = np.linalg.inv(self.monomial_to_tower)

    def to_monomial(self, elem: F) -> FieldArray:
        v = GF2([int(bit) for bit in reversed(elem.value)])
        return self.gf.Vector(self.tower_to_monomial @ v)

    def from_monomial(self, value: FieldArray) -> F:
        v = self.monomial_to_tower @ value.vector()
        return self.elem_ty(tuple(bool(bit) for bit in v[::-1]))


GF2_8_MONOMIAL_TO_TOWER_ROOT = 0x3C  # hardcode: root of monomial in tower
GF2_8_TOWER_ISOMORPHISM = MonomialBasisIsomorphism(Elem8b, GF2_8, GF2_8_MONOMIAL_TO_TOWER_ROOT)
