# (C) 2024 Irreducible Inc.

from hypothesis import strategies as st

from wiedemann_tower.utils.utils import Bits, int_to_bits


def random_integers_strategy(
    min_value: int,
    max_value: int,
) -> st.SearchStrategy[int]:
    return st.builds(lambda rng: rng.randint(min_value, max_value), st.randoms(use_true_random=True))


def bits_strategy(n_bits: int, nonzero: bool = False) -> st.SearchStrategy[Bits]:
    """Tower elements of the given bit-width, drawn through their packed integer values."""
    return st.integers(1 if nonzero else 0, 2**n_bits - 1).map(lambda x: int_to_bits(x, n_bits))
