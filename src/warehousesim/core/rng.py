import random
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class ChoiceSource(Protocol):
    """Anything that can pick one element uniformly, e.g. random.Random."""

    def choice(self, seq: Sequence[T]) -> T: ...


def get_seeded_rng(seed: Optional[int]) -> random.Random:
    """Returns a new random.Random instance seeded with the given integer (or OS entropy for None)."""
    return random.Random(seed)
