"""Protocol for sources of randomness used by the claim scorer."""

from typing import Protocol


class RandomSource(Protocol):
    """Protocol defining the randomness the scorer needs.

    ``random.Random`` satisfies it, so tests can pass a seeded instance.
    """

    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        ...

    def randint(self, a: int, b: int) -> int:
        """Return an integer in [a, b], both ends included."""
        ...
