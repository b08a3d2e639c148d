import random
from typing import Optional


def roll(low: int = 1, high: int = 3, rng: Optional[random.Random] = None) -> int:
    """Uniform integer in [low, high]; unrelated to any deck."""
    if low > high:
        raise ValueError(f"Empty roll range: {low}..{high}")
    return (rng or random).randint(low, high)
