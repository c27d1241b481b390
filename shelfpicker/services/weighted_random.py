"""
Weighted random selection.

Picks from a pre-sorted list with exponentially decaying weights, so the
top of the list is favored while every entry keeps a non-zero chance:

    index 0  -> 1.0
    index 5  -> ~0.44
    index 10 -> ~0.20
    index 20 -> ~0.04
"""

import random
from collections.abc import Sequence
from typing import TypeVar

DECAY_FACTOR = 0.85

T = TypeVar("T")


def pick_weighted_random_game(games: Sequence[T], rng: random.Random | None = None) -> T:
    """
    Pick one entry, weighting position i by DECAY_FACTOR ** i.

    Args:
        games: Candidates, already sorted by the criterion of interest
        rng: Random source. Defaults to the module-level generator.

    Returns:
        The selected entry. A single candidate is returned without drawing.

    Raises:
        ValueError: If games is empty
    """
    if not games:
        raise ValueError("Cannot pick from empty game list")

    if len(games) == 1:
        return games[0]

    weights = [DECAY_FACTOR**index for index in range(len(games))]
    draw = (rng or random).random() * sum(weights)

    cumulative = 0.0
    for game, weight in zip(games, weights, strict=True):
        cumulative += weight
        if draw <= cumulative:
            return game

    # Rounding left the running sum just below the draw
    return games[0]
