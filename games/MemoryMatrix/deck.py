"""
MemoryMatrix - Cards and deck construction.

A deck holds every symbol of the level exactly twice, shuffled with an
in-place Fisher-Yates pass.
"""
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, MutableSequence, Sequence, TypeVar

T = TypeVar('T')


class CardState(str, Enum):
    """Card lifecycle: HIDDEN -> FLIPPED -> HIDDEN or MATCHED (terminal)."""
    HIDDEN = "hidden"
    FLIPPED = "flipped"
    MATCHED = "matched"


@dataclass
class Card:
    """One card on the board."""
    id: int
    symbol: str
    state: CardState = CardState.HIDDEN


def shuffle(items: MutableSequence[T], rng: random.Random) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place; returns items for chaining.

    For i from the last index down to 1, swap item i with a uniformly
    chosen index in [0, i].
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def build_deck(symbols: Sequence[str], pairs: int, rng: random.Random) -> List[Card]:
    """Create a shuffled board of 2 * pairs hidden cards.

    Args:
        symbols: Symbol set; the first `pairs` entries are used
        pairs: Number of pairs
        rng: Random source for the shuffle

    Returns:
        Cards with ids 0..2*pairs-1 in board order
    """
    chosen = list(symbols[:pairs])
    if len(set(chosen)) != pairs:
        raise ValueError(f"Need {pairs} distinct symbols, got {chosen}")

    values: List[str] = []
    for symbol in chosen:
        values.extend((symbol, symbol))
    shuffle(values, rng)

    return [Card(id=index, symbol=symbol) for index, symbol in enumerate(values)]
