"""Hand evaluation: best five of up to seven cards, and hand comparison.

Every 5-card subset of the supplied cards is scored and the strongest one is
kept. A score is a ``HandValue``: the hand category plus five rank values,
most significant first, so two hands are compared by category and then
lexicographically by kickers. Equal values mean a split pot.
"""

import itertools
from collections import Counter
from collections.abc import Sequence
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field

from holdem.cards import Card, Rank, find_duplicates
from holdem.errors import InsufficientCardsError, InvalidHandError

MIN_CARDS = 5
MAX_CARDS = 7
HAND_SIZE = 5

WHEEL_RANKS = (14, 5, 4, 3, 2)
WHEEL_KICKERS = (5, 4, 3, 2, 1)


class HandCategory(IntEnum):
    """Hand categories; a larger value always beats a smaller one."""

    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def label(self) -> str:
        return HAND_CATEGORY_NAMES[self]


HAND_CATEGORY_NAMES = {
    HandCategory.ROYAL_FLUSH: "Royal Flush",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.PAIR: "Pair",
    HandCategory.HIGH_CARD: "High Card",
}


class Ordering(Enum):
    """Result of comparing two hands."""

    GREATER = 1
    EQUAL = 0
    LESS = -1


class HandValue(BaseModel):
    """Comparable strength of a 5-card hand.

    ``category`` and ``kickers`` define the value; ``cards`` records which five
    cards produced it and is ignored by equality, hashing and ordering.
    """

    model_config = ConfigDict(frozen=True)

    category: HandCategory
    kickers: tuple[int, ...] = Field(description="Rank values, most significant first")
    cards: tuple[Card, ...] = Field(default=(), description="The best five cards")

    @property
    def key(self) -> tuple[int, tuple[int, ...]]:
        return (int(self.category), self.kickers)

    @property
    def name(self) -> str:
        return self.category.label

    @property
    def high_card(self) -> int:
        """Most significant kicker (5 for the wheel)."""
        return self.kickers[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandValue):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __lt__(self, other: "HandValue") -> bool:
        if not isinstance(other, HandValue):
            return NotImplemented
        return self.key < other.key

    def __le__(self, other: "HandValue") -> bool:
        if not isinstance(other, HandValue):
            return NotImplemented
        return self.key <= other.key

    def __gt__(self, other: "HandValue") -> bool:
        if not isinstance(other, HandValue):
            return NotImplemented
        return self.key > other.key

    def __ge__(self, other: "HandValue") -> bool:
        if not isinstance(other, HandValue):
            return NotImplemented
        return self.key >= other.key

    def __str__(self) -> str:
        shown = " ".join(str(card) for card in self.cards)
        return f"{self.name} ({shown})" if shown else self.name


def compare(a: HandValue, b: HandValue) -> Ordering:
    """Compare two hands by category, then kicker by kicker."""
    if a.key > b.key:
        return Ordering.GREATER
    if a.key < b.key:
        return Ordering.LESS
    return Ordering.EQUAL


def evaluate(cards: Sequence[Card]) -> HandValue:
    """Return the value of the best 5-card hand among 5 to 7 cards."""
    cards = list(cards)
    duplicates = find_duplicates(cards)
    if duplicates:
        shown = ", ".join(str(card) for card in duplicates)
        raise InvalidHandError(f"Duplicate cards in hand: {shown}")
    if len(cards) < MIN_CARDS:
        raise InsufficientCardsError(
            f"Need at least {MIN_CARDS} cards to evaluate, got {len(cards)}"
        )
    if len(cards) > MAX_CARDS:
        raise InvalidHandError(f"Cannot evaluate more than {MAX_CARDS} cards, got {len(cards)}")

    # Canonical order makes the chosen five independent of input order.
    ordered = sorted(cards, key=lambda card: card.sort_key)
    combos = itertools.combinations(ordered, HAND_SIZE)
    best_combo = next(combos)
    best_key = _score_five(best_combo)
    for combo in combos:
        key = _score_five(combo)
        if key > best_key:
            best_key, best_combo = key, combo
    category, kickers = best_key
    return HandValue(category=category, kickers=kickers, cards=best_combo)


def evaluate_five(cards: Sequence[Card]) -> HandValue:
    """Score exactly five distinct cards."""
    if len(cards) != HAND_SIZE:
        raise InvalidHandError(f"Expected {HAND_SIZE} cards, got {len(cards)}")
    category, kickers = _score_five(cards)
    return HandValue(category=category, kickers=kickers, cards=tuple(cards))


def _score_five(cards: Sequence[Card]) -> tuple[HandCategory, tuple[int, ...]]:
    counts = Counter(int(card.rank) for card in cards)
    # Ranks grouped by multiplicity, then by rank: [trips..., pair..., singles...]
    grouped = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    kickers = tuple(rank for rank, count in grouped for _ in range(count))
    shape = [count for _, count in grouped]

    is_flush = len({card.suit for card in cards}) == 1
    straight_kickers = _straight_kickers(counts)

    if straight_kickers and is_flush:
        if straight_kickers[0] == Rank.ACE:
            category = HandCategory.ROYAL_FLUSH
        else:
            category = HandCategory.STRAIGHT_FLUSH
        kickers = straight_kickers
    elif shape[0] == 4:
        category = HandCategory.FOUR_OF_A_KIND
    elif shape == [3, 2]:
        category = HandCategory.FULL_HOUSE
    elif is_flush:
        category = HandCategory.FLUSH
    elif straight_kickers:
        category = HandCategory.STRAIGHT
        kickers = straight_kickers
    elif shape[0] == 3:
        category = HandCategory.THREE_OF_A_KIND
    elif shape[:2] == [2, 2]:
        category = HandCategory.TWO_PAIR
    elif shape[0] == 2:
        category = HandCategory.PAIR
    else:
        category = HandCategory.HIGH_CARD

    return category, kickers


def _straight_kickers(counts: Counter) -> tuple[int, ...] | None:
    """Kickers of a straight, or None. The wheel plays 5-high."""
    if len(counts) != HAND_SIZE:
        return None
    ranks = tuple(sorted(counts, reverse=True))
    if ranks == WHEEL_RANKS:
        return WHEEL_KICKERS
    if ranks[0] - ranks[-1] == HAND_SIZE - 1:
        return ranks
    return None


def evaluate_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandValue:
    """
    Evaluate a player's hand at any street from the flop on.

    Args:
        hole_cards: Player's 2 hole cards
        community_cards: 3-5 community cards on the board

    Returns:
        HandValue of the best five cards available
    """
    if len(hole_cards) != 2:
        raise InvalidHandError(f"Expected 2 hole cards, got {len(hole_cards)}")

    if len(community_cards) < 3:
        raise InsufficientCardsError(
            f"Need at least 3 community cards, got {len(community_cards)}"
        )

    return evaluate([*hole_cards, *community_cards])


def get_hand_name(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> str:
    """Get human-readable hand name."""
    return evaluate_hand(hole_cards, community_cards).name
