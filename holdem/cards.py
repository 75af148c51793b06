"""Card model: ranks, suits, cards and the 52-card deck."""

import random
import re
from collections.abc import Iterable, Iterator
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from holdem.errors import DeckExhaustedError, InvalidHandError


class Rank(IntEnum):
    """Card rank, Ace high."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def symbol(self) -> str:
        """Single-character display symbol (2-9, T, J, Q, K, A)."""
        return RANK_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, text: str) -> "Rank":
        """Parse a rank symbol; accepts '10' as well as 'T'."""
        key = text.strip().upper()
        if key == "10":
            key = "T"
        for rank, symbol in RANK_SYMBOLS.items():
            if symbol == key:
                return rank
        raise InvalidHandError(f"Invalid rank: {text!r}")


RANK_SYMBOLS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}


class Suit(Enum):
    """Card suit."""

    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"

    @property
    def glyph(self) -> str:
        return SUIT_GLYPHS[self]

    @property
    def color(self) -> str:
        """Display color used by the table renderer."""
        return "red" if self in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    @classmethod
    def from_symbol(cls, text: str) -> "Suit":
        """Parse a suit letter (any case) or its glyph."""
        key = text.strip()
        for suit, glyph in SUIT_GLYPHS.items():
            if key.lower() == suit.value or key == glyph:
                return suit
        raise InvalidHandError(f"Invalid suit: {text!r}")


SUIT_GLYPHS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

_SUIT_INDEX = {suit: idx for idx, suit in enumerate(Suit)}


class Card(BaseModel):
    """Represents a playing card.

    Cards are immutable and hashable. Equality uses both rank and suit, while
    the ordering operators compare ranks only.
    """

    model_config = ConfigDict(frozen=True)

    rank: Rank = Field(description="Card rank: 2-14 (T=10, J=11, Q=12, K=13, A=14)")
    suit: Suit = Field(description="Card suit: h, d, c, s")

    @field_validator("rank", mode="before")
    @classmethod
    def coerce_rank(cls, value: object) -> object:
        if isinstance(value, str):
            return Rank.from_symbol(value)
        return value

    @field_validator("suit", mode="before")
    @classmethod
    def coerce_suit(cls, value: object) -> object:
        if isinstance(value, str):
            return Suit.from_symbol(value)
        return value

    def __str__(self) -> str:
        """Return human-readable card string."""
        return f"{self.rank.symbol}{self.suit.glyph}"

    def __repr__(self) -> str:
        return f"Card(rank='{self.rank.symbol}', suit='{self.suit.value}')"

    def __lt__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank >= other.rank

    @property
    def code(self) -> str:
        """Two-character code, e.g. 'As' for Ace of spades."""
        return f"{self.rank.symbol}{self.suit.value}"

    @property
    def sort_key(self) -> tuple[int, int]:
        """Canonical ordering: rank descending, then suit."""
        return (-int(self.rank), _SUIT_INDEX[self.suit])

    def to_treys_str(self) -> str:
        """Convert to treys library format (e.g., 'As' for Ace of spades)."""
        return self.code

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Create a Card from text such as 'As', 'Td', '10h' or 'Q♠'."""
        text = text.strip()
        if len(text) < 2:
            raise InvalidHandError(f"Invalid card: {text!r}")
        return cls(rank=Rank.from_symbol(text[:-1]), suit=Suit.from_symbol(text[-1]))


def parse_cards(cards: str | Iterable[str]) -> list[Card]:
    """Parse 'As Kd Qh' (space or comma separated) or a list of card strings."""
    if isinstance(cards, str):
        cards = [token for token in re.split(r"[\s,]+", cards) if token]
    return [Card.parse(token) for token in cards]


def card_display(cards: Iterable[Card]) -> str:
    """Render cards for display, e.g. 'A♠ K♦'."""
    return " ".join(str(card) for card in cards)


def find_duplicates(cards: Iterable[Card]) -> list[Card]:
    """Return every card that appears more than once, in first-seen order."""
    seen: set[Card] = set()
    duplicates: list[Card] = []
    for card in cards:
        if card in seen and card not in duplicates:
            duplicates.append(card)
        seen.add(card)
    return duplicates


def full_deck() -> list[Card]:
    """All 52 cards in a fixed order."""
    return [Card(rank=r, suit=s) for r in Rank for s in Suit]


class Deck:
    """Standard 52-card deck.

    A fresh deck is ordered. Shuffling uses the deck's own random generator,
    so a seeded deck deals the same sequence every time.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self.cards: list[Card] = []
        self.reset()

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def reset(self) -> None:
        """Restore all 52 cards in their fixed order."""
        self.cards = full_deck()

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place."""
        self.rng.shuffle(self.cards)

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards from the top of the deck."""
        if n < 0:
            raise ValueError(f"Cannot deal a negative number of cards: {n}")
        if n > len(self.cards):
            raise DeckExhaustedError(
                f"Not enough cards in deck. Requested {n}, have {len(self.cards)}"
            )
        dealt = self.cards[:n]
        self.cards = self.cards[n:]
        return dealt

    def remove(self, cards: Iterable[Card]) -> None:
        """Take known cards (hole cards, board) out of the deck."""
        for card in cards:
            try:
                self.cards.remove(card)
            except ValueError:
                raise InvalidHandError(f"Card {card} is not in the deck") from None
