from holdem.cards import Card, Deck, Rank, Suit, card_display, full_deck, parse_cards
from holdem.equity import EquityResult, PlayerEquity, estimate_equity
from holdem.errors import (
    DeckExhaustedError,
    HoldemError,
    InsufficientCardsError,
    InvalidHandError,
    NoActivePlayersError,
)
from holdem.hand_eval import (
    HandCategory,
    HandValue,
    Ordering,
    compare,
    evaluate,
    evaluate_five,
    evaluate_hand,
    get_hand_name,
)
from holdem.showdown import PlayerHandContext, ShowdownResult, resolve_winners

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "card_display",
    "full_deck",
    "parse_cards",
    "HandCategory",
    "HandValue",
    "Ordering",
    "compare",
    "evaluate",
    "evaluate_five",
    "evaluate_hand",
    "get_hand_name",
    "PlayerHandContext",
    "ShowdownResult",
    "resolve_winners",
    "EquityResult",
    "PlayerEquity",
    "estimate_equity",
    "HoldemError",
    "InvalidHandError",
    "InsufficientCardsError",
    "NoActivePlayersError",
    "DeckExhaustedError",
]
