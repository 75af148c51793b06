"""Exceptions raised by the hand evaluation engine."""


class HoldemError(ValueError):
    """Base class for all engine errors (invalid input from the caller)."""


class InvalidHandError(HoldemError):
    """Duplicate card, malformed card text, or wrong card count."""


class InsufficientCardsError(HoldemError):
    """Fewer cards than the operation needs."""


class NoActivePlayersError(HoldemError):
    """A showdown was requested without any active player."""


class DeckExhaustedError(HoldemError):
    """More cards were requested than remain in the deck."""
