"""Showdown resolution: who wins among the active players."""

import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from holdem.cards import Card, card_display, find_duplicates
from holdem.errors import InsufficientCardsError, InvalidHandError, NoActivePlayersError
from holdem.hand_eval import HandValue, Ordering, compare, evaluate

logger = logging.getLogger(__name__)

BOARD_SIZE = 5


class PlayerHandContext(BaseModel):
    """A player's cards at showdown."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    hole_cards: tuple[Card, Card]
    active: bool = True


class ShowdownResult(BaseModel):
    """Result of a hand that went to showdown."""

    model_config = ConfigDict(frozen=True)

    winners: frozenset[str]  # player_ids; more than one on a split pot
    winning_value: HandValue
    hands: dict[str, HandValue] = Field(default_factory=dict)  # every active player

    @property
    def is_split(self) -> bool:
        return len(self.winners) > 1


def resolve_winners(
    players: Sequence[PlayerHandContext], community: Sequence[Card]
) -> ShowdownResult:
    """
    Find the winner(s) of a showdown.

    Args:
        players: Every seated player; inactive (folded) players are skipped
        community: Exactly 5 community cards

    Returns:
        ShowdownResult with all players holding the best hand
    """
    if len(community) < BOARD_SIZE:
        raise InsufficientCardsError(
            f"Showdown needs {BOARD_SIZE} community cards, got {len(community)}"
        )
    if len(community) > BOARD_SIZE:
        raise InvalidHandError(
            f"Showdown needs {BOARD_SIZE} community cards, got {len(community)}"
        )

    active_players = [p for p in players if p.active]
    if not active_players:
        raise NoActivePlayersError("No active players at showdown")

    player_ids = [p.player_id for p in active_players]
    if len(set(player_ids)) != len(player_ids):
        raise InvalidHandError(f"Duplicate player ids at showdown: {player_ids}")

    dealt = [card for p in active_players for card in p.hole_cards] + list(community)
    duplicates = find_duplicates(dealt)
    if duplicates:
        raise InvalidHandError(f"Cards dealt more than once: {card_display(duplicates)}")

    hands: dict[str, HandValue] = {}
    for player in active_players:
        hands[player.player_id] = evaluate([*player.hole_cards, *community])

    best = hands[active_players[0].player_id]
    for value in hands.values():
        if compare(value, best) is Ordering.GREATER:
            best = value
    winners = frozenset(
        pid for pid, value in hands.items() if compare(value, best) is Ordering.EQUAL
    )

    logger.debug(
        f"Showdown on {card_display(community)}: {sorted(winners)} win with {best}"
    )
    return ShowdownResult(winners=winners, winning_value=best, hands=hands)
