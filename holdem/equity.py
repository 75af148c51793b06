"""Equity estimation by running out the board.

Each run-out is an independent showdown, so run-outs are split into batches and
evaluated on a thread pool. Small run-out spaces (turn and river) are enumerated
exactly; larger ones are sampled with a seeded generator per batch, which keeps
results reproducible no matter how the batches are scheduled.
"""

import itertools
import logging
import math
import random
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor

from pydantic import BaseModel, Field

from holdem.cards import Card, Deck, card_display, find_duplicates
from holdem.config import get_settings
from holdem.errors import DeckExhaustedError, InvalidHandError, NoActivePlayersError
from holdem.hand_eval import evaluate

logger = logging.getLogger(__name__)

BOARD_SIZE = 5


class PlayerEquity(BaseModel):
    """One player's share over all simulated run-outs."""

    player_id: str
    wins: int = 0  # run-outs won outright
    ties: int = 0  # run-outs split with others
    equity: float = 0.0  # expected pot share, 0-1
    trials: int = 0

    @property
    def win_rate(self) -> float:
        return self.wins / self.trials if self.trials else 0.0

    @property
    def tie_rate(self) -> float:
        return self.ties / self.trials if self.trials else 0.0


class EquityResult(BaseModel):
    """Equity of every player for a given board."""

    players: dict[str, PlayerEquity] = Field(default_factory=dict)
    trials: int
    exact: bool  # True when every run-out was enumerated

    def __getitem__(self, player_id: str) -> PlayerEquity:
        return self.players[player_id]


class _Tally:
    """Per-batch counters, merged after the pool finishes."""

    def __init__(self, player_ids: Sequence[str]) -> None:
        self.wins = dict.fromkeys(player_ids, 0)
        self.ties = dict.fromkeys(player_ids, 0)
        self.shares = dict.fromkeys(player_ids, 0.0)
        self.trials = 0

    def record(self, winners: list[str]) -> None:
        self.trials += 1
        if len(winners) == 1:
            self.wins[winners[0]] += 1
        else:
            for pid in winners:
                self.ties[pid] += 1
        share = 1.0 / len(winners)
        for pid in winners:
            self.shares[pid] += share

    def merge(self, other: "_Tally") -> None:
        self.trials += other.trials
        for pid in self.wins:
            self.wins[pid] += other.wins[pid]
            self.ties[pid] += other.ties[pid]
            self.shares[pid] += other.shares[pid]


def _showdown_winners(hands: Mapping[str, Sequence[Card]], board: Sequence[Card]) -> list[str]:
    values = {pid: evaluate([*hole, *board]) for pid, hole in hands.items()}
    best = max(values.values())
    return [pid for pid, value in values.items() if value == best]


def _run_boards(
    hands: Mapping[str, Sequence[Card]], board: Sequence[Card], runouts: Iterable[Sequence[Card]]
) -> _Tally:
    tally = _Tally(list(hands))
    for runout in runouts:
        tally.record(_showdown_winners(hands, [*board, *runout]))
    return tally


def _sample_runouts(
    remaining: Sequence[Card], missing: int, count: int, seed: int
) -> Iterable[Sequence[Card]]:
    rng = random.Random(seed)
    for _ in range(count):
        yield rng.sample(remaining, missing)


def _validate(hands: Mapping[str, Sequence[Card]], board: Sequence[Card]) -> None:
    if len(hands) < 2:
        raise NoActivePlayersError(f"Equity needs at least 2 players, got {len(hands)}")
    for pid, hole in hands.items():
        if len(hole) != 2:
            raise InvalidHandError(f"Player {pid} must hold 2 hole cards, got {len(hole)}")
    if len(board) > BOARD_SIZE:
        raise InvalidHandError(f"Board has at most {BOARD_SIZE} cards, got {len(board)}")
    duplicates = find_duplicates([*itertools.chain.from_iterable(hands.values()), *board])
    if duplicates:
        raise InvalidHandError(f"Cards dealt more than once: {card_display(duplicates)}")


def estimate_equity(
    hands: Mapping[str, Sequence[Card]],
    board: Sequence[Card] = (),
    iterations: int | None = None,
    seed: int | None = None,
    workers: int | None = None,
) -> EquityResult:
    """
    Estimate each player's share of the pot.

    Args:
        hands: player_id -> 2 hole cards, for every player still in the hand
        board: 0-5 community cards already dealt
        iterations: Sampled run-outs when exact enumeration is too large
        seed: Seed for reproducible sampling
        workers: Thread pool size

    Returns:
        EquityResult with wins, ties and equity per player
    """
    settings = get_settings()
    iterations = settings.equity_iterations if iterations is None else iterations
    workers = settings.equity_workers if workers is None else workers
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}")
    if workers <= 0:
        raise ValueError(f"workers must be positive, got {workers}")

    hands = {pid: list(hole) for pid, hole in hands.items()}
    board = list(board)
    _validate(hands, board)

    deck = Deck()
    deck.remove([*itertools.chain.from_iterable(hands.values()), *board])
    remaining = list(deck)
    missing = BOARD_SIZE - len(board)
    if len(remaining) < missing:
        raise DeckExhaustedError(
            f"Cannot complete the board: need {missing} cards, {len(remaining)} left in deck"
        )
    total_runouts = math.comb(len(remaining), missing)

    # A complete board has a single run-out, which is always enumerated.
    exact = missing == 0 or total_runouts <= settings.exact_threshold
    if exact:
        all_runouts = list(itertools.combinations(remaining, missing))
        size = max(1, math.ceil(len(all_runouts) / workers))
        batches = [all_runouts[i : i + size] for i in range(0, len(all_runouts), size)]
    else:
        seeder = random.Random(seed)
        batches = []
        left = iterations
        while left > 0:
            count = min(settings.equity_batch_size, left)
            batches.append(_sample_runouts(remaining, missing, count, seeder.getrandbits(64)))
            left -= count

    logger.info(
        f"Equity for {len(hands)} players on [{card_display(board)}]: "
        f"{'enumerating' if exact else 'sampling'} "
        f"{total_runouts if exact else iterations} run-outs in {len(batches)} batches"
    )

    total = _Tally(list(hands))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        for tally in executor.map(lambda runouts: _run_boards(hands, board, runouts), batches):
            total.merge(tally)

    players = {
        pid: PlayerEquity(
            player_id=pid,
            wins=total.wins[pid],
            ties=total.ties[pid],
            equity=total.shares[pid] / total.trials,
            trials=total.trials,
        )
        for pid in hands
    }
    return EquityResult(players=players, trials=total.trials, exact=exact)
