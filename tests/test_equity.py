import pytest

from holdem.cards import full_deck, parse_cards
from holdem.equity import estimate_equity
from holdem.errors import DeckExhaustedError, InvalidHandError, NoActivePlayersError


def hands(**labels):
    return {pid: parse_cards(cards) for pid, cards in labels.items()}


def test_river_is_a_single_exact_showdown():
    result = estimate_equity(hands(A="As Ah", B="Kd Kh"), parse_cards("2c 7d 9s Jh 3c"))
    assert result.exact
    assert result.trials == 1
    assert result["A"].equity == 1.0
    assert result["A"].wins == 1
    assert result["B"].equity == 0.0


def test_identical_hands_split_every_runout():
    result = estimate_equity(hands(A="As Ks", B="Ad Kd"), parse_cards("2c 7h 9c Jh 3c"))
    assert result["A"].ties == 1
    assert result["A"].equity == pytest.approx(0.5)
    assert result["B"].tie_rate == 1.0


def test_turn_enumerates_every_river():
    board = parse_cards("Ah Ac 7d 2s")
    result = estimate_equity(hands(A="As Ad", B="Kh Kd"), board)
    assert result.exact
    assert result.trials == 44
    assert result["A"].equity == 1.0
    assert result["B"].wins == 0


def test_flop_enumeration_counts_outs():
    # B has a flush draw against a set; the set fills up when the board pairs
    board = parse_cards("Ah 7h 2c")
    result = estimate_equity(hands(A="As Ad", B="Kh 3h"), board)
    assert result.exact
    assert result.trials == 990
    assert result["A"].equity + result["B"].equity == pytest.approx(1.0)
    assert result["B"].equity == pytest.approx(253 / 990)


def test_sampled_results_are_reproducible_across_workers():
    players = hands(A="As Ah", B="7c 2d")
    single = estimate_equity(players, iterations=600, seed=7, workers=1)
    pooled = estimate_equity(players, iterations=600, seed=7, workers=4)

    assert not single.exact
    assert single.trials == 600
    assert single == pooled
    assert single["A"].equity > 0.75


def test_three_way_equity_sums_to_one():
    result = estimate_equity(hands(A="As Ah", B="Kc Kd", C="Qh Jh"), iterations=300, seed=1)
    assert sum(p.equity for p in result.players.values()) == pytest.approx(1.0)
    assert result["A"].win_rate > result["B"].win_rate


def test_exact_threshold_comes_from_settings(monkeypatch):
    monkeypatch.setenv("HOLDEM_EXACT_THRESHOLD", "0")
    monkeypatch.setenv("HOLDEM_EQUITY_ITERATIONS", "250")
    monkeypatch.setenv("HOLDEM_EQUITY_BATCH_SIZE", "100")
    result = estimate_equity(hands(A="As Ad", B="Kh 3h"), parse_cards("Ah 7h 2c"), seed=3)
    assert not result.exact
    assert result.trials == 250


def test_validation():
    with pytest.raises(NoActivePlayersError):
        estimate_equity(hands(A="As Ad"))
    with pytest.raises(InvalidHandError, match="more than once"):
        estimate_equity(hands(A="As Ad", B="As Kd"))
    with pytest.raises(InvalidHandError, match="hole cards"):
        estimate_equity(hands(A="As Ad Ac", B="Ks Kd"))
    with pytest.raises(InvalidHandError):
        estimate_equity(hands(A="As Ad", B="Ks Kd"), parse_cards("2c 3c 4c 5c 6c 7c"))
    with pytest.raises(ValueError):
        estimate_equity(hands(A="As Ad", B="Ks Kd"), iterations=0)


def test_full_board_is_exact_even_without_enumeration(monkeypatch):
    monkeypatch.setenv("HOLDEM_EXACT_THRESHOLD", "0")
    result = estimate_equity(
        hands(A="As Ah", B="Kd Kh"), parse_cards("2c 7d 9s Jh 3c"), iterations=50
    )
    assert result.exact
    assert result.trials == 1
    assert result["A"].equity == 1.0


def test_too_many_players_to_complete_the_board():
    deck = full_deck()
    players = {f"p{i}": deck[2 * i : 2 * i + 2] for i in range(24)}
    with pytest.raises(DeckExhaustedError, match="need 5 cards, 4 left"):
        estimate_equity(players)
