from random import Random

import pytest

from mines.board import Board
from mines.multiplier import multiplier
from mines.state import (
    CellAlreadyRevealed,
    GameState,
    GameStatus,
    InvalidBet,
    InvalidMineCount,
    NoActiveSession,
    OutOfBounds,
    is_won,
    start_game,
)


def corner_mines_game(bet=10.0):
    """5x5 game with mines on the four corners and the centre."""
    board = Board.from_mines(5, [(0, 0), (0, 4), (4, 0), (4, 4), (2, 2)])
    return start_game(bet, 5, board=board)


def safe_cells(game: GameState):
    return [
        (r, c)
        for r in range(game.board.size)
        for c in range(game.board.size)
        if not game.board.cell(r, c).has_mine
    ]


def test_start_game_initial_state():
    game = start_game(10, 5, rng=Random(1))

    assert game.status is GameStatus.ACTIVE
    assert game.current_multiplier == 1.0
    assert game.payout is None
    assert game.board.mine_count == 5
    assert game.revealed_safe == 0


@pytest.mark.parametrize("bet", [0, -5, float("nan"), float("inf"), "ten"])
def test_start_game_rejects_bad_bets(bet):
    with pytest.raises(InvalidBet):
        start_game(bet, 5)


@pytest.mark.parametrize("mine_count", [0, 25, -3, 2.5])
def test_start_game_rejects_bad_mine_counts(mine_count):
    with pytest.raises(InvalidMineCount):
        start_game(10, mine_count)


def test_start_game_enforces_min_bet():
    with pytest.raises(InvalidBet):
        start_game(0.5, 3, min_bet=1.0)


def test_safe_reveal_raises_multiplier():
    game = corner_mines_game()

    outcome = game.reveal(0, 1)

    assert not outcome.hit_mine
    assert game.status is GameStatus.ACTIVE
    assert game.current_multiplier == pytest.approx(multiplier(1, 25, 5))
    assert game.current_multiplier > 1.0
    assert outcome.payout == pytest.approx(10 * game.current_multiplier)
    assert game.payout is None


def test_mine_reveal_loses_and_keeps_multiplier():
    game = corner_mines_game()
    game.reveal(0, 1)
    before = game.current_multiplier

    outcome = game.reveal(2, 2)

    assert outcome.hit_mine
    assert outcome.finished
    assert outcome.payout == 0.0
    assert game.status is GameStatus.LOST
    assert game.payout == 0.0
    assert game.current_multiplier == before


def test_revealing_every_safe_cell_wins():
    game = corner_mines_game()
    cells = safe_cells(game)

    for row, col in cells[:-1]:
        game.reveal(row, col)
        assert not is_won(game)
        assert game.status is GameStatus.ACTIVE

    outcome = game.reveal(*cells[-1])

    assert is_won(game)
    assert game.status is GameStatus.WON
    assert outcome.payout == pytest.approx(10 * multiplier(20, 25, 5))
    assert game.payout == outcome.payout


def test_cash_out_pays_current_multiplier():
    game = corner_mines_game(bet=20)
    game.reveal(1, 1)
    game.reveal(1, 2)

    payout = game.cash_out()

    assert payout == pytest.approx(20 * multiplier(2, 25, 5))
    assert game.status is GameStatus.CASHED_OUT
    with pytest.raises(NoActiveSession):
        game.cash_out()


def test_cash_out_without_reveals_returns_stake():
    game = corner_mines_game(bet=15)

    assert game.cash_out() == 15


def test_already_revealed_cell_is_rejected_without_changes():
    game = corner_mines_game()
    game.reveal(3, 3)
    before = (game.current_multiplier, game.status, game.revealed_safe)

    with pytest.raises(CellAlreadyRevealed):
        game.reveal(3, 3)

    assert (game.current_multiplier, game.status, game.revealed_safe) == before


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (5, 0), (0, 5), (1.5, 0), (0, "2"), (True, 1)])
def test_out_of_bounds_is_rejected(row, col):
    game = corner_mines_game()

    with pytest.raises(OutOfBounds):
        game.reveal(row, col)

    assert game.revealed_safe == 0
    assert game.status is GameStatus.ACTIVE


def test_terminal_game_rejects_further_actions():
    game = corner_mines_game()
    game.reveal(0, 0)

    with pytest.raises(NoActiveSession):
        game.reveal(1, 1)
    with pytest.raises(NoActiveSession):
        game.cash_out()
    assert not game.board.cell(1, 1).revealed
