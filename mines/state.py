"""Game state and the reveal / cash-out state machine."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import Optional

from .board import Board, InvalidParameters, MinesError, generate_board
from .multiplier import HOUSE_EDGE, STARTING_MULTIPLIER, multiplier


class InvalidBet(MinesError):
    """Raised when the stake is not a positive amount."""


class InvalidMineCount(MinesError):
    """Raised when the mine count does not fit the board."""


class NoActiveSession(MinesError):
    """Raised when acting on a missing or finished game."""


class OutOfBounds(MinesError):
    """Raised when reveal coordinates fall outside the grid."""


class CellAlreadyRevealed(MinesError):
    """Raised when the target cell has already been revealed."""


class GameStatus(Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"
    CASHED_OUT = "cashed_out"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.ACTIVE

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RevealOutcome:
    row: int
    col: int
    hit_mine: bool
    status: GameStatus
    multiplier: float
    payout: float

    @property
    def finished(self) -> bool:
        return self.status.is_terminal


@dataclass
class GameState:
    """One wager from bet placement until it is won, lost or cashed out."""

    board: Board
    bet: float
    mine_count: int
    house_edge: float = HOUSE_EDGE
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: GameStatus = GameStatus.ACTIVE
    current_multiplier: float = STARTING_MULTIPLIER
    payout: Optional[float] = None

    @property
    def total_cells(self) -> int:
        return self.board.total_cells

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.mine_count

    @property
    def revealed_safe(self) -> int:
        return self.board.revealed_safe_count()

    @property
    def potential_payout(self) -> float:
        return self.bet * self.current_multiplier

    def is_won(self) -> bool:
        return is_won(self)

    def reveal(self, row: int, col: int) -> RevealOutcome:
        self._ensure_active()
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (row, col)):
            raise OutOfBounds(f"Cell coordinates must be integers, got ({row!r}, {col!r}).")
        if not self.board.in_bounds(row, col):
            raise OutOfBounds(f"Cell ({row}, {col}) is outside the {self.board.size}x{self.board.size} grid.")
        cell = self.board.cell(row, col)
        if cell.revealed:
            raise CellAlreadyRevealed(f"Cell ({row}, {col}) is already revealed.")

        cell.reveal()
        if cell.has_mine:
            self._finish(GameStatus.LOST, 0.0)
            return self._outcome(row, col, hit_mine=True)

        self.current_multiplier = multiplier(
            self.revealed_safe,
            self.total_cells,
            self.mine_count,
            house_edge=self.house_edge,
        )
        if self.is_won():
            self._finish(GameStatus.WON, self.potential_payout)
        return self._outcome(row, col, hit_mine=False)

    def cash_out(self) -> float:
        self._ensure_active()
        payout = self.potential_payout
        self._finish(GameStatus.CASHED_OUT, payout)
        return payout

    def _finish(self, status: GameStatus, payout: float) -> None:
        self.status = status
        self.payout = payout

    def _outcome(self, row: int, col: int, *, hit_mine: bool) -> RevealOutcome:
        if hit_mine:
            payout = 0.0
        elif self.payout is not None:
            payout = self.payout
        else:
            payout = self.potential_payout
        return RevealOutcome(
            row=row,
            col=col,
            hit_mine=hit_mine,
            status=self.status,
            multiplier=self.current_multiplier,
            payout=payout,
        )

    def _ensure_active(self) -> None:
        if self.status is not GameStatus.ACTIVE:
            raise NoActiveSession(f"Game {self.id} is {self.status}; no further actions allowed.")


def is_won(state: GameState) -> bool:
    """True once every safe cell on the board has been revealed."""
    return state.board.revealed_safe_count() == state.total_cells - state.mine_count


def validate_bet(bet: float, *, min_bet: float = 0.0) -> float:
    try:
        value = float(bet)
    except (TypeError, ValueError) as exc:
        raise InvalidBet(f"Bet must be a number, got {bet!r}.") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidBet("Bet must be a positive amount.")
    if value < min_bet:
        raise InvalidBet(f"Bet must be at least {min_bet}.")
    return value


def validate_mine_count(mine_count: int, total_cells: int) -> int:
    if isinstance(mine_count, bool) or not isinstance(mine_count, int):
        raise InvalidMineCount(f"Mine count must be an integer, got {mine_count!r}.")
    if mine_count < 1 or mine_count >= total_cells:
        raise InvalidMineCount(f"Mine count must be between 1 and {total_cells - 1}.")
    return mine_count


def start_game(
    bet: float,
    mine_count: int,
    *,
    size: int = 5,
    rng: Optional[Random] = None,
    board: Optional[Board] = None,
    house_edge: float = HOUSE_EDGE,
    min_bet: float = 0.0,
) -> GameState:
    """Validate the wager and return a new active game at multiplier 1.0."""
    if board is not None:
        size = board.size
    value = validate_bet(bet, min_bet=min_bet)
    count = validate_mine_count(mine_count, size * size)
    if board is None:
        board = generate_board(size, count, rng=rng)
    elif board.mine_count != count:
        raise InvalidParameters("Supplied board does not carry the requested number of mines.")
    return GameState(board=board, bet=value, mine_count=count, house_edge=house_edge)
