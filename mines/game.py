"""Per-player session layer around the Mines engine."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from random import Random
from typing import List, Optional

from .board import Board, MinesError
from .history import Clock, HistoryRecord, HistoryStore, build_record, utc_now
from .ledger import BalanceLedger, InsufficientFunds
from .rules_schema import RuleSet
from .state import GameState, NoActiveSession, RevealOutcome, start_game, validate_bet

logger = logging.getLogger(__name__)


class GameInProgress(MinesError):
    """Raised when a new game is requested while another is still active."""


@dataclass(frozen=True)
class ActionResult:
    game: GameState
    payout: Optional[float]
    balance: float
    record: Optional[HistoryRecord] = None


@dataclass
class GameSession:
    """Balance, history and the current game for a single player.

    Every public operation runs under one lock, so a reveal racing a cash-out
    (or a double-clicked reveal) is applied one after the other.
    """

    rules: RuleSet = field(default_factory=RuleSet)
    seed: Optional[int] = None
    clock: Clock = utc_now
    ledger: BalanceLedger = field(init=False)
    history: HistoryStore = field(init=False)
    rng: Random = field(init=False)
    current: Optional[GameState] = field(default=None, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)
        self.ledger = BalanceLedger(self.rules.starting_balance)
        self.history = HistoryStore(self.rules.history_limit)

    # Game lifecycle ----------------------------------------------------

    def start_game(self, bet: float, mine_count: int, *, board: Optional[Board] = None) -> ActionResult:
        with self._lock:
            if self.current is not None and not self.current.status.is_terminal:
                raise GameInProgress(f"Game {self.current.id} is still active.")
            amount = validate_bet(bet, min_bet=self.rules.min_bet)
            if not self.ledger.can_afford(amount):
                raise InsufficientFunds(
                    f"Balance {self.ledger.current_balance():.2f} is below the bet of {amount:.2f}."
                )
            game = start_game(
                amount,
                mine_count,
                size=self.rules.grid_size,
                rng=self.rng,
                board=board,
                house_edge=self.rules.house_edge,
                min_bet=self.rules.min_bet,
            )
            balance = self.ledger.debit(game.bet)
            self.current = game
            logger.info("Game %s started: bet=%.2f mines=%d", game.id, game.bet, game.mine_count)
            return ActionResult(game=game, payout=None, balance=balance)

    def reveal_cell(self, row: int, col: int) -> ActionResult:
        with self._lock:
            game = self._require_active()
            outcome = game.reveal(row, col)
            logger.debug(
                "Game %s revealed (%d, %d): mine=%s multiplier=%.4f",
                game.id,
                row,
                col,
                outcome.hit_mine,
                outcome.multiplier,
            )
            return self._settle(game, outcome)

    def cash_out(self) -> ActionResult:
        with self._lock:
            game = self._require_active()
            game.cash_out()
            return self._settle(game, None)

    def current_game(self) -> Optional[GameState]:
        return self.current

    # Balance and history -----------------------------------------------

    def balance(self) -> float:
        return self.ledger.current_balance()

    def deposit(self, amount: float) -> float:
        with self._lock:
            return self.ledger.deposit(amount)

    def reset_balance(self, amount: Optional[float] = None) -> float:
        with self._lock:
            return self.ledger.reset(amount)

    def history_records(self) -> List[HistoryRecord]:
        return self.history.records()

    # Helpers -----------------------------------------------------------

    def _settle(self, game: GameState, outcome: Optional[RevealOutcome]) -> ActionResult:
        if not game.status.is_terminal:
            assert outcome is not None
            return ActionResult(game=game, payout=outcome.payout, balance=self.ledger.current_balance())

        assert game.payout is not None
        balance = self.ledger.credit(game.payout)
        record = build_record(game, clock=self.clock)
        self.history.append(record)
        logger.info(
            "Game %s finished: result=%s payout=%.2f multiplier=%.4f",
            game.id,
            game.status,
            game.payout,
            game.current_multiplier,
        )
        return ActionResult(game=game, payout=game.payout, balance=balance, record=record)

    def _require_active(self) -> GameState:
        if self.current is None or self.current.status.is_terminal:
            raise NoActiveSession("No active game.")
        return self.current
