"""Convenience service layer for UI and HTTP consumers."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional

from .game import ActionResult, GameSession
from .history import Clock, HistoryRecord, utc_now
from .multiplier import max_multiplier, multiplier_table
from .rules_schema import RuleSet
from .state import GameState

DEFAULT_PLAYER = "local"


@dataclass
class CellView:
    row: int
    col: int
    revealed: bool
    has_mine: Optional[bool]


@dataclass
class GameStatsView:
    revealed_safe: int
    safe_cells: int
    remaining_safe: int
    progress_percent: int
    potential_payout: float
    multiplier: float
    max_multiplier: float


@dataclass
class GameView:
    id: str
    status: str
    bet: float
    mine_count: int
    grid_size: int
    multiplier: float
    payout: Optional[float]
    board: list[list[CellView]]
    stats: GameStatsView
    next_multipliers: list[float]


@dataclass
class HistoryView:
    id: str
    bet: float
    mine_count: int
    payout: float
    result: str
    multiplier: float
    timestamp: str


@dataclass
class ActionView:
    game: GameView
    payout: Optional[float]
    balance: float


@dataclass
class PlayerView:
    player_id: str
    balance: float
    game: Optional[GameView]
    history: list[HistoryView]


class MinesService:
    """Facade holding one GameSession per player id."""

    def __init__(self, rules: Optional[RuleSet] = None, *, seed: Optional[int] = None, clock: Clock = utc_now) -> None:
        self.rules = rules or RuleSet()
        self.seed = seed
        self.clock = clock
        self._sessions: Dict[str, GameSession] = {}
        self._registry_lock = threading.Lock()

    # Session lifecycle -------------------------------------------------

    def session_for(self, player_id: str = DEFAULT_PLAYER) -> GameSession:
        with self._registry_lock:
            session = self._sessions.get(player_id)
            if session is None:
                session = GameSession(rules=self.rules, seed=self.seed, clock=self.clock)
                self._sessions[player_id] = session
            return session

    def has_active_game(self, player_id: str = DEFAULT_PLAYER) -> bool:
        game = self.session_for(player_id).current_game()
        return game is not None and not game.status.is_terminal

    # Actions -----------------------------------------------------------

    def start_game(self, bet: float, mine_count: int, player_id: str = DEFAULT_PLAYER) -> ActionView:
        result = self.session_for(player_id).start_game(bet, mine_count)
        return self._action_view(result)

    def reveal_cell(self, row: int, col: int, player_id: str = DEFAULT_PLAYER) -> ActionView:
        result = self.session_for(player_id).reveal_cell(row, col)
        return self._action_view(result)

    def cash_out(self, player_id: str = DEFAULT_PLAYER) -> ActionView:
        result = self.session_for(player_id).cash_out()
        return self._action_view(result)

    def deposit(self, amount: float, player_id: str = DEFAULT_PLAYER) -> float:
        return self.session_for(player_id).deposit(amount)

    def reset_balance(self, amount: Optional[float] = None, player_id: str = DEFAULT_PLAYER) -> float:
        return self.session_for(player_id).reset_balance(amount)

    # Views -------------------------------------------------------------

    def get_current_game(self, player_id: str = DEFAULT_PLAYER) -> Optional[GameView]:
        game = self.session_for(player_id).current_game()
        return self.game_view(game) if game is not None else None

    def get_balance(self, player_id: str = DEFAULT_PLAYER) -> float:
        return self.session_for(player_id).balance()

    def get_history(self, player_id: str = DEFAULT_PLAYER) -> list[HistoryView]:
        return [history_view(record) for record in self.session_for(player_id).history_records()]

    def get_player_view(self, player_id: str = DEFAULT_PLAYER) -> PlayerView:
        return PlayerView(
            player_id=player_id,
            balance=self.get_balance(player_id),
            game=self.get_current_game(player_id),
            history=self.get_history(player_id),
        )

    def game_view(self, game: GameState) -> GameView:
        board = game.board
        show_all = game.status.is_terminal
        cells = [
            [
                CellView(
                    row=r,
                    col=c,
                    revealed=cell.revealed,
                    has_mine=cell.has_mine if (cell.revealed or show_all) else None,
                )
                for c, cell in enumerate(row)
            ]
            for r, row in enumerate(board.cells)
        ]
        revealed_safe = game.revealed_safe
        top = max_multiplier(game.total_cells, game.mine_count, house_edge=game.house_edge)
        table = multiplier_table(game.total_cells, game.mine_count, house_edge=game.house_edge)
        return GameView(
            id=game.id,
            status=game.status.value,
            bet=game.bet,
            mine_count=game.mine_count,
            grid_size=board.size,
            multiplier=game.current_multiplier,
            payout=game.payout,
            board=cells,
            stats=GameStatsView(
                revealed_safe=revealed_safe,
                safe_cells=game.safe_cells,
                remaining_safe=game.safe_cells - revealed_safe,
                progress_percent=round(100 * revealed_safe / game.safe_cells),
                potential_payout=game.potential_payout,
                multiplier=game.current_multiplier,
                max_multiplier=top,
            ),
            next_multipliers=[] if show_all else table[revealed_safe:],
        )

    # Helpers -----------------------------------------------------------

    def _action_view(self, result: ActionResult) -> ActionView:
        return ActionView(game=self.game_view(result.game), payout=result.payout, balance=result.balance)


def history_view(record: HistoryRecord) -> HistoryView:
    return HistoryView(
        id=record.id,
        bet=record.bet,
        mine_count=record.mine_count,
        payout=record.payout,
        result=record.result.value,
        multiplier=record.multiplier,
        timestamp=record.timestamp.isoformat(),
    )
