"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from mines.state import GameState

from .base import BotStrategy, Move


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None, cash_out_chance: float = 0.2) -> None:
        self._rng = random.Random(seed)
        self.cash_out_chance = cash_out_chance

    def choose_mine_count(self, max_mines: int) -> int:
        return self._rng.randint(1, max_mines)

    def next_move(self, game: GameState) -> Move:
        if game.revealed_safe > 0 and self._rng.random() < self.cash_out_chance:
            return None
        return self._rng.choice(game.board.hidden_positions())
