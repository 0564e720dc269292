"""Bot that cashes out after a fixed number of safe reveals."""

from __future__ import annotations

import random
from typing import Optional

from mines.state import GameState

from .base import BotStrategy, Move


class TargetRevealBot(BotStrategy):
    name = "Target"

    def __init__(self, target: int = 3, mine_count: int = 3, seed: Optional[int] = None) -> None:
        if target < 1:
            raise ValueError("Target must be at least one reveal.")
        self.target = target
        self.mine_count = mine_count
        self._rng = random.Random(seed)

    def choose_mine_count(self, max_mines: int) -> int:
        return min(self.mine_count, max_mines)

    def next_move(self, game: GameState) -> Move:
        if game.revealed_safe >= self.target:
            return None
        return self._rng.choice(game.board.hidden_positions())
