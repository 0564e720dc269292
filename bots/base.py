"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import Optional, Tuple

from mines.state import GameState

# ``None`` means cash out; otherwise the (row, col) to reveal.
Move = Optional[Tuple[int, int]]


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def on_game_start(self, game: GameState) -> None:
        """Optional hook invoked after a game is started."""
        return None

    def choose_mine_count(self, max_mines: int) -> int:
        return 1

    def next_move(self, game: GameState) -> Move:
        """Reveal the first hidden cell in row-major order."""
        hidden = game.board.hidden_positions()
        if not hidden:
            raise RuntimeError("No hidden cells left for bot.")
        return hidden[0]
