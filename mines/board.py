"""Board model and mine placement."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import Iterator, List, Optional, Tuple


class MinesError(ValueError):
    """Base class for every engine error."""


class InvalidParameters(MinesError):
    """Raised when board or multiplier arguments are out of range."""


@dataclass
class Cell:
    """A single grid square. Only ``revealed`` may change, and only once."""

    has_mine: bool = False
    revealed: bool = False

    def reveal(self) -> None:
        self.revealed = True


@dataclass
class Board:
    size: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[Cell() for _ in range(self.size)] for _ in range(self.size)]
        if len(self.cells) != self.size or any(len(row) != self.size for row in self.cells):
            raise InvalidParameters("Board must be a square grid of the declared size.")

    @property
    def total_cells(self) -> int:
        return self.size * self.size

    @property
    def mine_count(self) -> int:
        return sum(1 for cell in self.iter_cells() if cell.has_mine)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def revealed_safe_count(self) -> int:
        return sum(1 for cell in self.iter_cells() if cell.revealed and not cell.has_mine)

    def mine_positions(self) -> List[Tuple[int, int]]:
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, cell in enumerate(row)
            if cell.has_mine
        ]

    def hidden_positions(self) -> List[Tuple[int, int]]:
        return [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, cell in enumerate(row)
            if not cell.revealed
        ]

    @classmethod
    def from_mines(cls, size: int, mines: List[Tuple[int, int]]) -> "Board":
        """Build a board with mines at fixed positions (tests and replays)."""
        board = cls(size=size)
        for row, col in mines:
            if not board.in_bounds(row, col):
                raise InvalidParameters(f"Mine position {(row, col)} is off the board.")
            board.cells[row][col].has_mine = True
        placed = board.mine_count
        if placed < 1 or placed >= board.total_cells:
            raise InvalidParameters("Board must hold at least one mine and one safe cell.")
        return board


def validate_dimensions(size: int, mine_count: int) -> None:
    if size < 1:
        raise InvalidParameters("Board size must be positive.")
    if mine_count < 1 or mine_count >= size * size:
        raise InvalidParameters(
            f"Mine count must be between 1 and {size * size - 1} for a {size}x{size} board."
        )


def generate_board(size: int, mine_count: int, *, rng: Optional[Random] = None) -> Board:
    """Return a fresh ``size`` x ``size`` board with ``mine_count`` mines.

    Positions are drawn uniformly and redrawn on collision until the requested
    number of distinct cells carry a mine. All cells start unrevealed.
    """
    validate_dimensions(size, mine_count)
    if rng is None:
        rng = Random()

    board = Board(size=size)
    placed = 0
    while placed < mine_count:
        row = rng.randrange(size)
        col = rng.randrange(size)
        cell = board.cells[row][col]
        if not cell.has_mine:
            cell.has_mine = True
            placed += 1
    return board
