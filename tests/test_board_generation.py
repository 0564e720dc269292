from random import Random

import pytest

from mines.board import Board, InvalidParameters, generate_board


@pytest.mark.parametrize("size,mine_count", [(5, 1), (5, 5), (5, 24), (2, 3), (6, 20)])
def test_generate_board_places_exact_mine_count(size, mine_count):
    board = generate_board(size, mine_count, rng=Random(11))

    cells = list(board.iter_cells())
    assert len(cells) == size * size
    assert sum(cell.has_mine for cell in cells) == mine_count
    assert sum(not cell.has_mine for cell in cells) == size * size - mine_count
    assert not any(cell.revealed for cell in cells)


@pytest.mark.parametrize("mine_count", [0, -1, 25, 30])
def test_generate_board_rejects_invalid_mine_counts(mine_count):
    with pytest.raises(InvalidParameters):
        generate_board(5, mine_count)


def test_generate_board_is_reproducible_with_seed():
    first = generate_board(5, 5, rng=Random(3))
    second = generate_board(5, 5, rng=Random(3))

    assert first.mine_positions() == second.mine_positions()


def test_boards_are_independent():
    rng = Random(5)
    first = generate_board(5, 3, rng=rng)
    second = generate_board(5, 3, rng=rng)

    first.cell(0, 0).reveal()
    assert not second.cell(0, 0).revealed


def test_mine_positions_cover_whole_grid():
    rng = Random(99)
    seen = set()
    for _ in range(300):
        seen.update(generate_board(5, 1, rng=rng).mine_positions())
    assert len(seen) == 25


def test_board_from_mines():
    board = Board.from_mines(3, [(0, 0), (2, 1)])

    assert board.mine_count == 2
    assert board.cell(2, 1).has_mine
    assert not board.cell(1, 1).has_mine
    assert board.in_bounds(2, 2)
    assert not board.in_bounds(3, 0)

    with pytest.raises(InvalidParameters):
        Board.from_mines(3, [(3, 3)])
