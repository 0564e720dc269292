"""Payout multiplier progression."""

from __future__ import annotations

from typing import List

from .board import InvalidParameters

HOUSE_EDGE = 0.05
STARTING_MULTIPLIER = 1.0


def _check_counts(total_cells: int, mine_count: int) -> int:
    if total_cells < 2:
        raise InvalidParameters("Board must contain at least two cells.")
    if mine_count < 1 or mine_count >= total_cells:
        raise InvalidParameters("Mine count must leave at least one safe cell.")
    return total_cells - mine_count


def multiplier(
    revealed_safe: int,
    total_cells: int,
    mine_count: int,
    *,
    house_edge: float = HOUSE_EDGE,
) -> float:
    """Return the multiplier after ``revealed_safe`` safe reveals.

    ``fair * progress * (1 - house_edge)`` where ``fair = T / S`` and
    ``progress = S / R`` with ``R`` the safe cells left after this reveal.
    The clearing reveal (``R == 0``) keeps the progress factor at its last
    finite value ``S / 1``.
    """
    safe_cells = _check_counts(total_cells, mine_count)
    if revealed_safe < 0 or revealed_safe > safe_cells:
        raise InvalidParameters(
            f"Revealed safe count must be between 0 and {safe_cells}, got {revealed_safe}."
        )
    if revealed_safe == 0:
        return STARTING_MULTIPLIER

    remaining = safe_cells - revealed_safe
    if remaining == 0:
        remaining = 1
    fair_multiplier = total_cells / safe_cells
    progress_factor = safe_cells / remaining
    return fair_multiplier * progress_factor * (1 - house_edge)


def max_multiplier(total_cells: int, mine_count: int, *, house_edge: float = HOUSE_EDGE) -> float:
    """Multiplier reached once every safe cell has been revealed."""
    safe_cells = _check_counts(total_cells, mine_count)
    return multiplier(safe_cells, total_cells, mine_count, house_edge=house_edge)


def multiplier_table(total_cells: int, mine_count: int, *, house_edge: float = HOUSE_EDGE) -> List[float]:
    """Multipliers after reveal 1, 2, ... S."""
    safe_cells = _check_counts(total_cells, mine_count)
    return [
        multiplier(k, total_cells, mine_count, house_edge=house_edge)
        for k in range(1, safe_cells + 1)
    ]
