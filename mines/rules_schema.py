"""Validation schema for Mines rules configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 6


class RuleSet(BaseModel):
    grid_size: int = Field(5, ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE, description="Side length of the square board.")
    house_edge: float = Field(0.05, ge=0.0, lt=0.10, description="Fraction taken off the fair multiplier.")
    min_bet: float = Field(1.0, gt=0, description="Smallest accepted stake.")
    default_mine_count: int = Field(3, ge=1, description="Mine count offered before the player picks one.")
    starting_balance: float = Field(1000.0, ge=0, description="Balance given to new and reset players.")
    history_limit: int = Field(50, ge=1, description="Number of finished games kept per player.")

    @field_validator("house_edge")
    @classmethod
    def round_edge(cls, value: float) -> float:
        return round(value, 6)

    @model_validator(mode="after")
    def check_board(self) -> "RuleSet":
        total = self.total_cells
        if self.default_mine_count >= total:
            raise ValueError(f"default_mine_count must be below {total} on a {self.grid_size}x{self.grid_size} board.")
        # First safe reveal with a single mine is the smallest multiplier; it must beat 1.0.
        if (1 - self.house_edge) * total <= total - 2:
            raise ValueError(
                f"house_edge {self.house_edge} is too large for a {self.grid_size}x{self.grid_size} board."
            )
        return self

    @property
    def total_cells(self) -> int:
        return self.grid_size * self.grid_size

    @property
    def max_mine_count(self) -> int:
        return self.total_cells - 1


def load_rules(path: Optional[Union[str, Path]] = None) -> RuleSet:
    """Read a JSON rules file, or return the defaults when no path is given."""
    if path is None:
        return RuleSet()
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return RuleSet(**payload)
