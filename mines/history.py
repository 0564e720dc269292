"""History records emitted when a game reaches a terminal state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from .state import GameState, GameStatus

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class HistoryRecord:
    id: str
    bet: float
    mine_count: int
    payout: float
    result: GameStatus
    multiplier: float
    timestamp: datetime


def build_record(state: GameState, *, clock: Optional[Clock] = None) -> HistoryRecord:
    if not state.status.is_terminal or state.payout is None:
        raise ValueError("History records are only produced for finished games.")
    clock = clock or utc_now
    return HistoryRecord(
        id=state.id,
        bet=state.bet,
        mine_count=state.mine_count,
        payout=state.payout,
        result=state.status,
        multiplier=state.current_multiplier,
        timestamp=clock(),
    )


class HistoryStore:
    """Append-only log, newest record first, trimmed to ``limit`` entries."""

    def __init__(self, limit: int = 50) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self.limit = limit
        self._records: List[HistoryRecord] = []

    def append(self, record: HistoryRecord) -> None:
        self._records.insert(0, record)
        del self._records[self.limit :]

    def records(self) -> List[HistoryRecord]:
        return list(self._records)

    def clear(self) -> None:
        self._records = []

    def __len__(self) -> int:
        return len(self._records)
