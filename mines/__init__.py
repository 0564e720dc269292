"""Core engine package for the Mines wagering game."""

__all__ = [
    "board",
    "multiplier",
    "state",
    "history",
    "ledger",
    "game",
    "rules_schema",
    "service",
]
