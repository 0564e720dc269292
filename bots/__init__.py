"""Auto-play strategies for Mines."""

from .random_bot import RandomBot
from .target_bot import TargetRevealBot

__all__ = ["RandomBot", "TargetRevealBot"]
