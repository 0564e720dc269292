"""Simulation arena: let a bot play many games and report the return."""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable

from mines.game import GameSession
from mines.rules_schema import RuleSet

from .base import BotStrategy
from .random_bot import RandomBot
from .target_bot import TargetRevealBot

logger = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "random": RandomBot,
    "target": TargetRevealBot,
}


def play_game(session: GameSession, bot: BotStrategy, bet: float) -> dict:
    mine_count = bot.choose_mine_count(session.rules.total_cells - 1)
    game = session.start_game(bet, mine_count).game
    bot.on_game_start(game)
    result = None
    while not game.status.is_terminal:
        move = bot.next_move(game)
        if move is None:
            result = session.cash_out()
        else:
            result = session.reveal_cell(*move)
    assert result is not None and result.record is not None
    return {
        "result": result.record.result.value,
        "mine_count": mine_count,
        "payout": result.record.payout,
        "multiplier": result.record.multiplier,
    }


def run_match(
    bot: BotStrategy,
    *,
    n_games: int = 100,
    bet: float = 1.0,
    seed: int | None = None,
    rules: RuleSet | None = None,
) -> dict:
    rules = rules or RuleSet()
    # Keep the simulated bankroll out of the way of the statistics.
    session = GameSession(rules=rules, seed=seed)
    session.reset_balance(bet * n_games)
    history = []
    counts = {"won": 0, "lost": 0, "cashed_out": 0}
    total_payout = 0.0
    for _ in range(n_games):
        entry = play_game(session, bot, bet)
        counts[entry["result"]] += 1
        total_payout += entry["payout"]
        history.append(entry)
    total_bet = bet * n_games
    rtp = total_payout / total_bet if total_bet else 0.0
    logger.info("%s played %d games, rtp=%.4f", bot.name, n_games, rtp)
    return {
        "games": n_games,
        "wins": counts["won"],
        "losses": counts["lost"],
        "cash_outs": counts["cashed_out"],
        "total_bet": total_bet,
        "total_payout": total_payout,
        "rtp": rtp,
        "balance": session.balance(),
        "history": history,
    }


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Simulate Mines games with a bot.")
    parser.add_argument("--bot", default="target", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=1000, help="Number of games to play.")
    parser.add_argument("--bet", type=float, default=1.0)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    logging.getLogger("mines").setLevel(logging.WARNING)
    bot = BOT_REGISTRY[args.bot](seed=args.seed)
    results = run_match(bot, n_games=args.n, bet=args.bet, seed=args.seed)

    print(f"{bot.name}: {results['wins']} won, {results['losses']} lost, {results['cash_outs']} cashed out")
    print(f"Return to player: {results['rtp']:.4f} ({results['total_payout']:.2f} / {results['total_bet']:.2f})")


if __name__ == "__main__":
    main()
