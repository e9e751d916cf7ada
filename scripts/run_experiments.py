"""
Run a batch of dice games between the host and a simulated user agent, then compare the
empirical win rate of every (host dice, user dice) pairing with the probability engine.
Usage: python scripts/run_experiments.py 2,2,4,4,9,9 1,1,6,6,8,8 3,3,5,5,7,7 --agent counter --games 2000
"""
import argparse
import json
import os
import random
from collections import defaultdict
from typing import Any, Dict

from nontransitive_dice.core.config import ConfigurationError, GameConfig
from nontransitive_dice.core.engine import GameEngine
from nontransitive_dice.core.events import InMemoryRecorder
from nontransitive_dice.core.probability import pair_probability
from nontransitive_dice.core.state import DRAW, HOST, USER
from nontransitive_dice.agents import make_agent, simulatable_agents

DEFAULT_DICE = ["2,2,4,4,9,9", "1,1,6,6,8,8", "3,3,5,5,7,7"]


def run_game(agent, cfg: GameConfig, rng: random.Random) -> Dict[str, Any]:
    """
    Play one game with the given agent answering for the user.
    Returns:
        dict: Winner, first mover and the dice slot owned by each party.
    """
    engine = GameEngine(cfg, agent, InMemoryRecorder(), rng=rng)
    winner = engine.play()
    s = engine.state
    return {
        "winner": winner,
        "first_mover": s.first_mover,
        "comp_dice": s.comp_dice_index,
        "user_dice": s.user_dice_index,
        "verified": all(r.verified for r in s.exchanges),
    }


def summarize(results, cfg: GameConfig) -> Dict[str, Any]:
    totals = {HOST: 0, USER: 0, DRAW: 0}
    pairs = defaultdict(lambda: {"games": 0, "user_wins": 0})
    for r in results:
        totals[r["winner"]] += 1
        key = (r["user_dice"], r["comp_dice"])
        pairs[key]["games"] += 1
        pairs[key]["user_wins"] += r["winner"] == USER

    per_pair = []
    for (u, c), stats in sorted(pairs.items()):
        per_pair.append({
            "user_dice": cfg.dice[u].label(),
            "comp_dice": cfg.dice[c].label(),
            "games": stats["games"],
            "empirical": round(stats["user_wins"] / stats["games"], 3),
            "expected": round(pair_probability(cfg.dice[u], cfg.dice[c]), 3),
        })
    return {
        "games": len(results),
        "wins": totals,
        "all_commitments_verified": all(r["verified"] for r in results),
        "pairs": per_pair,
    }


def plot_pairs(summary: Dict[str, Any], out_path: str):
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    labels = [f"{p['user_dice']}\nvs {p['comp_dice']}" for p in summary["pairs"]]
    empirical = [p["empirical"] for p in summary["pairs"]]
    expected = [p["expected"] for p in summary["pairs"]]
    xs = range(len(labels))
    plt.figure(figsize=(max(6, int(len(labels) * 1.2)), 4))
    plt.bar([x - 0.2 for x in xs], empirical, width=0.4, color='C0', label='empirical')
    plt.bar([x + 0.2 for x in xs], expected, width=0.4, color='C1', label='expected')
    plt.xticks(list(xs), labels, fontsize=7)
    plt.ylabel('User win rate')
    plt.ylim(0, 1)
    plt.title('User win rate per dice pairing')
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_path)
    plt.close()


def main():
    parser = argparse.ArgumentParser(description='Simulate dice games against the host')
    parser.add_argument('dice', nargs='*', default=DEFAULT_DICE, help='Dice specifications, e.g. 1,2,3 4,5,6 7,8,9')
    parser.add_argument('--agent', type=str, default='random', help=f"Agent answering for the user {simulatable_agents()}")
    parser.add_argument('--games', type=int, default=1000, help='Number of games to simulate')
    parser.add_argument('--seed', type=int, default=0, help='Seed for host and agent randomness')
    parser.add_argument('--data-dir', type=str, default='data', help='Directory for the summary and chart')
    parser.add_argument('--plot', action='store_true', help='Save a bar chart of win rates (needs matplotlib)')
    args = parser.parse_args()

    try:
        cfg = GameConfig.from_args(args.dice)
    except ConfigurationError as e:
        raise SystemExit(str(e))

    rng = random.Random(args.seed)
    try:
        agent = make_agent(args.agent, rng=random.Random(args.seed + 1))
    except ValueError as e:
        raise SystemExit(str(e))
    results = []
    for i in range(args.games):
        results.append(run_game(agent, cfg, rng))
        if (i + 1) % 100 == 0:
            print(f"{i + 1}/{args.games} games")

    summary = summarize(results, cfg)
    os.makedirs(args.data_dir, exist_ok=True)
    summary_path = os.path.join(args.data_dir, "experiment_summary.json")
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write(json.dumps(summary, indent=2))
    print(json.dumps(summary, indent=2))
    if args.plot:
        chart = os.path.join(args.data_dir, "win_rates.png")
        plot_pairs(summary, chart)
        print(f"[Chart saved to {chart}]")


if __name__ == "__main__":
    main()
