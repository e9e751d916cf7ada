"""
Draw the pairwise win-probability table of a dice set as a heatmap and report whether
the "beats" relation contains a cycle.
Usage: python scripts/plot_probabilities.py 2,2,4,4,9,9 1,1,6,6,8,8 3,3,5,5,7,7 --out data/probabilities.png
"""
import argparse
import os

from nontransitive_dice.core.config import ConfigurationError, GameConfig
from nontransitive_dice.core.probability import find_cycle, format_probability, winning_probabilities


def main():
    parser = argparse.ArgumentParser(description='Heatmap of pairwise win probabilities')
    parser.add_argument('dice', nargs='+', help='Dice specifications, e.g. 1,2,3 4,5,6 7,8,9')
    parser.add_argument('--out', type=str, default=os.path.join('data', 'probabilities.png'), help='Output image')
    args = parser.parse_args()

    try:
        cfg = GameConfig.from_args(args.dice)
    except ConfigurationError as e:
        raise SystemExit(str(e))

    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    table = winning_probabilities(cfg.dice)
    n = len(cfg.dice)
    grid = [[float('nan')] * n for _ in range(n)]
    for (i, j), p in table.items():
        grid[i][j] = p
    labels = [d.label() for d in cfg.dice]

    fig, ax = plt.subplots(figsize=(max(5, n * 1.5), max(4, n * 1.2)))
    im = ax.imshow(grid, vmin=0.0, vmax=1.0, cmap='RdYlGn')
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xticklabels(labels, rotation=45, ha='right', fontsize=8)
    ax.set_yticklabels(labels, fontsize=8)
    ax.set_xlabel('Opponent dice')
    ax.set_ylabel('Dice')
    for (i, j), p in table.items():
        ax.text(j, i, format_probability(p), ha='center', va='center', fontsize=8)
    fig.colorbar(im, ax=ax, label='P(row beats column)')
    ax.set_title('Pairwise win probabilities')
    fig.tight_layout()
    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    fig.savefig(args.out)
    plt.close(fig)
    print(f"[Heatmap saved to {args.out}]")

    cycle = find_cycle(table)
    if cycle is None:
        print("The dice set is transitive: no cycle in the beats relation.")
    else:
        print("Non-transitive cycle: " + " beats ".join(labels[i] for i in cycle))


if __name__ == "__main__":
    main()
