"""
Statistical check that throw exchanges give uniform results whatever the user contributes.
Runs many exchanges with a fixed contribution, verifies every commitment and reports a
chi-square statistic against the uniform distribution.
Usage: python scripts/check_fairness.py --range 6 --contribution 3 --trials 60000 --plot
"""
import argparse
import os

from nontransitive_dice.core.fairness import FairExchange

# 99.9% quantiles of the chi-square distribution, indexed by degrees of freedom
CHI2_999 = {1: 10.83, 2: 13.82, 3: 16.27, 4: 18.47, 5: 20.52, 6: 22.46, 7: 24.32,
            8: 26.12, 9: 27.88, 10: 29.59, 11: 31.26, 12: 32.91, 15: 37.70, 19: 43.82}


def run_trials(range_: int, contribution: int, trials: int):
    """
    Returns:
        tuple: (counts per result, number of failed verifications)
    """
    counts = [0] * range_
    failures = 0
    for _ in range(trials):
        exchange = FairExchange.commit(range_)
        digest = exchange.digest
        exchange.contribute(contribution)
        reveal = exchange.reveal()
        if not reveal.verify(digest):
            failures += 1
        counts[reveal.result] += 1
    return counts, failures


def chi_square(counts) -> float:
    expected = sum(counts) / len(counts)
    return sum((c - expected) ** 2 / expected for c in counts)


def plot_counts(counts, out_path: str):
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    plt.figure(figsize=(6, 4))
    plt.bar(range(len(counts)), counts, color='C0')
    plt.axhline(sum(counts) / len(counts), color='C1', linestyle='--', label='uniform')
    plt.xlabel('Result')
    plt.ylabel('Count')
    plt.title('Throw exchange results')
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_path)
    plt.close()


def main():
    parser = argparse.ArgumentParser(description='Check uniformity of fair throw exchanges')
    parser.add_argument('--range', type=int, default=6, help='Number of sides')
    parser.add_argument('--contribution', type=int, default=0, help='Fixed user contribution')
    parser.add_argument('--trials', type=int, default=60000, help='Number of exchanges')
    parser.add_argument('--data-dir', type=str, default='data', help='Directory for the chart')
    parser.add_argument('--plot', action='store_true', help='Save a histogram (needs matplotlib)')
    args = parser.parse_args()

    counts, failures = run_trials(args.range, args.contribution, args.trials)
    stat = chi_square(counts)
    dof = args.range - 1
    print(f"counts: {counts}")
    print(f"chi-square: {stat:.2f} with {dof} degrees of freedom")
    if dof in CHI2_999:
        verdict = "uniform" if stat < CHI2_999[dof] else "NOT uniform"
        print(f"critical value (p=0.001): {CHI2_999[dof]} -> {verdict}")
    print(f"failed verifications: {failures}")
    if args.plot:
        os.makedirs(args.data_dir, exist_ok=True)
        chart = os.path.join(args.data_dir, "fairness.png")
        plot_counts(counts, chart)
        print(f"[Chart saved to {chart}]")


if __name__ == "__main__":
    main()
