"""
probability.py
Computes pairwise win probabilities for a dice set, shown to the user on request (help).
Ties count for neither side, so p(A, B) + p(B, A) may be less than 1.
Related modules:
- dice.py: Dice faces being compared.
- engine.py: Emits the table when the user asks for help.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .dice import Dice

Pair = Tuple[int, int]


def pair_probability(dice_a: Dice, dice_b: Dice) -> float:
    """
    Probability that a throw of dice_a is strictly greater than a throw of dice_b.
    """
    wins = sum(1 for a in dice_a.values() for b in dice_b.values() if a > b)
    return wins / (dice_a.sides * dice_b.sides)


def winning_probabilities(dice: Sequence[Dice]) -> Dict[Pair, float]:
    """
    Win probability for every ordered pair of distinct dice.
    Args:
        dice: The dice set.
    Returns:
        dict: {(index_a, index_b): p(a beats b)}, iterated in row-major order.
    """
    table = {}
    for i, dice_a in enumerate(dice):
        for j, dice_b in enumerate(dice):
            if i != j:
                table[(i, j)] = pair_probability(dice_a, dice_b)
    return table


def format_probability(p: float) -> str:
    return f"{p:.2f}"


def table_rows(dice: Sequence[Dice], table: Dict[Pair, float]) -> List[Tuple[str, str]]:
    """Display rows ("[a] vs [b]", "0.56") for a probability table."""
    return [(f"{dice[i].label()} vs {dice[j].label()}", format_probability(p)) for (i, j), p in table.items()]


def beats(table: Dict[Pair, float]) -> List[Pair]:
    """Ordered pairs (a, b) where a wins more than half of the throws against b."""
    return [pair for pair, p in table.items() if p > 0.5]


def find_cycle(table: Dict[Pair, float]) -> Optional[Tuple[int, ...]]:
    """
    Find a cycle in the "beats" relation, the witness that the set is non-transitive.
    Returns:
        tuple|None: Dice indices (a, b, ..., a) or None when the relation is acyclic.
    """
    graph: Dict[int, List[int]] = {}
    for a, b in beats(table):
        graph.setdefault(a, []).append(b)

    # iterative dfs with the path kept on the stack
    for start in sorted(graph):
        stack = [(start, (start,))]
        while stack:
            node, path = stack.pop()
            for nxt in graph.get(node, []):
                if nxt == start:
                    return path + (start,)
                if nxt not in path and nxt > start:
                    stack.append((nxt, path + (nxt,)))
    return None
