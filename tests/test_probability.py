import unittest
from nontransitive_dice.core.dice import Dice
from nontransitive_dice.core.probability import (
    beats,
    find_cycle,
    format_probability,
    pair_probability,
    table_rows,
    winning_probabilities,
)

A = Dice((2, 2, 4, 4, 9, 9))
B = Dice((1, 1, 6, 6, 8, 8))
C = Dice((3, 3, 5, 5, 7, 7))


class TestProbability(unittest.TestCase):
    """
    Tests for pairwise win probabilities: every ordered pair is present, values lie in [0, 1],
    ties count for neither side and the sample dice form a non-transitive cycle.
    """

    def test_every_ordered_pair(self):
        dice = [A, B, C, Dice((1, 2, 3, 4, 5, 6))]
        table = winning_probabilities(dice)
        expected = [(i, j) for i in range(4) for j in range(4) if i != j]
        self.assertEqual(list(table.keys()), expected)
        for p in table.values():
            self.assertGreaterEqual(p, 0.0)
            self.assertLessEqual(p, 1.0)

    def test_non_transitive_sample(self):
        table = winning_probabilities([A, B, C])
        self.assertGreater(table[(0, 1)], 0.5)
        self.assertGreater(table[(1, 2)], 0.5)
        self.assertGreater(table[(2, 0)], 0.5)
        self.assertEqual(format_probability(table[(0, 1)]), "0.56")
        self.assertEqual(find_cycle(table), (0, 1, 2, 0))

    def test_ties_count_for_neither_side(self):
        x = Dice((1, 2))
        y = Dice((2, 3))
        self.assertEqual(pair_probability(x, y), 0.0)
        self.assertEqual(pair_probability(y, x), 0.75)
        self.assertEqual(pair_probability(x, x), 0.25)
        self.assertLess(pair_probability(x, y) + pair_probability(y, x), 1.0)

    def test_transitive_set_has_no_cycle(self):
        dice = [Dice((1, 1)), Dice((2, 2)), Dice((3, 3))]
        table = winning_probabilities(dice)
        self.assertEqual(beats(table), [(1, 0), (2, 0), (2, 1)])
        self.assertIsNone(find_cycle(table))

    def test_table_rows(self):
        rows = table_rows([A, B, C], winning_probabilities([A, B, C]))
        self.assertEqual(len(rows), 6)
        self.assertEqual(rows[0], ("[2,2,4,4,9,9] vs [1,1,6,6,8,8]", "0.56"))


if __name__ == '__main__':
    unittest.main()
