import unittest
from nontransitive_dice.core.dice import Dice, parse_dice


class TestDice(unittest.TestCase):
    """
    Tests for the `Dice` value object: roll returns the face at the index, rejects indices
    outside [0, sides) and the faces cannot be changed after construction.
    """

    def test_roll_returns_face_at_index(self):
        d = Dice((2, 2, 4, 4, 9, 9))
        for i in range(d.sides):
            self.assertEqual(d.roll(i), d.values()[i])

    def test_roll_rejects_out_of_range(self):
        d = Dice((1, 2, 3))
        for bad in (-1, 3, 10):
            with self.assertRaises(IndexError):
                d.roll(bad)

    def test_faces_are_immutable(self):
        faces = [1, 2, 3]
        d = Dice(faces)
        faces.append(4)
        self.assertEqual(d.sides, 3)
        self.assertIsInstance(d.values(), tuple)
        with self.assertRaises(AttributeError):
            d.faces = (9, 9, 9)

    def test_parse_and_label(self):
        d = parse_dice("3,3,5,5,7,7")
        self.assertEqual(d.values(), (3, 3, 5, 5, 7, 7))
        self.assertEqual(d.label(), "[3,3,5,5,7,7]")
        self.assertEqual(parse_dice("-1,0").values(), (-1, 0))
        with self.assertRaises(ValueError):
            parse_dice("1,a,3")


if __name__ == '__main__':
    unittest.main()
