import unittest
from nontransitive_dice.core.choices import (
    ExitRequested,
    HelpRequested,
    InputValidationError,
    Prompt,
    Selected,
    parse_selection,
    validate_index,
)


class TestChoices(unittest.TestCase):
    """
    Tests for turning raw input into tagged choices and for selection bounds.
    """

    def test_help_and_exit_tokens(self):
        self.assertEqual(parse_selection("?", 2), HelpRequested())
        self.assertEqual(parse_selection("x", 2), ExitRequested())
        self.assertEqual(parse_selection(" X \n", 2), ExitRequested())

    def test_valid_selection(self):
        self.assertEqual(parse_selection("1", 2), Selected(1))
        self.assertEqual(parse_selection(" 0 ", 6), Selected(0))

    def test_out_of_range_selection(self):
        with self.assertRaises(InputValidationError):
            parse_selection("9", 2)
        with self.assertRaises(InputValidationError):
            parse_selection("-1", 2)

    def test_unparsable_selection(self):
        for text in ("", "abc", "1.5", "help"):
            with self.assertRaises(InputValidationError):
                parse_selection(text, 3)

    def test_validate_index(self):
        self.assertEqual(validate_index(2, 3), 2)
        for bad in (3, -1, True, "1"):
            with self.assertRaises(InputValidationError):
                validate_index(bad, 3)

    def test_prompt_default_options(self):
        p = Prompt("contribution", 3)
        self.assertEqual(p.options, ("0", "1", "2"))
        self.assertEqual(Prompt("dice", 2, options=("[1,2]", "[3,4]")).options, ("[1,2]", "[3,4]"))


if __name__ == '__main__':
    unittest.main()
