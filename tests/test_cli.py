import io
import unittest
from contextlib import redirect_stderr

from UI.cli import ConsoleAgent, ConsoleSink, main, play, render_table
from nontransitive_dice.core.choices import InputValidationError, Prompt, Selected
from nontransitive_dice.core.config import GameConfig


class TestCli(unittest.TestCase):
    """
    Tests for the console input provider and output sink.
    """

    def test_console_agent_lists_options_and_parses(self):
        out = []
        agent = ConsoleAgent(read=lambda _: "1", write=out.append)
        choice = agent.choose(Prompt("dice", 2, options=("[1,2]", "[3,4]"), message="Choose your dice."), {})
        self.assertEqual(choice, Selected(1))
        self.assertEqual(out, ["Choose your dice.", "0 - [1,2]", "1 - [3,4]", "X - exit\n? - help"])

    def test_console_agent_rejects_out_of_range(self):
        agent = ConsoleAgent(read=lambda _: "9", write=lambda *_: None)
        with self.assertRaises(InputValidationError):
            agent.choose(Prompt("guess", 2), {})

    def test_render_table(self):
        lines = render_table([("[1,2] vs [3,4]", "0.00"), ("[3,4] vs [1,2]", "1.00")])
        self.assertEqual(lines[2], "| A pair of dices | Probability |")
        self.assertEqual(lines[4], "| [1,2] vs [3,4]  | 0.00        |")
        self.assertTrue(all(len(line) == len(lines[1]) for line in lines[1:]))

    def test_console_game_transcript(self):
        answers = iter(["9", "?", "0", "0", "0", "0"])
        out = []
        cfg = GameConfig.from_args(["2,2,4,4,9,9", "1,1,6,6,8,8", "3,3,5,5,7,7"], rng_seed=1)
        winner = play(cfg, ConsoleAgent(read=lambda _: next(answers), write=out.append), ConsoleSink(write=out.append))
        text = "\n".join(out)
        self.assertIn(winner, ("host", "user", "draw"))
        self.assertIn("Invalid input. Please try again.", text)
        self.assertIn("Probabilities of winning for each pair of dice:", text)
        self.assertIn("(HMAC = ", text)
        self.assertIn("(KEY = ", text)
        self.assertIn("Verification of every random value:", text)
        self.assertNotIn("MISMATCH", text)

    def test_main_rejects_two_dice(self):
        err = io.StringIO()
        with redirect_stderr(err):
            code = main(["1,2,3", "4,5,6"])
        self.assertEqual(code, 2)
        self.assertIn("minimum number of dices is 3", err.getvalue())


if __name__ == '__main__':
    unittest.main()
