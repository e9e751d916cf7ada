import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from nontransitive_dice.core.config import ConfigurationError, GameConfig
from nontransitive_dice.core.engine import GameEngine
from nontransitive_dice.core.choices import parse_selection
from nontransitive_dice.core.events import EventSink, GameEvent
from nontransitive_dice.core.state import HOST, USER
from nontransitive_dice.agents.base import Agent


class ConsoleAgent(Agent):
    """
    Reads the user's answers from the terminal.
    Lists every option, plus exit and help, then parses one line of input.
    Unparsable or out of range input raises InputValidationError, which the engine handles.
    """
    def __init__(self, read=input, write=print):
        self.read = read
        self.write = write

    def choose(self, prompt, view):
        if prompt.message:
            self.write(prompt.message)
        for i, label in enumerate(prompt.options):
            self.write(f"{i} - {label}")
        self.write("X - exit\n? - help")
        return parse_selection(self.read("Your selection: "), prompt.bound)


def render_table(rows: Sequence[Tuple[str, str]]) -> List[str]:
    """
    Render probability rows ("[a] vs [b]", "0.56") as an ASCII table.
    Args:
        rows: Pair label and formatted probability per ordered pair.
    Returns:
        list[str]: Table lines.
    """
    head = ("A pair of dices", "Probability")
    left = max([len(head[0])] + [len(pair) for pair, _ in rows])
    right = max([len(head[1])] + [len(p) for _, p in rows])
    border = f"+-{'-' * left}-+-{'-' * right}-+"
    lines = ["Probabilities of winning for each pair of dice:", border,
             f"| {head[0].ljust(left)} | {head[1].ljust(right)} |", border]
    for pair, p in rows:
        lines.append(f"| {pair.ljust(left)} | {p.ljust(right)} |")
    lines.append(border)
    return lines


class ConsoleSink(EventSink):
    """
    Prints engine events the way the game talks to the user.
    """
    def __init__(self, write=print):
        self.write = write

    def record(self, event: GameEvent) -> None:
        handler = getattr(self, f"_on_{event.event_type}", None)
        if handler is not None:
            handler(event.payload)

    def _on_FirstMoveCommitted(self, p):
        self.write("Let's determine who makes the first move.")
        self.write(f"I selected a random value in the range 0..{p['range'] - 1}")
        self.write(f"(HMAC = {p['hmac']})")

    def _on_FirstMoveRevealed(self, p):
        self.write(f"My selection: {p['number']}")
        self.write(f"(KEY = {p['key']})")

    def _on_FirstMoverDecided(self, p):
        if p["first_mover"] == USER:
            self.write("You make the first move.")
        else:
            self.write("I make the first move.")

    def _on_DiceChosen(self, p):
        if p["owner"] == HOST:
            self.write(f"I choose the {p['dice']} dice.")
        else:
            self.write(f"You choose the {p['dice']} dice.")

    def _on_ThrowCommitted(self, p):
        if p["owner"] == HOST:
            self.write("It's time for my throw.")
        else:
            self.write("It's time for your throw.")
        self.write(f"I selected a random value in the range 0..{p['range'] - 1}.")
        self.write(f"(HMAC = {p['hmac']})")

    def _on_ThrowRevealed(self, p):
        self.write(f"My number is {p['number']}")
        self.write(f"(KEY = {p['key']})")
        self.write(f"The result is {p['number']} + {p['contribution']} = {p['result']} (mod {p['range']}).")
        whose = "My" if p["owner"] == HOST else "Your"
        self.write(f"{whose} throw is {p['value']}.")

    def _on_GameFinished(self, p):
        user, comp = p["user_throw"], p["comp_throw"]
        if p["winner"] == USER:
            self.write(f"You win ({user} > {comp})")
        elif p["winner"] == HOST:
            self.write(f"I win ({user} < {comp})")
        else:
            self.write(f"It's a draw ({user} = {comp})")
        self.write("\nVerification of every random value:")
        for record in p["exchanges"]:
            r = record.reveal
            status = "ok" if record.verified else "MISMATCH"
            self.write(f"  {record.purpose}: HMAC={record.digest} number={r.host_number} "
                       f"key={r.key_hex} yours={r.user_number} result={r.result} [{status}]")

    def _on_ProbabilityTable(self, p):
        self.write("")
        for line in render_table(p["rows"]):
            self.write(line)

    def _on_InvalidInput(self, p):
        self.write("Invalid input. Please try again.")

    def _on_GameAborted(self, p):
        self.write("Goodbye")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Non-transitive dice game with provably fair throws",
        epilog="example: python -m UI.cli 2,2,4,4,9,9 1,1,6,6,8,8 3,3,5,5,7,7 (put -- before dice with negative faces)",
    )
    parser.add_argument("dice", nargs="*", help="One comma separated list of face values per dice")
    parser.add_argument("--seed", type=int, default=None, help="Seed the host's random choices (testing only)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def play(config: GameConfig, agent: Optional[Agent] = None, sink: Optional[EventSink] = None) -> Optional[str]:
    """
    Play one game in the terminal.
    Returns:
        str|None: Winner, or None if the user exited.
    """
    engine = GameEngine(config, agent or ConsoleAgent(), sink or ConsoleSink())
    return engine.play()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        config = GameConfig.from_args(args.dice, rng_seed=args.seed)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        return 2
    try:
        play(config)
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye")
    return 0


if __name__ == "__main__":
    sys.exit(main())
