"""
choices.py
Defines the prompt description handed to an input provider and the tagged results it returns:
Selected(index), HelpRequested or ExitRequested.
Related modules:
- engine.py: Issues prompts and acts on each result tag.
- agents/: Input providers that answer prompts.
"""

from dataclasses import dataclass, field
from typing import Tuple

HELP_TOKENS = ("?",)
EXIT_TOKENS = ("x", "X")


class InputValidationError(ValueError):
    """
    Raised for a selection that is not an integer in the allowed range.
    Recoverable: the same prompt is issued again.
    """
    pass


class Choice:
    """
    Base class for every answer to a prompt.
    """
    pass


@dataclass(frozen=True)
class Selected(Choice):
    """
    The counterparty picked an option.
    Args:
        index (int): Selected option, expected in [0, bound).
    """
    index: int


@dataclass(frozen=True)
class HelpRequested(Choice):
    """Show the probability table and ask again."""
    pass


@dataclass(frozen=True)
class ExitRequested(Choice):
    """Abandon the game at once."""
    pass


@dataclass(frozen=True)
class Prompt:
    """
    One suspension point of the game.
    Fields:
        kind (str): "guess", "dice" or "contribution".
        bound (int): Exclusive upper bound of a valid selection.
        options (tuple[str]): Label per option, index i labels selection i.
        message (str): Text shown before the options.
    """
    kind: str
    bound: int
    options: Tuple[str, ...] = field(default=())
    message: str = ""

    def __post_init__(self):
        if not self.options:
            object.__setattr__(self, "options", tuple(str(i) for i in range(self.bound)))


def validate_index(index: int, bound: int) -> int:
    """
    Check that a selection lies in [0, bound).
    Raises:
        InputValidationError: If it does not.
    """
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < bound:
        raise InputValidationError(f"selection must be an integer between 0 and {bound - 1}, got {index!r}")
    return index


def parse_selection(text: str, bound: int) -> Choice:
    """
    Turn a line typed by the user into a Choice.
    Args:
        text (str): Raw input.
        bound (int): Exclusive upper bound for numeric selections.
    Returns:
        Choice: HelpRequested for "?", ExitRequested for "x"/"X", otherwise Selected.
    Raises:
        InputValidationError: For non-integer or out of range input.
    """
    text = text.strip()
    if text in HELP_TOKENS:
        return HelpRequested()
    if text in EXIT_TOKENS:
        return ExitRequested()
    try:
        index = int(text)
    except ValueError:
        raise InputValidationError(f"not an integer: {text!r}") from None
    return Selected(validate_index(index, bound))
