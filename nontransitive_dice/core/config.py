"""
config.py
Defines the GameConfig dataclass, which holds the dice set and the randomness options for a game,
and the startup parsing/validation of the dice specification.
Related modules:
- dice.py: Dice instances held by the config.
- engine.py: Uses GameConfig to initialize the game and its random source.
"""

import random
import secrets
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .dice import Dice, parse_dice

MIN_DICE = 3
MIN_SIDES = 2
MIN_KEY_BYTES = 16
EXAMPLE_DICE = "1,2,3,4,5,6 1,2,3,4,5,6 1,2,3,4,5,6"


class ConfigurationError(ValueError):
    """
    Raised when the dice specification given at startup breaks one of the game rules.
    Unrecoverable: the game is never started.
    """
    pass


@dataclass(frozen=True)
class GameConfig:
    """
    Game setup, validated on construction.
    Fields:
        dice (tuple[Dice]): The dice set, at least 3 dice with the same number of sides.
        key_bytes (int): Length of the secret key drawn for every fair exchange.
        rng_seed (int|None): Seed for reproducible games. None (the default) uses the
            operating system's cryptographically secure source.
    """
    dice: Tuple[Dice, ...]
    key_bytes: int = 32
    rng_seed: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "dice", tuple(self.dice))
        if len(self.dice) < MIN_DICE:
            raise ConfigurationError(f"The minimum number of dices is {MIN_DICE}, for example: {EXAMPLE_DICE}")
        for dice in self.dice:
            if dice.sides < MIN_SIDES:
                raise ConfigurationError(f"Each dice must have at least {MIN_SIDES} values, for example: 1,2.")
        if len({dice.sides for dice in self.dice}) != 1:
            raise ConfigurationError("All dices must have the same number of elements, for example: 1,2,3 1,2,3 1,2,3")
        if self.key_bytes < MIN_KEY_BYTES:
            raise ConfigurationError(f"key_bytes must be at least {MIN_KEY_BYTES}")

    @property
    def sides(self) -> int:
        return self.dice[0].sides

    def make_rng(self) -> random.Random:
        """
        Build the random source for a game. Seeded generators are for tests and simulations only.
        """
        if self.rng_seed is None:
            return secrets.SystemRandom()
        return random.Random(self.rng_seed)

    @classmethod
    def from_args(cls, args: Sequence[str], **kwargs) -> "GameConfig":
        """
        Parse command line dice specifications ("2,2,4,4,9,9" per dice) into a validated config.
        Args:
            args: One string per dice.
            **kwargs: Extra GameConfig fields (key_bytes, rng_seed).
        Raises:
            ConfigurationError: If the specification is invalid.
        """
        if len(args) < MIN_DICE:
            raise ConfigurationError(f"The minimum number of dices is {MIN_DICE}, for example: {EXAMPLE_DICE}")
        dice = []
        for token in args:
            try:
                dice.append(parse_dice(token))
            except ValueError:
                raise ConfigurationError(f"All dice values must be integers, for example: 1,2,3,4,5,6. Got: {token!r}") from None
        return cls(dice=tuple(dice), **kwargs)
