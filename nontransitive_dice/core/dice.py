"""
dice.py
Defines the Dice value object used throughout the game: an immutable, ordered list of face values.
Related modules:
- config.py: Parses dice specifications into Dice instances.
- probability.py: Compares face values of dice pairs.
- engine.py: Rolls the dice with an index produced by a fair exchange.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Dice:
    """
    A custom dice described by its face values. Never mutated after construction.
    Args:
        faces (tuple[int]): Face values in order; index i is the face rolled by roll(i).
    """
    faces: Tuple[int, ...]

    def __post_init__(self):
        # accept any sequence but always store a tuple
        object.__setattr__(self, "faces", tuple(self.faces))

    def roll(self, index: int) -> int:
        """
        Return the face value at the given index.
        Args:
            index (int): Face index in [0, sides).
        Returns:
            int: The face value.
        Raises:
            IndexError: If index is outside [0, sides).
        """
        if not 0 <= index < len(self.faces):
            raise IndexError(f"face index {index} out of range 0..{len(self.faces) - 1}")
        return self.faces[index]

    @property
    def sides(self) -> int:
        return len(self.faces)

    def values(self) -> Tuple[int, ...]:
        """Read-only view of the face values."""
        return self.faces

    def label(self) -> str:
        return "[" + ",".join(str(v) for v in self.faces) + "]"

    def __str__(self):
        return self.label()


def parse_dice(token: str) -> Dice:
    """
    Parse a comma separated dice specification such as "2,2,4,4,9,9".
    Raises:
        ValueError: If any face is not an integer.
    """
    return Dice(tuple(int(part) for part in token.split(",")))
