"""
state.py
Defines the game state dataclasses: the single in-progress GameState and one ExchangeRecord per fair exchange.
Related modules:
- engine.py: The only writer of GameState.
- fairness.py: Reveal objects stored in exchange records.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .dice import Dice
from .fairness import Reveal

DETERMINING_FIRST_MOVER = "DETERMINING_FIRST_MOVER"
SELECTING_DICE = "SELECTING_DICE"
THROWING = "THROWING"
FINISHED = "FINISHED"
PHASE_ORDER = (DETERMINING_FIRST_MOVER, SELECTING_DICE, THROWING, FINISHED)

HOST = "host"
USER = "user"
DRAW = "draw"


@dataclass
class ExchangeRecord:
    """
    Public trace of one commit-reveal exchange.
    Fields:
        purpose (str): "first_move", "host_throw" or "user_throw".
        range (int): Exclusive upper bound of the exchanged numbers.
        digest (str): Commitment published before the contribution.
        reveal (Reveal|None): Filled when the exchange is opened.
        verified (bool|None): Whether the reveal matches the digest.
    """
    purpose: str
    range: int
    digest: str
    reveal: Optional[Reveal] = None
    verified: Optional[bool] = None


@dataclass
class GameState:
    """
    State of one game. Phases only move forward through PHASE_ORDER.
    Fields:
        phase (str): Current phase.
        first_mover (str|None): HOST or USER once decided.
        comp_dice_index / user_dice_index (int|None): Slot of each party's dice in the dice set.
        comp_dice / user_dice (Dice|None): The dice owned by each party, assigned once.
        comp_throw / user_throw (int|None): Face thrown by each party, assigned once.
        winner (str|None): HOST, USER or DRAW when finished.
        aborted (bool): True if the user exited; no further transitions happen.
        exchanges (list[ExchangeRecord]): Every exchange run so far, in order.
    """
    phase: str = DETERMINING_FIRST_MOVER
    first_mover: Optional[str] = None
    comp_dice_index: Optional[int] = None
    user_dice_index: Optional[int] = None
    comp_dice: Optional[Dice] = None
    user_dice: Optional[Dice] = None
    comp_throw: Optional[int] = None
    user_throw: Optional[int] = None
    winner: Optional[str] = None
    aborted: bool = False
    exchanges: List[ExchangeRecord] = field(default_factory=list)
