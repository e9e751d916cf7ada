"""
engine.py
Implements the GameEngine class, the turn-taking state machine of the non-transitive dice game:
first-mover exchange, dice selection, one throw per party and the verdict.
Related modules:
- config.py: GameConfig is used to configure the engine.
- state.py: GameState and ExchangeRecord hold all game data.
- fairness.py: FairExchange produces every contested random value.
- choices.py: Prompts issued to the agent and the tagged answers.
- events.py: Output sink receiving GameEvent objects.
"""

import logging
from typing import Dict, List, Optional

from .choices import (
    ExitRequested,
    HelpRequested,
    InputValidationError,
    Prompt,
    Selected,
    validate_index,
)
from .config import GameConfig
from .dice import Dice
from .events import EventSink, GameEvent, InMemoryRecorder
from .fairness import FairExchange, host_value, modular_sum
from .probability import table_rows, winning_probabilities
from .state import (
    DETERMINING_FIRST_MOVER,
    DRAW,
    FINISHED,
    HOST,
    PHASE_ORDER,
    SELECTING_DICE,
    THROWING,
    USER,
    ExchangeRecord,
    GameState,
)

logger = logging.getLogger(__name__)


class IllegalMoveError(RuntimeError):
    """
    Raised when the engine is driven out of order (wrong phase, game aborted, value assigned twice).
    """
    pass


class GameEngine:
    """
    Main state machine for the dice game. Asks the injected agent for every user decision
    and reports everything that happens to the injected sink.
    """
    def __init__(self, config: GameConfig, agent, sink: Optional[EventSink] = None, rng=None):
        """
        Args:
            config (GameConfig): Validated game configuration.
            agent: Input provider answering prompts (see agents.base.Agent).
            sink (EventSink|None): Output sink; defaults to an InMemoryRecorder.
            rng: Random source with randrange(); defaults to config.make_rng().
        """
        self.config = config
        self.dice = config.dice
        self.agent = agent
        self.sink = sink if sink is not None else InMemoryRecorder()
        self.rng = rng if rng is not None else config.make_rng()
        self.state = GameState()
        self._events: List[GameEvent] = []
        self.turn_log: List[Dict] = []
        self._probabilities = None
        self._snapshot()

    def _emit(self, event_type: str, **payload) -> None:
        event = GameEvent(event_type, payload)
        self._events.append(event)
        self.sink.record(event)

    def pop_events(self) -> List[GameEvent]:
        """
        Return and clear all emitted events since last call.
        """
        ev = list(self._events)
        self._events.clear()
        return ev

    def get_events(self) -> List[GameEvent]:
        """
        Return all events emitted so far (does not clear).
        """
        return list(self._events)

    def _snapshot(self) -> Dict:
        """
        Internal: Record the public state after each phase.
        """
        s = self.state
        snap = {
            "phase": s.phase,
            "first_mover": s.first_mover,
            "comp_dice": None if s.comp_dice is None else list(s.comp_dice.values()),
            "user_dice": None if s.user_dice is None else list(s.user_dice.values()),
            "comp_throw": s.comp_throw,
            "user_throw": s.user_throw,
            "winner": s.winner,
            "exchanges": len(s.exchanges),
        }
        self.turn_log.append(snap)
        return snap

    def _require(self, phase: str) -> None:
        if self.state.aborted:
            raise IllegalMoveError("Game was aborted")
        if self.state.phase != phase:
            raise IllegalMoveError(f"Expected phase {phase}, game is in {self.state.phase}")

    def _advance(self, phase: str) -> None:
        current = PHASE_ORDER.index(self.state.phase)
        if PHASE_ORDER.index(phase) != current + 1:
            raise IllegalMoveError(f"Cannot move from {self.state.phase} to {phase}")
        logger.debug("phase %s -> %s", self.state.phase, phase)
        self.state.phase = phase
        self._snapshot()

    def get_view(self) -> Dict:
        """
        Public view of the game handed to the agent with every prompt.
        """
        s = self.state
        return {
            "phase": s.phase,
            "dice": self.dice,
            "first_mover": s.first_mover,
            "comp_dice_index": s.comp_dice_index,
            "comp_dice": s.comp_dice,
            "user_dice": s.user_dice,
            "comp_throw": s.comp_throw,
        }

    def probabilities(self):
        """Win probability per ordered pair of dice indices, computed once per game."""
        if self._probabilities is None:
            self._probabilities = winning_probabilities(self.dice)
        return self._probabilities

    def show_help(self) -> None:
        """Read-only side query: emit the probability table without touching the state."""
        table = self.probabilities()
        self._emit("ProbabilityTable", table=dict(table), rows=table_rows(self.dice, table))

    def _ask(self, prompt: Prompt) -> Optional[int]:
        """
        Issue a prompt until the agent gives a valid selection.
        Returns:
            int|None: The selection, or None if the agent asked to exit.
        """
        while True:
            try:
                choice = self.agent.choose(prompt, self.get_view())
                if isinstance(choice, Selected):
                    return validate_index(choice.index, prompt.bound)
            except InputValidationError as e:
                self._emit("InvalidInput", kind=prompt.kind, error=str(e))
                continue
            if isinstance(choice, HelpRequested):
                self.show_help()
            elif isinstance(choice, ExitRequested):
                self._abort(prompt)
                return None
            else:
                raise TypeError(f"agent returned {choice!r}, expected a Choice")

    def _abort(self, prompt: Prompt) -> None:
        logger.info("user exited during %s (%s prompt)", self.state.phase, prompt.kind)
        self.state.aborted = True
        self._emit("GameAborted", phase=self.state.phase)

    def _open_exchange(self, purpose: str, range_: int, combine=modular_sum):
        exchange = FairExchange.commit(range_, rng=self.rng, key_bytes=self.config.key_bytes, combine=combine)
        record = ExchangeRecord(purpose=purpose, range=range_, digest=exchange.digest)
        self.state.exchanges.append(record)
        return exchange, record

    def _close_exchange(self, exchange: FairExchange, record: ExchangeRecord, user_number: int):
        exchange.contribute(user_number)
        reveal = exchange.reveal()
        record.reveal = reveal
        record.verified = reveal.verify(record.digest)
        if not record.verified:
            logger.warning("commitment mismatch on %s exchange", record.purpose)
        return reveal

    def determine_first_mover(self) -> Optional[str]:
        """
        Coin toss by commit-reveal: the user guesses the host's hidden bit and moves first on a hit.
        Returns:
            str|None: HOST or USER, or None if the user exited.
        """
        self._require(DETERMINING_FIRST_MOVER)
        exchange, record = self._open_exchange("first_move", 2, combine=host_value)
        self._emit("FirstMoveCommitted", range=2, hmac=record.digest)
        guess = self._ask(Prompt("guess", 2, message="Try to guess my selection."))
        if guess is None:
            return None
        reveal = self._close_exchange(exchange, record, guess)
        self._emit("FirstMoveRevealed", number=reveal.host_number, key=reveal.key_hex,
                   guess=guess, verified=record.verified)
        self.state.first_mover = USER if guess == reveal.result else HOST
        self._emit("FirstMoverDecided", first_mover=self.state.first_mover)
        self._advance(SELECTING_DICE)
        return self.state.first_mover

    def _assign(self, owner: str, index: int) -> Dice:
        s = self.state
        if owner == HOST:
            if s.comp_dice is not None:
                raise IllegalMoveError("Host dice already assigned")
            s.comp_dice_index, s.comp_dice = index, self.dice[index]
            dice = s.comp_dice
        else:
            if s.user_dice is not None:
                raise IllegalMoveError("User dice already assigned")
            s.user_dice_index, s.user_dice = index, self.dice[index]
            dice = s.user_dice
        self._emit("DiceChosen", owner=owner, index=index, dice=dice)
        return dice

    def _dice_prompt(self, indices: List[int]) -> Prompt:
        return Prompt("dice", len(indices), options=tuple(self.dice[i].label() for i in indices),
                      message="Choose your dice.")

    def select_dice(self) -> bool:
        """
        Assign one dice to each party. The host's pick is its own private draw from the
        dice still available; the user picks by index from what is offered.
        Returns:
            bool: False if the user exited.
        """
        self._require(SELECTING_DICE)
        remaining = list(range(len(self.dice)))
        if self.state.first_mover == HOST:
            self._assign(HOST, remaining.pop(self.rng.randrange(len(remaining))))
            pick = self._ask(self._dice_prompt(remaining))
            if pick is None:
                return False
            self._assign(USER, remaining[pick])
        else:
            pick = self._ask(self._dice_prompt(remaining))
            if pick is None:
                return False
            self._assign(USER, remaining.pop(pick))
            self._assign(HOST, remaining[self.rng.randrange(len(remaining))])
        self._advance(THROWING)
        return True

    def _throw(self, owner: str, dice: Dice) -> Optional[int]:
        purpose = f"{owner}_throw"
        exchange, record = self._open_exchange(purpose, dice.sides)
        self._emit("ThrowCommitted", owner=owner, range=dice.sides, hmac=record.digest)
        contribution = self._ask(Prompt("contribution", dice.sides,
                                        message=f"Add your number modulo {dice.sides}."))
        if contribution is None:
            return None
        reveal = self._close_exchange(exchange, record, contribution)
        value = dice.roll(reveal.result)
        self._emit("ThrowRevealed", owner=owner, number=reveal.host_number, key=reveal.key_hex,
                   contribution=contribution, result=reveal.result, range=dice.sides,
                   value=value, verified=record.verified)
        return value

    def throw(self) -> bool:
        """
        Host throws first, then the user, each through its own exchange.
        Returns:
            bool: False if the user exited.
        """
        self._require(THROWING)
        s = self.state
        if s.comp_throw is not None or s.user_throw is not None:
            raise IllegalMoveError("Throws already made")
        comp_throw = self._throw(HOST, s.comp_dice)
        if comp_throw is None:
            return False
        s.comp_throw = comp_throw
        user_throw = self._throw(USER, s.user_dice)
        if user_throw is None:
            return False
        s.user_throw = user_throw
        s.winner = self._verdict(s.user_throw, s.comp_throw)
        self._advance(FINISHED)
        self._emit("GameFinished", winner=s.winner, user_throw=s.user_throw, comp_throw=s.comp_throw,
                   exchanges=list(s.exchanges))
        return True

    @staticmethod
    def _verdict(user_throw: int, comp_throw: int) -> str:
        if user_throw > comp_throw:
            return USER
        if user_throw < comp_throw:
            return HOST
        return DRAW

    def is_terminal(self) -> bool:
        """
        Returns True once the game is finished or was aborted.
        """
        return self.state.phase == FINISHED or self.state.aborted

    def play(self) -> Optional[str]:
        """
        Run the whole game.
        Returns:
            str|None: The winner (HOST, USER or DRAW), or None if the user exited.
        """
        if self.determine_first_mover() is None:
            return None
        if not self.select_dice():
            return None
        if not self.throw():
            return None
        return self.state.winner
