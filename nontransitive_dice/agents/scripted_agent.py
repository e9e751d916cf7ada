from typing import Iterable, List, Union

from .base import Agent
from ..core.choices import Choice, ExitRequested, HelpRequested, Selected
from . import register_agent


@register_agent("scripted")
class ScriptedAgent(Agent):
    """
    Replays a fixed list of answers, one per prompt. Integers become Selected, "?" asks for
    help and "x" exits. Used by tests and demos in place of the console.
    """
    def __init__(self, answers: Iterable[Union[int, str, Choice]] = ()):
        self._answers: List[Choice] = [self._to_choice(a) for a in answers]
        self.prompts = []

    @staticmethod
    def _to_choice(answer) -> Choice:
        if isinstance(answer, Choice):
            return answer
        if answer == "?":
            return HelpRequested()
        if answer in ("x", "X"):
            return ExitRequested()
        return Selected(answer)

    def choose(self, prompt, view):
        self.prompts.append(prompt)
        if not self._answers:
            raise RuntimeError(f"no scripted answer left for {prompt.kind} prompt")
        return self._answers.pop(0)

    @property
    def exhausted(self) -> bool:
        return not self._answers
