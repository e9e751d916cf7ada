from abc import ABC, abstractmethod
from typing import Any

from ..core.choices import Choice, Prompt


class Agent(ABC):
    """
    Abstract base class for everything that answers prompts for the user side of the game.
    Agents must implement choose(prompt, view), returning Selected, HelpRequested or ExitRequested.
    """

    @abstractmethod
    def choose(self, prompt: Prompt, view: Any) -> Choice:
        """
        Answer one prompt.
        Args:
            prompt (Prompt): What is being asked and the valid bound.
            view (dict): Public game view from GameEngine.get_view().
        Returns:
            Choice: The answer.
        """
        raise NotImplementedError

