import random

from .base import Agent
from ..core.choices import Selected
from ..core.probability import pair_probability
from . import register_agent


@register_agent("random")
class RandomAgent(Agent):
    """
    Answers every prompt with a uniformly random valid selection. Used for simulations.
    """
    def __init__(self, rng=None):
        """
        Args:
            rng: Optional random number generator.
        """
        self.rng = rng or random.Random()

    def choose(self, prompt, view):
        return Selected(self.rng.randrange(prompt.bound))


@register_agent("counter")
class CounterPickAgent(RandomAgent):
    """
    Plays random numbers but, when the host has already chosen, picks the offered dice with the
    best chance of beating it. Shows the advantage of moving second with non-transitive dice.
    """
    def choose(self, prompt, view):
        comp_index = view.get("comp_dice_index")
        if prompt.kind != "dice" or comp_index is None:
            return super().choose(prompt, view)
        comp_dice = view["dice"][comp_index]
        offered = [d for i, d in enumerate(view["dice"]) if i != comp_index]
        best = max(range(len(offered)), key=lambda i: pair_probability(offered[i], comp_dice))
        return Selected(best)
