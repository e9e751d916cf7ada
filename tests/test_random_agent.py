import random
import unittest
from nontransitive_dice.agents import AGENT_MAP, make_agent, simulatable_agents
from nontransitive_dice.agents.random_agent import CounterPickAgent, RandomAgent
from nontransitive_dice.agents.scripted_agent import ScriptedAgent
from nontransitive_dice.core.choices import ExitRequested, HelpRequested, Prompt, Selected
from nontransitive_dice.core.config import GameConfig
from nontransitive_dice.core.engine import GameEngine
from nontransitive_dice.core.state import HOST

SAMPLE = ["2,2,4,4,9,9", "1,1,6,6,8,8", "3,3,5,5,7,7"]


class TestAgents(unittest.TestCase):
    """
    Tests for the registered agents:
      - the registry exposes every agent module,
      - the random agent always answers inside the prompt bound,
      - the counter-pick agent takes the offered dice that beats the host's dice,
      - the scripted agent replays answers and refuses to invent new ones.
    """

    def test_registry(self):
        for name in ("random", "counter", "scripted"):
            self.assertIn(name, AGENT_MAP)

    def test_make_agent(self):
        self.assertEqual(simulatable_agents(), ["counter", "random"])
        self.assertIsInstance(make_agent("counter", rng=random.Random(0)), CounterPickAgent)
        for bad in ("scripted", "nash"):
            with self.assertRaises(ValueError):
                make_agent(bad)

    def test_random_agent_stays_in_bounds(self):
        agent = RandomAgent(rng=random.Random(1))
        prompt = Prompt("contribution", 6)
        for _ in range(200):
            choice = agent.choose(prompt, {})
            self.assertIsInstance(choice, Selected)
            self.assertTrue(0 <= choice.index < 6)

    def test_counter_agent_beats_host_dice(self):
        for seed in range(20):
            cfg = GameConfig.from_args(SAMPLE, rng_seed=seed)
            engine = GameEngine(cfg, CounterPickAgent(rng=random.Random(seed)))
            engine.play()
            s = engine.state
            if s.first_mover == HOST:
                # each sample dice is beaten by exactly one other: the one before it in the cycle
                self.assertEqual(s.user_dice_index, (s.comp_dice_index - 1) % 3)

    def test_scripted_agent(self):
        agent = ScriptedAgent([1, "?", "x"])
        prompt = Prompt("guess", 2)
        self.assertEqual(agent.choose(prompt, {}), Selected(1))
        self.assertEqual(agent.choose(prompt, {}), HelpRequested())
        self.assertEqual(agent.choose(prompt, {}), ExitRequested())
        self.assertTrue(agent.exhausted)
        with self.assertRaises(RuntimeError):
            agent.choose(prompt, {})


if __name__ == '__main__':
    unittest.main()
