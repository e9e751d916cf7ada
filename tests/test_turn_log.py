import unittest
from nontransitive_dice.core.config import GameConfig
from nontransitive_dice.core.engine import GameEngine
from nontransitive_dice.core.state import PHASE_ORDER
from nontransitive_dice.agents.scripted_agent import ScriptedAgent


class TestTurnLog(unittest.TestCase):
    """
    Tests for the per-phase `turn_log` snapshots recorded by `GameEngine`.
    These tests verify:
      - An initial snapshot is recorded when the engine is created.
      - One snapshot is appended per phase transition, in forward order only.
      - The final snapshot reflects both throws and the verdict.
    """

    def setUp(self):
        cfg = GameConfig.from_args(["2,2,4,4,9,9", "1,1,6,6,8,8", "3,3,5,5,7,7"], rng_seed=5)
        self.engine = GameEngine(cfg, ScriptedAgent([0, 0, 1, 2]))

    def test_initial_snapshot(self):
        self.assertEqual(len(self.engine.turn_log), 1)
        initial = self.engine.turn_log[0]
        self.assertEqual(initial['phase'], PHASE_ORDER[0])
        self.assertIsNone(initial['comp_dice'])
        self.assertEqual(initial['exchanges'], 0)

    def test_snapshots_follow_phase_order(self):
        self.engine.play()
        phases = [snap['phase'] for snap in self.engine.turn_log]
        self.assertEqual(tuple(phases), PHASE_ORDER)
        last = self.engine.turn_log[-1]
        self.assertEqual(last['exchanges'], 3)
        self.assertIsNotNone(last['comp_throw'])
        self.assertIsNotNone(last['user_throw'])
        self.assertEqual(last['winner'], self.engine.state.winner)

    def test_pop_events_clears(self):
        self.engine.play()
        events = self.engine.pop_events()
        self.assertEqual(events[0].event_type, 'FirstMoveCommitted')
        self.assertEqual(events[-1].event_type, 'GameFinished')
        self.assertEqual(self.engine.get_events(), [])


if __name__ == '__main__':
    unittest.main()
