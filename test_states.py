import unittest

import states
from carousel import ChoiceCarousel
from config import Config
from dialer import DialerController
from states import CallState, ConfirmState, InputState, StateTag, WaitState
from utils import Movement


class FakeSound:
    def __init__(self):
        self.played = []
        self.stopped = []

    def play(self, cue):
        self.played.append(cue)

    def stop(self, cue):
        self.stopped.append(cue)


class StateTestCase(unittest.TestCase):
    def setUp(self):
        self.config = Config()
        self.sound = FakeSound()
        self.dialer = DialerController(self.config, sound=self.sound)


class TestWaitState(StateTestCase):
    def alternate(self, count, spacing):
        """Feed ``count`` alternating movements with ``spacing`` ticks after each."""
        state = self.dialer.state
        for i in range(count):
            movement = Movement.LEFT if i % 2 == 0 else Movement.RIGHT
            states.wait_movement(state, self.dialer, movement)
            if self.dialer.state is not state:
                return
            for _ in range(spacing):
                states.wait_tick(state)

    def test_enter_clears_input(self):
        self.dialer.input = "123"
        self.dialer.set_state(WaitState())
        self.assertEqual(self.dialer.input, "")
        self.assertEqual(len(self.dialer.carousel), 0)

    def test_four_quick_alternations_start_input(self):
        self.alternate(4, spacing=2)

        self.assertEqual(self.dialer.state.tag, StateTag.INPUT)
        self.assertEqual(self.sound.played, ["select"])

    def test_three_alternations_are_not_enough(self):
        self.alternate(3, spacing=0)

        self.assertEqual(self.dialer.state.tag, StateTag.WAIT)
        self.assertAlmostEqual(self.dialer.state.points, 3 * self.config.wait_reward)

    def test_slow_alternations_never_start(self):
        self.alternate(20, spacing=40)

        self.assertEqual(self.dialer.state.tag, StateTag.WAIT)
        self.assertEqual(self.sound.played, [])

    def test_same_direction_scores_once(self):
        state = self.dialer.state
        for _ in range(10):
            states.wait_movement(state, self.dialer, Movement.RIGHT)

        self.assertEqual(state.points, self.config.wait_reward)
        self.assertEqual(state.prev_movement, Movement.RIGHT)

    def test_center_is_ignored(self):
        state = self.dialer.state
        states.wait_movement(state, self.dialer, Movement.LEFT)
        states.wait_movement(state, self.dialer, Movement.CENTER)

        self.assertEqual(state.prev_movement, Movement.LEFT)

    def test_score_decays_to_zero(self):
        state = self.dialer.state
        states.wait_movement(state, self.dialer, Movement.LEFT)
        for _ in range(100):
            states.wait_tick(state)

        self.assertEqual(state.points, 0)


class TestInputState(StateTestCase):
    def setUp(self):
        super().setUp()
        self.dialer.set_state(InputState())

    def select(self, label):
        self.dialer.carousel.index = self.dialer.carousel.choices.index(label)
        states.commit_input(self.dialer.state, self.dialer)

    def test_enter_populates_choices(self):
        self.assertEqual(self.dialer.carousel.choices, states.INPUT_CHOICES)
        self.assertEqual(self.dialer.carousel.current(), "0")

    def test_digits_and_delete(self):
        self.select("4")
        self.select("2")
        self.assertEqual(self.dialer.input, "42")

        self.select("Del")
        self.assertEqual(self.dialer.input, "4")
        self.assertEqual(self.sound.played, ["select"] * 3)

    def test_delete_on_empty_input(self):
        self.select("Del")
        self.assertEqual(self.dialer.input, "")
        self.assertEqual(self.dialer.state.tag, StateTag.INPUT)

    def test_call_goes_to_confirm(self):
        self.select("5")
        self.select("Call")

        self.assertEqual(self.dialer.state.tag, StateTag.CONFIRM)
        self.assertEqual(self.dialer.input, "5")

    def test_unknown_choice(self):
        self.dialer.carousel = ChoiceCarousel(["Redial"])
        with self.assertRaises(AssertionError):
            states.commit_input(self.dialer.state, self.dialer)

    def test_navigation(self):
        self.dialer.countdown.remaining = 10

        states.navigate_choices(self.dialer, Movement.LEFT)
        self.assertEqual(self.dialer.carousel.current(), "Call")
        self.assertEqual(self.dialer.countdown.remaining, self.config.countdown_ticks)

        states.navigate_choices(self.dialer, Movement.RIGHT)
        states.navigate_choices(self.dialer, Movement.RIGHT)
        self.assertEqual(self.dialer.carousel.current(), "1")
        self.assertEqual(self.sound.played, ["change"] * 3)

    def test_center_does_not_reset_countdown(self):
        self.dialer.countdown.remaining = 10
        states.navigate_choices(self.dialer, Movement.CENTER)

        self.assertEqual(self.dialer.countdown.remaining, 10)
        self.assertEqual(self.sound.played, [])


class TestConfirmState(StateTestCase):
    def setUp(self):
        super().setUp()
        self.dialer.set_state(InputState())
        self.dialer.input = "7"
        self.dialer.set_state(ConfirmState())

    def select(self, label):
        self.dialer.carousel.index = self.dialer.carousel.choices.index(label)
        states.commit_confirm(self.dialer.state, self.dialer)

    def test_enter_populates_choices(self):
        self.assertEqual(self.dialer.carousel.choices, ["No", "Yes", "Back"])

    def test_back_keeps_input(self):
        self.select("Back")
        self.assertEqual(self.dialer.state.tag, StateTag.INPUT)
        self.assertEqual(self.dialer.input, "7")
        self.assertEqual(self.dialer.carousel.current(), "0")

    def test_no_clears_input(self):
        self.select("No")
        self.assertEqual(self.dialer.state.tag, StateTag.WAIT)
        self.assertEqual(self.dialer.input, "")

    def test_yes_starts_call(self):
        self.select("Yes")
        self.assertEqual(self.dialer.state.tag, StateTag.CALL)
        self.assertEqual(self.dialer.input, "7")
        self.assertEqual(self.sound.played, ["select", "phone-ringing"])


class TestCallState(StateTestCase):
    def test_call_lasts_call_ticks(self):
        self.dialer.input = "911"
        self.dialer.set_state(CallState())
        state = self.dialer.state
        self.assertEqual(state.ticks, 250)

        for _ in range(249):
            states.call_tick(state, self.dialer)
        self.assertEqual(self.dialer.state.tag, StateTag.CALL)

        states.call_tick(state, self.dialer)
        self.assertEqual(self.dialer.state.tag, StateTag.WAIT)
        self.assertEqual(self.dialer.input, "")
        self.assertEqual(self.sound.stopped, ["phone-ringing"])


if __name__ == '__main__':
    unittest.main()
