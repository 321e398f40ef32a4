"""
Dialer controller: turns pupil positions into phone-dial input.

The host calls ``update_pupil_position()`` whenever the tracker produces a
sample and ``tick()`` at ``Config.ticks_per_second``. Each tick runs, in this
order:

    1. render the active state
    2. countdown check   -> may COMMIT the current choice
    3. movement check    -> may dispatch LEFT/RIGHT to the state
    4. state tick

A glance in the same tick as an expiring countdown is applied after the
commit. State tick handlers see the state as left by the movement.
"""

import logging

import states
from carousel import ChoiceCarousel
from config import Config
from countdown import CountdownTimer
from states import RenderIntent, StateTag, WaitState
from utils import Movement, MovementClassifier, SignalSmoother

logger = logging.getLogger(__name__)


class DialerController:
    """
    Owns the active state and everything the states act upon.

    Collaborators:
        display: object with ``open()``, ``close()`` and ``draw(intent)``
        sound:   object with ``play(cue)`` and ``stop(cue)``
    Either may be None, in which case nothing is drawn or played.
    """

    def __init__(self, config=None, display=None, sound=None):
        self.config = config or Config()
        self.display = display
        self.sound = sound

        self.smoother = SignalSmoother(self.config.moving_average_size)
        self.classifier = MovementClassifier(
            threshold=self.config.movement_threshold,
            cooldown=self.config.debounce_ticks,
        )
        self.countdown = CountdownTimer(self.config.countdown_ticks, self._commit)
        self.carousel = ChoiceCarousel()

        # Digits entered so far
        self.input = ""

        self.state = None
        self.set_state(WaitState())

    # -------------------------------------------------------------------------
    # Host entry points
    # -------------------------------------------------------------------------

    def start(self):
        """The app is started."""
        if self.display is not None:
            self.display.open()

    def stop(self):
        """The app is stopped."""
        if self.display is not None:
            self.display.close()

    def on_key(self, key):
        """
        Manual override of the eye tracking.

        Args:
            key: Key code as returned by ``cv2.waitKey``
        """
        if not states.shows_choices(self.state):
            return

        # Keys follow the mirrored camera view
        if key in (ord('h'), ord('H')):
            self.carousel.next()
        elif key in (ord('l'), ord('L')):
            self.carousel.prev()

    def update_pupil_position(self, left_x, left_y, right_x, right_y):
        """
        Record a new pupil sample.

        Only the mean horizontal position is used; the vertical coordinates
        are accepted for interface compatibility.
        """
        self.smoother.push((left_x + right_x) / 2)

    def tick(self):
        """Advance the dialer by one tick."""
        self.render()
        self.countdown.tick()
        self._detect_movement()
        self._dispatch_tick()

    def close(self):
        """Exit the active state; the controller is unusable afterwards."""
        if self.state is not None:
            self._dispatch_exit(self.state)
            self.state = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        self.close()

    # -------------------------------------------------------------------------
    # Context used by the states
    # -------------------------------------------------------------------------

    def set_state(self, new_state):
        """
        Replace the active state.

        The old state is exited before the new one is entered. Setting the
        state that is already active does nothing.
        """
        assert new_state is not None
        if new_state is self.state:
            return

        old_state = self.state
        if old_state is not None:
            self._dispatch_exit(old_state)
            logger.info(f"State: {old_state.tag.value} -> {new_state.tag.value}")

        if not states.shows_choices(new_state):
            self.carousel = ChoiceCarousel()
        self.countdown.reset()
        self._dispatch_enter(new_state)

        self.state = new_state

    def set_choices(self, choices):
        """Install a fresh carousel for the entered state."""
        carousel = ChoiceCarousel()
        carousel.set_choices(choices)
        self.carousel = carousel

    def play(self, cue):
        logger.debug(f"Cue: {cue}")
        if self.sound is not None:
            self.sound.play(cue)

    def stop_cue(self, cue):
        if self.sound is not None:
            self.sound.stop(cue)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self):
        if self.display is not None:
            self.display.draw(self.render_intent())

    def render_intent(self):
        """Snapshot of what the active state wants on screen."""
        state = self.state
        indicator = self.classifier.indicator(self.smoother.average())

        if state.tag is StateTag.WAIT:
            return RenderIntent(
                state=state.tag,
                prompt=states.WAIT_PROMPT,
                indicator=indicator,
            )
        elif state.tag is StateTag.INPUT:
            return RenderIntent(
                state=state.tag,
                input=self.input,
                carousel=self._carousel_snapshot(),
                countdown=self.countdown.seconds(self.config.ticks_per_second),
                indicator=indicator,
            )
        elif state.tag is StateTag.CONFIRM:
            return RenderIntent(
                state=state.tag,
                prompt=states.CONFIRM_PROMPT + self.input,
                input=self.input,
                carousel=self._carousel_snapshot(),
                countdown=self.countdown.seconds(self.config.ticks_per_second),
                indicator=indicator,
            )
        elif state.tag is StateTag.CALL:
            return RenderIntent(
                state=state.tag,
                input=self.input,
                show_avatar=True,
                indicator=indicator,
            )
        raise AssertionError(f"unknown state {state!r}")

    def _carousel_snapshot(self):
        # Slide the carousel while a navigation is cooling down
        offset = 0.0
        pending = self.classifier.pending
        if pending != Movement.CENTER:
            offset = self.classifier.progress()
            if pending == Movement.LEFT:
                offset = -offset
        return self.carousel.snapshot(self.config.choices_radius, offset)

    # -------------------------------------------------------------------------
    # Event dispatch
    # -------------------------------------------------------------------------

    def _detect_movement(self):
        armed = self.classifier.is_armed
        movement = self.classifier.classify(self.smoother.average())
        if armed:
            self._dispatch_movement(movement)

    def _commit(self):
        state = self.state
        if state.tag is StateTag.INPUT:
            logger.debug(f"Commit '{self.carousel.current()}'")
            states.commit_input(state, self)
        elif state.tag is StateTag.CONFIRM:
            logger.debug(f"Commit '{self.carousel.current()}'")
            states.commit_confirm(state, self)
        elif state.tag in (StateTag.WAIT, StateTag.CALL):
            pass
        else:
            raise AssertionError(f"unknown state {state!r}")

    def _dispatch_enter(self, state):
        if state.tag is StateTag.WAIT:
            states.enter_wait(state, self)
        elif state.tag is StateTag.INPUT:
            states.enter_input(state, self)
        elif state.tag is StateTag.CONFIRM:
            states.enter_confirm(state, self)
        elif state.tag is StateTag.CALL:
            states.enter_call(state, self)
        else:
            raise AssertionError(f"unknown state {state!r}")

    def _dispatch_exit(self, state):
        if state.tag is StateTag.CALL:
            states.exit_call(state, self)
        elif state.tag in (StateTag.WAIT, StateTag.INPUT, StateTag.CONFIRM):
            pass
        else:
            raise AssertionError(f"unknown state {state!r}")

    def _dispatch_movement(self, movement):
        state = self.state
        if state.tag is StateTag.WAIT:
            states.wait_movement(state, self, movement)
        elif state.tag in (StateTag.INPUT, StateTag.CONFIRM):
            states.navigate_choices(self, movement)
        elif state.tag is StateTag.CALL:
            pass
        else:
            raise AssertionError(f"unknown state {state!r}")

    def _dispatch_tick(self):
        state = self.state
        if state.tag is StateTag.WAIT:
            states.wait_tick(state)
        elif state.tag is StateTag.CALL:
            states.call_tick(state, self)
        elif state.tag in (StateTag.INPUT, StateTag.CONFIRM):
            pass
        else:
            raise AssertionError(f"unknown state {state!r}")

    def __repr__(self):
        tag = self.state.tag.value if self.state is not None else None
        return f"<DialerController(state={tag}, input={self.input!r})>"
