"""
Interaction states of the dialer.

Each state is a small payload tagged with a ``StateTag``. The controller
owns exactly one live state object and dispatches events to the handler
functions below by matching on the tag:

    WAIT    --(left/right alternations)-->  INPUT
    INPUT   --(commit "Call")-------------> CONFIRM
    CONFIRM --(commit "Yes")--------------> CALL
    CONFIRM --(commit "Back")-------------> INPUT
    CONFIRM --(commit anything else)------> WAIT
    CALL    --(call_ticks elapsed)--------> WAIT

Handlers receive the controller as ``ctx`` and only touch it through
``config``, ``input``, ``carousel``, ``countdown``, ``set_choices()``,
``set_state()``, ``play()`` and ``stop_cue()``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

from carousel import CarouselSnapshot
from utils import Movement

logger = logging.getLogger(__name__)


INPUT_CHOICES = [str(i) for i in range(10)] + ["Del", "Call"]
CONFIRM_CHOICES = ["No", "Yes", "Back"]

WAIT_PROMPT = "Quickly look left and right 5 times to start"
CONFIRM_PROMPT = "Do you want to call "


class StateTag(Enum):
    WAIT = "wait"
    INPUT = "input"
    CONFIRM = "confirm"
    CALL = "call"


# eq=False keeps identity semantics: two fresh states are never "the same"

@dataclass(eq=False)
class WaitState:
    """Idle screen, waiting for a deliberate left/right gesture."""
    tag: ClassVar[StateTag] = StateTag.WAIT
    prev_movement: Movement = Movement.CENTER
    points: float = 0.0


@dataclass(eq=False)
class InputState:
    tag: ClassVar[StateTag] = StateTag.INPUT


@dataclass(eq=False)
class ConfirmState:
    tag: ClassVar[StateTag] = StateTag.CONFIRM


@dataclass(eq=False)
class CallState:
    """Symbolic phone call shown for a fixed time."""
    tag: ClassVar[StateTag] = StateTag.CALL
    ticks: int = 0


@dataclass(frozen=True)
class RenderIntent:
    """Everything the display collaborator needs to draw one frame."""
    state: StateTag
    prompt: str = ""
    input: str = ""
    carousel: Optional[CarouselSnapshot] = None
    countdown: Optional[int] = None
    show_avatar: bool = False
    indicator: float = 0.5


def shows_choices(state):
    return state.tag in (StateTag.INPUT, StateTag.CONFIRM)


# =============================================================================
# WAIT
# =============================================================================

def enter_wait(state, ctx):
    state.prev_movement = Movement.CENTER
    state.points = 0.0
    ctx.input = ""


def wait_movement(state, ctx, movement):
    """
    Score left/right alternations.

    Every change of direction (the first LEFT/RIGHT counts as one) adds
    ``wait_reward``; the score decays by one per tick, so only a quick
    series of alternations reaches ``wait_threshold``.
    """
    # Only left and right matter here
    if movement == Movement.CENTER:
        return

    if state.prev_movement != movement:
        state.points += ctx.config.wait_reward

    if state.points >= ctx.config.wait_threshold:
        logger.debug(f"Wake-up gesture accepted (score={state.points:.1f})")
        ctx.play("select")
        ctx.set_state(InputState())
        return

    state.prev_movement = movement


def wait_tick(state):
    if state.points > 0:
        state.points = max(0.0, state.points - 1)


# =============================================================================
# INPUT / CONFIRM
# =============================================================================

def navigate_choices(ctx, movement):
    """Move through the carousel; any movement restarts the countdown."""
    if movement == Movement.LEFT:
        ctx.carousel.prev()
    elif movement == Movement.RIGHT:
        ctx.carousel.next()

    if movement != Movement.CENTER:
        ctx.countdown.reset()
        ctx.play("change")


def enter_input(state, ctx):
    ctx.set_choices(INPUT_CHOICES)


def commit_input(state, ctx):
    ctx.play("select")

    choice = ctx.carousel.current()
    if choice == "Del":
        # Remove the last character, if any
        ctx.input = ctx.input[:-1]
    elif choice == "Call":
        ctx.set_state(ConfirmState())
    else:
        assert choice.isdigit(), f"unexpected choice {choice!r}"
        ctx.input += choice


def enter_confirm(state, ctx):
    ctx.set_choices(CONFIRM_CHOICES)


def commit_confirm(state, ctx):
    ctx.play("select")

    choice = ctx.carousel.current()
    if choice == "Yes":
        ctx.set_state(CallState())
    elif choice == "Back":
        ctx.set_state(InputState())
    else:
        ctx.set_state(WaitState())


# =============================================================================
# CALL
# =============================================================================

def enter_call(state, ctx):
    state.ticks = ctx.config.call_ticks
    ctx.play("phone-ringing")
    logger.info(f"Calling {ctx.input or '(empty number)'}")


def exit_call(state, ctx):
    ctx.stop_cue("phone-ringing")


def call_tick(state, ctx):
    state.ticks -= 1
    if state.ticks <= 0:
        ctx.set_state(WaitState())
