"""
Tick scheduler - the per-frame update loop

=============================================================================
ONE TICK
=============================================================================

    0. Advance the frame clock by dt, apply a mode toggle if one was pressed
    1. Frame boundary hook (the renderer clears its frame)
    2. Active movement strategy (planner OR manual controller)
    3. Animation frame (advance while walking, idle pose otherwise)
    4. Thought throttle (maybe start a fetch)
    5. Speech queue (maybe start the next sentence)

Movement always runs before speech. Steps 4 and 5 only START asyncio tasks;
the tick never awaits them. Their completions run on the same event loop
between two ticks and touch nothing but the queue, the throttle state and
`current_utterance`.

=============================================================================
CONTEXT OBJECT
=============================================================================

Everything the loop needs (character, canvas, clock, rng, strategies,
speech queue, throttle) lives in one WandererContext built at startup and
handed to the scheduler. Nothing is module-global, so a test can build as
many independent contexts as it likes.

=============================================================================
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from . import config as cfg
from .clock import FrameClock
from .entities.character import Canvas, Character, MovementMode
from .movement.manual import Controls, ManualController
from .movement.planner import AutonomousPlanner
from .speech.queue import SpeechQueue
from .speech.throttle import ThoughtThrottle

logger = logging.getLogger(__name__)

NO_INPUT = Controls()


@dataclass
class WandererContext:
    """All mutable state of one wanderer session."""

    canvas: Canvas
    character: Character
    clock: FrameClock
    rng: random.Random
    planner: AutonomousPlanner
    manual: ManualController
    speech: SpeechQueue
    throttle: ThoughtThrottle

    @classmethod
    def create(cls, config: cfg.WandererConfig, synthesizer, thought_source,
               rng: random.Random = None,
               clock: FrameClock = None) -> 'WandererContext':
        """Wire up a context from a config and the two external services."""
        canvas = Canvas(config.canvas_width, config.canvas_height)
        clock = clock or FrameClock()
        rng = rng or random.Random()

        mode = MovementMode.MANUAL if config.start_manual else MovementMode.AUTONOMOUS
        character = Character.centered_on(
            canvas,
            speed=config.speed,
            width=config.sprite_width,
            height=config.sprite_height,
            frame_count=config.frame_count,
            frame_speed=config.frame_speed,
            idle_frame=config.idle_frame,
            movement_mode=mode,
        )

        planner = AutonomousPlanner(
            canvas, clock, rng,
            arrival_radius=config.arrival_radius,
            timeout_min=config.waypoint_timeout_min,
            timeout_max=config.waypoint_timeout_max,
        )
        speech = SpeechQueue(character, synthesizer)
        throttle = ThoughtThrottle(
            thought_source, speech, clock, min_interval=config.thought_interval
        )

        return cls(
            canvas=canvas,
            character=character,
            clock=clock,
            rng=rng,
            planner=planner,
            manual=ManualController(canvas),
            speech=speech,
            throttle=throttle,
        )

    def resize(self, width: float, height: float):
        """Canvas size changed (window resize): keep the character inside."""
        self.canvas.width = width
        self.canvas.height = height
        self.character.clamp_to(self.canvas)


class TickScheduler:
    """Drives one WandererContext, one tick per display frame."""

    def __init__(self, context: WandererContext,
                 on_frame_start: Optional[Callable[[], None]] = None):
        self.context = context
        self.on_frame_start = on_frame_start
        self.tick_count = 0

    def tick(self, dt: float, controls: Controls = NO_INPUT):
        """
        Run one frame of the simulation.

        Parameters:
        -----------
        dt : float
            Milliseconds since the previous tick
        controls : Controls
            Input resolved for this frame

        Must be called from inside a running event loop (steps 4 and 5
        schedule asyncio tasks).
        """
        ctx = self.context
        character = ctx.character

        now = ctx.clock.advance(dt)

        if controls.toggle_mode:
            mode = character.toggle_mode()
            logger.info("Movement mode: %s", mode.value)

        if self.on_frame_start is not None:
            self.on_frame_start()

        if character.movement_mode == MovementMode.AUTONOMOUS:
            ctx.planner.update(character)
        else:
            ctx.manual.update(character, controls)

        character.update_animation(now)

        ctx.throttle.maybe_fetch_thought()
        ctx.speech.drain_step()

        self.tick_count += 1

    async def shutdown(self):
        """Cancel whatever fetch or sentence is still in flight."""
        await self.context.throttle.cancel()
        await self.context.speech.cancel()
