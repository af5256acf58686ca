import pytest

from thought_wanderer.entities.character import MovementMode
from thought_wanderer.movement.manual import Controls
from thought_wanderer.scheduler import TickScheduler

from tests.helpers import FakeSynthesizer, FakeThoughtSource, settle

DT = 16.0


async def run_ticks(scheduler, count, controls=Controls()):
    for _ in range(count):
        scheduler.tick(DT, controls)
        await settle()


@pytest.mark.asyncio
async def test_tick_advances_clock(make_context):
    ctx = make_context()
    scheduler = TickScheduler(ctx)

    await run_ticks(scheduler, 3)

    assert ctx.clock.now() == pytest.approx(3 * DT)
    assert scheduler.tick_count == 3


@pytest.mark.asyncio
async def test_frame_hook_runs_every_tick(make_context):
    ctx = make_context()
    calls = []
    scheduler = TickScheduler(ctx, on_frame_start=lambda: calls.append(ctx.clock.now()))

    await run_ticks(scheduler, 4)

    assert calls == [DT, 2 * DT, 3 * DT, 4 * DT]


@pytest.mark.asyncio
async def test_autonomous_mode_wanders(make_context):
    ctx = make_context()
    scheduler = TickScheduler(ctx)
    start = (ctx.character.x, ctx.character.y)

    await run_ticks(scheduler, 30)

    assert ctx.character.waypoint is not None
    assert (ctx.character.x, ctx.character.y) != start


@pytest.mark.asyncio
async def test_toggle_switches_mode_and_clears_waypoint(make_context):
    ctx = make_context()
    scheduler = TickScheduler(ctx)
    await run_ticks(scheduler, 1)
    assert ctx.character.waypoint is not None

    scheduler.tick(DT, Controls(toggle_mode=True))
    await settle()

    assert ctx.character.movement_mode == MovementMode.MANUAL
    assert ctx.character.waypoint is None

    scheduler.tick(DT, Controls(toggle_mode=True))
    await settle()

    # The planner picks a fresh waypoint on the very same tick
    assert ctx.character.movement_mode == MovementMode.AUTONOMOUS
    assert ctx.character.waypoint_chosen_at == ctx.clock.now()


@pytest.mark.asyncio
async def test_manual_mode_stands_still_without_input(make_context):
    ctx = make_context(start_manual=True)
    scheduler = TickScheduler(ctx)
    start = (ctx.character.x, ctx.character.y)

    await run_ticks(scheduler, 10)

    assert (ctx.character.x, ctx.character.y) == start
    assert not ctx.character.is_moving
    assert ctx.character.animation_frame == ctx.character.idle_frame
    assert ctx.character.waypoint is None


@pytest.mark.asyncio
async def test_manual_mode_never_leaves_canvas(make_context):
    ctx = make_context(start_manual=True)
    scheduler = TickScheduler(ctx)

    await run_ticks(scheduler, 400, Controls(up=True, left=True))

    assert ctx.character.x == ctx.character.half_width
    assert ctx.character.y == ctx.character.half_height


@pytest.mark.asyncio
async def test_walk_animation_follows_wall_clock(make_context):
    ctx = make_context(start_manual=True)
    scheduler = TickScheduler(ctx)
    first = ctx.character.animation_frame

    # 6 ticks * 16 ms = 96 ms: not yet one frame period
    await run_ticks(scheduler, 6, Controls(right=True))
    assert ctx.character.animation_frame == first

    await run_ticks(scheduler, 1, Controls(right=True))
    assert ctx.character.animation_frame == (first + 1) % ctx.character.frame_count


@pytest.mark.asyncio
async def test_thought_is_spoken_sentence_by_sentence(make_context):
    synth = FakeSynthesizer()
    source = FakeThoughtSource(["A. B. C."])
    ctx = make_context(synthesizer=synth, thought_source=source)
    scheduler = TickScheduler(ctx)

    await run_ticks(scheduler, 1)
    assert ctx.speech.pending == ("A", "B", "C")

    await run_ticks(scheduler, 3)
    assert synth.spoken == ["A", "B", "C"]
    assert ctx.speech.is_idle
    assert ctx.character.current_utterance is None

    # Idle again, but the next thought waits for the interval
    await run_ticks(scheduler, 100)
    assert source.calls == 1


@pytest.mark.asyncio
async def test_character_keeps_walking_while_speaking(make_context):
    synth = FakeSynthesizer(hold=True)
    source = FakeThoughtSource(["Long thought."])
    ctx = make_context(synthesizer=synth, thought_source=source)
    scheduler = TickScheduler(ctx)

    await run_ticks(scheduler, 2)
    assert ctx.character.current_utterance == "Long thought"

    position = (ctx.character.x, ctx.character.y)
    await run_ticks(scheduler, 5)
    assert (ctx.character.x, ctx.character.y) != position
    assert ctx.character.current_utterance == "Long thought"

    synth.release()
    await settle()
    assert ctx.character.current_utterance is None


@pytest.mark.asyncio
async def test_fetch_retried_after_failure(make_context):
    source = FakeThoughtSource([ConnectionError("offline"), "Hello."])
    ctx = make_context(thought_source=source)
    scheduler = TickScheduler(ctx)

    await run_ticks(scheduler, 1)
    assert ctx.throttle.last_fetch_at is None

    await run_ticks(scheduler, 1)
    assert source.calls == 2
    assert ctx.throttle.last_fetch_at == pytest.approx(2 * DT)


def test_resize_pulls_character_inside(make_context):
    ctx = make_context()
    ctx.character.x, ctx.character.y = 700.0, 500.0

    ctx.resize(400, 300)

    assert ctx.canvas.width == 400
    assert ctx.character.x == 400 - ctx.character.half_width
    assert ctx.character.y == 300 - ctx.character.half_height


@pytest.mark.asyncio
async def test_shutdown_cancels_in_flight_work(make_context):
    synth = FakeSynthesizer(hold=True)
    source = FakeThoughtSource(["Unfinished."])
    ctx = make_context(synthesizer=synth, thought_source=source)
    scheduler = TickScheduler(ctx)

    await run_ticks(scheduler, 2)
    assert ctx.speech.speaking

    await scheduler.shutdown()

    assert not ctx.speech.speaking
    assert not ctx.throttle.fetching
