import random

import pytest

from thought_wanderer.entities.character import Canvas, Character
from thought_wanderer.entities.sprite import Direction
from thought_wanderer.movement.manual import Controls, ManualController


@pytest.fixture
def controller(canvas):
    return ManualController(canvas)


@pytest.mark.parametrize("controls, expected", [
    (Controls(right=True), Direction.RIGHT),
    (Controls(left=True), Direction.LEFT),
    (Controls(up=True), Direction.UP),
    (Controls(down=True), Direction.DOWN),
    (Controls(up=True, right=True), Direction.UP_RIGHT),
    (Controls(up=True, left=True), Direction.UP_LEFT),
    (Controls(down=True, right=True), Direction.DOWN_RIGHT),
    (Controls(down=True, left=True), Direction.DOWN_LEFT),
])
def test_key_directions(controller, character, controls, expected):
    controller.update(character, controls)
    assert character.is_moving
    assert character.direction == expected


def test_moves_speed_per_axis(controller, character):
    x, y = character.x, character.y
    controller.update(character, Controls(down=True, left=True))
    assert (character.x, character.y) == (x - character.speed, y + character.speed)


def test_no_keys_keeps_last_direction(controller, character):
    controller.update(character, Controls(up=True))
    controller.update(character, Controls())
    assert not character.is_moving
    assert character.direction == Direction.UP


def test_opposing_keys_cancel(controller, character):
    x, y = character.x, character.y
    controller.update(character, Controls(up=True, down=True, left=True, right=True))
    assert not character.is_moving
    assert (character.x, character.y) == (x, y)


def test_opposing_pair_leaves_other_axis(controller, character):
    controller.update(character, Controls(up=True, down=True, right=True))
    assert character.direction == Direction.RIGHT


def test_stops_at_wall(controller, canvas):
    character = Character(canvas.width - 70, 300)
    for _ in range(10):
        controller.update(character, Controls(right=True))
    assert character.x == canvas.width - character.half_width


def test_position_always_within_bounds():
    canvas = Canvas(500, 400)
    controller = ManualController(canvas)
    character = Character.centered_on(canvas, speed=17.0)
    rng = random.Random(5)

    for _ in range(2000):
        controls = Controls(
            up=rng.random() < 0.5,
            down=rng.random() < 0.3,
            left=rng.random() < 0.5,
            right=rng.random() < 0.3,
        )
        controller.update(character, controls)
        assert character.half_width <= character.x <= canvas.width - character.half_width
        assert character.half_height <= character.y <= canvas.height - character.half_height
