import os
import random

import pytest

from tests.helpers import FakeSynthesizer, FakeThoughtSource
from thought_wanderer.clock import FrameClock
from thought_wanderer.config import WandererConfig
from thought_wanderer.entities.character import Canvas, Character
from thought_wanderer.scheduler import WandererContext


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep WANDERER_* variables of the calling shell out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("WANDERER_"):
            monkeypatch.delenv(name)


@pytest.fixture
def canvas():
    return Canvas(800, 600)


@pytest.fixture
def clock():
    return FrameClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def character(canvas):
    return Character.centered_on(canvas)


@pytest.fixture
def make_context(rng):
    """Build a WandererContext on an 800x600 canvas with fake services."""
    def factory(synthesizer=None, thought_source=None, **overrides):
        config = WandererConfig(canvas_width=800, canvas_height=600).with_overrides(**overrides)
        return WandererContext.create(
            config,
            synthesizer or FakeSynthesizer(),
            thought_source or FakeThoughtSource(),
            rng=rng,
        )
    return factory
