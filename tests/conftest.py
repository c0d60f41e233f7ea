import os
import sys

import pytest

# Headless SDL so scene tests can build fonts and surfaces without a window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Ensure the project root (containing boot.py and minigames/) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from minigames.needle_stop.controller import Mode, NeedleController, SwingConfig


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start=10_000.0):
        self.now = float(start)

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def controller(clock):
    return NeedleController(SwingConfig(period_ms=1800, advance_delay_ms=1000), clock=clock)


@pytest.fixture()
def duel(clock):
    return NeedleController(
        SwingConfig(period_ms=1800, advance_delay_ms=1000),
        clock=clock,
        mode=Mode.TWO_PLAYER,
    )
