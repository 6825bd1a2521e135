import os

# pygame must never open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pytest

from colors import parse_color


class RecordingContext:
    """2D context that records every call instead of drawing."""
    def __init__(self):
        self.calls = []
        self.stroke_style = None
        self.fill_style = None
        self.global_composite_operation = 'source-over'

    def __setattr__(self, name, value):
        if name in ('stroke_style', 'fill_style') and value is not None:
            value = parse_color(value)
        object.__setattr__(self, name, value)

    def _record(self, name, *args):
        self.calls.append((name, args))

    def begin_path(self):
        self._record('begin_path')

    def move_to(self, x, y):
        self._record('move_to', x, y)

    def line_to(self, x, y):
        self._record('line_to', x, y)

    def arc(self, x, y, radius, start_angle, end_angle):
        self._record('arc', x, y, radius, start_angle, end_angle)

    def stroke(self):
        self._record('stroke', self.stroke_style, self.global_composite_operation)

    def fill_rect(self, x, y, width, height):
        self._record('fill_rect', x, y, width, height, self.fill_style, self.global_composite_operation)

    def names(self):
        return [name for name, _ in self.calls]


class RecordingSurface:
    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.context = RecordingContext()

    def get_context(self, kind="2d"):
        return self.context if kind == "2d" else None


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
