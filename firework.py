# firework.py

import math
import logging
from collections import deque

import numpy as np

import constants
from colors import hsla, HSLA

logger = logging.getLogger("fireworks")


class Firework:
    """
    A projectile travelling in a straight line from its launch point to a target.

    Data Contract:
    - Inputs:
        - start, target ((x, y)): surface-relative coordinates. Targets off the
          surface are legal.
        - hue (float): the frame hue at launch.
        - speed (float): initial speed in pixels per frame.
        - acceleration (float): speed multiplier applied every frame.
        - brightness (float): lightness percent used for the stroke.
    - Invariants:
        - len(coordinates) == FIREWORK_TRAIL_LENGTH at all times.
        - distance_travelled is measured from the start to the candidate
          position of the latest update, never to a committed overshoot.
    """
    def __init__(self, start, target, hue: float, speed: float, acceleration: float, brightness: float):
        self.start = np.array(start, dtype=float)
        self.target = np.array(target, dtype=float)
        self.position = self.start.copy()

        self.distance_to_target = float(np.linalg.norm(self.target - self.start))
        self.distance_travelled = 0.0

        # Most recent position first; the oldest entry is drawn as the tail.
        self.coordinates = deque(
            [tuple(self.start)] * constants.FIREWORK_TRAIL_LENGTH,
            maxlen=constants.FIREWORK_TRAIL_LENGTH,
        )

        delta = self.target - self.start
        self.angle = math.atan2(delta[1], delta[0])
        self.speed = speed
        self.acceleration = acceleration
        self.hue = hue
        self.brightness = brightness
        self.target_radius = constants.TARGET_RADIUS_MIN

    @classmethod
    def launch(cls, start, target, hue: float, settings, rng: np.random.Generator):
        """Creates a firework using the run settings and a random brightness."""
        brightness = rng.uniform(*constants.FIREWORK_BRIGHTNESS_RANGE)
        firework = cls(start, target, hue, settings.speed, settings.acceleration, brightness)
        logger.debug(
            f"Firework launched: start={tuple(firework.start)}, target={tuple(firework.target)}, "
            f"distance={firework.distance_to_target:.1f}"
        )
        return firework

    @property
    def color(self) -> HSLA:
        return hsla(self.hue, 100, self.brightness)

    def update(self, on_arrival):
        """
        Advances the firework by one frame.

        on_arrival(firework) is called instead of committing the move when the
        candidate position reaches or passes the target distance.
        """
        self.coordinates.appendleft(tuple(self.position))

        if self.target_radius < constants.TARGET_RADIUS_MAX:
            self.target_radius += constants.TARGET_RADIUS_STEP
        else:
            self.target_radius = constants.TARGET_RADIUS_MIN

        self.speed *= self.acceleration
        velocity = self.speed * np.array([math.cos(self.angle), math.sin(self.angle)])
        candidate = self.position + velocity

        self.distance_travelled = float(np.linalg.norm(candidate - self.start))

        if self.distance_travelled >= self.distance_to_target:
            on_arrival(self)
        else:
            self.position = candidate

    def draw(self, context):
        tail_x, tail_y = self.coordinates[-1]

        context.begin_path()
        context.move_to(tail_x, tail_y)
        context.line_to(self.position[0], self.position[1])
        context.stroke_style = self.color
        context.stroke()

        # Pulsing ring marking the target
        context.begin_path()
        context.arc(self.target[0], self.target[1], self.target_radius, 0, 2 * math.pi)
        context.stroke()
