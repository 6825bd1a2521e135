# particle.py

import math
from collections import deque

import numpy as np

import constants
from colors import hsla, HSLA


class Particle:
    """
    Represents a single spark of an explosion.

    Data Contract:
    - Inputs:
        - position ((x, y)): the explosion point.
        - angle (float): travel direction in radians, fixed for the particle's life.
        - speed (float): initial speed in pixels per frame.
        - hue, brightness (float): color of the spark.
        - decay (float): opacity lost per frame.
        - trail_length (int): number of tracked past positions (>= 1).
        - friction (float): speed multiplier per frame (< 1).
        - gravity (float): downward drift in pixels per frame.
    - Invariants:
        - len(coordinates) == trail_length at all times.
        - alpha decreases by exactly `decay` on every update.
    """
    def __init__(self, position, angle: float, speed: float, hue: float, brightness: float,
                 decay: float, trail_length: int, friction: float = constants.PARTICLE_FRICTION,
                 gravity: float = constants.DEFAULT_GRAVITY):
        self.position = np.array(position, dtype=float)
        self.coordinates = deque([tuple(self.position)] * trail_length, maxlen=trail_length)
        self.angle = angle
        self.direction = np.array([math.cos(angle), math.sin(angle)])
        self.speed = speed
        self.friction = friction
        self.gravity = gravity
        self.hue = hue
        self.brightness = brightness
        self.alpha = 1.0
        self.decay = decay

    @classmethod
    def spawn(cls, position, hue: float, settings, rng: np.random.Generator):
        """Creates a particle with randomized direction, speed, shade and decay."""
        return cls(
            position,
            angle=rng.uniform(0, 2 * math.pi),
            speed=rng.uniform(*constants.PARTICLE_SPEED_RANGE),
            hue=rng.uniform(hue - constants.PARTICLE_HUE_SPREAD, hue + constants.PARTICLE_HUE_SPREAD),
            brightness=rng.uniform(*constants.PARTICLE_BRIGHTNESS_RANGE),
            decay=rng.uniform(*constants.PARTICLE_DECAY_RANGE),
            trail_length=settings.particle_trail,
            gravity=settings.gravity,
        )

    @property
    def color(self) -> HSLA:
        return hsla(self.hue, 100, self.brightness, self.alpha)

    def update(self, on_burnout):
        """
        Updates the particle's state for one frame.
        p_new = p_old + direction * speed + (0, gravity)

        on_burnout(particle) is called once the opacity has dropped to the
        decay rate or below.
        """
        self.coordinates.appendleft(tuple(self.position))
        self.speed *= self.friction

        self.position += self.direction * self.speed
        self.position[1] += self.gravity

        self.alpha -= self.decay
        if self.alpha <= self.decay:
            on_burnout(self)

    def draw(self, context):
        """
        Draws the particle as a line from the oldest tracked point.
        """
        tail_x, tail_y = self.coordinates[-1]

        context.begin_path()
        context.move_to(tail_x, tail_y)
        context.line_to(self.position[0], self.position[1])
        context.stroke_style = self.color
        context.stroke()
