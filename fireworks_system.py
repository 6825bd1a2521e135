# fireworks_system.py

import logging
import math

import numpy as np

import constants
from colors import hsla
from firework import Firework
from particle import Particle
from settings import ConfigurationError, resolve_settings

logger = logging.getLogger("fireworks")

FADE_COLOR = hsla(0, 0, 0, constants.TRAIL_FADE_ALPHA)


class FireworksDisplay:
    """
    Owns the fireworks simulation for one drawing surface and advances it one
    frame per tick().

    Data Contract:
    - Inputs:
        - surface: exposes get_context("2d"), width and height.
        - options (dict): the 'fireworks' section of the config file. All keys
          are optional (see settings.resolve_settings).
        - rng (np.random.Generator): the master seeded random number generator.
    - Outputs: None. This class modifies its internal state and draws on the
      surface's context.
    - Side Effects: Draws on the surface every tick.
    - Invariants:
        - tick() never blocks; its cost is linear in the number of live entities.
        - Within a tick every firework is drawn and updated before any particle.
        - Entities are removed by index during reverse traversal, so removal
          never skips or repeats a neighbour.

    Raises ConfigurationError when the surface lacks a capability.
    """
    def __init__(self, surface, options: dict = None, rng: np.random.Generator = None):
        self.context, self.width, self.height = self._validate_surface(surface)
        self.settings = resolve_settings(options)
        self.rng = rng if rng is not None else np.random.default_rng()

        self.hue = float(self.settings.hue)
        if self.settings.launch_point is not None:
            self.launch_point = self.settings.launch_point
        else:
            self.launch_point = (self.width / 2, self.height)

        self._fireworks = []
        self._particles = []

        # --- Launch counters (frames) ---
        self.limiter_tick = 0
        self.timer_tick = 0

        # --- Statistics for logging ---
        self.frame = 0
        self.fireworks_launched = 0
        self.fireworks_exploded = 0

        logger.info(f"FireworksDisplay created for a {self.width}x{self.height} surface.")
        logger.info(f"Resolved settings: {self.settings}")

    @staticmethod
    def _validate_surface(surface):
        """
        Checks the drawing-surface contract and returns (context, width, height).
        """
        if surface is None:
            raise ConfigurationError("The drawing surface is missing.")

        get_context = getattr(surface, 'get_context', None)
        if not callable(get_context):
            raise ConfigurationError("The drawing surface does not provide 'get_context'.")
        for name in ('width', 'height'):
            if not hasattr(surface, name):
                raise ConfigurationError(f"The drawing surface does not provide '{name}'.")

        width, height = surface.width, surface.height
        for name, value in (('width', width), ('height', height)):
            if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
                raise ConfigurationError(f"The drawing surface '{name}' is not a number: {value!r}")

        context = get_context("2d")
        if context is None:
            raise ConfigurationError("The drawing surface did not return a 2D context.")
        return context, width, height

    @property
    def fireworks(self):
        """Live fireworks, as a read-only snapshot."""
        return tuple(self._fireworks)

    @property
    def particles(self):
        """Live particles, as a read-only snapshot."""
        return tuple(self._particles)

    def tick(self):
        """
        Runs a full frame: fade, fireworks, particles, then the auto-launch timer.
        Must be called by the host at a steady cadence; it does no timing itself.
        """
        self._advance_hue()
        self._fade()

        # --- 1. Fireworks (reverse order so removal keeps unvisited indices valid) ---
        for index in range(len(self._fireworks) - 1, -1, -1):
            firework = self._fireworks[index]
            firework.draw(self.context)
            firework.update(lambda arrived, index=index: self._explode(index, arrived))

        # --- 2. Particles, including those spawned above ---
        for index in range(len(self._particles) - 1, -1, -1):
            particle = self._particles[index]
            particle.draw(self.context)
            particle.update(lambda burnt_out, index=index: self._remove_particle(index))

        # --- 3. Launch timers ---
        self._auto_launch()
        self.limiter_tick += 1
        self.frame += 1

    def launch_at(self, x: float, y: float) -> bool:
        """
        Launches a firework from the launch point toward (x, y).

        Launches are limited to one per `fireworks_limiter` frames; a call that
        arrives too early is dropped and returns False. Targets that are not
        finite numbers are dropped the same way.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.debug(f"Launch toward ({x}, {y}) dropped: target is not finite.")
            return False

        if self.limiter_tick < self.settings.fireworks_limiter:
            logger.debug(f"Launch toward ({x}, {y}) dropped by the limiter.")
            return False

        self._launch((x, y))
        self.limiter_tick = 0
        return True

    def _advance_hue(self):
        if self.settings.hue_step is None:
            self.hue = self.rng.uniform(0, 360)
        else:
            self.hue = (self.hue + self.settings.hue_step) % 360

    def _fade(self):
        """
        Erases a fraction of the previous frames instead of clearing, which
        leaves decaying motion trails, then switches to additive drawing.
        """
        self.context.global_composite_operation = 'destination-out'
        self.context.fill_style = FADE_COLOR
        self.context.fill_rect(0, 0, self.width, self.height)
        self.context.global_composite_operation = 'lighter'

    def _launch(self, target):
        firework = Firework.launch(self.launch_point, target, self.hue, self.settings, self.rng)
        self._fireworks.append(firework)
        self.fireworks_launched += 1

    def _auto_launch(self):
        self.timer_tick += 1
        if self.timer_tick >= self.settings.autolaunch_timer:
            target = (
                self.rng.uniform(0, self.width),
                self.rng.uniform(0, self.height * constants.AUTOLAUNCH_TARGET_HEIGHT_FRACTION),
            )
            self._launch(target)
            self.timer_tick = 0

    def _explode(self, index: int, firework: Firework):
        """
        Removes an arrived firework and bursts particles at its target point.
        """
        del self._fireworks[index]
        self.fireworks_exploded += 1

        target = tuple(firework.target)
        for _ in range(self.settings.particle_count):
            self._particles.append(Particle.spawn(target, self.hue, self.settings, self.rng))

        logger.debug(
            f"Firework exploded at ({target[0]:.1f}, {target[1]:.1f}) "
            f"with {self.settings.particle_count} particles."
        )

    def _remove_particle(self, index: int):
        del self._particles[index]
