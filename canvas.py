# canvas.py

"""
Pygame rendering backend.

Exposes a pygame.Surface through the drawing-surface contract the fireworks
engine consumes: a width, a height, and get_context("2d") returning an object
with the canvas-style path, stroke, fill and compositing calls.

Compositing modes:
- 'source-over': normal alpha blending.
- 'lighter': additive blending, colors premultiplied by their alpha.
- 'destination-out': erases towards the background. On an opaque display
  this is a multiplication of the destination by (1 - alpha).
"""

import math
import logging

import numpy as np
import pygame

import constants
from colors import hsla, parse_color, premultiplied, to_pygame_color

logger = logging.getLogger("fireworks")

COMPOSITE_OPERATIONS = ('source-over', 'lighter', 'destination-out')


class PygameContext2D:
    """
    Canvas-style 2D drawing context backed by a pygame surface.

    Data Contract:
    - Inputs: surface (pygame.Surface) - the destination for all drawing.
    - Side Effects: Every stroke/fill call draws on the surface immediately.
    - Invariants: stroke_style and fill_style always hold validated HSLA values.
    """
    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self.line_width = constants.LINE_WIDTH
        self._stroke_style = hsla(0, 0, 0)
        self._fill_style = hsla(0, 0, 0)
        self._composite_operation = 'source-over'
        self._subpaths = []

    @property
    def stroke_style(self):
        return self._stroke_style

    @stroke_style.setter
    def stroke_style(self, value):
        self._stroke_style = parse_color(value)

    @property
    def fill_style(self):
        return self._fill_style

    @fill_style.setter
    def fill_style(self, value):
        self._fill_style = parse_color(value)

    @property
    def global_composite_operation(self):
        return self._composite_operation

    @global_composite_operation.setter
    def global_composite_operation(self, value):
        # Unsupported modes are ignored, as a browser canvas does.
        if value not in COMPOSITE_OPERATIONS:
            logger.warning(f"Ignoring unsupported composite operation {value!r}.")
            return
        self._composite_operation = value

    # --- Paths ---

    def begin_path(self):
        self._subpaths = []

    def move_to(self, x, y):
        # Non-finite points are ignored, as a browser canvas does.
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        self._subpaths.append([(float(x), float(y))])

    def line_to(self, x, y):
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((float(x), float(y)))

    def arc(self, x, y, radius, start_angle, end_angle):
        """Adds a circular arc, approximated by line segments, to the current path."""
        if not all(math.isfinite(v) for v in (x, y, radius, start_angle, end_angle)):
            return
        sweep = abs(end_angle - start_angle)
        segments = max(2, int(math.ceil(constants.ARC_SEGMENTS * sweep / (2 * math.pi))))
        angles = np.linspace(start_angle, end_angle, segments + 1)
        points = np.column_stack((x + radius * np.cos(angles), y + radius * np.sin(angles)))

        if not self._subpaths:
            self._subpaths.append([])
        self._subpaths[-1].extend((float(px), float(py)) for px, py in points)

    def stroke(self):
        for points in self._subpaths:
            if len(points) >= 2:
                self._stroke_polyline(points)

    # --- Drawing ---

    def fill_rect(self, x, y, width, height):
        if not all(math.isfinite(v) for v in (x, y, width, height)):
            return
        rect = pygame.Rect(int(x), int(y), int(math.ceil(width)), int(math.ceil(height)))
        rect.normalize()
        rect = rect.clip(self.surface.get_rect())
        if rect.width == 0 or rect.height == 0:
            return

        color = self._fill_style
        operation = self._composite_operation
        if operation == 'destination-out':
            keep = int(round(255 * (1 - color.alpha)))
            self.surface.fill((keep, keep, keep), rect, special_flags=pygame.BLEND_RGB_MULT)
        elif operation == 'lighter':
            self.surface.fill(premultiplied(color), rect, special_flags=pygame.BLEND_RGB_ADD)
        elif color.alpha >= 1:
            self.surface.fill(to_pygame_color(color), rect)
        else:
            overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
            overlay.fill(to_pygame_color(color))
            self.surface.blit(overlay, rect.topleft)

    def _stroke_polyline(self, points):
        """
        Draws the polyline on a small patch covering its bounding box, then
        composites the patch onto the surface with the current mode.
        """
        pad = self.line_width + 1
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        left = int(math.floor(min(xs))) - pad
        top = int(math.floor(min(ys))) - pad
        right = int(math.ceil(max(xs))) + pad
        bottom = int(math.ceil(max(ys))) + pad

        # Off-surface segments only cost the visible part of their box.
        rect = pygame.Rect(left, top, right - left + 1, bottom - top + 1).clip(self.surface.get_rect())
        if rect.width == 0 or rect.height == 0:
            return
        local = [(px - rect.left, py - rect.top) for px, py in points]

        color = self._stroke_style
        operation = self._composite_operation
        if operation == 'lighter':
            patch = pygame.Surface(rect.size)
            patch.fill(constants.BLACK)
            pygame.draw.lines(patch, premultiplied(color), False, local, self.line_width)
            self.surface.blit(patch, rect.topleft, special_flags=pygame.BLEND_RGB_ADD)
        elif operation == 'destination-out':
            keep = int(round(255 * (1 - color.alpha)))
            patch = pygame.Surface(rect.size)
            patch.fill((255, 255, 255))
            pygame.draw.lines(patch, (keep, keep, keep), False, local, self.line_width)
            self.surface.blit(patch, rect.topleft, special_flags=pygame.BLEND_RGB_MULT)
        else:
            patch = pygame.Surface(rect.size, pygame.SRCALPHA)
            patch.fill((0, 0, 0, 0))
            pygame.draw.lines(patch, to_pygame_color(color), False, local, self.line_width)
            self.surface.blit(patch, rect.topleft)


class PygameCanvas:
    """
    Wraps a pygame surface (usually the display) as a drawing surface.
    """
    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self._context = None

    @property
    def width(self):
        return self.surface.get_width()

    @property
    def height(self):
        return self.surface.get_height()

    def get_context(self, kind: str = "2d"):
        """Returns the shared 2D context, or None for any other context kind."""
        if kind != "2d":
            return None
        if self._context is None:
            self._context = PygameContext2D(self.surface)
        return self._context
