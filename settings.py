# settings.py

"""
Run settings for the fireworks engine.

The option mapping handed to the display (usually the 'fireworks' section of
config.json) is resolved exactly once into an immutable FireworksSettings
value. Missing keys take the defaults from constants.py.
"""

import logging
import math
import numbers
from collections import namedtuple

import constants

logger = logging.getLogger("fireworks")


class ConfigurationError(Exception):
    """Raised when the engine cannot start with the given surface or options."""


FireworksSettings = namedtuple('FireworksSettings', [
    'hue',
    'fireworks_limiter',
    'autolaunch_timer',
    'particle_trail',
    'speed',
    'acceleration',
    'particle_count',
    'gravity',
    'launch_point',
    'hue_step',
])

# Option key -> (settings field, default)
_OPTIONS = {
    'hue': ('hue', constants.DEFAULT_HUE),
    'fireworksLimiter': ('fireworks_limiter', constants.DEFAULT_FIREWORKS_LIMITER),
    'autolaunchTimer': ('autolaunch_timer', constants.DEFAULT_AUTOLAUNCH_TIMER),
    'particleTrail': ('particle_trail', constants.DEFAULT_PARTICLE_TRAIL),
    'speed': ('speed', constants.DEFAULT_SPEED),
    'acceleration': ('acceleration', constants.DEFAULT_ACCELERATION),
    'particleCount': ('particle_count', constants.DEFAULT_PARTICLE_COUNT),
    'gravity': ('gravity', constants.DEFAULT_GRAVITY),
    'launchPoint': ('launch_point', None),
    'hueStep': ('hue_step', None),
}

_DEFAULTS = {field: default for field, default in _OPTIONS.values()}

# Older hosts spelled the timer option this way.
_ALIASES = {'autolauchTimer': 'autolaunchTimer'}

_POSITIVE_INTEGER_FIELDS = ('fireworks_limiter', 'autolaunch_timer', 'particle_trail', 'particle_count')


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _resolve_launch_point(value):
    if value is None:
        return None
    try:
        x, y = value
    except (TypeError, ValueError):
        raise ConfigurationError(f"Option 'launchPoint' must be an [x, y] pair, got {value!r}") from None
    if not (_is_number(x) and _is_number(y)):
        raise ConfigurationError(f"Option 'launchPoint' must hold two numbers, got {value!r}")
    return (float(x), float(y))


def resolve_settings(options=None) -> FireworksSettings:
    """
    Resolves an option mapping into FireworksSettings.

    Data Contract:
    - Inputs: options (mapping or None) - camelCase option keys, all optional.
    - Outputs: FireworksSettings with every field populated.
    - Side Effects: Logs a warning for ignored keys and replaced values.
    - Invariants: limiter, timer, particle trail and particle count are
      positive integers. A value that is not falls back to its default.

    Raises ConfigurationError when a value is not a finite number.
    """
    options = dict(options or {})
    for alias, key in _ALIASES.items():
        if alias in options:
            options.setdefault(key, options[alias])
            del options[alias]

    unknown = sorted(set(options) - set(_OPTIONS))
    if unknown:
        logger.warning(f"Ignoring unknown fireworks options: {unknown}")

    values = {}
    for key, (field, default) in _OPTIONS.items():
        value = options.get(key)
        if value is None:
            values[field] = default
        elif field == 'launch_point':
            values[field] = _resolve_launch_point(value)
        elif not _is_number(value):
            raise ConfigurationError(f"Option '{key}' must be a number, got {value!r}")
        else:
            values[field] = value

    for field in _POSITIVE_INTEGER_FIELDS:
        value = values[field]
        if value <= 0 or not float(value).is_integer():
            default = _DEFAULTS[field]
            logger.warning(f"Setting '{field}'={value!r} is not a positive integer. Using {default}.")
            values[field] = default
        else:
            values[field] = int(value)

    return FireworksSettings(**values)
