import math

import numpy as np
import pytest

from fireworks_system import FireworksDisplay
from settings import ConfigurationError
from tests.conftest import RecordingContext, RecordingSurface


class StubEntity:
    def __init__(self, name, log, expire=False):
        self.name = name
        self.log = log
        self.expire = expire

    def draw(self, context):
        self.log.append(('draw', self.name))

    def update(self, callback):
        self.log.append(('update', self.name))
        if self.expire:
            callback(self)


def straight_up_display(rng, **options):
    """A display whose user launches fly from (100, 100) and never auto-launch."""
    settings = {
        'launchPoint': [100, 100],
        'speed': 2,
        'acceleration': 1,
        'autolaunchTimer': 100000,
    }
    settings.update(options)
    return FireworksDisplay(RecordingSurface(200, 200), settings, rng)


def ready_for_launch(display):
    for _ in range(display.settings.fireworks_limiter):
        display.tick()


# --- Construction ---

class MissingContext:
    width = 100
    height = 100


class MissingWidth:
    height = 100

    def get_context(self, kind="2d"):
        return RecordingContext()


class MissingHeight:
    width = 100

    def get_context(self, kind="2d"):
        return RecordingContext()


class NoTwoDimensionalContext:
    width = 100
    height = 100

    def get_context(self, kind="2d"):
        return None


class TextualWidth:
    width = "100px"
    height = 100

    def get_context(self, kind="2d"):
        return RecordingContext()


@pytest.mark.parametrize("surface_type", [
    MissingContext, MissingWidth, MissingHeight, NoTwoDimensionalContext, TextualWidth,
])
def test_unusable_surface_raises_configuration_error(surface_type):
    with pytest.raises(ConfigurationError):
        FireworksDisplay(surface_type())


def test_missing_surface_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        FireworksDisplay(None)


def test_complete_surface_initializes(surface):
    display = FireworksDisplay(surface)
    assert display.context is surface.context
    assert (display.width, display.height) == (800, 600)
    assert display.launch_point == (400, 600)
    assert display.fireworks == ()
    assert display.particles == ()


# --- Frame ---

def test_tick_fades_then_switches_to_additive_drawing(surface, rng):
    display = FireworksDisplay(surface, rng=rng)
    display.tick()

    name, args = surface.context.calls[0]
    assert name == 'fill_rect'
    x, y, width, height, fill_style, operation = args
    assert (x, y, width, height) == (0, 0, 800, 600)
    assert operation == 'destination-out'
    assert fill_style.alpha == pytest.approx(0.5)
    assert surface.context.global_composite_operation == 'lighter'


def test_empty_tick_only_fades(surface, rng):
    display = FireworksDisplay(surface, rng=rng)
    display.tick()
    assert surface.context.names() == ['fill_rect']
    assert display.frame == 1


def test_hue_is_random_per_frame(surface, rng):
    display = FireworksDisplay(surface, rng=rng)
    hues = set()
    for _ in range(20):
        display.tick()
        assert 0 <= display.hue < 360
        hues.add(display.hue)
    assert len(hues) > 1


def test_hue_step_cycles_and_wraps(surface, rng):
    display = FireworksDisplay(surface, {'hue': 350, 'hueStep': 20}, rng)
    display.tick()
    assert display.hue == pytest.approx(10)
    display.tick()
    assert display.hue == pytest.approx(30)


def test_fireworks_processed_before_particles_in_reverse_order(surface, rng):
    display = FireworksDisplay(surface, rng=rng)
    log = []
    display._fireworks.extend([StubEntity('f0', log), StubEntity('f1', log)])
    display._particles.extend([StubEntity('p0', log), StubEntity('p1', log)])

    display.tick()

    assert log == [
        ('draw', 'f1'), ('update', 'f1'),
        ('draw', 'f0'), ('update', 'f0'),
        ('draw', 'p1'), ('update', 'p1'),
        ('draw', 'p0'), ('update', 'p0'),
    ]


def test_removal_during_iteration_visits_every_particle_once(surface, rng):
    display = FireworksDisplay(surface, rng=rng)
    log = []
    a, b, c, d = (StubEntity(name, log) for name in 'abcd')
    b.expire = True
    c.expire = True
    display._particles.extend([a, b, c, d])

    display.tick()

    updated = [name for action, name in log if action == 'update']
    assert updated == ['d', 'c', 'b', 'a']
    assert display.particles == (a, d)


# --- Launching ---

def test_launch_at_is_rate_limited(rng):
    display = straight_up_display(rng)
    for _ in range(4):
        display.tick()
    assert display.launch_at(100, 0) is False

    display.tick()
    assert display.launch_at(100, 0) is True
    assert display.launch_at(100, 0) is False
    assert len(display.fireworks) == 1

    ready_for_launch(display)
    assert display.launch_at(50, 0) is True
    assert display.fireworks_launched == 2


def test_firework_explodes_after_exact_number_of_frames(rng):
    display = straight_up_display(rng)
    ready_for_launch(display)
    assert display.launch_at(100, 0)

    for _ in range(49):
        display.tick()
    assert len(display.fireworks) == 1
    assert display.particles == ()

    display.tick()
    assert display.fireworks == ()
    assert display.fireworks_exploded == 1
    assert len(display.particles) == 30


def test_burst_starts_at_target_not_at_overshoot(rng):
    display = straight_up_display(rng, speed=30)
    ready_for_launch(display)
    display.launch_at(100, 0)

    while display.fireworks:
        display.tick()

    assert len(display.particles) == 30
    for particle in display.particles:
        # The trail still holds the spawn point after one update
        assert all(point == (100.0, 0.0) for point in particle.coordinates)


def test_burst_particles_shade_near_frame_hue(rng):
    display = straight_up_display(rng)
    ready_for_launch(display)
    display.launch_at(100, 0)
    while display.fireworks:
        display.tick()

    for particle in display.particles:
        assert display.hue - 20 <= particle.hue < display.hue + 20


def test_particle_trail_of_one_is_preserved(rng):
    display = straight_up_display(rng, particleTrail=1)
    ready_for_launch(display)
    display.launch_at(100, 0)
    while display.fireworks:
        display.tick()

    assert display.particles
    for _ in range(10):
        for particle in display.particles:
            assert len(particle.coordinates) == 1
        display.tick()


def test_particles_eventually_burn_out(rng):
    display = straight_up_display(rng)
    ready_for_launch(display)
    display.launch_at(100, 0)
    while display.fireworks:
        display.tick()

    # Slowest decay is 0.015 per frame
    for _ in range(70):
        display.tick()
    assert display.particles == ()


def test_auto_launch_every_timer_period(surface, rng):
    display = FireworksDisplay(surface, {'autolaunchTimer': 80}, rng)

    for launch in range(1, 4):
        for _ in range(79):
            display.tick()
        assert display.fireworks_launched == launch - 1

        display.tick()
        assert display.fireworks_launched == launch

        firework = display.fireworks[-1]
        assert tuple(firework.start) == (400.0, 600.0)
        assert 0 <= firework.target[0] <= 800
        assert 0 <= firework.target[1] <= 300


def test_off_surface_targets_are_accepted(rng):
    display = straight_up_display(rng)
    ready_for_launch(display)
    assert display.launch_at(-5000, 9000)
    for _ in range(10):
        display.tick()
    assert len(display.fireworks) == 1


def test_entity_collections_are_read_only_snapshots(rng):
    display = straight_up_display(rng)
    ready_for_launch(display)
    display.launch_at(100, 0)
    snapshot = display.fireworks
    assert isinstance(snapshot, tuple)
    display.tick()
    assert snapshot is not display.fireworks


def test_seeded_runs_are_reproducible():
    def run(seed):
        display = FireworksDisplay(RecordingSurface(), {'autolaunchTimer': 10}, np.random.default_rng(seed))
        for _ in range(60):
            display.tick()
        return [tuple(p.position) for p in display.particles]

    assert run(7) == run(7)


@pytest.mark.parametrize("options", [{'hueStep': math.nan}, {'speed': math.nan}, {'hue': math.inf}])
def test_non_finite_options_fail_at_construction(surface, options):
    with pytest.raises(ConfigurationError):
        FireworksDisplay(surface, options)


@pytest.mark.parametrize("target", [(math.nan, 0), (0, math.inf), (-math.inf, math.nan)])
def test_non_finite_targets_are_dropped(rng, target):
    display = straight_up_display(rng)
    ready_for_launch(display)

    assert display.launch_at(*target) is False
    assert display.fireworks == ()
    assert display.fireworks_launched == 0
    # The limiter is not consumed by a dropped target
    assert display.launch_at(100, 0) is True
