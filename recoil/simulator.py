"""
simulator.py - Deterministic recoil trajectory preview

simulate() turns a weapon's viewkick fields and a named pattern into the
accumulated (yaw, -pitch) camera offset after every shot of one magazine.
The primary trajectory uses light randomness; variant trajectories use
other seeds and heavier dampening to show the spread of outcomes.

Seeds come from string_hash("<pattern>:<mode>:<air|ground>:<shots>") and
each trajectory draws from its own Mulberry32, so the same inputs always
produce bit-identical points.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple, Union

import numpy as np

from recoil.params import (
    ModeMultipliers,
    ViewMode,
    mode_multipliers,
    read_number,
    shot_count,
    shot_interval,
)
from recoil.patterns import RecoilPattern, RecoilPatternRegistry, get_recoil_pattern_registry
from recoil.prng import MASK_32, Mulberry32, string_hash

logger = logging.getLogger(__name__)

MIN_VARIANTS = 1
MAX_VARIANTS = 10

PRIMARY_DAMPENING = (0.85, 0.85)
VARIANT_DAMPENING = (0.55, 0.7)

Point = Tuple[float, float]


@dataclass(frozen=True)
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass
class Trajectory:
    points: List[Point] = field(default_factory=list)
    bounds: Optional[Bounds] = None

    def __len__(self) -> int:
        return len(self.points)

    def as_array(self) -> np.ndarray:
        """Points as an (n, 2) float array."""
        return np.asarray(self.points, dtype=float).reshape(-1, 2)


@dataclass(frozen=True)
class _AxisInputs:
    base_yaw: float
    base_pitch: float
    yaw_random: float
    pitch_random: float
    yaw_exclusion: float
    yaw_scale: float
    pitch_scale: float
    value_per_shot: float
    yaw_lerp: Tuple[float, float]
    pitch_lerp: Tuple[float, float]
    decay_delay: float
    decay_rate: float


def _read_axis_inputs(properties: Mapping[str, Any]) -> _AxisInputs:
    def read(key):
        return read_number(properties, key)

    return _AxisInputs(
        base_yaw=read("viewkick_yaw_base"),
        base_pitch=read("viewkick_pitch_base"),
        yaw_random=read("viewkick_yaw_random"),
        pitch_random=read("viewkick_pitch_random"),
        yaw_exclusion=read("viewkick_yaw_random_innerexclude"),
        yaw_scale=read("viewkick_yaw_softScale") + read("viewkick_yaw_hardScale"),
        pitch_scale=read("viewkick_pitch_softScale") + read("viewkick_pitch_hardScale"),
        value_per_shot=read("viewkick_scale_valuePerShot"),
        yaw_lerp=(read("viewkick_scale_yaw_valueLerpStart"), read("viewkick_scale_yaw_valueLerpEnd")),
        pitch_lerp=(read("viewkick_scale_pitch_valueLerpStart"), read("viewkick_scale_pitch_valueLerpEnd")),
        decay_delay=read("viewkick_scale_valueDecayDelay"),
        decay_rate=read("viewkick_scale_valueDecayRate"),
    )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _axis_scale(scale_value: float, lerp: Tuple[float, float], mode: ModeMultipliers) -> float:
    """Clamped shot scale, or the lerp between min and max when the axis sets a lerp range."""
    lerp_start, lerp_end = lerp
    if lerp_end != lerp_start:
        t = _clamp((scale_value - lerp_start) / (lerp_end - lerp_start), 0.0, 1.0)
        return mode.scale_min + (mode.scale_max - mode.scale_min) * t
    return _clamp(scale_value, mode.scale_min, mode.scale_max)


def _decay_scale(elapsed: float, delay: float, rate: float) -> float:
    if elapsed > delay:
        return max(0.0, 1.0 - (elapsed - delay) * rate * 0.01)
    return 1.0


def _apply_exclusion(value: float, exclusion: float) -> float:
    if exclusion > 0 and abs(value) < exclusion:
        return exclusion if value >= 0 else -exclusion
    return value


def _run_trajectory(pattern: RecoilPattern, inputs: _AxisInputs, mode: ModeMultipliers,
                    shots: int, dt: float, seed: int, dampening: Tuple[float, float],
                    track_bounds: bool) -> Trajectory:
    rng = Mulberry32(seed)
    damp_yaw, damp_pitch = dampening
    yaw = 0.0
    pitch = 0.0
    points: List[Point] = []

    for i in range(shots):
        bullet_yaw, bullet_pitch, bullet_yaw_rand, bullet_pitch_rand = pattern.bullet(i)

        rand_yaw = (2.0 * rng() - 1.0) * bullet_yaw_rand * inputs.yaw_random * damp_yaw
        rand_yaw = _apply_exclusion(rand_yaw, inputs.yaw_exclusion)
        rand_pitch = (2.0 * rng() - 1.0) * bullet_pitch_rand * inputs.pitch_random * damp_pitch

        scale_value = 1.0 + inputs.value_per_shot * i
        yaw_axis = _axis_scale(scale_value, inputs.yaw_lerp, mode)
        pitch_axis = _axis_scale(scale_value, inputs.pitch_lerp, mode)

        decay = _decay_scale(i * dt, inputs.decay_delay, inputs.decay_rate)
        first_shot = mode.first_shot if i == 0 else 1.0
        shot_scale = mode.fraction * mode.air_scale * first_shot * decay

        yaw += (bullet_yaw * inputs.base_yaw + rand_yaw) * inputs.yaw_scale * yaw_axis * shot_scale
        pitch += (bullet_pitch * inputs.base_pitch + rand_pitch) * inputs.pitch_scale * pitch_axis * shot_scale
        points.append((yaw, -pitch))

    bounds = None
    if track_bounds and points:
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        bounds = Bounds(min(xs), max(xs), min(ys), max(ys))

    return Trajectory(points, bounds)


def simulation_seed(pattern_name: str, view_mode: ViewMode, airborne: bool, shots: int) -> int:
    """32-bit seed shared by every trajectory of one simulation."""
    return string_hash(f"{pattern_name}:{view_mode.value}:{'air' if airborne else 'ground'}:{shots}")


def simulate(properties: Mapping[str, Any], pattern_name: str,
             view_mode: Union[ViewMode, str] = ViewMode.HIPFIRE, airborne: bool = False,
             variant_count: int = 1,
             registry: Optional[RecoilPatternRegistry] = None) -> Tuple[Trajectory, List[Trajectory]]:
    """
    Simulate one magazine of recoil.

    Args:
        properties: Weapon key -> value mapping (WeaponDocument.values())
        pattern_name: Name of the recoil pattern
        view_mode: ViewMode or "hipfire" / "ads"
        airborne: Whether the shooter is in the air
        variant_count: Total number of trajectories, clamped to [1, 10]
        registry: Pattern registry (defaults to the global registry)

    Returns:
        (primary, variants): the primary trajectory with bounds, and
        variant_count - 1 variant trajectories without bounds. An unknown
        pattern gives an empty primary and no variants.

    Raises:
        ValueError: If view_mode is not a known view mode
    """
    view_mode = ViewMode.coerce(view_mode)
    if registry is None:
        registry = get_recoil_pattern_registry()

    pattern = registry.get_pattern(pattern_name) if pattern_name else None
    if pattern is None:
        logger.debug("Unknown recoil pattern %r, nothing to simulate", pattern_name)
        return Trajectory([], None), []

    variant_count = max(MIN_VARIANTS, min(MAX_VARIANTS, int(variant_count)))
    shots = shot_count(properties)
    dt = shot_interval(properties)
    inputs = _read_axis_inputs(properties)
    mode = mode_multipliers(properties, view_mode, airborne)
    seed = simulation_seed(pattern.name, view_mode, airborne, shots)

    primary = _run_trajectory(pattern, inputs, mode, shots, dt, seed, PRIMARY_DAMPENING, track_bounds=True)
    variants = [
        _run_trajectory(pattern, inputs, mode, shots, dt, (seed + offset) & MASK_32,
                        VARIANT_DAMPENING, track_bounds=False)
        for offset in range(1, variant_count)
    ]
    return primary, variants
