"""
params.py - Simulator inputs read from weapon properties

Every viewkick field has a default used when the key is absent or does not
hold a number. Values may be numbers or strings holding a decimal numeral;
most weapon files quote their numbers.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

NUMERAL_RE = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)\s*$')

PATTERN_KEY = "viewkick_pattern"

DEFAULTS: Dict[str, float] = {
    "ammo_clip_size": 30,
    "fire_rate": 0,
    "viewkick_pitch_base": 1,
    "viewkick_pitch_random": 1,
    "viewkick_pitch_softScale": 0,
    "viewkick_pitch_hardScale": 0,
    "viewkick_yaw_base": 1,
    "viewkick_yaw_random": 1,
    "viewkick_yaw_random_innerexclude": 0,
    "viewkick_yaw_softScale": 0,
    "viewkick_yaw_hardScale": 0,
    "viewkick_hipfire_weaponFraction": 1,
    "viewkick_ads_weaponFraction": 0,
    "viewkick_air_scale_ads": 1,
    "viewkick_scale_firstshot_hipfire": 1,
    "viewkick_scale_firstshot_ads": 1,
    "viewkick_scale_min_hipfire": 1,
    "viewkick_scale_max_hipfire": 1,
    "viewkick_scale_min_ads": 1,
    "viewkick_scale_max_ads": 1,
    "viewkick_scale_valuePerShot": 0,
    "viewkick_scale_pitch_valueLerpStart": 0,
    "viewkick_scale_pitch_valueLerpEnd": 0,
    "viewkick_scale_yaw_valueLerpStart": 0,
    "viewkick_scale_yaw_valueLerpEnd": 0,
    "viewkick_scale_valueDecayDelay": 0,
    "viewkick_scale_valueDecayRate": 0,
}

DEFAULT_SHOTS = 30
MAX_SHOTS = 60
DEFAULT_SHOT_INTERVAL = 0.1


class ViewMode(Enum):
    HIPFIRE = "hipfire"
    ADS = "ads"

    @classmethod
    def coerce(cls, value: Any) -> "ViewMode":
        """Accept a ViewMode or its string value; anything else raises ValueError."""
        if isinstance(value, cls):
            return value
        return cls(value)


def read_number(properties: Mapping[str, Any], key: str) -> float:
    """
    Read a numeric simulator input, falling back to its default.

    Raises:
        KeyError: If key is not a known simulator input
    """
    default = DEFAULTS[key]
    value = properties.get(key)
    if value is None:
        return float(default)
    if isinstance(value, bool):
        return float(default)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and NUMERAL_RE.match(value):
        return float(value)

    logger.debug("Non-numeric value %r for '%s', using default %s", value, key, default)
    return float(default)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def shot_count(properties: Mapping[str, Any]) -> int:
    """Magazine size clamped to [1, MAX_SHOTS]; zero or missing means DEFAULT_SHOTS."""
    ammo = read_number(properties, "ammo_clip_size") or DEFAULT_SHOTS
    return max(1, min(MAX_SHOTS, round_half_up(ammo)))


def shot_interval(properties: Mapping[str, Any]) -> float:
    fire_rate = read_number(properties, "fire_rate")
    return 1.0 / fire_rate if fire_rate > 0 else DEFAULT_SHOT_INTERVAL


def resolve_pattern_name(properties: Mapping[str, Any]) -> Optional[str]:
    """Pattern named by the weapon, or None when it names none."""
    value = properties.get(PATTERN_KEY)
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class ModeMultipliers:
    """Scalars that depend on view mode and the airborne flag."""
    fraction: float
    first_shot: float
    scale_min: float
    scale_max: float
    air_scale: float


def mode_multipliers(properties: Mapping[str, Any], view_mode: ViewMode, airborne: bool) -> ModeMultipliers:
    """
    Resolve hipfire or ADS multipliers.

    ADS layers its modifiers on the hipfire bases:
        fraction  = hipfire_weaponFraction * (1 - ads_weaponFraction)
        first/min/max = hipfire value * ads value
    The air scale only applies while aiming down sights in the air.
    """
    def read(key):
        return read_number(properties, key)

    fraction = read("viewkick_hipfire_weaponFraction")
    first_shot = read("viewkick_scale_firstshot_hipfire")
    scale_min = read("viewkick_scale_min_hipfire")
    scale_max = read("viewkick_scale_max_hipfire")

    if view_mode is ViewMode.HIPFIRE:
        return ModeMultipliers(fraction, first_shot, scale_min, scale_max, 1.0)

    return ModeMultipliers(
        fraction=fraction * (1.0 - read("viewkick_ads_weaponFraction")),
        first_shot=first_shot * read("viewkick_scale_firstshot_ads"),
        scale_min=scale_min * read("viewkick_scale_min_ads"),
        scale_max=scale_max * read("viewkick_scale_max_ads"),
        air_scale=read("viewkick_air_scale_ads") if airborne else 1.0,
    )
