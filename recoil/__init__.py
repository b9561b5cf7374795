"""
recoil - Recoil pattern table and deterministic trajectory preview

PUBLIC API:
  From patterns.py:
    - get_recoil_pattern_registry() - Get pattern registry singleton
    - RecoilPatternRegistry - Pattern registry class
    - RecoilPattern - One named pattern

  From simulator.py:
    - simulate() - Primary and variant trajectories for a weapon
    - Trajectory, Bounds

  From params.py:
    - ViewMode - hipfire / ads
    - resolve_pattern_name() - Pattern named by a weapon's viewkick_pattern

  From analysis.py:
    - spread_statistics() - Per-shot mean/std across trajectories

USAGE:
  from kvdoc import parse
  from recoil import simulate, resolve_pattern_name

  doc = parse(text)
  props = doc.values()
  primary, variants = simulate(props, resolve_pattern_name(props), "ads", variant_count=5)
"""

from recoil.analysis import SpreadStatistics, spread_statistics
from recoil.params import DEFAULTS, ViewMode, read_number, resolve_pattern_name
from recoil.patterns import (
    RecoilPattern,
    RecoilPatternRegistry,
    get_recoil_pattern_registry,
    reset_recoil_pattern_registry,
)
from recoil.prng import Mulberry32, string_hash
from recoil.simulator import Bounds, Trajectory, simulate

__all__ = [
    # Patterns
    'RecoilPattern',
    'RecoilPatternRegistry',
    'get_recoil_pattern_registry',
    'reset_recoil_pattern_registry',
    # Simulation
    'simulate',
    'Trajectory',
    'Bounds',
    'ViewMode',
    'DEFAULTS',
    'read_number',
    'resolve_pattern_name',
    'Mulberry32',
    'string_hash',
    # Analysis
    'spread_statistics',
    'SpreadStatistics',
]
