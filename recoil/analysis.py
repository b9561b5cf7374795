"""
analysis.py - Spread statistics over simulated trajectories
"""

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from recoil.simulator import Trajectory


@dataclass
class SpreadStatistics:
    """Per-shot mean and standard deviation across trajectories."""
    mean_x: np.ndarray = field(default_factory=lambda: np.zeros(0))
    mean_y: np.ndarray = field(default_factory=lambda: np.zeros(0))
    std_x: np.ndarray = field(default_factory=lambda: np.zeros(0))
    std_y: np.ndarray = field(default_factory=lambda: np.zeros(0))
    final_dispersion: float = 0.0
    trajectory_count: int = 0

    @property
    def shots(self) -> int:
        return int(self.mean_x.shape[0])


def spread_statistics(primary: Trajectory, variants: Sequence[Trajectory]) -> SpreadStatistics:
    """
    Summarize how far the simulated trajectories drift apart.

    All non-empty trajectories are stacked into a (trajectories, shots, 2)
    array; final_dispersion is the largest distance of a last-shot point
    from the mean last-shot point.

    Raises:
        ValueError: If non-empty trajectories have different lengths
    """
    trajectories: List[Trajectory] = [t for t in [primary, *variants] if len(t) > 0]
    if not trajectories:
        return SpreadStatistics()

    lengths = {len(t) for t in trajectories}
    if len(lengths) != 1:
        raise ValueError(f"Trajectories must have equal lengths, got {sorted(lengths)}")

    stacked = np.stack([t.as_array() for t in trajectories])
    mean = stacked.mean(axis=0)
    std = stacked.std(axis=0)

    final_offsets = stacked[:, -1, :] - mean[-1]
    final_dispersion = float(np.linalg.norm(final_offsets, axis=1).max())

    return SpreadStatistics(
        mean_x=mean[:, 0],
        mean_y=mean[:, 1],
        std_x=std[:, 0],
        std_y=std[:, 1],
        final_dispersion=final_dispersion,
        trajectory_count=len(trajectories),
    )
