"""Core types for trademetrics.

Dataclasses for configuration and drawdown episodes.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MetricsConfig:
    """Metric configuration.

    Parameters
    ----------
    periods_per_year : float, default 252
        Periods per year for annualization (252 daily, 52 weekly, 12 monthly).
    risk_free : float, default 0.0
        Risk-free rate per period.
    target_return : float, default 0.0
        Minimum acceptable return per period for Sortino.
    """

    periods_per_year: float = 252
    risk_free: float = 0.0
    target_return: float = 0.0

    def __post_init__(self) -> None:
        if self.periods_per_year <= 0:
            raise ValueError(
                f"periods_per_year must be positive, got {self.periods_per_year}"
            )


@dataclass(frozen=True)
class DrawdownEpisode:
    """A maximal run of strictly negative drawdown.

    Parameters
    ----------
    start : int
        Position of the first period below the high-water mark.
    end : int
        Position of the last period below the high-water mark (inclusive).
    depth : float
        Most negative drawdown in the run (the trough).
    """

    start: int
    end: int
    depth: float

    @property
    def duration(self) -> int:
        """Number of periods in the episode."""
        return self.end - self.start + 1
