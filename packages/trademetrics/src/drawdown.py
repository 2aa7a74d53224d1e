"""Drawdown analytics.

This module derives the drawdown series from an equity curve, splits it
into drawdown episodes, and measures depth, duration and recovery.

Every function accepts either ``equity_curve`` or ``returns``; when both
are given the equity curve is used.
"""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .converters import resolve_equity_curve
from .stats import SeriesLike
from .types import DrawdownEpisode

logger = logging.getLogger(__name__)


def drawdown_series(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
) -> pd.Series:
    """
    Compute running drawdown series.

    Drawdown at each point is the relative decline from the running peak
    of the equity curve.

    Parameters
    ----------
    equity_curve : SeriesLike, optional
        Equity values.
    returns : SeriesLike, optional
        Periodic returns, compounded from a base of 1 when no equity
        curve is given.

    Returns
    -------
    pd.Series
        Drawdown series (values <= 0, exactly 0 at running peaks). Empty
        when there is no input.

    Examples
    --------
    >>> drawdown_series(equity_curve=[100, 110, 99, 121])
    0    0.0
    1    0.0
    2   -0.1
    3    0.0
    dtype: float64
    """
    eq = resolve_equity_curve(equity_curve, returns)
    if eq is None or len(eq) == 0:
        return pd.Series(dtype=float)

    running_max = eq.cummax()
    dd = (eq - running_max) / running_max

    if np.isinf(dd.to_numpy()).any():
        logger.warning(
            "drawdown_series: running peak is zero at %d points, returning NaN there",
            int(np.isinf(dd.to_numpy()).sum()),
        )
        dd = dd.replace([np.inf, -np.inf], np.nan)

    return dd


def max_drawdown(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
) -> float | None:
    """
    Compute maximum drawdown.

    Parameters
    ----------
    equity_curve : SeriesLike, optional
        Equity values.
    returns : SeriesLike, optional
        Periodic returns.

    Returns
    -------
    float | None
        Most negative drawdown (0.0 if the curve never fell). None when
        there is no data.

    Examples
    --------
    >>> max_drawdown(equity_curve=[100, 105, 110, 108, 115, 112, 120])
    -0.02608695652173913
    """
    dd = drawdown_series(equity_curve, returns).dropna()
    if len(dd) == 0:
        return None
    return float(dd.min())


def drawdown_episodes(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
) -> list[DrawdownEpisode]:
    """
    Split the drawdown series into episodes.

    An episode is a maximal run of consecutive periods with strictly
    negative drawdown. A run still open at the last period is closed
    there, with its depth taken over the periods observed so far.

    Parameters
    ----------
    equity_curve : SeriesLike, optional
        Equity values.
    returns : SeriesLike, optional
        Periodic returns.

    Returns
    -------
    list[DrawdownEpisode]
        Episodes ordered by start position. Empty if the curve never
        dropped below its running peak.

    Notes
    -----
    Positions with a missing drawdown are treated as "not below the
    peak" and therefore end any open episode.
    """
    dd = drawdown_series(equity_curve, returns).to_numpy()
    below = dd < 0

    episodes: list[DrawdownEpisode] = []
    start: int | None = None
    for i, flag in enumerate(below):
        if flag and start is None:
            start = i
        elif not flag and start is not None:
            episodes.append(_episode(dd, start, i - 1))
            start = None

    if start is not None:
        episodes.append(_episode(dd, start, len(dd) - 1))

    return episodes


def _episode(dd: np.ndarray, start: int, end: int) -> DrawdownEpisode:
    return DrawdownEpisode(start=start, end=end, depth=float(dd[start:end + 1].min()))


def drawdown_table(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
) -> pd.DataFrame:
    """
    Tabulate drawdown episodes.

    Returns
    -------
    pd.DataFrame
        One row per episode with columns ``start``, ``end``, ``duration``
        and ``depth``. Empty (with the same columns) when there are none.
    """
    episodes = drawdown_episodes(equity_curve, returns)
    return pd.DataFrame(
        {
            "start": pd.Series([e.start for e in episodes], dtype=int),
            "end": pd.Series([e.end for e in episodes], dtype=int),
            "duration": pd.Series([e.duration for e in episodes], dtype=int),
            "depth": pd.Series([e.depth for e in episodes], dtype=float),
        }
    )


def max_drawdown_duration(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
) -> int:
    """
    Compute maximum drawdown duration.

    Returns
    -------
    int
        Length in periods of the longest episode. 0 when there are none.
    """
    episodes = drawdown_episodes(equity_curve, returns)
    if not episodes:
        return 0
    return max(e.duration for e in episodes)


def average_drawdown(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
) -> float:
    """
    Compute the average episode depth.

    Parameters
    ----------
    equity_curve : SeriesLike, optional
        Equity values.
    returns : SeriesLike, optional
        Periodic returns.

    Returns
    -------
    float
        Mean of the episode depths (negative value).

    Notes
    -----
    Returns 0.0, not None, when there are no episodes. This differs from
    the None convention of the other drawdown functions and is kept for
    compatibility with existing reports.
    """
    episodes = drawdown_episodes(equity_curve, returns)
    if not episodes:
        return 0.0
    return float(np.mean([e.depth for e in episodes]))


def recovery_time(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
) -> int | None:
    """
    Compute periods from the worst trough back to the prior peak.

    The trough is the first position of the global minimum of the
    drawdown series. Recovery is the first position at or after the
    trough whose drawdown is >= 0.

    Parameters
    ----------
    equity_curve : SeriesLike, optional
        Equity values.
    returns : SeriesLike, optional
        Periodic returns.

    Returns
    -------
    int | None
        Number of periods between trough and recovery. None when the
        curve never recovers or there is no data.

    Examples
    --------
    >>> recovery_time(equity_curve=[100, 90, 100])
    1
    >>> recovery_time(equity_curve=[100, 90, 95]) is None
    True
    """
    dd = drawdown_series(equity_curve, returns)
    if dd.notna().sum() == 0:
        return None

    values = dd.to_numpy()
    trough = int(np.nanargmin(values))

    recovered = np.flatnonzero(values[trough:] >= 0)
    if len(recovered) == 0:
        return None
    return int(recovered[0])
