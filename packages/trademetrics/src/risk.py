"""Risk-adjusted performance ratios.

This module provides the Sharpe, Sortino, Calmar and Information
ratios, plus the downside deviation and tracking error they build on.

The ratios do not share a single convention for degenerate inputs:

* Sharpe / Information Ratio: None on a zero denominator.
* Sortino: inf when no return falls below target, None on a zero
  downside deviation.
* Calmar: None when the max drawdown is zero (never inf).

Callers depend on these per-metric conventions, so they are kept as is.
"""
from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd

from .drawdown import max_drawdown
from .errors import LengthMismatchError
from .returns import cagr
from .stats import SeriesLike, as_series, clean, count_valid, mean_or_none, std_or_none

logger = logging.getLogger(__name__)


def sharpe_ratio(
    returns: SeriesLike,
    risk_free: float = 0.0,
    periods_per_year: float = 252,
) -> float | None:
    """
    Compute annualized Sharpe ratio.

    Sharpe ratio measures excess return per unit of total risk.

    Parameters
    ----------
    returns : SeriesLike
        Periodic returns (e.g., daily).
    risk_free : float, default 0.0
        Risk-free rate (same frequency as returns).
    periods_per_year : float, default 252
        Number of periods per year for annualization.

    Returns
    -------
    float | None
        Annualized Sharpe ratio. None with fewer than 2 returns or when
        the excess returns have exactly zero standard deviation.

    Notes
    -----
    Sharpe = mean(r - rf) / std(r - rf) * sqrt(periods_per_year)
    """
    excess = clean(returns) - risk_free
    if len(excess) < 2:
        return None

    std = std_or_none(excess)
    if std is None or std == 0:
        return None

    return float(excess.mean() / std * np.sqrt(periods_per_year))


def downside_deviation(
    returns: SeriesLike,
    target_return: float = 0.0,
) -> float | None:
    """
    Root-mean-square shortfall below a target.

    Parameters
    ----------
    returns : SeriesLike
        Periodic (excess) returns.
    target_return : float, default 0.0
        Target return.

    Returns
    -------
    float | None
        sqrt(mean((r - target)^2)) over returns strictly below target.
        None when no return is below target.
    """
    r = clean(returns)
    downside = r[r < target_return]
    if len(downside) == 0:
        return None
    return float(np.sqrt(((downside - target_return) ** 2).mean()))


def sortino_ratio(
    returns: SeriesLike,
    risk_free: float = 0.0,
    target_return: float = 0.0,
    periods_per_year: float = 252,
) -> float | None:
    """
    Compute annualized Sortino ratio.

    Sortino ratio uses downside deviation instead of total volatility,
    penalizing only returns below target.

    Parameters
    ----------
    returns : SeriesLike
        Periodic returns.
    risk_free : float, default 0.0
        Risk-free rate (same frequency as returns).
    target_return : float, default 0.0
        Target for the excess returns in the downside calculation.
    periods_per_year : float, default 252
        Number of periods per year.

    Returns
    -------
    float | None
        Annualized Sortino ratio. ``math.inf`` when no excess return is
        below target; None with fewer than 2 returns or when the downside
        deviation is exactly zero.

    Notes
    -----
    Sortino = mean(r - rf) / downside_deviation(r - rf) * sqrt(periods_per_year)
    """
    excess = clean(returns) - risk_free
    if len(excess) < 2:
        return None

    if not (excess < target_return).any():
        return math.inf

    dd = downside_deviation(excess, target_return)
    if dd is None or dd == 0:
        return None

    return float(excess.mean() / dd * np.sqrt(periods_per_year))


def calmar_ratio(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
    periods_per_year: float = 252,
) -> float | None:
    """
    Compute Calmar ratio.

    Calmar ratio is CAGR divided by maximum drawdown.

    Parameters
    ----------
    equity_curve : SeriesLike, optional
        Equity values. Used in preference to ``returns``.
    returns : SeriesLike, optional
        Periodic returns.
    periods_per_year : float, default 252
        Number of periods per year.

    Returns
    -------
    float | None
        abs(cagr / max_drawdown). None if either is undefined or if the
        max drawdown is exactly zero.
    """
    growth = cagr(equity_curve, returns, periods_per_year)
    max_dd = max_drawdown(equity_curve, returns)

    if growth is None or max_dd is None or max_dd == 0:
        return None

    return abs(growth / max_dd)


def _active_returns(
    name: str,
    returns: SeriesLike,
    benchmark_returns: SeriesLike,
) -> pd.Series:
    r = as_series(returns)
    b = as_series(benchmark_returns)
    if len(r) != len(b):
        raise LengthMismatchError(name, len(r), len(b))
    return pd.Series(r.to_numpy() - b.to_numpy(), index=r.index)


def tracking_error(
    returns: SeriesLike,
    benchmark_returns: SeriesLike,
    periods_per_year: float = 252,
) -> float | None:
    """
    Annualized tracking error (std of active returns).

    Parameters
    ----------
    returns : SeriesLike
        Strategy returns.
    benchmark_returns : SeriesLike
        Benchmark returns, same frequency and length.
    periods_per_year : float, default 252
        For annualization.

    Returns
    -------
    float | None
        TE = sqrt(periods_per_year) * std(r - b). None if < 2 obs.

    Raises
    ------
    LengthMismatchError
        If the two series differ in length.
    """
    active = _active_returns("tracking_error", returns, benchmark_returns)
    std = std_or_none(active)
    if std is None:
        return None
    return float(std * np.sqrt(periods_per_year))


def information_ratio(
    returns: SeriesLike,
    benchmark_returns: SeriesLike,
    periods_per_year: float = 252,
) -> float | None:
    """
    Compute Information Ratio.

    IR measures excess return over benchmark per unit of tracking error.

    Parameters
    ----------
    returns : SeriesLike
        Strategy returns.
    benchmark_returns : SeriesLike
        Benchmark returns. Compared by position, so it must have the
        same length as ``returns``.
    periods_per_year : float, default 252
        Number of periods per year.

    Returns
    -------
    float | None
        Annualized Information Ratio. None with fewer than 2 active
        returns or zero tracking error.

    Raises
    ------
    LengthMismatchError
        If the two series differ in length.
    """
    active = _active_returns("information_ratio", returns, benchmark_returns)
    if count_valid(active) < 2:
        return None

    std = std_or_none(active)
    if std is None:
        return None
    if std == 0:
        logger.warning("information_ratio: zero tracking error, returning None")
        return None

    return float(mean_or_none(active) / std * np.sqrt(periods_per_year))
