"""Rolling-window metrics.

Each rolling metric re-evaluates the full-sample formula over every
trailing window. Outputs have the input's length and index and use the
nullable ``"Float64"`` dtype: positions without enough history, or where
the metric is undefined, hold ``pd.NA``.
"""
from __future__ import annotations

import logging
from typing import Callable

import numpy as np
import pandas as pd

from .drawdown import max_drawdown
from .errors import LengthMismatchError
from .returns import annualized_volatility
from .risk import sharpe_ratio, sortino_ratio
from .stats import SeriesLike, as_series, pairwise_complete, var_or_none

logger = logging.getLogger(__name__)

WindowFunc = Callable[[pd.Series], float | None]
PairWindowFunc = Callable[[pd.Series, pd.Series], float | None]


def _check_window(window: int, min_periods: int | None) -> int:
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if min_periods is None:
        return window
    if min_periods < 0:
        raise ValueError(f"min_periods must be >= 0, got {min_periods}")
    return min_periods


def _warn_if_short(name: str, n: int, window: int) -> None:
    if n < window:
        logger.warning(
            "%s: series of length %d is shorter than window %d; every slot is NA",
            name, n, window,
        )


def _to_output(values: list[float | None], index: pd.Index) -> pd.Series:
    return pd.Series(pd.array(values, dtype="Float64"), index=index)


def rolling_apply(
    series: SeriesLike,
    window: int,
    func: WindowFunc,
    min_periods: int | None = None,
) -> pd.Series:
    """
    Apply a metric over every trailing window.

    Parameters
    ----------
    series : SeriesLike
        Input series.
    window : int
        Window length W.
    func : callable
        Metric evaluated on each window slice; may return None.
    min_periods : int, optional
        Minimum number of non-missing values a window needs. Defaults
        to ``window``.

    Returns
    -------
    pd.Series
        Float64 series of the input's length. Positions 0..W-2 are NA;
        position i >= W-1 holds func(series[i-W+1 : i+1]).

    Raises
    ------
    ValueError
        If ``window`` < 1 or ``min_periods`` < 0.
    """
    min_periods = _check_window(window, min_periods)
    s = as_series(series)
    _warn_if_short("rolling_apply", len(s), window)
    valid = s.notna().to_numpy()

    out: list[float | None] = [None] * len(s)
    for i in range(window - 1, len(s)):
        lo = i - window + 1
        if valid[lo:i + 1].sum() >= min_periods:
            out[i] = func(s.iloc[lo:i + 1])

    return _to_output(out, s.index)


def rolling_apply_pair(
    left: SeriesLike,
    right: SeriesLike,
    window: int,
    func: PairWindowFunc,
    min_periods: int | None = None,
) -> pd.Series:
    """
    Apply a two-series metric over every trailing window.

    Both series are sliced at the same positions. The minimum-count rule
    applies to pairwise-complete observations.

    Parameters
    ----------
    left, right : SeriesLike
        Input series of equal length. The output takes ``left``'s index.
    window : int
        Window length W.
    func : callable
        Metric evaluated on each pair of window slices; may return None.
    min_periods : int, optional
        Minimum number of complete pairs a window needs. Defaults to
        ``window``.

    Returns
    -------
    pd.Series
        Float64 series of the inputs' length, NA where undefined.

    Raises
    ------
    LengthMismatchError
        If the two series differ in length.
    """
    min_periods = _check_window(window, min_periods)
    a = as_series(left)
    b = as_series(right)
    if len(a) != len(b):
        raise LengthMismatchError("rolling_apply_pair", len(a), len(b))
    _warn_if_short("rolling_apply_pair", len(a), window)
    complete = (a.notna().to_numpy() & b.notna().to_numpy())

    out: list[float | None] = [None] * len(a)
    for i in range(window - 1, len(a)):
        lo = i - window + 1
        if complete[lo:i + 1].sum() >= min_periods:
            out[i] = func(a.iloc[lo:i + 1], b.iloc[lo:i + 1])

    return _to_output(out, a.index)


def correlation(left: SeriesLike, right: SeriesLike) -> float | None:
    """
    Pearson correlation over pairwise-complete observations.

    Returns
    -------
    float | None
        Correlation in [-1, 1]. None with fewer than 2 complete pairs or
        when either side has zero variance.
    """
    a, b = pairwise_complete(left, right)
    if len(a) < 2:
        return None
    if a.var(ddof=1) == 0 or b.var(ddof=1) == 0:
        return None
    return float(np.corrcoef(a.to_numpy(), b.to_numpy())[0, 1])


def beta(returns: SeriesLike, benchmark_returns: SeriesLike) -> float | None:
    """
    Beta of ``returns`` against ``benchmark_returns``.

    Returns
    -------
    float | None
        cov(r, b) / var(b). The covariance uses pairwise-complete
        observations, the variance all non-missing benchmark values.
        None when either is undefined or the benchmark variance is 0.
    """
    a, b = pairwise_complete(returns, benchmark_returns)
    var_b = var_or_none(benchmark_returns)
    if len(a) < 2 or var_b is None or var_b == 0:
        return None
    covar = float(np.cov(a.to_numpy(), b.to_numpy(), ddof=1)[0, 1])
    return covar / var_b


def rolling_sharpe(
    returns: SeriesLike,
    window: int = 20,
    risk_free: float = 0.0,
    periods_per_year: float = 252,
    min_periods: int | None = None,
) -> pd.Series:
    """
    Rolling annualized Sharpe ratio.

    Parameters
    ----------
    returns : SeriesLike
        Periodic returns.
    window : int, default 20
        Window length.
    risk_free : float, default 0.0
        Risk-free rate per period.
    periods_per_year : float, default 252
        Periods per year.
    min_periods : int, optional
        Minimum non-missing returns per window (default: window).

    Returns
    -------
    pd.Series
        Rolling Sharpe ratio, NA where undefined.
    """
    return rolling_apply(
        returns,
        window,
        lambda w: sharpe_ratio(w, risk_free=risk_free, periods_per_year=periods_per_year),
        min_periods=min_periods,
    )


def rolling_sortino(
    returns: SeriesLike,
    window: int = 20,
    risk_free: float = 0.0,
    target_return: float = 0.0,
    periods_per_year: float = 252,
    min_periods: int | None = None,
) -> pd.Series:
    """
    Rolling annualized Sortino ratio.

    Windows without any return below target hold ``inf``.
    """
    return rolling_apply(
        returns,
        window,
        lambda w: sortino_ratio(
            w,
            risk_free=risk_free,
            target_return=target_return,
            periods_per_year=periods_per_year,
        ),
        min_periods=min_periods,
    )


def rolling_volatility(
    returns: SeriesLike,
    window: int = 20,
    periods_per_year: float = 252,
    min_periods: int = 2,
) -> pd.Series:
    """
    Rolling annualized volatility.

    Parameters
    ----------
    returns : SeriesLike
        Periodic returns.
    window : int, default 20
        Window length.
    periods_per_year : float, default 252
        Periods per year.
    min_periods : int, default 2
        Minimum non-missing returns per window.

    Returns
    -------
    pd.Series
        Rolling volatility, NA where undefined.
    """
    return rolling_apply(
        returns,
        window,
        lambda w: annualized_volatility(w, periods_per_year=periods_per_year),
        min_periods=min_periods,
    )


def rolling_max_drawdown(
    returns: SeriesLike,
    window: int = 20,
    min_periods: int | None = None,
) -> pd.Series:
    """Max drawdown of the returns compounded within each window."""
    return rolling_apply(
        returns,
        window,
        lambda w: max_drawdown(returns=w),
        min_periods=min_periods,
    )


def rolling_correlation(
    returns: SeriesLike,
    other_returns: SeriesLike,
    window: int = 20,
    min_periods: int | None = None,
) -> pd.Series:
    """
    Rolling Pearson correlation between two return series.

    Raises
    ------
    LengthMismatchError
        If the two series differ in length.
    """
    return rolling_apply_pair(
        returns, other_returns, window, correlation, min_periods=min_periods
    )


def rolling_beta(
    returns: SeriesLike,
    benchmark_returns: SeriesLike,
    window: int = 20,
    min_periods: int | None = None,
) -> pd.Series:
    """
    Rolling beta relative to a benchmark.

    Windows where the benchmark variance is exactly zero stay NA.

    Raises
    ------
    LengthMismatchError
        If the two series differ in length.
    """
    return rolling_apply_pair(
        returns, benchmark_returns, window, beta, min_periods=min_periods
    )
