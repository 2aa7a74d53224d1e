"""Return and equity curve conversions.

Builds cumulative equity curves from return series, recovers period
returns from an equity curve, and resolves the "returns or equity curve"
input accepted by the drawdown and CAGR-based metrics.
"""
from __future__ import annotations

import logging

import pandas as pd

from .errors import EmptyInputError
from .stats import SeriesLike, as_series, count_valid

logger = logging.getLogger(__name__)


def to_equity_curve(
    returns: SeriesLike,
    base: float = 1.0,
) -> pd.Series:
    """Build cumulative equity curve from returns.

    Parameters
    ----------
    returns : SeriesLike
        Period returns (e.g. 0.01 = +1%).
    base : float, default 1.0
        Starting capital. Use 100 for a human-scaled curve.

    Returns
    -------
    pd.Series
        Equity curve E_t = base * prod(1 + r_0..r_t), same length and index
        as ``returns``. Missing returns compound as 0.

    Raises
    ------
    EmptyInputError
        If ``returns`` is empty.
    ValueError
        If ``base`` is not positive.

    Examples
    --------
    >>> to_equity_curve([0.10, -0.05], base=100)
    0    110.0
    1    104.5
    dtype: float64
    """
    if base <= 0:
        raise ValueError(f"base must be positive, got {base}")
    r = as_series(returns)
    if len(r) == 0:
        raise EmptyInputError("to_equity_curve: returns are empty")
    return base * (1.0 + r.fillna(0.0)).cumprod()


def to_returns(equity_curve: SeriesLike) -> pd.Series:
    """Recover period returns from an equity curve.

    Parameters
    ----------
    equity_curve : SeriesLike
        Equity values.

    Returns
    -------
    pd.Series
        r_t = E_t / E_{t-1} - 1. The first value is NaN since the base
        level preceding the curve is not known.

    Raises
    ------
    EmptyInputError
        If ``equity_curve`` is empty.
    """
    eq = as_series(equity_curve)
    if len(eq) == 0:
        raise EmptyInputError("to_returns: equity curve is empty")
    if (eq == 0).any():
        logger.warning("to_returns: equity curve contains zeros; returns may be inf")
    return eq / eq.shift(1) - 1.0


def resolve_equity_curve(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
) -> pd.Series | None:
    """Pick the equity curve to analyse.

    The equity curve wins whenever it is supplied; otherwise the returns
    are compounded from a base of 1.

    Parameters
    ----------
    equity_curve : SeriesLike, optional
        Equity values.
    returns : SeriesLike, optional
        Period returns.

    Returns
    -------
    pd.Series | None
        Equity curve, an empty Series when the chosen input has no data
        (returns that are empty or entirely missing), or None when neither
        input was given.
    """
    if equity_curve is not None:
        return as_series(equity_curve)
    if returns is None:
        return None
    r = as_series(returns)
    if count_valid(r) == 0:
        logger.warning("resolve_equity_curve: no non-missing returns, treated as no data")
        return pd.Series(dtype=float)
    return to_equity_curve(r)
