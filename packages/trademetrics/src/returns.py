"""Return metrics.

Total return, compound annual growth rate, and the arithmetic
annualized return and volatility.

``cagr`` compounds geometrically while ``annualized_return`` scales the
arithmetic mean; they answer different questions and are not
interchangeable.
"""
from __future__ import annotations

import logging

import numpy as np

from .stats import SeriesLike, as_series, clean, mean_or_none, std_or_none

logger = logging.getLogger(__name__)


def total_return(returns: SeriesLike) -> float | None:
    """
    Compute total compounded return.

    Parameters
    ----------
    returns : SeriesLike
        Periodic returns.

    Returns
    -------
    float | None
        prod(1 + r) - 1 over non-missing returns. None if there are none.

    Examples
    --------
    >>> total_return([0.01, 0.02, -0.01, 0.03])
    0.0504949...
    """
    r = clean(returns)
    if len(r) == 0:
        return None
    return float((1.0 + r).prod() - 1.0)


def cagr(
    equity_curve: SeriesLike | None = None,
    returns: SeriesLike | None = None,
    periods_per_year: float = 252,
) -> float | None:
    """
    Compute compound annual growth rate.

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
        (growth multiple) ** (periods_per_year / n) - 1, where n is the
        length of the series used. None with fewer than 2 non-missing
        data points, without input, or when the growth multiple is not
        positive.

    Notes
    -----
    Equity form: multiple = E_last / E_first, n = len(equity_curve).
    Returns form: multiple = prod(1 + r) over the non-missing returns,
    n = len(returns). Missing returns still count towards the span, but at
    least 2 must be present.
    """
    if equity_curve is not None:
        eq = as_series(equity_curve).dropna()
        if len(eq) < 2:
            return None
        multiple = eq.iloc[-1] / eq.iloc[0]
        n_periods = len(eq)
    elif returns is not None:
        r = as_series(returns)
        valid = r.dropna()
        if len(valid) < 2:
            return None
        multiple = (1.0 + valid).prod()
        n_periods = len(r)
    else:
        return None

    if not multiple > 0:
        logger.warning(
            "cagr: growth multiple is not positive (%.4f), returning None",
            multiple,
        )
        return None

    years = n_periods / periods_per_year
    return float(multiple ** (1.0 / years) - 1.0)


def annualized_return(
    returns: SeriesLike,
    periods_per_year: float = 252,
) -> float | None:
    """
    Compute arithmetic annualized return.

    Parameters
    ----------
    returns : SeriesLike
        Periodic returns.
    periods_per_year : float, default 252
        Number of periods per year.

    Returns
    -------
    float | None
        mean(r) * periods_per_year. None if there are no returns.
    """
    mean = mean_or_none(returns)
    if mean is None:
        return None
    return mean * periods_per_year


def annualized_volatility(
    returns: SeriesLike,
    periods_per_year: float = 252,
) -> float | None:
    """
    Compute annualized volatility.

    Parameters
    ----------
    returns : SeriesLike
        Periodic returns.
    periods_per_year : float, default 252
        Periods per year for annualization.

    Returns
    -------
    float | None
        Sample std (ddof=1) * sqrt(periods_per_year). None with fewer
        than 2 non-missing returns.
    """
    std = std_or_none(returns, ddof=1)
    if std is None:
        return None
    return float(std * np.sqrt(periods_per_year))

