"""Missing-aware aggregation helpers.

Every metric routes its means, variances and standard deviations through
these helpers. Missing values (``NaN``, ``None``, ``pd.NA``) are skipped;
when nothing is left the helpers return ``None`` rather than ``NaN`` so
that "undefined" never hides inside floating-point arithmetic.
"""
from __future__ import annotations

from typing import Iterable, Union

import numpy as np
import pandas as pd

SeriesLike = Union[pd.Series, np.ndarray, Iterable[float]]


def as_series(values: SeriesLike) -> pd.Series:
    """Coerce a sequence of numbers into a float64 Series.

    Missing values of any flavour become ``NaN``. A Series keeps its
    index and name; the input itself is never modified.

    Parameters
    ----------
    values : pd.Series | np.ndarray | Iterable[float]
        Input values.

    Returns
    -------
    pd.Series
        New float64 Series.
    """
    if isinstance(values, pd.Series):
        data = values.to_numpy(dtype=float, na_value=np.nan)
        return pd.Series(data, index=values.index, name=values.name)
    data = pd.array(list(values), dtype="Float64").to_numpy(
        dtype=float, na_value=np.nan
    )
    return pd.Series(data, dtype=float)


def clean(values: SeriesLike) -> pd.Series:
    """Return the non-missing values of ``values``."""
    return as_series(values).dropna()


def count_valid(values: SeriesLike) -> int:
    """Number of non-missing values."""
    return int(as_series(values).notna().sum())


def mean_or_none(values: SeriesLike) -> float | None:
    """Mean of the non-missing values, or None if there are none."""
    x = clean(values)
    if len(x) == 0:
        return None
    return float(x.mean())


def var_or_none(values: SeriesLike, ddof: int = 1) -> float | None:
    """Variance of the non-missing values.

    Returns None when fewer than ``ddof + 1`` values remain.
    """
    x = clean(values)
    if len(x) < ddof + 1:
        return None
    return float(x.var(ddof=ddof))


def std_or_none(values: SeriesLike, ddof: int = 1) -> float | None:
    """Standard deviation of the non-missing values.

    Returns None when fewer than ``ddof + 1`` values remain.
    """
    x = clean(values)
    if len(x) < ddof + 1:
        return None
    return float(x.std(ddof=ddof))


def pairwise_complete(
    left: SeriesLike,
    right: SeriesLike,
) -> tuple[pd.Series, pd.Series]:
    """Keep positions where both series are present.

    Series are compared by position, not by index label. Callers are
    responsible for checking that the lengths match.

    Returns
    -------
    tuple[pd.Series, pd.Series]
        The two filtered series, both re-indexed from 0.
    """
    a = as_series(left).to_numpy()
    b = as_series(right).to_numpy()
    mask = ~(np.isnan(a) | np.isnan(b))
    return pd.Series(a[mask]), pd.Series(b[mask])
