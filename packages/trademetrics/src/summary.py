"""Performance summary.

This module defines the PerformanceSummary record and the function that
fills it from a return series, plus its text report.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from .drawdown import average_drawdown, max_drawdown, max_drawdown_duration, recovery_time
from .returns import annualized_return, annualized_volatility, cagr, total_return
from .risk import calmar_ratio, information_ratio, sharpe_ratio, sortino_ratio, tracking_error
from .rolling import correlation
from .stats import SeriesLike, as_series
from .types import MetricsConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PerformanceSummary:
    """Container for summary metrics.

    Every metric is ``None`` when undefined. ``sortino_ratio`` may be
    ``inf`` when no return fell below target. The benchmark fields are
    only filled when a benchmark was supplied.

    Examples
    --------
    >>> summary = performance_summary([0.10, -0.05, 0.02])
    >>> summary.n_positive, summary.n_negative
    (2, 1)
    >>> round(summary.win_rate, 4)
    0.6667
    """

    total_return: float | None
    cagr: float | None
    annualized_return: float | None
    annualized_volatility: float | None
    sharpe_ratio: float | None
    sortino_ratio: float | None
    calmar_ratio: float | None
    max_drawdown: float | None
    average_drawdown: float
    max_drawdown_duration: int
    recovery_time: int | None
    n_periods: int
    n_positive: int
    n_negative: int
    win_rate: float | None
    best_period: float | None
    worst_period: float | None
    information_ratio: float | None = None
    tracking_error: float | None = None
    benchmark_correlation: float | None = None
    has_benchmark: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    def report(self) -> str:
        """Generate the text report."""
        return format_report(self)


def performance_summary(
    returns: SeriesLike,
    equity_curve: SeriesLike | None = None,
    benchmark_returns: SeriesLike | None = None,
    risk_free: float | None = None,
    periods_per_year: float | None = None,
    target_return: float | None = None,
    config: MetricsConfig | None = None,
) -> PerformanceSummary:
    """
    Compute every summary metric for a strategy.

    Parameters
    ----------
    returns : SeriesLike
        Periodic strategy returns.
    equity_curve : SeriesLike, optional
        Equity values. When given, drives CAGR, Calmar and the drawdown
        metrics instead of the compounded returns.
    benchmark_returns : SeriesLike, optional
        Benchmark returns of the same length as ``returns``.
    risk_free, periods_per_year, target_return : float, optional
        Override the corresponding ``config`` values.
    config : MetricsConfig, optional
        Defaults for the parameters above.

    Returns
    -------
    PerformanceSummary
        One value per metric.

    Raises
    ------
    LengthMismatchError
        If ``benchmark_returns`` differs in length from ``returns``.
    """
    cfg = config if config is not None else MetricsConfig()
    rf = cfg.risk_free if risk_free is None else risk_free
    ppy = cfg.periods_per_year if periods_per_year is None else periods_per_year
    target = cfg.target_return if target_return is None else target_return

    r = as_series(returns)
    valid = r.dropna()
    if len(valid) == 0:
        logger.warning("performance_summary: no returns supplied; metrics are undefined")

    n_positive = int((valid > 0).sum())
    n_negative = int((valid < 0).sum())

    benchmark: dict[str, Any] = {}
    if benchmark_returns is not None:
        benchmark = {
            "information_ratio": information_ratio(r, benchmark_returns, ppy),
            "tracking_error": tracking_error(r, benchmark_returns, ppy),
            "benchmark_correlation": correlation(r, benchmark_returns),
            "has_benchmark": True,
        }

    return PerformanceSummary(
        total_return=total_return(r),
        cagr=cagr(equity_curve, r, ppy),
        annualized_return=annualized_return(r, ppy),
        annualized_volatility=annualized_volatility(r, ppy),
        sharpe_ratio=sharpe_ratio(r, risk_free=rf, periods_per_year=ppy),
        sortino_ratio=sortino_ratio(
            r, risk_free=rf, target_return=target, periods_per_year=ppy
        ),
        calmar_ratio=calmar_ratio(equity_curve, r, ppy),
        max_drawdown=max_drawdown(equity_curve, r),
        average_drawdown=average_drawdown(equity_curve, r),
        max_drawdown_duration=max_drawdown_duration(equity_curve, r),
        recovery_time=recovery_time(equity_curve, r),
        n_periods=len(r),
        n_positive=n_positive,
        n_negative=n_negative,
        win_rate=n_positive / len(valid) if len(valid) else None,
        best_period=float(valid.max()) if len(valid) else None,
        worst_period=float(valid.min()) if len(valid) else None,
        **benchmark,
    )


def _pct(value: float | None) -> str:
    if value is None:
        return f"{'N/A':>8}"
    return f"{value * 100:7.2f}%"


def _num(value: float | None) -> str:
    if value is None:
        return f"{'N/A':>7}"
    return f"{value:7.2f}"


def _count(value: int | None, unit: str = "") -> str:
    if value is None:
        return f"{'N/A':>7}"
    return f"{value:7d}{unit}"


def format_report(summary: PerformanceSummary) -> str:
    """
    Render a PerformanceSummary as a fixed-layout text report.

    Returns are shown as percentages and ratios with two decimals.
    Undefined values render as ``N/A``; an infinite ratio as ``inf``.
    """
    s = summary
    lines = [
        "=" * 46,
        "         Performance Summary",
        "=" * 46,
        "",
        "Return Metrics:",
        f"  Total Return:        {_pct(s.total_return)}",
        f"  CAGR:                {_pct(s.cagr)}",
        f"  Annualized Return:   {_pct(s.annualized_return)}",
        "",
        "Risk Metrics:",
        f"  Annualized Vol:      {_pct(s.annualized_volatility)}",
        f"  Sharpe Ratio:        {_num(s.sharpe_ratio)}",
        f"  Sortino Ratio:       {_num(s.sortino_ratio)}",
        f"  Calmar Ratio:        {_num(s.calmar_ratio)}",
        "",
        "Drawdown Metrics:",
        f"  Max Drawdown:        {_pct(s.max_drawdown)}",
        f"  Average Drawdown:    {_pct(s.average_drawdown)}",
        f"  Max DD Duration:     {_count(s.max_drawdown_duration, ' periods')}",
        f"  Recovery Time:       {_count(s.recovery_time, ' periods')}",
        "",
        "Period Statistics:",
        f"  Total Periods:       {_count(s.n_periods)}",
        f"  Winning Periods:     {_count(s.n_positive)}",
        f"  Losing Periods:      {_count(s.n_negative)}",
        f"  Win Rate:            {_pct(s.win_rate)}",
        f"  Best Period:         {_pct(s.best_period)}",
        f"  Worst Period:        {_pct(s.worst_period)}",
    ]

    if s.has_benchmark:
        lines += [
            "",
            "Benchmark Comparison:",
            f"  Information Ratio:   {_num(s.information_ratio)}",
            f"  Tracking Error:      {_pct(s.tracking_error)}",
            f"  Correlation:         {_num(s.benchmark_correlation)}",
        ]

    lines += ["", "=" * 46]
    return "\n".join(lines)
