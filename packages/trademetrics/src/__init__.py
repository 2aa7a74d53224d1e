"""trademetrics - Performance and risk analytics for trading strategies.

This package provides pure functions over return series and equity
curves. All functions are stateless with no side effects. Undefined
results are ``None``; rolling outputs use ``pd.NA``.

Public API:
- to_equity_curve, to_returns: Series conversion
- drawdown_series, max_drawdown, drawdown_episodes: Drawdown analysis
- total_return, cagr, annualized_return, annualized_volatility: Returns
- sharpe_ratio, sortino_ratio, calmar_ratio, information_ratio: Ratios
- rolling_sharpe, rolling_volatility, rolling_correlation, rolling_beta: Rolling
- performance_summary: Full summary with text report
"""

from .errors import EmptyInputError, LengthMismatchError, MetricsError
from .types import DrawdownEpisode, MetricsConfig
from .converters import resolve_equity_curve, to_equity_curve, to_returns
from .drawdown import (
    average_drawdown,
    drawdown_episodes,
    drawdown_series,
    drawdown_table,
    max_drawdown,
    max_drawdown_duration,
    recovery_time,
)
from .returns import annualized_return, annualized_volatility, cagr, total_return
from .risk import (
    calmar_ratio,
    downside_deviation,
    information_ratio,
    sharpe_ratio,
    sortino_ratio,
    tracking_error,
)
from .rolling import (
    beta,
    correlation,
    rolling_apply,
    rolling_apply_pair,
    rolling_beta,
    rolling_correlation,
    rolling_max_drawdown,
    rolling_sharpe,
    rolling_sortino,
    rolling_volatility,
)
from .summary import PerformanceSummary, format_report, performance_summary
from .config import load_config, metrics_config_from_file

__all__ = [
    # Errors and types
    "MetricsError",
    "EmptyInputError",
    "LengthMismatchError",
    "DrawdownEpisode",
    "MetricsConfig",
    # Conversion
    "to_equity_curve",
    "to_returns",
    "resolve_equity_curve",
    # Drawdown
    "drawdown_series",
    "max_drawdown",
    "drawdown_episodes",
    "drawdown_table",
    "max_drawdown_duration",
    "average_drawdown",
    "recovery_time",
    # Returns
    "total_return",
    "cagr",
    "annualized_return",
    "annualized_volatility",
    # Ratios
    "sharpe_ratio",
    "sortino_ratio",
    "downside_deviation",
    "calmar_ratio",
    "information_ratio",
    "tracking_error",
    # Rolling
    "rolling_apply",
    "rolling_apply_pair",
    "rolling_sharpe",
    "rolling_sortino",
    "rolling_volatility",
    "rolling_max_drawdown",
    "rolling_correlation",
    "rolling_beta",
    "correlation",
    "beta",
    # Summary
    "PerformanceSummary",
    "performance_summary",
    "format_report",
    # Config
    "load_config",
    "metrics_config_from_file",
]
