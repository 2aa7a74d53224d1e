"""Tests for the performance summary."""

import math

import numpy as np
import pandas as pd
import pytest

from src.drawdown import max_drawdown
from src.errors import LengthMismatchError
from src.returns import annualized_return, total_return
from src.risk import sharpe_ratio
from src.summary import PerformanceSummary, format_report, performance_summary
from src.types import MetricsConfig

RETURNS = [0.01, 0.02, -0.01, 0.03, -0.02, 0.015]


class TestPerformanceSummary:
    """Tests for performance_summary function."""

    def test_matches_component_metrics(self) -> None:
        """Test summary fields come from the individual metrics."""
        summary = performance_summary(RETURNS, periods_per_year=12)
        assert summary.total_return == pytest.approx(total_return(RETURNS))
        assert summary.annualized_return == pytest.approx(
            annualized_return(RETURNS, periods_per_year=12)
        )
        assert summary.sharpe_ratio == pytest.approx(
            sharpe_ratio(RETURNS, periods_per_year=12)
        )
        assert summary.max_drawdown == pytest.approx(max_drawdown(returns=RETURNS))

    def test_counts(self) -> None:
        """Test raw period statistics."""
        summary = performance_summary([0.01, np.nan, -0.02, 0.0, 0.03])
        assert summary.n_periods == 5
        assert summary.n_positive == 2
        assert summary.n_negative == 1
        assert summary.win_rate == pytest.approx(0.5)
        assert summary.best_period == pytest.approx(0.03)
        assert summary.worst_period == pytest.approx(-0.02)

    def test_equity_curve_drives_drawdown(self) -> None:
        """Test a supplied equity curve wins over the returns."""
        summary = performance_summary([0.01] * 4, equity_curve=[100, 80, 90, 100])
        assert summary.max_drawdown == pytest.approx(-0.2)
        assert summary.recovery_time == 2
        assert summary.max_drawdown_duration == 2

    def test_config_defaults_and_overrides(self) -> None:
        """Test explicit arguments override the config."""
        cfg = MetricsConfig(periods_per_year=12, risk_free=0.001)
        from_cfg = performance_summary(RETURNS, config=cfg)
        assert from_cfg.annualized_return == pytest.approx(np.mean(RETURNS) * 12)
        assert from_cfg.sharpe_ratio == pytest.approx(
            sharpe_ratio(RETURNS, risk_free=0.001, periods_per_year=12)
        )

        overridden = performance_summary(RETURNS, periods_per_year=52, config=cfg)
        assert overridden.annualized_return == pytest.approx(np.mean(RETURNS) * 52)

    def test_without_benchmark(self) -> None:
        """Test benchmark fields stay empty without a benchmark."""
        summary = performance_summary(RETURNS)
        assert summary.has_benchmark is False
        assert summary.information_ratio is None
        assert summary.benchmark_correlation is None

    def test_with_benchmark(self) -> None:
        """Test benchmark comparison fields are filled."""
        benchmark = [0.005, 0.01, -0.005, 0.02, -0.01, 0.01]
        summary = performance_summary(RETURNS, benchmark_returns=benchmark)
        assert summary.has_benchmark is True
        assert summary.information_ratio is not None
        assert summary.tracking_error > 0
        assert -1.0 <= summary.benchmark_correlation <= 1.0

    def test_benchmark_length_mismatch(self) -> None:
        """Test a benchmark of the wrong length raises."""
        with pytest.raises(LengthMismatchError):
            performance_summary(RETURNS, benchmark_returns=[0.01] * 3)

    def test_empty_returns(self) -> None:
        """Test empty input yields undefined metrics, not an error."""
        summary = performance_summary(pd.Series(dtype=float))
        assert summary.n_periods == 0
        assert summary.total_return is None
        assert summary.max_drawdown is None
        assert summary.average_drawdown == 0.0
        assert summary.win_rate is None
        assert summary.best_period is None

    def test_all_missing_returns(self) -> None:
        """Test entirely missing returns leave every metric undefined."""
        summary = performance_summary([np.nan, np.nan, np.nan])
        assert summary.n_periods == 3
        assert summary.total_return is None
        assert summary.cagr is None
        assert summary.max_drawdown is None
        assert summary.calmar_ratio is None
        assert summary.recovery_time is None
        assert "Max Drawdown:             N/A" in summary.report()

    def test_to_dict_field_order(self) -> None:
        """Test the structured record keeps a fixed field order."""
        d = performance_summary(RETURNS).to_dict()
        assert list(d)[:4] == ["total_return", "cagr", "annualized_return", "annualized_volatility"]
        assert "recovery_time" in d


class TestFormatReport:
    """Tests for format_report function."""

    def test_sections(self) -> None:
        """Test the report has its fixed sections."""
        report = performance_summary(RETURNS).report()
        for heading in ("Return Metrics:", "Risk Metrics:", "Drawdown Metrics:", "Period Statistics:"):
            assert heading in report
        assert "Benchmark Comparison:" not in report

    def test_percent_formatting(self) -> None:
        """Test returns render as percentages with two decimals."""
        report = format_report(performance_summary([0.10, 0.10]))
        assert "Total Return:          21.00%" in report

    def test_undefined_distinct_from_zero(self) -> None:
        """Test undefined metrics render as N/A rather than 0.00."""
        report = format_report(performance_summary([0.01]))
        sharpe_line = next(line for line in report.splitlines() if "Sharpe Ratio" in line)
        assert "N/A" in sharpe_line
        assert "0.00" not in sharpe_line

    def test_infinite_sortino(self) -> None:
        """Test an infinite Sortino ratio renders as inf."""
        summary = performance_summary([0.01, 0.02, 0.03])
        assert summary.sortino_ratio == math.inf
        sortino_line = next(line for line in summary.report().splitlines() if "Sortino" in line)
        assert "inf" in sortino_line

    def test_benchmark_block(self) -> None:
        """Test the benchmark block appears with a benchmark."""
        report = performance_summary(RETURNS, benchmark_returns=RETURNS[::-1]).report()
        assert "Benchmark Comparison:" in report
        assert "Information Ratio:" in report

    def test_unrecovered_recovery_time(self) -> None:
        """Test a never-recovered strategy shows N/A recovery time."""
        summary = performance_summary([0.0, -0.1, 0.05])
        assert summary.recovery_time is None
        recovery_line = next(line for line in summary.report().splitlines() if "Recovery Time" in line)
        assert "N/A" in recovery_line

    def test_frozen(self) -> None:
        """Test the summary record is read-only."""
        summary = performance_summary(RETURNS)
        assert isinstance(summary, PerformanceSummary)
        with pytest.raises(AttributeError):
            summary.cagr = 1.0
