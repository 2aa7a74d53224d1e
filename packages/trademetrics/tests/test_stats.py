"""Tests for missing-aware aggregation helpers."""

import numpy as np
import pandas as pd
import pytest

from src.stats import (
    as_series,
    count_valid,
    mean_or_none,
    pairwise_complete,
    std_or_none,
    var_or_none,
)


class TestAsSeries:
    """Tests for as_series function."""

    def test_list_with_missing(self) -> None:
        """Test None and pd.NA become NaN."""
        s = as_series([0.01, None, pd.NA, 0.02])
        assert s.dtype == np.float64
        assert s.isna().tolist() == [False, True, True, False]

    def test_nullable_series(self) -> None:
        """Test a Float64 series converts to float64 with NaN."""
        s = as_series(pd.Series([1.0, None], dtype="Float64"))
        assert s.dtype == np.float64
        assert np.isnan(s.iloc[1])

    def test_keeps_index(self) -> None:
        """Test index and name are preserved."""
        raw = pd.Series([1, 2], index=["a", "b"], name="r")
        s = as_series(raw)
        assert list(s.index) == ["a", "b"]
        assert s.name == "r"

    def test_infinity_kept(self) -> None:
        """Test infinity is a value, not missing."""
        s = as_series([np.inf, 1.0])
        assert count_valid(s) == 2


class TestAggregates:
    """Tests for mean/var/std helpers."""

    def test_mean_skips_missing(self) -> None:
        """Test missing values are excluded from the mean."""
        assert mean_or_none([1.0, np.nan, 3.0]) == pytest.approx(2.0)

    def test_mean_all_missing(self) -> None:
        """Test all-missing input is undefined, not zero."""
        assert mean_or_none([np.nan, None]) is None
        assert mean_or_none([]) is None

    def test_std_needs_two_values(self) -> None:
        """Test sample std is undefined for a single value."""
        assert std_or_none([1.0, np.nan]) is None
        assert std_or_none([1.0, 3.0]) == pytest.approx(np.sqrt(2.0))

    def test_var_ddof_zero(self) -> None:
        """Test population variance of a single value is 0."""
        assert var_or_none([5.0], ddof=0) == 0.0


class TestPairwiseComplete:
    """Tests for pairwise_complete function."""

    def test_drops_either_missing(self) -> None:
        """Test positions missing on either side are dropped."""
        a, b = pairwise_complete([1.0, np.nan, 3.0, 4.0], [10.0, 20.0, None, 40.0])
        assert a.tolist() == [1.0, 4.0]
        assert b.tolist() == [10.0, 40.0]

    def test_positional_not_label_aligned(self) -> None:
        """Test series with different indexes are paired by position."""
        left = pd.Series([1.0, 2.0], index=[0, 1])
        right = pd.Series([3.0, 4.0], index=[5, 6])
        a, b = pairwise_complete(left, right)
        assert b.tolist() == [3.0, 4.0]
