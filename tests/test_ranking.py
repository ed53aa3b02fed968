"""
Tests for rank assignment and percentile computation.
"""

import pandas as pd
import pytest

from src.config import PERCENTILE_METRICS
from src.ingestion.records import EmptyPopulationError
from src.rating.ranking import assign_ranks, calculate_percentile, compute_percentiles


class TestAssignRanks:
    """Tests for assign_ranks function."""

    def test_ranks_by_rating_descending(self):
        df = pd.DataFrame({"rating": [50.0, 90.0, 70.0], "total_matches": [10, 10, 10]})
        assert assign_ranks(df)["rank"].tolist() == [3, 1, 2]

    def test_equal_ratings_prefer_more_matches(self):
        df = pd.DataFrame({"rating": [80.0, 80.0, 80.0], "total_matches": [10, 20, 10]})
        assert assign_ranks(df)["rank"].tolist() == [2, 1, 3]

    def test_full_ties_keep_input_order(self):
        df = pd.DataFrame({"rating": [80.0] * 4, "total_matches": [10] * 4})
        assert assign_ranks(df)["rank"].tolist() == [1, 2, 3, 4]

    def test_ranks_are_permutation(self):
        df = pd.DataFrame({
            "rating": [3.0, 1.0, 2.0, 2.0, 5.0, 1.0],
            "total_matches": [1, 2, 3, 3, 1, 2],
        })
        ranks = assign_ranks(df)["rank"]
        assert sorted(ranks) == list(range(1, len(df) + 1))

    def test_non_default_index(self):
        df = pd.DataFrame(
            {"rating": [10.0, 30.0, 20.0], "total_matches": [5, 5, 5]},
            index=[7, 3, 9],
        )
        result = assign_ranks(df)
        assert result.loc[3, "rank"] == 1
        assert result.loc[9, "rank"] == 2
        assert result.loc[7, "rank"] == 3


class TestCalculatePercentile:
    """Tests for calculate_percentile function."""

    def test_middle(self):
        assert calculate_percentile(70, [50, 60, 70, 80, 90]) == pytest.approx(50.0)

    def test_best_is_100(self):
        assert calculate_percentile(90, [50, 60, 70, 80, 90]) == pytest.approx(100.0)

    def test_worst_is_0(self):
        assert calculate_percentile(50, [50, 60, 70, 80, 90]) == pytest.approx(0.0)

    def test_counts_strictly_below(self):
        assert calculate_percentile(60, [50, 60, 60, 70]) == pytest.approx(100 / 3)

    def test_single_value_population(self):
        assert calculate_percentile(42, [42]) == 100.0

    def test_empty_population(self):
        with pytest.raises(EmptyPopulationError):
            calculate_percentile(1, [])


class TestComputePercentiles:
    """Tests for compute_percentiles function."""

    @pytest.fixture
    def ranked(self):
        return pd.DataFrame({
            "rating": [90.0, 80.0, 70.0, 60.0],
            "count": [5, 50, 20, 10],
            "total_matches": [40, 300, 100, 60],
            "win_rate": [60.0, 52.0, 50.0, 45.0],
            "adjusted_win_rate": [61.0, 53.0, 50.0, 46.0],
            "depth": [8.0, 6.0, 5.0, 6.0],
            "meta_impact": [300.0, 2800.0, 1200.0, 600.0],
            "rank": [1, 2, 3, 4],
        })

    def test_adds_every_percentile_column(self, ranked):
        result = compute_percentiles(ranked)
        for column in PERCENTILE_METRICS:
            assert column in result.columns

    def test_percentiles_in_range(self, ranked):
        result = compute_percentiles(ranked)
        for column in PERCENTILE_METRICS:
            assert result[column].between(0, 100).all()

    def test_rank_percentile_inverted(self, ranked):
        result = compute_percentiles(ranked)
        assert result["rank_percentile"].tolist() == pytest.approx([100.0, 200 / 3, 100 / 3, 0.0])

    def test_count_percentile(self, ranked):
        result = compute_percentiles(ranked)
        assert result["count_percentile"].tolist() == pytest.approx([0.0, 100.0, 200 / 3, 100 / 3])

    def test_tied_values_share_percentile(self, ranked):
        result = compute_percentiles(ranked)
        assert result.loc[1, "depth_percentile"] == result.loc[3, "depth_percentile"]
