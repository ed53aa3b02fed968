"""
Ranking and Percentiles

Both are population-relative, so they run once every deck has a rating.

- assign_ranks: 1..N by rating, with a deterministic tie-break
- compute_percentiles: position of each deck within the population for
  every metric in PERCENTILE_METRICS
"""

import numpy as np
import pandas as pd

from src.config import INVERTED_METRICS, PERCENTILE_METRICS
from src.ingestion.records import EmptyPopulationError


def assign_ranks(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rank decks by rating (1 = best).

    Equal ratings are ordered by total_matches (more first), then by
    position in the input. Ranks are always a permutation of 1..N.
    """
    out = df.copy()
    positions = (
        out.assign(_input_position=np.arange(len(out)))
        .sort_values(
            ["rating", "total_matches", "_input_position"],
            ascending=[False, False, True],
            kind="mergesort",
        )["_input_position"]
        .to_numpy()
    )
    ranks = np.empty(len(out), dtype="int64")
    ranks[positions] = np.arange(1, len(out) + 1)
    out["rank"] = ranks
    return out


def calculate_percentile(value, sorted_values):
    """
    Calculate the percentile of a value within an ascending array.

    Percentile = share of values strictly below `value`, over N - 1, so the
    lowest value is 0 and the highest is 100. A one-element population is
    100.

    Examples:
        calculate_percentile(70, [50, 60, 70, 80, 90]) -> 50.0
        calculate_percentile(90, [50, 60, 70, 80, 90]) -> 100.0
    """
    sorted_values = np.asarray(sorted_values)
    n = len(sorted_values)
    if n == 0:
        raise EmptyPopulationError("Cannot compute a percentile in an empty population")
    if n == 1:
        return np.full(np.shape(value), 100.0) if np.ndim(value) else 100.0
    below = np.searchsorted(sorted_values, value, side="left")
    return below / (n - 1) * 100


def compute_percentiles(df: pd.DataFrame, metrics=PERCENTILE_METRICS,
                        inverted=INVERTED_METRICS) -> pd.DataFrame:
    """
    Add one *_percentile column per metric.

    Args:
        df: Ranked frame containing every source metric
        metrics: Mapping of output column -> source metric
        inverted: Metrics where lower is better (negated before ranking)

    Returns:
        New DataFrame with the percentile columns (0-100)
    """
    out = df.copy()
    for column, metric in metrics.items():
        values = out[metric].to_numpy(dtype=float)
        if metric in inverted:
            values = -values
        out[column] = calculate_percentile(values, np.sort(values))
    return out
