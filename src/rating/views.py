"""
Leaderboard Views

Filtering, sorting, batching and summary helpers for the presentation
layer. They read the finished leaderboard and never change ratings.
"""

from collections.abc import Iterator

import pandas as pd

from src.config import BATCH_SIZE

# sort key -> (column, ascending)
SORT_KEYS = {
    "rank": ("rank", True),
    "rating": ("rating", False),
    "win_rate": ("win_rate", False),
    "count": ("count", False),
    "meta_impact": ("meta_impact", False),
    "depth": ("depth", False),
}
DEFAULT_SORT = "rank"


def filter_leaderboard(df: pd.DataFrame, search: str = "", tier: str = "all") -> pd.DataFrame:
    """
    Filter by a case-insensitive name substring and an exact tier.

    An empty search and tier "all" keep everything.
    """
    mask = pd.Series(True, index=df.index)
    search = search.strip()
    if search:
        mask &= df["name"].str.contains(search, case=False, regex=False)
    if tier != "all":
        mask &= df["tier"] == tier
    return df[mask]


def sort_leaderboard(df: pd.DataFrame, sort_by: str = DEFAULT_SORT) -> pd.DataFrame:
    """Stable sort by one of SORT_KEYS; unknown keys fall back to rank."""
    column, ascending = SORT_KEYS.get(sort_by, SORT_KEYS[DEFAULT_SORT])
    return df.sort_values(column, ascending=ascending, kind="mergesort")


def paginate(df: pd.DataFrame, page: int, batch_size: int = BATCH_SIZE) -> pd.DataFrame:
    """Return the 0-based page of batch_size rows (empty past the end)."""
    if page < 0:
        raise ValueError(f"Page must be >= 0, got {page}")
    start = page * batch_size
    return df.iloc[start:start + batch_size]


def iter_batches(df: pd.DataFrame, batch_size: int = BATCH_SIZE) -> Iterator[pd.DataFrame]:
    """Yield consecutive batches for incremental display."""
    for start in range(0, len(df), batch_size):
        yield df.iloc[start:start + batch_size]


def summary_stats(df: pd.DataFrame) -> dict:
    """Headline numbers for the summary widgets."""
    return {
        "total_entities": int(len(df)),
        "total_matches": int(df["total_matches"].sum()) if len(df) else 0,
    }
