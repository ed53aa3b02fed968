"""
Basic Rate, Share and Meta Impact Metrics

Each function takes the population frame and returns a new frame with
extra columns; the input is never modified.

- compute_basic_metrics: total matches, win rates, depth (per deck)
- compute_share_metrics: usage share and share relative to the top deck
- compute_meta_impact: adjusted win rate weighted by share
"""

import pandas as pd

from src.ingestion.records import DegenerateRecordError, EmptyPopulationError, find_degenerate


def compute_basic_metrics(df: pd.DataFrame) -> pd.DataFrame:
    """
    Derive total_matches, win_rate, adjusted_win_rate and depth.

    Ties count as half a win in adjusted_win_rate. Depth is matches per
    entry: higher values mean the deck goes further in events.

    Raises:
        DegenerateRecordError: If any record has count = 0 or no matches
    """
    degenerate = find_degenerate(df)
    if degenerate.any():
        raise DegenerateRecordError(df.loc[degenerate, "name"].tolist())

    out = df.copy()
    out["total_matches"] = out["wins"] + out["losses"] + out["ties"]
    out["win_rate"] = out["wins"] / out["total_matches"] * 100
    out["adjusted_win_rate"] = (out["wins"] + 0.5 * out["ties"]) / out["total_matches"] * 100
    out["depth"] = out["total_matches"] / out["count"]
    return out


def compute_share_metrics(df: pd.DataFrame) -> pd.DataFrame:
    """
    Derive share (percent of all entries) and share_vs_top.

    share_vs_top is the deck's share relative to the most played deck,
    so the most played deck is always 100.
    """
    if df.empty:
        raise EmptyPopulationError("Cannot compute shares of an empty population")

    total_count = df["count"].sum()
    out = df.copy()
    out["share"] = out["count"] / total_count * 100
    out["share_vs_top"] = out["share"] / out["share"].max() * 100
    return out


def compute_meta_impact(df: pd.DataFrame) -> pd.DataFrame:
    """meta_impact = adjusted_win_rate * share. High for decks both popular and winning."""
    out = df.copy()
    out["meta_impact"] = out["adjusted_win_rate"] * out["share"]
    return out
