"""
Display Values

Rounded and short-form variants of counts and percentages for the
presentation layer. Nothing here feeds back into ratings or ranks.

The rounding policy is injectable: compute_display_values takes the
interval functions and compact threshold as keyword arguments.
"""

from collections.abc import Callable

import pandas as pd

from src.config import COMPACT_THRESHOLD, MATCHES_LARGE_INTERVAL, MATCHES_SMALL_INTERVAL
from src.utils import round_half_up, round_to_nearest


def smart_rounding_interval(value) -> int:
    """
    Pick a rounding interval that keeps a count readable.

    Examples:
        smart_rounding_interval(75)    -> 5
        smart_rounding_interval(450)   -> 10
        smart_rounding_interval(5000)  -> 50
        smart_rounding_interval(25000) -> 100
    """
    if value < 100:
        return 5
    if value < 1000:
        return 10
    if value < 10000:
        return 50
    return 100


def match_rounding_interval(value) -> int:
    """Nearest hundred below a thousand matches, nearest thousand above."""
    return MATCHES_SMALL_INTERVAL if value < 1000 else MATCHES_LARGE_INTERVAL


def format_compact(value, threshold=COMPACT_THRESHOLD) -> str:
    """
    Format a count, using a "k" suffix from threshold upward.

    Examples:
        format_compact(850)   -> "850"
        format_compact(2460)  -> "2.5k"
        format_compact(12000) -> "12k"
    """
    if value < threshold:
        return str(int(value))
    short = f"{value / 1000:.1f}".rstrip("0").rstrip(".")
    return f"{short}k"


def compute_display_values(
    df: pd.DataFrame,
    count_interval: Callable[[float], int] = smart_rounding_interval,
    matches_interval: Callable[[float], int] = match_rounding_interval,
    compact_threshold: int = COMPACT_THRESHOLD,
) -> pd.DataFrame:
    """
    Add rounded and formatted display columns.

    Adds count_rounded, total_matches_rounded, win_rate_rounded,
    share_rounded, rating_rounded, count_display and total_matches_display.
    """
    out = df.copy()
    out["count_rounded"] = out["count"].map(lambda v: round_to_nearest(v, count_interval(v)))
    out["total_matches_rounded"] = out["total_matches"].map(
        lambda v: round_to_nearest(v, matches_interval(v))
    )
    out["win_rate_rounded"] = out["win_rate"].map(round_half_up)
    out["share_rounded"] = out["share"].map(round_half_up)
    out["rating_rounded"] = out["rating"].map(round_half_up)
    out["count_display"] = out["count_rounded"].map(lambda v: format_compact(v, compact_threshold))
    out["total_matches_display"] = out["total_matches_rounded"].map(
        lambda v: format_compact(v, compact_threshold)
    )
    return out
