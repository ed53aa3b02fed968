"""
Tier Classification

Maps ratings to ordinal tier labels using the TIER_THRESHOLDS ladder
from src.config. The ladder is evaluated from the highest minimum down;
ratings below the lowest minimum are Unranked.
"""

import pandas as pd

from src.config import TIER_DISPLAY, TIER_THRESHOLDS, UNRANKED_TIER
from src.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def classify_tier(rating, thresholds=TIER_THRESHOLDS):
    """
    Get the tier label for a single rating.

    Args:
        rating: Numeric rating
        thresholds: Sequence of (label, minimum rating) pairs

    Returns:
        Label of the first (highest) threshold the rating reaches,
        or UNRANKED_TIER
    """
    for label, minimum in sorted(thresholds, key=lambda t: t[1], reverse=True):
        if rating >= minimum:
            return label
    return UNRANKED_TIER


def assign_tiers(df: pd.DataFrame, thresholds=TIER_THRESHOLDS,
                 display=TIER_DISPLAY) -> pd.DataFrame:
    """
    Add tier and tier_display columns.

    Args:
        df: Frame with a rating column
        thresholds: Tier ladder, see classify_tier
        display: Mapping of tier label -> presentation string; labels
            without an entry are shown as-is

    Returns:
        New DataFrame with tier and tier_display columns
    """
    out = df.copy()
    out["tier"] = out["rating"].apply(lambda r: classify_tier(r, thresholds))
    out["tier_display"] = out["tier"].map(lambda t: display.get(t, t))

    counts = out["tier"].value_counts()
    order = [label for label, _ in thresholds] + [UNRANKED_TIER]
    summary = ", ".join(f"{t}: {counts[t]}" for t in order if t in counts)
    logger.info(f"Tier distribution: {summary}")
    return out
