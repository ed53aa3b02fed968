"""
Leaderboard Pipeline

Runs the rating stages in order over a static snapshot of deck records:

1. Basic metrics (total matches, win rates, depth)
2. Share metrics (usage share, share vs most played)
3. Meta impact
4. Bayesian ratings
5. Tiers
6. Ranks
7. Percentiles
8. Display values

Every stage returns a new DataFrame, so running the pipeline twice on the
same input gives identical output.

Usage:
    python -m src.rating.pipeline path/to/records.csv [--top N]
    OR
    from src.rating import build_leaderboard
"""

import sys
from pathlib import Path

# Enable both `python src/rating/pipeline.py` and `python -m src.rating.pipeline` execution.
# Required for src.config/src.utils imports to resolve correctly.
_project_root = str(Path(__file__).parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import argparse

import pandas as pd

from src.config import DEFAULT_TOP_N, RATING_SCALE, TIER_DISPLAY, TIER_THRESHOLDS, Z_SCORE_BREAKPOINTS
from src.ingestion.records import PipelineError, load_records_csv, records_to_frame
from src.rating.bayesian import compute_bayesian_ratings
from src.rating.display import compute_display_values
from src.rating.ranking import assign_ranks, compute_percentiles
from src.rating.rates import compute_basic_metrics, compute_meta_impact, compute_share_metrics
from src.rating.tiers import assign_tiers
from src.rating.views import summary_stats
from src.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

SUMMARY_COLUMNS = [
    'rank', 'name', 'tier', 'rating', 'win_rate', 'adjusted_win_rate',
    'share', 'meta_impact', 'count', 'total_matches',
]


def build_leaderboard(
    records,
    drop_degenerate: bool = False,
    rating_scale=RATING_SCALE,
    breakpoints=Z_SCORE_BREAKPOINTS,
    thresholds=TIER_THRESHOLDS,
    tier_display=TIER_DISPLAY,
    display_options: dict | None = None,
) -> pd.DataFrame:
    """
    Build the enriched leaderboard for a population of decks.

    Args:
        records: DataFrame, or iterable of RawRecord / mappings with
            name, count, wins, losses, ties
        drop_degenerate: Exclude decks with no entries or no matches
            instead of rejecting the batch
        rating_scale: Lower bound -> rating multiplier
        breakpoints: z-score breakpoints for the confidence bound
        thresholds: Tier ladder
        tier_display: Tier label -> presentation string
        display_options: Keyword overrides for compute_display_values

    Returns:
        DataFrame with one row per deck in input order

    Raises:
        ValidationError: Invalid input (including DegenerateRecordError and
            EmptyPopulationError)
        PriorEstimationError: Meta statistics are not finite
    """
    df = records_to_frame(records, drop_degenerate=drop_degenerate)
    logger.info(f"Building leaderboard for {len(df)} decks")

    df = compute_basic_metrics(df)
    df = compute_share_metrics(df)
    df = compute_meta_impact(df)
    df = compute_bayesian_ratings(df, rating_scale=rating_scale, breakpoints=breakpoints)
    df = assign_tiers(df, thresholds=thresholds, display=tier_display)
    df = assign_ranks(df)
    df = compute_percentiles(df)
    df = compute_display_values(df, **(display_options or {}))
    return df


def to_records(leaderboard: pd.DataFrame) -> list[dict]:
    """Convert the leaderboard into plain dicts for presentation consumers."""
    return leaderboard.to_dict("records")


def process_dataset(csv_path, top: int = DEFAULT_TOP_N, drop_degenerate: bool = False) -> pd.DataFrame:
    """
    Load a records CSV, build its leaderboard and log the summary.

    Args:
        csv_path: Path to a CSV with name,count,wins,losses[,ties] columns
        top: Number of leading decks to log
        drop_degenerate: See build_leaderboard

    Returns:
        The leaderboard DataFrame
    """
    records = load_records_csv(csv_path, drop_degenerate=drop_degenerate)
    leaderboard = build_leaderboard(records)

    stats = summary_stats(leaderboard)
    logger.info("=" * 60)
    logger.info(f"{stats['total_entities']} Decks, {stats['total_matches']:,} Total Matches")
    logger.info("=" * 60)

    ranked = leaderboard.sort_values('rank')[SUMMARY_COLUMNS]
    logger.info(f"Top {top} Decks by Rating:")
    logger.info("\n" + ranked.head(top).to_string(index=False, float_format=lambda v: f"{v:.2f}"))

    return leaderboard


def main(argv=None):
    """CLI interface; exits with status 1 on rejected input."""
    parser = argparse.ArgumentParser(description="Build a rated, tiered metagame leaderboard.")
    parser.add_argument("csv", type=Path, help="CSV with name,count,wins,losses[,ties] columns")
    parser.add_argument("--top", type=int, default=DEFAULT_TOP_N, help="Entries to show")
    parser.add_argument(
        "--drop-degenerate", action="store_true",
        help="Skip decks with zero entries or zero matches instead of failing",
    )
    args = parser.parse_args(argv)

    try:
        process_dataset(args.csv, top=args.top, drop_degenerate=args.drop_degenerate)
    except FileNotFoundError as e:
        logger.error(f"Records file not found: {e.filename}")
        sys.exit(1)
    except PipelineError as e:
        logger.error(f"Leaderboard not built: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
