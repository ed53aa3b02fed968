"""
Rating Pipeline

Modules:
- rates: Win rates, depth, share and meta impact
- bayesian: Hierarchical Bayesian rating engine
- tiers: Tier classification
- ranking: Ranks and percentiles
- display: Rounded display values
- views: Filter/sort/batch helpers for the presentation layer
- pipeline: Runs every stage in order
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "build_leaderboard":
        from src.rating.pipeline import build_leaderboard
        return build_leaderboard
    if name == "compute_bayesian_ratings":
        from src.rating.bayesian import compute_bayesian_ratings
        return compute_bayesian_ratings
    if name == "process_dataset":
        from src.rating.pipeline import process_dataset
        return process_dataset
    if name == "run_pipeline":
        from src.rating.pipeline import main
        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
