"""
Central configuration for the Metagame Leaderboard.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

# --- Input Configuration ---
REQUIRED_COLUMNS = ("name", "count", "wins", "losses", "ties")
COLUMN_ALIASES = {"deck_name": "name"}
COLUMN_DEFAULTS = {"ties": 0}  # Filled in when absent, as on RawRecord
MAX_INPUT_ROWS = 500_000  # Upper bound on records accepted per run

# --- Bayesian Prior Configuration ---
PRIOR_MEAN_MIN = 0.01
PRIOR_MEAN_MAX = 0.99
PRIOR_VARIANCE_CAP_RATIO = 0.85  # Max share of the Bernoulli variance mu*(1-mu)
PRIOR_VARIANCE_FLOOR = 0.0001
PRIOR_PARAM_FLOOR = 0.5  # Minimum alpha/beta of the prior
DEFAULT_PRIOR_STRENGTH = 2.0  # alpha+beta of the fallback prior for a one-entity meta

# --- Confidence Bound Configuration ---
# (matches, z) breakpoints; z is interpolated linearly in between and held
# constant outside the range
Z_SCORE_BREAKPOINTS = (
    (30, 2.576),  # 99% for tiny samples
    (200, 2.326),
    (1000, 1.96),  # 95% for large samples
)
LOWER_BOUND_CAP = 0.99

# Small metas get relaxed bounds: z is divided by up to META_ADJUSTMENT_CAP
META_REFERENCE_SIZE = 100
META_ADJUSTMENT_CAP = 1.3

# More diverse metas (higher variance) get slightly looser bounds
DIVERSITY_OFFSET = 0.3
DIVERSITY_FACTOR_MIN = 0.8
DIVERSITY_FACTOR_MAX = 1.2

# --- Rating Configuration ---
RATING_SCALE = 180  # lower bound 0.5 -> rating 90

# --- Tier Configuration ---
# Evaluated top-down, first satisfied minimum wins
TIER_THRESHOLDS = (
    ("X", 100),   # Exceptional
    ("S+", 97),   # Elite+
    ("S", 94),    # Elite
    ("A", 91),    # Excellent
    ("B", 88),    # Good
    ("C", 85),    # Above Average
    ("D", 82),    # Average
    ("E", 79),    # Below Average
    ("F", 76),    # Poor
)
UNRANKED_TIER = "Unranked"
TIER_DISPLAY = {
    "X": "X Tier",
    "S+": "S+ Tier",
    "S": "S Tier",
    "A": "A Tier",
    "B": "B Tier",
    "C": "C Tier",
    "D": "D Tier",
    "E": "E Tier",
    "F": "F Tier",
    UNRANKED_TIER: "Unranked",
}

# --- Percentile Configuration ---
# column -> source metric; rank is negated so rank 1 is the 100th percentile
PERCENTILE_METRICS = {
    "rating_percentile": "rating",
    "count_percentile": "count",
    "total_matches_percentile": "total_matches",
    "win_rate_percentile": "win_rate",
    "adjusted_win_rate_percentile": "adjusted_win_rate",
    "depth_percentile": "depth",
    "meta_impact_percentile": "meta_impact",
    "rank_percentile": "rank",
}
INVERTED_METRICS = frozenset({"rank"})

# --- Display Configuration ---
COMPACT_THRESHOLD = 1000  # Values at or above this use the "k" short form
MATCHES_SMALL_INTERVAL = 100
MATCHES_LARGE_INTERVAL = 1000

# --- Presentation Collaborator Configuration ---
BATCH_SIZE = 50  # Entries per incremental display batch
DEFAULT_TOP_N = 20
