"""
Raw Record Ingestion

This module turns raw per-deck match summaries into the validated input
frame consumed by the rating pipeline. Records can arrive as RawRecord
values, plain mappings, a DataFrame, or a CSV file.

Validation runs before any statistic is computed: a batch that contains a
degenerate record (no entries or no matches) is rejected as a whole, since
shares, ranks and percentiles are population-wide.

Usage:
    from src.ingestion.records import records_to_frame, load_records_csv
    df = records_to_frame([RawRecord("Guzzlord ex", 805, 2130, 1966, 101)])
"""

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from pathlib import Path

import pandas as pd

from src.config import COLUMN_ALIASES, COLUMN_DEFAULTS, MAX_INPUT_ROWS, REQUIRED_COLUMNS
from src.utils import setup_logging, validate_input_size

# --- Module Logger ---
logger = setup_logging(__name__)


class PipelineError(Exception):
    """Base exception for leaderboard pipeline errors"""
    pass


class ValidationError(PipelineError):
    """Input batch failed validation"""
    pass


class DegenerateRecordError(ValidationError):
    """Raised when a record has count = 0 or total_matches = 0"""

    def __init__(self, names: list[str]):
        self.names = names
        preview = ", ".join(repr(n) for n in names[:5])
        more = f" (+{len(names) - 5} more)" if len(names) > 5 else ""
        super().__init__(
            f"{len(names)} record(s) with zero entries or zero matches: {preview}{more}"
        )


class EmptyPopulationError(ValidationError):
    """Raised when the input batch contains no records"""
    pass


@dataclass(frozen=True)
class RawRecord:
    """One deck's aggregate tournament results, as read from the data source."""
    name: str
    count: int
    wins: int
    losses: int
    ties: int = 0

    @property
    def total_matches(self) -> int:
        return self.wins + self.losses + self.ties


def _to_frame(records) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        return records.copy()

    rows = []
    for record in records:
        if isinstance(record, RawRecord):
            rows.append(asdict(record))
        elif isinstance(record, Mapping):
            rows.append(dict(record))
        else:
            raise ValidationError(
                f"Unsupported record type: {type(record).__name__}"
            )
    return pd.DataFrame(rows, columns=None if rows else list(REQUIRED_COLUMNS))


def find_degenerate(df: pd.DataFrame) -> pd.Series:
    """
    Boolean mask of records whose ratios are undefined.

    Args:
        df: Frame with count/wins/losses/ties columns

    Returns:
        Series, True where count == 0 or wins + losses + ties == 0
    """
    total = df["wins"] + df["losses"] + df["ties"]
    return (df["count"] == 0) | (total == 0)


def validate_records(df: pd.DataFrame, drop_degenerate: bool = False) -> pd.DataFrame:
    """
    Validate a raw record frame and return a clean copy.

    Args:
        df: Frame with at least the REQUIRED_COLUMNS; columns in
            COLUMN_DEFAULTS (ties) may be missing or blank and default to 0
        drop_degenerate: Exclude degenerate records (with a warning) instead
            of rejecting the batch

    Returns:
        New DataFrame with columns name, count, wins, losses, ties
        (integer dtype, default RangeIndex)

    Raises:
        ValidationError: Missing columns, too many rows, missing names, or
            invalid counts
        EmptyPopulationError: No records
        DegenerateRecordError: A record has count = 0 or no matches
    """
    df = df.rename(columns=COLUMN_ALIASES)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns and c not in COLUMN_DEFAULTS]
    if missing:
        raise ValidationError(f"Missing required columns: {', '.join(missing)}")

    if df.empty:
        raise EmptyPopulationError("Cannot rate an empty population")

    try:
        validate_input_size(len(df), MAX_INPUT_ROWS)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    df = df.reindex(columns=list(REQUIRED_COLUMNS))
    for col, default in COLUMN_DEFAULTS.items():
        df[col] = df[col].fillna(default)

    if df["name"].isna().any():
        raise ValidationError(f"{int(df['name'].isna().sum())} record(s) without a name")
    df["name"] = df["name"].astype(str).str.strip()

    for col in ("count", "wins", "losses", "ties"):
        values = pd.to_numeric(df[col], errors="coerce")
        if values.isna().any():
            bad = df.loc[values.isna(), "name"].tolist()
            raise ValidationError(f"Non-numeric '{col}' for: {', '.join(bad[:5])}")
        if (values % 1 != 0).any():
            bad = df.loc[values % 1 != 0, "name"].tolist()
            raise ValidationError(f"Non-integer '{col}' for: {', '.join(bad[:5])}")
        if (values < 0).any():
            bad = df.loc[values < 0, "name"].tolist()
            raise ValidationError(f"Negative '{col}' for: {', '.join(bad[:5])}")
        df[col] = values.astype("int64")

    degenerate = find_degenerate(df)
    if degenerate.any():
        names = df.loc[degenerate, "name"].tolist()
        if not drop_degenerate:
            raise DegenerateRecordError(names)
        logger.warning(f"Dropping {len(names)} degenerate record(s): {', '.join(names[:5])}")
        df = df[~degenerate]
        if df.empty:
            raise EmptyPopulationError("No records left after dropping degenerate records")

    return df.reset_index(drop=True)


def records_to_frame(records, drop_degenerate: bool = False) -> pd.DataFrame:
    """
    Build the validated pipeline input from any supported record source.

    Args:
        records: DataFrame, or iterable of RawRecord / mappings
        drop_degenerate: See validate_records

    Returns:
        Validated DataFrame in input order
    """
    if not isinstance(records, (pd.DataFrame, Iterable)):
        raise ValidationError(f"Unsupported records source: {type(records).__name__}")
    return validate_records(_to_frame(records), drop_degenerate=drop_degenerate)


def load_records_csv(path: Path | str, drop_degenerate: bool = False) -> pd.DataFrame:
    """
    Load and validate raw records from a CSV file.

    The file needs the columns name (or deck_name), count, wins, losses and,
    optionally, ties.
    """
    path = Path(path)
    logger.info(f"Loading records from {path}")
    df = pd.read_csv(path)
    logger.info(f"Loaded {len(df)} rows")
    return validate_records(df, drop_degenerate=drop_degenerate)
