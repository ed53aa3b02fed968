"""
Shared utilities for the Metagame Leaderboard.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import logging
import math


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def log_distribution(logger: logging.Logger, label: str, values) -> None:
    """
    Log min/max/spread/mean/median/std of a numeric series.

    Args:
        logger: Logger to write to
        label: Heading for the block
        values: pandas Series of numeric values
    """
    if len(values) == 0:
        return
    logger.info(f"{label}:")
    logger.info(f"  Min: {values.min():.2f}")
    logger.info(f"  Max: {values.max():.2f}")
    logger.info(f"  Spread: {values.max() - values.min():.2f}")
    logger.info(f"  Mean: {values.mean():.2f}")
    logger.info(f"  Median: {values.median():.2f}")
    logger.info(f"  Std Dev: {values.std() if len(values) > 1 else 0:.2f}")


# --- Rounding ---
def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def round_to_nearest(value: float, interval: int) -> int:
    """
    Round a number to the nearest multiple of interval.

    Examples:
        round_to_nearest(123, 10) -> 120
        round_to_nearest(127, 10) -> 130
    """
    return round_half_up(value / interval) * interval


# --- Validation ---
def validate_input_size(rows: int, max_rows: int) -> None:
    """
    Validate that an input batch does not exceed the maximum row count.

    Args:
        rows: Number of records in the batch
        max_rows: Maximum allowed number of records

    Raises:
        ValueError: If rows exceeds max_rows
    """
    if rows > max_rows:
        raise ValueError(
            f"Input too large: {rows:,} records. "
            f"Maximum allowed: {max_rows:,} records"
        )


__all__ = [
    # Logging
    'setup_logging',
    'log_distribution',
    # Rounding
    'round_half_up',
    'round_to_nearest',
    # Validation
    'validate_input_size',
]
