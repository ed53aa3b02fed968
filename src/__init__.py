"""
Metagame Leaderboard - Core Package

This package contains the core modules for:
- Rating pipeline: rates, Bayesian rating, tiers, ranks, percentiles (src.rating)
- Record ingestion and validation (src.ingestion)
- Shared configuration and utilities
"""

from src.config import *
