"""
Hierarchical Bayesian Rating Engine

Rates decks by a conservative estimate of their true (tie-adjusted) win
rate. The algorithm:

1. Estimate a Beta prior for each deck from the rest of the meta
   (empirical Bayes, leave-one-out): the match-weighted mean win rate and
   the match-weighted variance of every *other* deck, matched to a Beta
   distribution by method of moments. A deck's own results never move its
   own prior.
2. Update each deck's Beta distribution with its own wins/losses
   (ties count half each way) to get the posterior.
3. Take a lower confidence bound of the posterior. The bound is centred on
   the posterior mean, capped at the deck's observed rate, so a losing deck
   is never pulled up toward the meta on a thin sample. The z-score shrinks
   as the deck's sample grows, is loosened for diverse metas, and is relaxed
   for small metas (fewer than META_REFERENCE_SIZE decks).
4. rating = lower bound * RATING_SCALE.

Low-volume decks are pulled toward the meta mean and get wide bounds, so a
lucky 4-1 record cannot outrank an established deck on noise.

Usage:
    from src.rating.bayesian import compute_bayesian_ratings
    rated = compute_bayesian_ratings(df)
"""

import math
from typing import NamedTuple

import numpy as np
import pandas as pd

from src.config import (
    DEFAULT_PRIOR_STRENGTH,
    DIVERSITY_FACTOR_MAX,
    DIVERSITY_FACTOR_MIN,
    DIVERSITY_OFFSET,
    LOWER_BOUND_CAP,
    META_ADJUSTMENT_CAP,
    META_REFERENCE_SIZE,
    PRIOR_MEAN_MAX,
    PRIOR_MEAN_MIN,
    PRIOR_PARAM_FLOOR,
    PRIOR_VARIANCE_CAP_RATIO,
    PRIOR_VARIANCE_FLOOR,
    RATING_SCALE,
    Z_SCORE_BREAKPOINTS,
)
from src.ingestion.records import EmptyPopulationError, PipelineError
from src.utils import log_distribution, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class PriorEstimationError(PipelineError):
    """Raised when the meta statistics for the prior are not finite"""
    pass


class BetaPrior(NamedTuple):
    """
    Beta prior and the statistics it was estimated from.

    Fields are floats for the meta-level prior and per-deck arrays for the
    leave-one-out priors.
    """
    alpha: float
    beta: float
    mean: float  # clamped weighted mean win rate (0-1)
    variance: float  # clamped variance used for the moments match
    raw_variance: float  # weighted variance before clamping
    population: int  # number of decks the prior was estimated from
    total_matches: int


def dynamic_z_score(n, breakpoints=Z_SCORE_BREAKPOINTS):
    """
    Get the z-score for a deck's own sample size.

    Smaller samples use larger z-scores (wider, more conservative bounds).
    z is interpolated linearly between breakpoints and held constant
    outside them.

    Args:
        n: Matches played (scalar or array)
        breakpoints: Sequence of (matches, z) pairs, matches ascending

    Returns:
        z-score(s), same shape as n
    """
    xs = [float(x) for x, _ in breakpoints]
    zs = [float(z) for _, z in breakpoints]
    return np.interp(n, xs, zs)


def meta_adjustment_factor(total_decks, reference_size=META_REFERENCE_SIZE,
                           cap=META_ADJUSTMENT_CAP):
    """
    Calculate the meta-size adjustment factor.

    Small metas receive a boost (1.0 for reference_size decks or more, up to
    cap for tiny metas). The effective z-score is divided by this factor,
    relaxing bounds so that a thin meta is not rated over-conservatively.
    """
    if total_decks >= reference_size:
        return 1.0
    boost = 1 + (reference_size - total_decks) / (reference_size * 4)
    return min(boost, cap)


def meta_diversity_factor(prior: BetaPrior):
    """
    Scale z by how spread out the meta's win rates are.

    Diversity is the observed variance relative to the Bernoulli maximum
    mean*(1-mean). Returned factor is clamped to
    [DIVERSITY_FACTOR_MIN, DIVERSITY_FACTOR_MAX]; works element-wise on
    leave-one-out priors.
    """
    diversity = prior.raw_variance / (prior.mean * (1 - prior.mean))
    factor = 1 / (DIVERSITY_OFFSET + diversity)
    return np.clip(factor, DIVERSITY_FACTOR_MIN, DIVERSITY_FACTOR_MAX)


def _beta_from_moments(weighted_mean, variance, population):
    """
    Match clamped moments to Beta parameters.

    Element-wise over arrays. Populations of one deck have no spread to
    measure and get the wide DEFAULT_PRIOR_STRENGTH prior instead.

    Returns:
        Tuple of (alpha, beta, mean_est, var_est)
    """
    mean_est = np.clip(weighted_mean, PRIOR_MEAN_MIN, PRIOR_MEAN_MAX)
    bernoulli_var = mean_est * (1 - mean_est)

    var_est = np.clip(variance, PRIOR_VARIANCE_FLOOR, bernoulli_var * PRIOR_VARIANCE_CAP_RATIO)
    strength = np.maximum(1.0, bernoulli_var / var_est - 1)

    single = np.asarray(population) <= 1
    strength = np.where(single, DEFAULT_PRIOR_STRENGTH, strength)
    var_est = np.where(single, bernoulli_var / (DEFAULT_PRIOR_STRENGTH + 1), var_est)

    alpha = np.maximum(PRIOR_PARAM_FLOOR, mean_est * strength)
    beta = np.maximum(PRIOR_PARAM_FLOOR, (1 - mean_est) * strength)
    return alpha, beta, mean_est, var_est


def estimate_prior(wins, losses, ties) -> BetaPrior:
    """
    Estimate the meta-level Beta prior by method of moments.

    Args:
        wins, losses, ties: Per-deck counts (array-like, same length)

    Returns:
        BetaPrior

    Raises:
        EmptyPopulationError: No decks
        PriorEstimationError: Weighted mean or variance is not finite
    """
    wins = np.asarray(wins, dtype=float)
    losses = np.asarray(losses, dtype=float)
    ties = np.asarray(ties, dtype=float)

    population = len(wins)
    if population == 0:
        raise EmptyPopulationError("Cannot estimate a prior for an empty population")

    n = wins + losses + ties
    total_games = n.sum()
    with np.errstate(divide="ignore", invalid="ignore"):
        win_rates = (wins + 0.5 * ties) / n
        weighted_mean = (win_rates * n).sum() / total_games
        variance = (n * (win_rates - weighted_mean) ** 2).sum() / total_games

    if not (math.isfinite(weighted_mean) and math.isfinite(variance)):
        raise PriorEstimationError(
            f"Non-finite meta statistics (mean={weighted_mean}, variance={variance}) "
            f"over {population} decks / {total_games:.0f} matches"
        )

    if population > 1 and variance <= 0:
        logger.warning(
            f"Meta variance is {variance:.3g}; clamping to {PRIOR_VARIANCE_FLOOR}"
        )

    alpha, beta, mean_est, var_est = _beta_from_moments(weighted_mean, variance, population)

    return BetaPrior(
        alpha=float(alpha),
        beta=float(beta),
        mean=float(mean_est),
        variance=float(var_est),
        raw_variance=float(variance),
        population=population,
        total_matches=int(total_games),
    )


def estimate_loo_priors(wins, losses, ties) -> BetaPrior:
    """
    Estimate one Beta prior per deck from every other deck (leave-one-out).

    Deck i's prior is the method-of-moments prior of the meta without deck
    i, so it depends only on the other decks' results. Sums over the other
    decks are built from prefix and suffix sums that never include deck i's
    own term.

    A one-deck meta has nothing to learn from and gets the uniform
    Beta(1, 1) prior.

    Args:
        wins, losses, ties: Per-deck counts (array-like, same length)

    Returns:
        BetaPrior of per-deck arrays (population is the shared count of
        other decks)

    Raises:
        EmptyPopulationError: No decks
        PriorEstimationError: A deck's leave-one-out statistics are not finite
    """
    wins = np.asarray(wins, dtype=float)
    losses = np.asarray(losses, dtype=float)
    ties = np.asarray(ties, dtype=float)

    if len(wins) == 0:
        raise EmptyPopulationError("Cannot estimate a prior for an empty population")
    others = len(wins) - 1

    n = wins + losses + ties
    adjusted_wins = wins + 0.5 * ties

    # Whole and half matches: these subtractions are exact
    rest_matches = n.sum() - n
    rest_wins = adjusted_wins.sum() - adjusted_wins

    with np.errstate(divide="ignore", invalid="ignore"):
        # sum of n * p^2 over the other decks
        squares = adjusted_wins ** 2 / n
        before = np.concatenate(([0.0], np.cumsum(squares)[:-1]))
        after = np.concatenate((np.cumsum(squares[::-1])[::-1][1:], [0.0]))

        if others == 0:
            weighted_mean = np.full(len(wins), 0.5)
            variance = np.zeros(len(wins))
        else:
            weighted_mean = rest_wins / rest_matches
            variance = np.maximum(0.0, (before + after) / rest_matches - weighted_mean ** 2)

    if not (np.isfinite(weighted_mean).all() and np.isfinite(variance).all()):
        raise PriorEstimationError(
            f"Non-finite leave-one-out statistics over {len(wins)} decks / {n.sum():.0f} matches"
        )

    alpha, beta, mean_est, var_est = _beta_from_moments(weighted_mean, variance, others)

    return BetaPrior(
        alpha=alpha,
        beta=beta,
        mean=mean_est,
        variance=var_est,
        raw_variance=variance,
        population=others,
        total_matches=rest_matches,
    )


def posterior_lower_bound(wins, losses, ties, prior: BetaPrior, z):
    """
    Update the prior with observed results and take the lower bound.

    The bound is centred on min(posterior mean, observed tie-adjusted rate)
    with the spread of a Beta of the posterior's concentration around that
    centre. For decks at or above the prior mean this is the posterior mean
    and standard deviation; a deck below the prior mean keeps its observed
    rate, so shrinkage never lifts it.

    Args:
        wins, losses, ties: Deck counts (scalars or arrays)
        prior: BetaPrior (scalar or per-deck fields)
        z: Effective z-score(s)

    Returns:
        Tuple of (posterior_mean, lower_bound); lower_bound is clamped to
        [0, LOWER_BOUND_CAP]
    """
    wins = np.asarray(wins, dtype=float)
    losses = np.asarray(losses, dtype=float)
    ties = np.asarray(ties, dtype=float)

    post_alpha = prior.alpha + wins + 0.5 * ties
    post_beta = prior.beta + losses + 0.5 * ties
    total = post_alpha + post_beta
    posterior_mean = post_alpha / total

    n = wins + losses + ties
    with np.errstate(divide="ignore", invalid="ignore"):
        observed = np.where(n > 0, (wins + 0.5 * ties) / n, posterior_mean)
    center = np.minimum(posterior_mean, observed)
    spread = np.sqrt(center * (1 - center) / (total + 1))

    lower_bound = np.clip(center - z * spread, 0.0, LOWER_BOUND_CAP)
    return posterior_mean, lower_bound


def compute_bayesian_ratings(df: pd.DataFrame, rating_scale=RATING_SCALE,
                             breakpoints=Z_SCORE_BREAKPOINTS) -> pd.DataFrame:
    """
    Rate every deck in the population.

    Args:
        df: Frame with wins, losses, ties columns
        rating_scale: Multiplier from lower bound (0-1) to rating
        breakpoints: z-score breakpoints, see dynamic_z_score

    Returns:
        New DataFrame with posterior_mean, lower_bound and rating columns
    """
    prior = estimate_prior(df["wins"], df["losses"], df["ties"])
    priors = estimate_loo_priors(df["wins"], df["losses"], df["ties"])
    meta_factor = meta_adjustment_factor(prior.population)
    diversity_factor = meta_diversity_factor(priors)

    logger.info(f"Meta prior over {prior.population} decks, {prior.total_matches:,} matches:")
    logger.info(f"  Weighted mean win rate: {prior.mean:.4f}")
    logger.info(f"  Variance (raw/used): {prior.raw_variance:.6f} / {prior.variance:.6f}")
    logger.info(f"  Beta(alpha={prior.alpha:.2f}, beta={prior.beta:.2f})")
    logger.info(
        f"  Leave-one-out prior strength: "
        f"{np.min(priors.alpha + priors.beta):.1f}-{np.max(priors.alpha + priors.beta):.1f}"
    )
    logger.info(
        f"  Meta adjustment: {meta_factor:.3f}, diversity factor: "
        f"{np.min(diversity_factor):.3f}-{np.max(diversity_factor):.3f}"
    )

    n = (df["wins"] + df["losses"] + df["ties"]).to_numpy(dtype=float)
    z = dynamic_z_score(n, breakpoints) * diversity_factor / meta_factor

    posterior_mean, lower_bound = posterior_lower_bound(
        df["wins"].to_numpy(), df["losses"].to_numpy(), df["ties"].to_numpy(), priors, z
    )

    out = df.copy()
    out["posterior_mean"] = posterior_mean
    out["lower_bound"] = lower_bound
    out["rating"] = lower_bound * rating_scale

    log_distribution(logger, "Rating Distribution", out["rating"])
    return out
