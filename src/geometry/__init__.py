"""
Ball geometry of seminorms.

Balls are predicate-defined subsets; the ball laws take the left-hand side of
a set identity and return the canonical right-hand side.
"""

from src.geometry.balls import Ball, ClosedBall, ball, closed_ball
from src.geometry.laws import (
    AbsorptionWitness,
    BalancedWitness,
    absorbent_ball,
    absorbent_ball_zero,
    ball_add_ball_subset,
    ball_antitone,
    ball_comp,
    ball_finset_sup,
    ball_mono,
    ball_smul,
    ball_sup,
    ball_zero_functional,
    ball_zero_subset_smul,
    balanced_ball_zero,
    closed_ball_add_closed_ball_subset,
    closed_ball_mono,
    closed_ball_smul,
    closed_ball_zero_functional,
    convex_combination,
    neg_ball,
    smul_ball_zero,
    subset_on,
    vadd_ball,
)
from src.geometry.norm_adapter import (
    MetricBall,
    MetricPreimage,
    ball_norm_seminorm,
    norm_seminorm,
    norm_seminorm_ball,
    preimage_metric_ball,
)
from src.geometry.subsets import (
    EmptySet,
    Intersection,
    ScaledSet,
    Subset,
    TranslatedSet,
    UniversalSet,
)

__all__ = [
    # Subsets
    "Subset",
    "EmptySet",
    "UniversalSet",
    "Intersection",
    "ScaledSet",
    "TranslatedSet",
    # Balls
    "Ball",
    "ClosedBall",
    "ball",
    "closed_ball",
    # Laws
    "subset_on",
    "ball_mono",
    "closed_ball_mono",
    "ball_antitone",
    "ball_smul",
    "closed_ball_smul",
    "ball_sup",
    "ball_finset_sup",
    "ball_zero_functional",
    "closed_ball_zero_functional",
    "ball_add_ball_subset",
    "closed_ball_add_closed_ball_subset",
    "ball_zero_subset_smul",
    "smul_ball_zero",
    "neg_ball",
    "vadd_ball",
    "ball_comp",
    "convex_combination",
    "AbsorptionWitness",
    "absorbent_ball",
    "absorbent_ball_zero",
    "BalancedWitness",
    "balanced_ball_zero",
    # Norm adapter
    "norm_seminorm",
    "MetricBall",
    "ball_norm_seminorm",
    "norm_seminorm_ball",
    "MetricPreimage",
    "preimage_metric_ball",
]
