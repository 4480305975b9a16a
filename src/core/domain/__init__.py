"""
Domain value types.

Seminorm and its constructors, compatible scalar actions on ℝ≥0,
ring homomorphisms and (semi)linear maps.
"""

from src.core.domain.actions import (
    COMPATIBILITY_GRID,
    NAT,
    NNRAT,
    NNREAL,
    FunctionAction,
    NaturalAction,
    NNRationalAction,
    NNRealAction,
    ScalarAction,
)
from src.core.domain.functional import Seminorm, homogeneity_bounds
from src.core.domain.maps import LinearMap, RestrictedSpace, RingHom

__all__ = [
    # Seminorm
    "Seminorm",
    "homogeneity_bounds",
    # Scalar actions
    "COMPATIBILITY_GRID",
    "ScalarAction",
    "NNRealAction",
    "NaturalAction",
    "NNRationalAction",
    "FunctionAction",
    "NNREAL",
    "NAT",
    "NNRAT",
    # Maps
    "RingHom",
    "LinearMap",
    "RestrictedSpace",
]
