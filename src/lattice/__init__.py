"""
Seminorm algebra and order structure.

algebra: 0, +, r•p, ⊔, ⊓, sup_set/inf_set, composition, restriction of scalars.
order:   pointwise order and the lattice interfaces assembled from it.
"""

from src.lattice.algebra import (
    InfimalConvolutionSolver,
    SeminormFamily,
    SupSetResult,
    SupStatus,
    add,
    bdd_above,
    bdd_below,
    comp,
    comp_triangle,
    finset_sup,
    inf,
    inf_set,
    restrict_scalars,
    smul,
    smul_sup,
    sup,
    sup_set,
    sup_set_tagged,
    zero,
)
from src.lattice.order import (
    POINTWISE_ORDER,
    ConditionallyCompleteLattice,
    JoinSemilattice,
    Lattice,
    OrderedCancelAddMonoid,
    PointwiseOrder,
    SeminormLattice,
    smul_le_smul,
)

__all__ = [
    # Algebra
    "zero",
    "add",
    "smul",
    "sup",
    "inf",
    "InfimalConvolutionSolver",
    "SeminormFamily",
    "SupStatus",
    "SupSetResult",
    "bdd_above",
    "bdd_below",
    "sup_set",
    "sup_set_tagged",
    "finset_sup",
    "inf_set",
    "comp",
    "comp_triangle",
    "restrict_scalars",
    "smul_sup",
    # Order
    "PointwiseOrder",
    "POINTWISE_ORDER",
    "OrderedCancelAddMonoid",
    "JoinSemilattice",
    "Lattice",
    "ConditionallyCompleteLattice",
    "SeminormLattice",
    "smul_le_smul",
]
