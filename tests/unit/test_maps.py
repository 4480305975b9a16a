"""
Тесты гомоморфизмов колец и (полу)линейных отображений
"""

import numpy as np
import pytest

from src.core.domain import LinearMap, RestrictedSpace, RingHom
from src.core.errors import StructureUnavailableError
from src.core.scalars import COMPLEXES, REALS
from src.core.vectors import REAL_LINE, CoordinateSpace


class TestRingHom:
    """σ : 𝕜 → 𝕜'"""

    def test_identity(self) -> None:
        assert RingHom.identity(REALS)(2.5) == 2.5

    def test_conjugation_is_isometric(self) -> None:
        conj = RingHom.conjugation()
        assert conj(1 + 2j) == 1 - 2j
        assert conj.isometric
        assert COMPLEXES.norm(conj(3 + 4j)) == COMPLEXES.norm(3 + 4j)

    def test_real_embedding(self) -> None:
        emb = RingHom.real_embedding()
        assert emb(2.0) == 2 + 0j
        assert emb.source is REALS
        assert emb.target is COMPLEXES


class TestLinearMap:
    """Линейные отображения"""

    def test_from_matrix(self) -> None:
        plane = CoordinateSpace(2)
        rotate = LinearMap.from_matrix([[0.0, -1.0], [1.0, 0.0]], plane, plane)
        assert np.allclose(rotate(plane.vector(1.0, 0.0)), [0.0, 1.0])

    def test_sum_of_maps(self) -> None:
        plane = CoordinateSpace(2)
        total = LinearMap.identity(plane) + LinearMap.identity(plane)
        assert np.allclose(total(plane.vector(1.0, 2.0)), [2.0, 4.0])

    def test_sum_requires_same_homomorphism(self) -> None:
        line = CoordinateSpace(1, scalars=COMPLEXES)
        f = LinearMap.identity(line)
        g = LinearMap(line, line, lambda z: np.conj(z), RingHom.conjugation())
        with pytest.raises(StructureUnavailableError, match="different ring homomorphisms"):
            f + g

    def test_zero_map_requires_shared_scalars(self) -> None:
        with pytest.raises(StructureUnavailableError, match="shared scalar field"):
            LinearMap.zero(CoordinateSpace(2, scalars=COMPLEXES), REAL_LINE)


class TestRestrictedSpace:
    """ℂⁿ как пространство над ℝ"""

    def test_real_scalar_action(self) -> None:
        space = RestrictedSpace(CoordinateSpace(2, scalars=COMPLEXES), RingHom.real_embedding())
        v = space.base.vector(1j, 2.0)
        assert space.scalars is REALS
        assert np.allclose(space.smul(3.0, v), [3j, 6.0])
        assert space.norm(v) == pytest.approx(np.sqrt(5.0))

    def test_mismatched_target(self) -> None:
        with pytest.raises(StructureUnavailableError, match="algebra map lands in"):
            RestrictedSpace(CoordinateSpace(2), RingHom.real_embedding())
