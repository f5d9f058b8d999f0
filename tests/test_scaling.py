"""Tests for the scale links and their composition."""

import math

import numpy as np
import pytest

from overlay_core.errors import OverlayConfigError
from scaling import (
    GammaFunction,
    LinearScale,
    NormalizationScale,
    ScaleChain,
    bubble_chain,
    compose,
)


# ── Links ──────────────────────────────────────────────────────

class TestNormalizationScale:
    def test_maps_bounds_to_unit_range(self):
        norm = NormalizationScale(0, 100)
        assert norm(0) == pytest.approx(0.0)
        assert norm(25) == pytest.approx(0.25)
        assert norm(100) == pytest.approx(1.0)

    def test_degenerate_bounds_give_midpoint(self):
        norm = NormalizationScale(5, 5)
        assert norm.degenerate
        assert norm(-3) == 0.5
        assert norm(5) == 0.5
        assert norm(1e9) == 0.5

    def test_inverted_bounds_rejected(self):
        with pytest.raises(OverlayConfigError):
            NormalizationScale(10, 0)

    def test_non_finite_bounds_rejected(self):
        with pytest.raises(OverlayConfigError):
            NormalizationScale(0, math.inf)

    def test_from_values_ignores_nan(self):
        norm = NormalizationScale.from_values([3.0, float("nan"), -2.0, 7.5])
        assert (norm.low, norm.high) == (-2.0, 7.5)

    def test_from_values_empty_defaults_to_unit(self):
        norm = NormalizationScale.from_values([])
        assert (norm.low, norm.high) == (0.0, 1.0)

    def test_returns_float_for_scalar(self):
        assert isinstance(NormalizationScale(0, 2)(1), float)


class TestLinearScale:
    def test_default_is_identity(self):
        lin = LinearScale()
        assert lin(0.3) == pytest.approx(0.3)

    def test_remaps_unit_range(self):
        lin = LinearScale(1, 10)
        assert lin(0.0) == pytest.approx(1.0)
        assert lin(0.5) == pytest.approx(5.5)
        assert lin(1.0) == pytest.approx(10.0)

    def test_array_input(self):
        out = LinearScale(2, 4)(np.array([0.0, 0.5, 1.0]))
        np.testing.assert_allclose(out, [2.0, 3.0, 4.0])

    def test_bounds(self):
        assert LinearScale(1, 10).bounds == (1.0, 10.0)


class TestGammaFunction:
    def test_default_is_no_correction(self):
        assert GammaFunction()(0.37) == pytest.approx(0.37)

    def test_square_root_for_gamma_two(self):
        assert GammaFunction(2.0)(0.25) == pytest.approx(0.5)

    def test_endpoints_fixed(self):
        g = GammaFunction(3.3)
        assert g(0.0) == pytest.approx(0.0)
        assert g(1.0) == pytest.approx(1.0)

    @pytest.mark.parametrize("gamma", [0, -1.0, float("nan"), float("inf"), "abc"])
    def test_invalid_gamma_fails_at_bind_time(self, gamma):
        with pytest.raises(OverlayConfigError) as exc:
            GammaFunction(gamma)
        assert exc.value.key == "bubble.gamma"

    def test_negative_input_keeps_sign(self):
        assert GammaFunction(2.0)(-0.25) == pytest.approx(-0.5)


# ── Composition ────────────────────────────────────────────────

class TestCompose:
    def test_applies_left_to_right(self):
        chain = compose(lambda x: x + 1, lambda x: x * 2)
        assert chain(3) == pytest.approx(8.0)

    def test_empty_chain_is_identity(self):
        chain = compose()
        assert chain(4.2) == pytest.approx(4.2)
        assert chain.name == "identity"

    def test_name_lists_stages(self):
        chain = compose(NormalizationScale(0, 1), GammaFunction(2.0))
        assert chain.name == "normalize -> gamma"
        assert len(chain) == 2

    def test_link_lookup(self):
        gamma = GammaFunction(2.0)
        chain = compose(NormalizationScale(0, 1), gamma)
        assert chain.link("gamma") is gamma
        assert chain.link("remap") is None

    def test_monotonic_unless_reversed_remap(self):
        assert compose(NormalizationScale(0, 1), LinearScale(1, 10)).monotonic
        assert not compose(LinearScale(10, 1)).monotonic

    def test_replace_stage(self):
        chain = compose(NormalizationScale(0, 100), GammaFunction(2.0))
        swapped = chain.replace("gamma", GammaFunction(1.0))
        assert swapped(25) == pytest.approx(0.25)
        # Original untouched
        assert chain(25) == pytest.approx(0.5)

    def test_replace_unknown_stage(self):
        with pytest.raises(KeyError):
            compose(GammaFunction()).replace("remap", LinearScale())

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError):
            ScaleChain([GammaFunction(), 3])

    def test_array_in_array_out(self):
        chain = compose(NormalizationScale(0, 10), LinearScale(0, 100))
        out = chain(np.array([0.0, 5.0, 10.0]))
        assert isinstance(out, np.ndarray)
        np.testing.assert_allclose(out, [0.0, 50.0, 100.0])


class TestBubbleChain:
    def test_gamma_two_scenario(self):
        chain = bubble_chain(bounds=(0, 100), radius=(1, 10), gamma=2.0)
        # 1 + (10 - 1) * 0.25 ** (1/2)
        assert chain(25) == pytest.approx(5.5)

    def test_gamma_one_reduces_to_normalize_and_remap(self):
        chain = bubble_chain(bounds=(0, 100), radius=(1, 10), gamma=1.0)
        plain = compose(NormalizationScale(0, 100), LinearScale(1, 10))
        for x in (0, 12.5, 25, 60, 100):
            assert chain(x) == pytest.approx(plain(x))

    @pytest.mark.parametrize("gamma", [0.2, 0.5, 1.0, 2.0, 7.5])
    def test_order_preserved(self, gamma):
        chain = bubble_chain(bounds=(0, 100), radius=(1, 10), gamma=gamma)
        xs = np.linspace(-20, 120, 57)
        ys = chain(xs)
        assert np.all(np.diff(ys) >= 0)
        assert chain.monotonic

    def test_degenerate_bounds_give_mid_radius(self):
        chain = bubble_chain(bounds=(3, 3), radius=(1, 10), gamma=2.0)
        # midpoint 0.5 -> gamma -> remap: stays inside the radius range
        assert 1.0 <= chain(3) <= 10.0
        assert chain(3) == pytest.approx(1 + 9 * 0.5 ** 0.5)

    def test_inverted_radius_rejected(self):
        with pytest.raises(OverlayConfigError):
            bubble_chain(bounds=(0, 1), radius=(10, 1))

    def test_invalid_gamma_rejected(self):
        with pytest.raises(OverlayConfigError):
            bubble_chain(bounds=(0, 1), radius=(1, 10), gamma=0)
