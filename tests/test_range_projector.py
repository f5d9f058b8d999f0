"""Tests for axis scales, the linear projection and range projection."""

import numpy as np
import pytest

from overlay_core.types import Range, RangeSelection
from projection import AxisScale, LinearProjection, Polygon, RangeProjector


# ── AxisScale ──────────────────────────────────────────────────

class TestAxisScale:
    def test_scaled(self):
        scale = AxisScale(-1.0, 3.0)
        assert scale.scaled(-1.0) == 0.0
        assert scale.scaled(1.0) == 0.5
        assert scale.unscaled(0.5) == 1.0

    def test_zero_width_axis(self):
        assert AxisScale(2.0, 2.0).scaled(7.0) == 0.5

    def test_inverted_rejected(self):
        with pytest.raises(ValueError):
            AxisScale(3.0, 1.0)

    def test_nice_bounds(self):
        scale = AxisScale.from_values([0.3, 8.7])
        assert (scale.min, scale.max) == (0.0, 9.0)

    def test_raw_bounds(self):
        scale = AxisScale.from_values([0.3, 8.7], nice=False)
        assert (scale.min, scale.max) == (0.3, 8.7)

    def test_constant_values_get_width(self):
        scale = AxisScale.from_values([4.0, 4.0])
        assert scale.min == 4.0
        assert scale.max > scale.min


# ── LinearProjection ───────────────────────────────────────────

class TestLinearProjection:
    def test_corners(self, projection):
        # x grows right, y is flipped
        assert projection.project_2d([0.0, 0.0, 0.0], 0, 2) == pytest.approx((0.0, 100.0))
        assert projection.project_2d([3.0, 0.0, 6.0], 0, 2) == pytest.approx((100.0, 0.0))

    def test_margin(self):
        proj = LinearProjection([AxisScale(0, 1), AxisScale(0, 1)], 120, 120, margin=10)
        assert proj.project_2d([0, 0], 0, 1) == pytest.approx((10.0, 110.0))
        assert proj.project_2d([1, 1], 0, 1) == pytest.approx((110.0, 10.0))

    def test_project_points_matches_single(self, projection):
        matrix = np.array([[1.0, 2.0, 3.0], [2.5, -1.0, 0.5]])
        batch = projection.project_points(matrix, 0, 1)
        for row, expected in zip(matrix, batch):
            assert projection.project_2d(row, 0, 1) == pytest.approx(tuple(expected))

    def test_bad_dimension(self, projection):
        with pytest.raises(ValueError):
            projection.project_2d([0, 0, 0], 0, 3)
        with pytest.raises(ValueError):
            projection.scale_of(-1)

    def test_from_data(self):
        proj = LinearProjection.from_data(np.array([[0.0, 10.0], [1.0, 20.0]]), 50, 50)
        assert proj.dimensionality == 2
        assert proj.scale_of(1).min == 10.0

    def test_margin_must_fit(self):
        with pytest.raises(ValueError):
            LinearProjection([AxisScale(0, 1)], 20, 20, margin=10)


# ── RangeProjector ─────────────────────────────────────────────

class TestRangeProjector:
    def test_three_dimensional_scenario(self, projection):
        """Selection [(1,2), None, (0,5)] displayed on dims (0, 2)."""
        selection = RangeSelection.from_pairs([(1, 2), None, (0, 5)])
        cube = RangeProjector().project(selection.ranges, projection, 0, 2)

        assert cube.x_range == Range(1.0, 2.0)
        assert cube.y_range == Range(0.0, 5.0)
        # Unconstrained dim 1 resolves to its scale but leaves the polygon alone
        assert (cube.mins[1], cube.maxs[1]) == (-1.0, 10.0)

        x_lo, x_hi = cube.filled.x_extent
        y_lo, y_hi = cube.filled.y_extent
        assert (x_lo, x_hi) == pytest.approx((100 / 3, 200 / 3))
        assert (y_lo, y_hi) == pytest.approx((100 / 6, 100.0))

    def test_unconstrained_axes_use_full_extent(self, projection):
        cube = RangeProjector().project([None, None, None], projection, 0, 1)
        assert cube.x_range == (0.0, 3.0)
        assert cube.y_range == (-1.0, 10.0)
        assert cube.filled.x_extent == pytest.approx((0.0, 100.0))
        assert cube.filled.y_extent == pytest.approx((0.0, 100.0))

    def test_degenerate_range_gives_zero_width(self, projection):
        cube = RangeProjector().project([Range(2.0, 2.0), None, Range(1.0, 4.0)], projection, 0, 2)
        x_lo, x_hi = cube.filled.x_extent
        assert x_lo == pytest.approx(x_hi)
        assert len(cube.filled.points) == 4

    def test_filled_and_frame_share_vertices(self, projection):
        cube = RangeProjector().project([Range(0.5, 1.0), None, None], projection, 0, 1)
        assert cube.filled.points == cube.frame.points
        assert cube.filled.filled
        assert not cube.frame.filled

    def test_other_dimensions_do_not_change_polygon(self, projection):
        projector = RangeProjector()
        a = projector.project([Range(1, 2), Range(0, 1), Range(0, 5)], projection, 0, 2)
        b = projector.project([Range(1, 2), Range(4, 9), Range(0, 5)], projection, 0, 2)
        assert a.filled.points == b.filled.points

    def test_swapped_axes(self, projection):
        cube = RangeProjector().project([Range(1, 2), None, Range(0, 5)], projection, 2, 0)
        assert cube.x_range == (0.0, 5.0)
        assert cube.y_range == (1.0, 2.0)

    def test_wrong_range_count(self, projection):
        with pytest.raises(ValueError):
            RangeProjector().project([Range(0, 1)], projection, 0, 1)


class TestPolygon:
    def test_svg_points(self):
        poly = Polygon(((0.0, 1.5), (2.25, 3.0)))
        assert poly.svg_points() == "0,1.5 2.25,3"


class TestRange:
    def test_reversed_rejected(self):
        with pytest.raises(ValueError):
            Range.of(2, 1)

    def test_degenerate_allowed(self):
        assert Range.of(3, 3).width == 0.0

    def test_selection_length_fixed(self):
        sel = RangeSelection.from_pairs([(0, 1), None, None])
        assert sel.dimensionality == 3
        assert isinstance(sel.ranges, tuple)
