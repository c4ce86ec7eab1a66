"""
Tests for Instance transform management.
"""

import numpy as np
import pytest

from objscale import (
    Instance,
    create_box_definition,
    create_line_definition,
    create_plane_definition,
)
from objscale.transformation import DegenerateExtentError, axis_scales


class TestInstance:
    """Test the Instance class."""

    @pytest.fixture
    def box(self):
        return Instance(create_box_definition((10.0, 20.0, 30.0)), name="box")

    def test_defaults(self, box):
        np.testing.assert_array_equal(box.transformation, np.eye(4))
        np.testing.assert_allclose(box.extent, [10.0, 20.0, 30.0])
        assert box.kind == "component"
        assert box.scale == pytest.approx(1.0)
        assert box.transform_stack == []

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            Instance((1.0, 1.0, 1.0), kind="face")

    def test_extent_triple_definition(self):
        inst = Instance((5.0, 0.0, 2.0), np.diag([3.0, 9.0, 3.0, 1.0]))
        assert inst.scale == pytest.approx(3.0)

    def test_set_scale_records_uniform_transform(self, box):
        box.rotate(0.5, [0, 1, 0])
        box.translate([1.0, 2.0, 3.0])
        box.set_scale(0.25)
        assert box.scale == pytest.approx(0.25)
        np.testing.assert_allclose(box.transformation[:3, 3], [1.0, 2.0, 3.0])
        last = box.transform_stack[-1]
        assert last.name == "scale"
        assert last.is_uniform_scale
        assert last.uniform_scale == 0.25

    def test_undo_last_transform(self, box):
        box.scale_axes(2.0, 2.0, 2.0)
        before = box.get_transformation()
        box.set_scale(5.0)
        box.undo_last_transform()
        np.testing.assert_allclose(box.transformation, before)
        assert len(box.transform_stack) == 1

    def test_undo_on_empty_stack(self, box):
        assert box.undo_last_transform() is None

    def test_reset_transforms(self, box):
        box.translate([1.0, 0.0, 0.0])
        box.set_scale(3.0)
        box.reset_transforms()
        np.testing.assert_array_equal(box.transformation, np.eye(4))
        assert box.transform_stack == []

    def test_set_transformation_rejects_bad_shape(self, box):
        with pytest.raises(ValueError):
            box.set_transformation(np.eye(3))

    def test_plane_ignores_flat_axis(self):
        plane = Instance(create_plane_definition(4.0, 2.0))
        np.testing.assert_allclose(plane.extent, [4.0, 2.0, 0.0])
        plane.scale_axes(0.5, 0.5, 9.0)
        assert plane.scale == pytest.approx(0.5)

    def test_line_uses_single_axis(self):
        line = Instance(create_line_definition(10.0))
        line.scale_axes(3.0, 7.0, 7.0)
        assert line.scale == pytest.approx(3.0)

    def test_empty_definition(self):
        inst = Instance((0.0, 0.0, 0.0))
        with pytest.raises(DegenerateExtentError):
            _ = inst.scale

    def test_bounding_box_corners(self, box):
        box.set_scale(2.0)
        box.translate([100.0, 0.0, 0.0])
        corners = box.bounding_box_corners()
        assert corners.shape == (8, 3)
        np.testing.assert_allclose(corners.min(axis=0), [100.0, 0.0, 0.0], atol=1e-9)
        np.testing.assert_allclose(corners.max(axis=0), [120.0, 40.0, 60.0], atol=1e-9)

    def test_copy_is_independent(self, box):
        box.set_scale(2.0)
        dup = box.copy()
        dup.set_scale(3.0)
        assert box.scale == pytest.approx(2.0)
        assert len(dup.transform_stack) == 2
        np.testing.assert_allclose(axis_scales(dup.transformation), [3.0, 3.0, 3.0])
