"""
Demo definitions and models for objscale.

Provides example geometries of each dimensionality using trimesh, and a demo
model placing them with assorted transformations.
"""

from typing import Tuple

import numpy as np
import trimesh

from .model import Model


def create_box_definition(
    extents: Tuple[float, float, float] = (10.0, 10.0, 10.0),
) -> trimesh.Trimesh:
    """
    Create a box with its minimum corner at the origin.

    Args:
        extents: Box size (width, depth, height)

    Returns:
        Trimesh box object
    """
    box = trimesh.creation.box(extents=extents)
    box.apply_translation(np.asarray(extents, dtype=float) / 2.0)

    box.metadata["definition_type"] = "box"
    box.metadata["dimensions"] = 3
    box.metadata["extents"] = tuple(float(e) for e in extents)
    return box


def create_plane_definition(
    width: float = 10.0,
    depth: float = 10.0,
) -> trimesh.Trimesh:
    """
    Create a flat rectangle in the XY plane (zero height).

    Args:
        width: Size along x
        depth: Size along y

    Returns:
        Trimesh with two triangles
    """
    vertices = np.array(
        [[0.0, 0.0, 0.0], [width, 0.0, 0.0], [width, depth, 0.0], [0.0, depth, 0.0]]
    )
    faces = np.array([[0, 1, 2], [0, 2, 3]])
    plane = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)

    plane.metadata["definition_type"] = "plane"
    plane.metadata["dimensions"] = 2
    plane.metadata["extents"] = (float(width), float(depth), 0.0)
    return plane


def create_line_definition(length: float = 10.0, segments: int = 1) -> trimesh.PointCloud:
    """
    Create a straight run of points along x (zero depth and height).

    Args:
        length: Size along x
        segments: Number of segments between points

    Returns:
        Trimesh point cloud
    """
    xs = np.linspace(0.0, length, segments + 1)
    points = np.column_stack([xs, np.zeros_like(xs), np.zeros_like(xs)])
    line = trimesh.PointCloud(points)

    line.metadata["definition_type"] = "line"
    line.metadata["dimensions"] = 1
    line.metadata["extents"] = (float(length), 0.0, 0.0)
    return line


def create_demo_model(name: str = "Demo") -> Model:
    """
    Create a model with one instance of each demo definition.

    - "box": rotated 30 degrees about z, scaled 1:87, moved to (100, 0, 0)
    - "plane": scaled 1:87 in x and y, with a stale scale of 5 along its flat z axis
    - "line": scaled 2 along x only
    """
    model = Model(name)

    box = model.add_instance(create_box_definition(), name="box")
    box.set_scale(1 / 87)
    box.rotate(np.pi / 6, [0, 0, 1])
    box.translate([100.0, 0.0, 0.0])

    plane = model.add_instance(create_plane_definition(), name="plane", kind="group")
    plane.scale_axes(1 / 87, 1 / 87, 5.0)

    line = model.add_instance(create_line_definition(), name="line")
    line.scale_axes(2.0, 1.0, 1.0)

    return model
