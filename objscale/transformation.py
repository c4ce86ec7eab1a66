"""
Uniform scale extraction and re-application for 4x4 affine matrices.

Matrices follow the usual homogeneous layout: the three axis vectors are the
first three components of columns 0, 1 and 2, the origin is `M[:3, 3]` and
`M[3, 3]` is the homogeneous corner. Hosts that serialize matrices as a flat
column-major list of 16 values (x axis, 0, y axis, 0, z axis, 0, origin, w)
can pass that list directly.

Scale is read together with the extent of the geometry the matrix places. An
extent of exactly zero along an axis marks that axis as flat: interactive
scale tools usually leave the scale along a flat axis untouched when the user
performs a seemingly uniform scaling, so the value stored there cannot be
trusted and is ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class TransformationError(ValueError):
    """Base class for invalid input to the scale decomposition."""


class DegenerateExtentError(TransformationError):
    """Raised when every extent component is zero."""


class NonPositiveScaleError(TransformationError):
    """Raised when a scale factor that is not strictly positive is applied."""


class DegenerateMatrixError(TransformationError):
    """Raised when a matrix has a zero-length axis or a zero homogeneous corner."""


def as_matrix(matrix: Any) -> np.ndarray:
    """Return `matrix` as a new 4x4 float array.

    Accepts a (4, 4) array-like or a flat sequence of 16 values in
    column-major order.
    """
    M = np.array(matrix, dtype=float)
    if M.shape == (16,):
        return M.reshape((4, 4), order="F")
    if M.shape != (4, 4):
        raise ValueError(f"Transform matrix must be 4x4, got shape {M.shape}")
    return M


def as_extent(extent: Any) -> np.ndarray:
    """Return the (3,) extent of a trimesh geometry or a triple of sizes."""
    if hasattr(extent, "extents"):
        ext = extent.extents
        # trimesh returns None for geometry without vertices
        if ext is None:
            return np.zeros(3, dtype=float)
        extent = ext
    E = np.array(extent, dtype=float)
    if E.shape != (3,):
        raise ValueError(f"Extent must have 3 components, got shape {E.shape}")
    if np.any(E < 0):
        raise ValueError(f"Extent components must be non-negative, got {E.tolist()}")
    return E


def axis_scales(matrix: Any) -> np.ndarray:
    """Lengths of the x, y and z axis vectors of `matrix`."""
    M = as_matrix(matrix)
    return np.linalg.norm(M[:3, :3], axis=0)


def scaling_matrix(scale: float) -> np.ndarray:
    """Pure uniform scaling about the origin."""
    S = np.eye(4, dtype=float)
    S[0, 0] = S[1, 1] = S[2, 2] = float(scale)
    return S


def extract_scale(matrix: Any, extent: Any) -> float:
    """
    Extract a single uniform scale factor from a transformation.

    The geometric mean of the axis scales is taken over the axes along which
    the geometry has a non-zero extent. Axes with zero extent count as a
    neutral 1. Non-uniform scaling is therefore approximated rather than
    rejected.

    The result is divided by the homogeneous corner `M[3, 3]`, which some
    hosts use as an extra (inverse) scale term.

    Args:
        matrix: 4x4 transformation, or 16 values in column-major order.
        extent: Local bounding box size (width, depth, height), or a trimesh
            geometry whose `extents` are used.

    Returns:
        The scale factor.

    Raises:
        DegenerateExtentError: All extent components are zero.
        DegenerateMatrixError: The homogeneous corner is zero.
    """
    M = as_matrix(matrix)
    sizes = as_extent(extent)
    flat = sizes == 0
    dimensions = int(np.count_nonzero(~flat))
    if dimensions == 0:
        raise DegenerateExtentError("Cannot extract scale for an extent of zero size")

    scales = np.linalg.norm(M[:3, :3], axis=0)
    scales[flat] = 1.0
    product = float(np.prod(scales))

    if dimensions == 3:
        scale = float(np.cbrt(product))
    elif dimensions == 2:
        scale = float(np.sqrt(product))
    else:
        scale = product

    if logger.isEnabledFor(logging.DEBUG) and not np.allclose(
        scales[~flat], scales[~flat][0]
    ):
        logger.debug(
            "Non-uniform axis scales %s approximated by %.6g",
            scales[~flat].tolist(),
            scale,
        )

    w = M[3, 3]
    if w == 0:
        raise DegenerateMatrixError("Homogeneous corner of transformation is zero")
    return scale / w


def remove_scale(matrix: Any) -> np.ndarray:
    """Return the transformation with its axis vectors normalized.

    The origin is kept and the bottom row is reset to (0, 0, 0, 1).
    """
    M = as_matrix(matrix)
    axes = M[:3, :3]
    lengths = np.linalg.norm(axes, axis=0)
    if np.any(lengths == 0):
        raise DegenerateMatrixError(
            f"Cannot normalize zero-length axis vector (axis scales {lengths.tolist()})"
        )
    R = np.eye(4, dtype=float)
    R[:3, :3] = axes / lengths
    R[:3, 3] = M[:3, 3]
    return R


def apply_scale(matrix: Any, scale: float = 1.0) -> np.ndarray:
    """
    Replace the scaling of a transformation with a uniform scale.

    Rotation and translation are kept. The scale is applied in local space,
    before the orientation, so the origin does not move. Any value in the
    homogeneous corner is discarded. The default of 1 strips all scaling.

    Raises:
        NonPositiveScaleError: `scale` is not strictly positive.
        DegenerateMatrixError: An axis vector has zero length.
    """
    s = float(scale)
    # written as a negation so NaN is rejected too
    if not s > 0:
        raise NonPositiveScaleError(f"Scale must be positive, got {scale!r}")
    return remove_scale(matrix) @ scaling_matrix(s)


def column_major(matrix: Any) -> Sequence[float]:
    """Flatten a 4x4 matrix into 16 values in column-major order."""
    return as_matrix(matrix).flatten(order="F").tolist()
