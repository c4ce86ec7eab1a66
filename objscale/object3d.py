"""
Placed objects and their transform history.

Provides a lightweight base class `Object3D` that owns a 4x4 transformation
and records every replacement of it on a transform stack, and `Instance`,
a group or component placing a definition geometry in a model.

The definition is only read for its local bounding box, so it may be any
trimesh geometry (`Trimesh`, `PointCloud`, `Path3D`, ...) or a plain
(width, depth, height) triple.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

import numpy as np
import trimesh

from .transformation import apply_scale, as_extent, as_matrix, extract_scale

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


@dataclass
class Transform:
    name: str
    M: np.ndarray  # 4x4 homogeneous, the transformation that was set
    previous: np.ndarray  # 4x4 homogeneous, the transformation it replaced
    params: Optional[Dict[str, Any]]
    timestamp: datetime
    is_uniform_scale: bool = False
    uniform_scale: Optional[float] = None


class Entity:
    """Anything that can live in a model and be selected."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        # Set by Model.add_entity
        self.model: Optional[Any] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class Object3D(Entity):
    """
    Base class for entities placed by a transformation.

    Subclasses may override `_post_apply_transform(...)` to run any
    post-processing after a transformation is set.
    """

    def __init__(self, transformation: Optional[Any] = None, name: str = "") -> None:
        super().__init__(name)
        self.transformation: np.ndarray = (
            np.eye(4, dtype=float) if transformation is None else as_matrix(transformation)
        )
        self.original_transformation: np.ndarray = self.transformation.copy()
        # Stack of set transformations (in order of application)
        self.transform_stack: list[Transform] = []

    # ---- hooks ----------------------------------------------------------
    def _post_apply_transform(self, record: Transform) -> None:
        """Optional hook for subclasses to run after a transformation is set.

        Default implementation notifies the owning model, which records the
        change in its open operation.
        """
        if self.model is not None:
            self.model._record_change(self, record)

    # ---- core shared logic ---------------------------------------------
    def _set_and_record_transform(
        self,
        name: str,
        M: Any,
        *,
        params: Optional[Dict[str, Any]] = None,
        is_uniform_scale: bool = False,
        uniform_scale: Optional[float] = None,
    ) -> None:
        """Replace the transformation and record it on the stack."""
        M = as_matrix(M)
        record = Transform(
            name=name,
            M=M.copy(),
            previous=self.transformation.copy(),
            params=None if params is None else dict(params),
            timestamp=datetime.now(),
            is_uniform_scale=bool(is_uniform_scale),
            uniform_scale=(float(uniform_scale) if uniform_scale is not None else None),
        )
        self.transformation = M
        self.transform_stack.append(record)
        logger.debug("%r: set transformation '%s'", self, name)
        self._post_apply_transform(record)

    def set_transformation(
        self,
        M: Any,
        *,
        name: str = "custom",
        params: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Public convenience to set and record an arbitrary 4x4 transformation."""
        self._set_and_record_transform(name, M, params=params)

    def transform(self, M: Any, *, name: str = "transform") -> None:
        """Apply `M` in parent space, on top of the current transformation."""
        self._set_and_record_transform(name, as_matrix(M) @ self.transformation)

    def get_transformation(self) -> np.ndarray:
        """Return a copy of the current local->parent transformation."""
        return self.transformation.copy()

    # Convenience transforms
    def translate(self, t: Iterable[float]) -> None:
        tx, ty, tz = [float(c) for c in t]
        T = trimesh.transformations.translation_matrix([tx, ty, tz])
        self._set_and_record_transform(
            "translate", T @ self.transformation, params={"t": [tx, ty, tz]}
        )

    def rotate(self, angle: float, axis: Iterable[float], point: Optional[Iterable[float]] = None) -> None:
        """Rotate by `angle` radians about `axis` through `point` (parent space)."""
        axis = [float(c) for c in axis]
        R = trimesh.transformations.rotation_matrix(
            float(angle), axis, None if point is None else [float(c) for c in point]
        )
        self._set_and_record_transform(
            "rotate", R @ self.transformation, params={"angle": float(angle), "axis": axis}
        )

    def scale_axes(self, sx: float, sy: float, sz: float) -> None:
        """Scale along the local axes independently."""
        S = np.diag([float(sx), float(sy), float(sz), 1.0])
        self._set_and_record_transform(
            "scale_axes", self.transformation @ S, params={"scale": [sx, sy, sz]}
        )

    # Undo / reset
    def undo_last_transform(self) -> Optional[Transform]:
        """Restore the transformation that the last recorded one replaced."""
        if not self.transform_stack:
            return None
        last = self.transform_stack.pop()
        self.transformation = last.previous.copy()
        return last

    def reset_transforms(self) -> None:
        self.transformation = self.original_transformation.copy()
        self.transform_stack.clear()


class Instance(Object3D):
    """
    A group or component instance: a definition placed by a transformation.

    Attributes:
        definition: trimesh geometry or a (width, depth, height) triple
        kind: "group" or "component"
        transformation: local->parent 4x4 matrix
        transform_stack: list of `Transform` records in applied order
    """

    KINDS = ("group", "component")

    def __init__(
        self,
        definition: Any,
        transformation: Optional[Any] = None,
        *,
        name: str = "",
        kind: str = "component",
    ) -> None:
        if kind not in self.KINDS:
            raise ValueError(f"Unknown instance kind: {kind!r}")
        self.definition = definition
        self.kind = kind
        super().__init__(transformation, name=name)

    @property
    def extent(self) -> np.ndarray:
        """Local bounding box size of the definition."""
        return as_extent(self.definition)

    @property
    def scale(self) -> float:
        """Uniform scale currently encoded in the transformation."""
        return extract_scale(self.transformation, self.extent)

    def set_scale(self, scale: float) -> None:
        """Replace the scaling with a uniform `scale`, keeping orientation and position."""
        M = apply_scale(self.transformation, scale)
        sf = float(scale)
        self._set_and_record_transform(
            "scale", M, params={"scale": sf}, is_uniform_scale=True, uniform_scale=sf
        )

    def bounding_box_corners(self) -> np.ndarray:
        """(8, 3) corners of the definition's bounding box in parent space."""
        lo = self._local_bounds_min()
        ext = self.extent
        # Corner k takes the max along axis i when bit (2 - i) of k is set
        corners = np.array(list(itertools.product(*zip(lo, lo + ext))), dtype=float)
        return trimesh.transform_points(corners, self.transformation)

    def _local_bounds_min(self) -> np.ndarray:
        bounds = getattr(self.definition, "bounds", None)
        if bounds is None:
            return np.zeros(3, dtype=float)
        return np.asarray(bounds, dtype=float)[0]

    def copy(self) -> "Instance":
        inst = Instance(self.definition, self.transformation, name=self.name, kind=self.kind)
        inst.original_transformation = self.original_transformation.copy()
        inst.transform_stack = list(self.transform_stack)
        return inst
