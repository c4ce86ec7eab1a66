"""
objscale: read and edit the uniform scale of placed 3D objects

A Python package for extracting a single scale factor (e.g. 1:87) from a 4x4
affine transformation, given the bounding box of the geometry it places, and
for replacing a transformation's scaling with a uniform scale while keeping
its rotation and translation. Includes a small host model (selections,
undoable operations) and a dialog controller built on top of it.
"""

__version__ = "0.1.0"

# Core scale decomposition
from .transformation import (
    DegenerateExtentError,
    DegenerateMatrixError,
    NonPositiveScaleError,
    TransformationError,
    apply_scale,
    axis_scales,
    extract_scale,
    remove_scale,
)

# Options
from .config import DialogOptions, ScaleOptions

# Host model
from .model import Application, Model, Selection, SelectionEvent
from .object3d import Entity, Instance, Object3D, Transform
from .observers import SelectionObserver

# Scale notation and selection scaling
from .notation import Scale, format_scale, parse_scale
from .scaling import selected_instances, selection_scale, set_selection_scale

# Dialog controller
from .frontend import CommandState, DialogView, ScaleDialog

# Demo definitions
from .demo import (
    create_box_definition,
    create_demo_model,
    create_line_definition,
    create_plane_definition,
)

__all__ = [
    # Core
    "extract_scale",
    "apply_scale",
    "remove_scale",
    "axis_scales",
    "TransformationError",
    "DegenerateExtentError",
    "DegenerateMatrixError",
    "NonPositiveScaleError",
    # Options
    "ScaleOptions",
    "DialogOptions",
    # Host model
    "Application",
    "Model",
    "Selection",
    "SelectionEvent",
    "Entity",
    "Object3D",
    "Instance",
    "Transform",
    "SelectionObserver",
    # Notation and selection scaling
    "Scale",
    "parse_scale",
    "format_scale",
    "selected_instances",
    "selection_scale",
    "set_selection_scale",
    # Dialog
    "ScaleDialog",
    "DialogView",
    "CommandState",
    # Demo definitions
    "create_box_definition",
    "create_plane_definition",
    "create_line_definition",
    "create_demo_model",
]
