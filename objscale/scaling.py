"""
Read and write the uniform scale of the selected instances of a model.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional

from .config import ScaleOptions
from .model import Model
from .notation import format_scale
from .object3d import Instance
from .transformation import NonPositiveScaleError, TransformationError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def selected_instances(model: Model) -> List[Instance]:
    """Instances (groups and components) in the selection, in selection order."""
    return [e for e in model.selection if isinstance(e, Instance)]


def unique_values(values: Iterable[float], precision: int) -> List[float]:
    """Values with duplicates dropped, two scales being equal when they format the same."""
    unique = {}
    for value in values:
        unique.setdefault(format_scale(value, precision), value)
    return list(unique.values())


def selection_scale(model: Model, options: Optional[ScaleOptions] = None) -> Optional[float]:
    """
    Common scale of the selected instances.

    Instances whose scale cannot be read (empty definition, degenerate
    transformation) are ignored.

    Returns:
        The scale, or None when nothing scalable is selected or the selected
        instances have different scales.
    """
    options = options or ScaleOptions()
    scales = []
    for inst in selected_instances(model):
        try:
            scale = inst.scale
        except TransformationError as e:
            logger.debug("%r ignored for scale: %s", inst, e)
            continue
        if not (math.isfinite(scale) and scale > 0):
            logger.debug("%r ignored for scale: non-positive scale %r", inst, scale)
            continue
        scales.append(scale)
    scales = unique_values(scales, options.precision)
    return scales[0] if len(scales) == 1 else None


def set_selection_scale(
    model: Model, scale: float, options: Optional[ScaleOptions] = None
) -> int:
    """
    Give every selected instance the uniform `scale`, as one undoable operation.

    Returns:
        Number of instances changed.
    """
    options = options or ScaleOptions()
    s = float(scale)
    if not s > 0:
        raise NonPositiveScaleError(f"Scale must be positive, got {scale!r}")
    instances = selected_instances(model)
    if not instances:
        return 0
    with model.operation(options.operation_name):
        for inst in instances:
            inst.set_scale(s)
    logger.debug("Scaled %d instance(s) to %.6g", len(instances), s)
    return len(instances)
