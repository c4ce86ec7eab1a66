"""
3D preview of placed instances as wireframe bounding boxes.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .object3d import Instance

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Pairs of corner indices (Instance.bounding_box_corners order) differing in one axis
BOX_EDGES = tuple((a, a | bit) for a in range(8) for bit in (1, 2, 4) if not a & bit)


def box_wireframe(corners: np.ndarray) -> np.ndarray:
    """(N, 3) polyline through the 12 box edges, NaN rows separating edges."""
    rows: List[np.ndarray] = []
    gap = np.full((1, 3), np.nan)
    for a, b in BOX_EDGES:
        rows.extend([corners[[a, b]], gap])
    return np.vstack(rows)


def visualize_3d(
    instances: Iterable[Instance],
    title: str = "Instances",
    colors: Optional[Sequence[str]] = None,
    *,
    backend: str = "auto",
    show_axes: bool = True,
    width: int = 800,
    height: int = 600,
    line_width: float = 3.0,
) -> Optional[object]:
    """Visualize the transformed bounding boxes of `instances`.

    Args:
        instances: Instances to draw, one trace each
        title: Figure title
        colors: Line colors, cycled over instances
        backend: 'plotly', 'matplotlib', or 'auto'
        show_axes: Whether to display axes
        width: Figure width (pixels for plotly)
        height: Figure height (pixels for plotly)
        line_width: Line width

    Returns:
        Backend-specific figure object or None if the backend failed.
    """
    instances = list(instances)
    colors = list(colors) if colors else ["crimson", "royalblue", "seagreen", "darkorange"]
    frames = [box_wireframe(inst.bounding_box_corners()) for inst in instances]
    labels = [inst.name or f"Instance {i}" for i, inst in enumerate(instances)]

    # Determine backend if auto
    if backend == "auto":
        try:
            import plotly.graph_objects as go  # noqa: F401

            backend = "plotly"
        except ImportError:
            backend = "matplotlib"

    if backend == "plotly":
        try:
            import plotly.graph_objects as go

            fig = go.Figure()
            for i, (frame, label) in enumerate(zip(frames, labels)):
                fig.add_trace(
                    go.Scatter3d(
                        x=frame[:, 0],
                        y=frame[:, 1],
                        z=frame[:, 2],
                        mode="lines",
                        line=dict(color=colors[i % len(colors)], width=float(line_width)),
                        name=label,
                    )
                )
            fig.update_layout(
                title=title,
                autosize=False,
                width=int(width),
                height=int(height),
                scene=dict(
                    aspectmode="data",
                    xaxis=dict(visible=show_axes),
                    yaxis=dict(visible=show_axes),
                    zaxis=dict(visible=show_axes),
                ),
            )
            return fig
        except Exception as e:
            logger.warning("Plotly visualization failed: %s", e)
            return None

    if backend == "matplotlib":
        try:
            import matplotlib.pyplot as plt

            fig = plt.figure(figsize=(max(4, width / 100), max(3, height / 100)))
            ax = fig.add_subplot(111, projection="3d")
            for i, (frame, label) in enumerate(zip(frames, labels)):
                ax.plot(
                    frame[:, 0],
                    frame[:, 1],
                    frame[:, 2],
                    color=colors[i % len(colors)],
                    linewidth=float(line_width),
                    label=label,
                )
            ax.set_xlabel("X")
            ax.set_ylabel("Y")
            ax.set_zlabel("Z")
            ax.set_title(title)
            if not show_axes:
                ax.set_axis_off()
            fig.tight_layout()
            return fig
        except Exception as e:
            logger.warning("Matplotlib visualization failed: %s", e)
            return None

    raise ValueError(f"Unknown backend: {backend}")
