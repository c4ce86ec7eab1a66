"""
Option sets for the scaling layer and the scale dialog.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScaleOptions:
    # Maximum decimals shown in scale notation, e.g. 1:87.5. Selected instances
    # share a scale when their scales read the same at this precision
    precision: int = 3
    # Name of the undoable operation wrapping a scale change
    operation_name: str = "Scale Objects"


@dataclass
class DialogOptions:
    title: str = "Object Scale"
    resizable: bool = False
    width: int = 230
    height: int = 140
    left: int = 200
    top: int = 100
