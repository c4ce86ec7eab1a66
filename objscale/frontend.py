"""
Scale dialog controller.

`ScaleDialog` keeps a dialog view in sync with the selection of the active
model and applies scales typed into it. The view itself (HTML, Qt, ...) is
outside this package; it only has to implement `DialogView`.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from .config import DialogOptions, ScaleOptions
from .model import Application
from .notation import Scale
from .observers import SelectionObserver
from .scaling import selected_instances, selection_scale, set_selection_scale
from .transformation import TransformationError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Message for invalid selection
INVALID_SELECTION = "No groups or components selected"


class CommandState(str, Enum):
    CHECKED = "checked"
    UNCHECKED = "unchecked"


class DialogView:
    """
    Headless dialog view.

    Records what the controller pushed to it. UI toolkits subclass it and
    forward each call to their widgets.
    """

    def __init__(self, options: Optional[DialogOptions] = None) -> None:
        self.options = options or DialogOptions()
        self.visible = False
        self.fields = ""
        self.messages: List[str] = []
        self.field_valid = True

    def show(self) -> None:
        self.visible = True

    def close(self) -> None:
        self.visible = False

    def bring_to_front(self) -> None:
        pass

    def update_fields(self, text: str) -> None:
        self.fields = text

    def display_message(self, message: str) -> None:
        self.messages.append(message)

    def mark_as_valid(self) -> None:
        self.field_valid = True

    def mark_as_invalid(self) -> None:
        self.field_valid = False


class ScaleDialog:
    """Controller between a `DialogView` and the selection of the active model."""

    def __init__(
        self,
        app: Application,
        view: Optional[DialogView] = None,
        options: Optional[ScaleOptions] = None,
    ) -> None:
        self.app = app
        self.view = view if view is not None else DialogView()
        self.options = options or ScaleOptions()
        self.observer: Optional[SelectionObserver] = None
        # Last valid scale entered
        self.scale: Optional[Scale] = None

    @property
    def visible(self) -> bool:
        return self.view.visible

    def show(self) -> None:
        if self.visible:
            self.view.bring_to_front()
        else:
            self.view.show()
        if self.observer is not None:
            self.observer.release()
        self.observer = SelectionObserver(self.app, self.on_selection_change)
        self.on_selection_change()

    def hide(self) -> None:
        self.view.close()
        if self.observer is not None:
            self.observer.release()
            self.observer = None

    def toggle(self) -> None:
        if self.visible:
            self.hide()
        else:
            self.show()

    def command_state(self) -> CommandState:
        return CommandState.CHECKED if self.visible else CommandState.UNCHECKED

    def on_selection_change(self) -> None:
        """Push the scale of the current selection to the view."""
        model = self.app.active_model
        scale = selection_scale(model, self.options)
        text = str(Scale(scale, self.options.precision)) if scale is not None else ""
        self.view.update_fields(text)
        if not selected_instances(model):
            self.view.display_message(INVALID_SELECTION)

    def on_change(self, text: str) -> bool:
        """Apply a scale typed by the user. Returns whether it was applied."""
        scale = Scale(text, self.options.precision)
        if not scale.valid:
            logger.debug("Rejected scale notation %r", text)
            self.view.mark_as_invalid()
            return False
        self.scale = scale
        self.view.mark_as_valid()
        try:
            set_selection_scale(self.app.active_model, float(scale), self.options)
        except TransformationError as e:
            # The operation was rolled back
            logger.debug("Scale %s not applied: %s", scale, e)
            self.view.display_message(f"Cannot scale selection: {e}")
            return False
        return True
