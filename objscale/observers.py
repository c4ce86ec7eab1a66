"""
Selection observer that follows the active model.

`SelectionObserver` calls a callback whenever the selection of the
application's active model changes, and moves its subscription over when
another model becomes active (new, opened or switched to).
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .model import Application, Model, Selection, SelectionEvent

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class SelectionObserver:
    """
    Start listening to selection changes.

    Args:
        app: Application whose active model is observed.
        callback: Called without arguments when the selection changes, and
            once when a different model becomes active.
    """

    def __init__(self, app: Application, callback: Callable[[], Any]) -> None:
        self.app = app
        self._callback = callback
        self._model: Optional[Model] = None
        self._attach(app.active_model)

    @property
    def attached(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> Optional[Model]:
        """The model whose selection is currently observed."""
        return self._model

    def release(self) -> None:
        """Stop listening to selection changes."""
        self._detach()

    # ---- subscription handlers -----------------------------------------
    def _on_selection_change(self, event: SelectionEvent, selection: Selection) -> None:
        self._callback()

    def _on_activate_model(self, model: Model) -> None:
        if model is self._model:
            return
        self._detach_selection()
        self._attach(model)
        self._callback()

    # ---- internals ------------------------------------------------------
    def _attach(self, model: Model) -> None:
        self.app.add_observer(self._on_activate_model)
        model.selection.add_observer(self._on_selection_change)
        self._model = model
        logger.debug("Observing selection of %r", model)

    def _detach_selection(self) -> None:
        if self._model is not None:
            self._model.selection.remove_observer(self._on_selection_change)
            self._model = None

    def _detach(self) -> None:
        self._detach_selection()
        self.app.remove_observer(self._on_activate_model)
