"""
In-process host model: documents, selections and undoable operations.

Important terminology:
- "Model": a document holding entities (instances and other selectable things).
- "Selection": the ordered set of entities the user has picked in a model.
- "Operation": a named, undoable group of transformation changes. Every change
  made to an instance of the model while an operation is open is recorded and
  can be rolled back as one step.
- "Application": owner of the open models; exactly one of them is active.

Selections and applications notify subscribers through plain callables
registered with `add_observer` and removed with `remove_observer`.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, List, Optional

import trimesh
from trimesh.parent import Geometry

from .object3d import Entity, Instance, Object3D, Transform

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class SelectionEvent(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CLEARED = "cleared"
    BULK_CHANGE = "bulk_change"


SelectionHandler = Callable[[SelectionEvent, "Selection"], Any]
ModelHandler = Callable[["Model"], Any]


class Selection:
    """Ordered set of selected entities with change notification."""

    def __init__(self) -> None:
        self._entities: List[Entity] = []
        self._observers: List[SelectionHandler] = []

    # ---- subscription ---------------------------------------------------
    def add_observer(self, handler: SelectionHandler) -> bool:
        """Subscribe `handler(event, selection)`. Returns False if already subscribed."""
        if handler in self._observers:
            return False
        self._observers.append(handler)
        return True

    def remove_observer(self, handler: SelectionHandler) -> bool:
        if handler not in self._observers:
            return False
        self._observers.remove(handler)
        return True

    def _notify(self, event: SelectionEvent) -> None:
        logger.debug("Selection %s (%d selected)", event.value, len(self._entities))
        # Copy so handlers may unsubscribe while being called
        for handler in list(self._observers):
            handler(event, self)

    # ---- container protocol --------------------------------------------
    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities

    @property
    def empty(self) -> bool:
        return not self._entities

    # ---- mutation -------------------------------------------------------
    def add(self, *entities: Entity) -> int:
        new = [e for e in entities if e not in self._entities]
        # Keep first occurrence of duplicates passed in one call
        new = list(dict.fromkeys(new))
        if not new:
            return 0
        self._entities.extend(new)
        self._notify(SelectionEvent.ADDED)
        return len(new)

    def remove(self, *entities: Entity) -> int:
        gone = [e for e in self._entities if e in entities]
        if not gone:
            return 0
        self._entities = [e for e in self._entities if e not in gone]
        self._notify(SelectionEvent.REMOVED)
        return len(gone)

    def toggle(self, entity: Entity) -> None:
        if entity in self._entities:
            self.remove(entity)
        else:
            self.add(entity)

    def clear(self) -> None:
        if not self._entities:
            return
        self._entities.clear()
        self._notify(SelectionEvent.CLEARED)

    def replace(self, entities: Iterable[Entity]) -> None:
        """Replace the whole selection in one change."""
        new = list(dict.fromkeys(entities))
        if new == self._entities:
            return
        self._entities = new
        self._notify(SelectionEvent.BULK_CHANGE)


@dataclass
class Operation:
    name: str
    # (object, record) in the order the changes were made
    changes: List[tuple] = field(default_factory=list)

    def revert(self) -> None:
        for obj, record in reversed(self.changes):
            if obj.transform_stack and obj.transform_stack[-1] is record:
                obj.undo_last_transform()
                continue
            # Later changes were made on top of this one; they are discarded with it
            obj.transformation = record.previous.copy()
            for i, other in enumerate(obj.transform_stack):
                if other is record:
                    del obj.transform_stack[i:]
                    break


class Model:
    """A document with entities, a selection and an undo stack."""

    def __init__(self, name: str = "Untitled") -> None:
        self.name = name
        self.entities: List[Entity] = []
        self.selection = Selection()
        self._operation: Optional[Operation] = None
        self._undo_stack: List[Operation] = []

    def __repr__(self) -> str:
        return f"Model({self.name!r})"

    # ---- entities -------------------------------------------------------
    def add_entity(self, entity: Entity) -> Entity:
        if entity.model is not None and entity.model is not self:
            raise ValueError(f"{entity!r} already belongs to {entity.model!r}")
        entity.model = self
        if entity not in self.entities:
            self.entities.append(entity)
        return entity

    def add_instance(
        self,
        definition: Any,
        transformation: Optional[Any] = None,
        *,
        name: str = "",
        kind: str = "component",
    ) -> Instance:
        inst = Instance(definition, transformation, name=name, kind=kind)
        self.add_entity(inst)
        return inst

    def remove_entity(self, entity: Entity) -> None:
        self.selection.remove(entity)
        self.entities.remove(entity)
        entity.model = None

    @property
    def instances(self) -> List[Instance]:
        return [e for e in self.entities if isinstance(e, Instance)]

    # ---- operations -----------------------------------------------------
    @property
    def operation_open(self) -> bool:
        return self._operation is not None

    def start_operation(self, name: str) -> None:
        if self._operation is not None:
            raise RuntimeError(
                f"Operation '{self._operation.name}' is still open; cannot start '{name}'"
            )
        self._operation = Operation(name)
        logger.debug("%r: started operation '%s'", self, name)

    def commit_operation(self) -> None:
        op = self._take_operation("commit")
        if not op.changes:
            logger.debug("%r: dropped empty operation '%s'", self, op.name)
            return
        self._undo_stack.append(op)
        logger.info("%r: committed '%s' (%d changes)", self, op.name, len(op.changes))

    def abort_operation(self) -> None:
        op = self._take_operation("abort")
        op.revert()
        logger.info("%r: aborted '%s'", self, op.name)

    def _take_operation(self, action: str) -> Operation:
        if self._operation is None:
            raise RuntimeError(f"No open operation to {action}")
        op, self._operation = self._operation, None
        return op

    @contextmanager
    def operation(self, name: str) -> Iterator["Model"]:
        """Run a block as one undoable operation, rolled back if it raises."""
        self.start_operation(name)
        try:
            yield self
        except BaseException:
            self.abort_operation()
            raise
        self.commit_operation()

    def _record_change(self, obj: Object3D, record: Transform) -> None:
        if self._operation is not None:
            self._operation.changes.append((obj, record))

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def undo(self) -> Optional[str]:
        """Revert the last committed operation. Returns its name."""
        if self._operation is not None:
            raise RuntimeError("Cannot undo while an operation is open")
        if not self._undo_stack:
            return None
        op = self._undo_stack.pop()
        op.revert()
        logger.info("%r: undid '%s'", self, op.name)
        return op.name

    # ---- export ---------------------------------------------------------
    def to_scene(self) -> trimesh.Scene:
        """Export the instances with trimesh geometry as a `trimesh.Scene`."""
        scene = trimesh.Scene()
        for i, inst in enumerate(self.instances):
            if not isinstance(inst.definition, Geometry):
                logger.debug("to_scene: %r has no geometry; skipped", inst)
                continue
            node = inst.name or f"instance_{i}"
            scene.add_geometry(
                inst.definition, node_name=node, geom_name=node, transform=inst.transformation
            )
        return scene


class Application:
    """Owner of open models; notifies observers when the active model changes."""

    def __init__(self, model: Optional[Model] = None) -> None:
        self.models: List[Model] = []
        self._observers: List[ModelHandler] = []
        self.active_model: Model = model if model is not None else Model()
        self.models.append(self.active_model)

    def add_observer(self, handler: ModelHandler) -> bool:
        if handler in self._observers:
            return False
        self._observers.append(handler)
        return True

    def remove_observer(self, handler: ModelHandler) -> bool:
        if handler not in self._observers:
            return False
        self._observers.remove(handler)
        return True

    def new_model(self, name: str = "Untitled") -> Model:
        return self.open_model(Model(name))

    def open_model(self, model: Model) -> Model:
        if model not in self.models:
            self.models.append(model)
        self.activate_model(model)
        return model

    def activate_model(self, model: Model) -> None:
        if model not in self.models:
            raise ValueError(f"{model!r} is not open in this application")
        if model is self.active_model:
            return
        self.active_model = model
        logger.debug("Activated %r", model)
        for handler in list(self._observers):
            handler(model)

    def close_model(self, model: Model) -> None:
        """Close `model`; the most recently opened remaining model becomes active."""
        self.models.remove(model)
        if not self.models:
            self.models.append(Model())
        if model is self.active_model:
            self.activate_model(self.models[-1])
