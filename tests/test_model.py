"""
Tests for models, selections, operations and selection observers.
"""

import numpy as np
import pytest
import trimesh

from objscale import (
    Application,
    Entity,
    Model,
    SelectionEvent,
    SelectionObserver,
    create_box_definition,
    create_demo_model,
)


@pytest.fixture
def model():
    m = Model("Test")
    m.add_instance(create_box_definition(), name="a")
    m.add_instance(create_box_definition(), name="b")
    return m


class TestSelection:
    """Test Selection change notification."""

    def test_events(self, model):
        a, b = model.instances
        events = []
        model.selection.add_observer(lambda event, sel: events.append((event, len(sel))))
        model.selection.add(a)
        model.selection.add(a)  # no change
        model.selection.replace([a, b])
        model.selection.remove(a)
        model.selection.clear()
        model.selection.clear()  # no change
        assert events == [
            (SelectionEvent.ADDED, 1),
            (SelectionEvent.BULK_CHANGE, 2),
            (SelectionEvent.REMOVED, 1),
            (SelectionEvent.CLEARED, 0),
        ]

    def test_duplicate_observer(self, model):
        def handler(event, sel):
            pass

        assert model.selection.add_observer(handler)
        assert not model.selection.add_observer(handler)
        assert model.selection.remove_observer(handler)
        assert not model.selection.remove_observer(handler)

    def test_order_and_toggle(self, model):
        a, b = model.instances
        sel = model.selection
        sel.add(b, a, b)
        assert list(sel) == [b, a]
        sel.toggle(b)
        assert list(sel) == [a]
        assert b not in sel
        assert not sel.empty

    def test_remove_entity_deselects(self, model):
        a, _ = model.instances
        model.selection.add(a)
        model.remove_entity(a)
        assert model.selection.empty
        assert a.model is None


class TestOperations:
    """Test undoable operations."""

    def test_commit_and_undo(self, model):
        a, b = model.instances
        with model.operation("Scale"):
            a.set_scale(2.0)
            b.set_scale(3.0)
            a.set_scale(4.0)
        assert model.can_undo
        assert model.undo() == "Scale"
        np.testing.assert_allclose(a.transformation, np.eye(4))
        np.testing.assert_allclose(b.transformation, np.eye(4))
        assert not model.can_undo

    def test_abort_on_error(self, model):
        a, _ = model.instances
        with pytest.raises(RuntimeError, match="boom"):
            with model.operation("Scale"):
                a.set_scale(2.0)
                raise RuntimeError("boom")
        np.testing.assert_allclose(a.transformation, np.eye(4))
        assert not model.operation_open
        assert not model.can_undo

    def test_undo_discards_later_changes_from_history(self, model):
        a, _ = model.instances
        with model.operation("Scale"):
            a.set_scale(2.0)
        a.translate([5.0, 0.0, 0.0])
        model.undo()
        np.testing.assert_allclose(a.transformation, np.eye(4))
        assert a.transform_stack == []
        assert a.undo_last_transform() is None
        assert a.scale == pytest.approx(1.0)

    def test_abort_keeps_earlier_history(self, model):
        a, _ = model.instances
        a.translate([1.0, 0.0, 0.0])
        model.start_operation("Scale")
        a.set_scale(3.0)
        model.abort_operation()
        assert [t.name for t in a.transform_stack] == ["translate"]
        assert a.scale == pytest.approx(1.0)

    def test_empty_operation_dropped(self, model):
        model.start_operation("Nothing")
        model.commit_operation()
        assert not model.can_undo
        assert model.undo() is None

    def test_changes_outside_operation_not_undoable(self, model):
        a, _ = model.instances
        a.set_scale(2.0)
        assert not model.can_undo
        assert a.scale == pytest.approx(2.0)

    def test_nested_operation_rejected(self, model):
        model.start_operation("Outer")
        with pytest.raises(RuntimeError):
            model.start_operation("Inner")
        with pytest.raises(RuntimeError):
            model.undo()
        model.abort_operation()

    def test_commit_without_operation(self, model):
        with pytest.raises(RuntimeError):
            model.commit_operation()
        with pytest.raises(RuntimeError):
            model.abort_operation()

    def test_entity_belongs_to_one_model(self, model):
        other = Model("Other")
        with pytest.raises(ValueError):
            other.add_entity(model.instances[0])


class TestApplication:
    """Test model activation."""

    def test_activation_notifies(self):
        app = Application()
        seen = []
        app.add_observer(seen.append)
        second = app.new_model("Second")
        app.activate_model(second)  # already active
        app.activate_model(app.models[0])
        assert seen == [second, app.models[0]]

    def test_activate_unknown_model(self):
        with pytest.raises(ValueError):
            Application().activate_model(Model())

    def test_close_active_model(self):
        app = Application()
        first = app.active_model
        second = app.new_model()
        app.close_model(second)
        assert app.active_model is first
        app.close_model(first)
        assert len(app.models) == 1
        assert app.active_model is not first


class TestSelectionObserver:
    """Test SelectionObserver re-attachment."""

    def test_selection_changes_call_back(self, model):
        app = Application(model)
        calls = []
        observer = SelectionObserver(app, lambda: calls.append(1))
        model.selection.add(model.instances[0])
        model.selection.clear()
        assert len(calls) == 2
        observer.release()
        model.selection.add(model.instances[0])
        assert len(calls) == 2
        assert not observer.attached

    def test_follows_active_model(self, model):
        app = Application(model)
        calls = []
        observer = SelectionObserver(app, lambda: calls.append(app.active_model.name))
        other = app.new_model("Other")
        assert calls == ["Other"]
        assert observer.model is other
        # Old model no longer observed
        model.selection.add(model.instances[0])
        assert calls == ["Other"]
        other.selection.add(other.add_entity(Entity("edge")))
        assert calls == ["Other", "Other"]

    def test_release_is_idempotent(self, model):
        app = Application(model)
        observer = SelectionObserver(app, lambda: None)
        observer.release()
        observer.release()
        app.new_model()
        assert observer.model is None

    def test_release_removes_all_subscriptions(self, model):
        app = Application(model)
        first = SelectionObserver(app, lambda: None)
        second = SelectionObserver(app, lambda: None)
        assert len(model.selection._observers) == 2
        first.release()
        second.release()
        assert model.selection._observers == []
        assert app._observers == []


def test_demo_model_to_scene():
    model = create_demo_model()
    scene = model.to_scene()
    assert isinstance(scene, trimesh.Scene)
    assert set(scene.geometry.keys()) == {"box", "plane", "line"}
    M, _ = scene.graph["box"]
    np.testing.assert_allclose(M, model.instances[0].transformation)
