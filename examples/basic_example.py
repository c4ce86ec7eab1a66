"""
Basic example: read and edit the scale of a selection through the dialog controller.

This example demonstrates the complete objscale workflow:
1. Build a model with a box, a flat plane and a line
2. Read the scale of each instance
3. Select instances and read their common scale
4. Type a new scale into the (headless) dialog
5. Undo the change
"""

import logging

from objscale import Application, DialogView, ScaleDialog, create_demo_model


def main():
    """Run the basic example."""
    logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")

    print("objscale Basic Example")
    print("======================")

    # Step 1: Create a model
    print("\n1. Creating demo model...")
    app = Application(create_demo_model())
    model = app.active_model
    box, plane, line = model.instances

    # Step 2: Scale of each instance
    print("\n2. Instance scales:")
    for inst in model.instances:
        print(f"   {inst.name:6s} extent={inst.extent.tolist()} scale={inst.scale:.6g}")

    # Step 3: Open the dialog and select
    print("\n3. Selecting box and plane...")
    dialog = ScaleDialog(app, DialogView())
    dialog.show()
    model.selection.add(box, plane)
    print(f"   Dialog shows: {dialog.view.fields!r}")
    model.selection.add(line)
    print(f"   With the line as well: {dialog.view.fields!r}")

    # Step 4: Apply a new scale
    print("\n4. Typing 1:43.5...")
    dialog.on_change("1:43.5")
    for inst in model.instances:
        print(f"   {inst.name:6s} scale={inst.scale:.6g}")

    # Step 5: Undo
    print("\n5. Undo...")
    model.undo()
    for inst in model.instances:
        print(f"   {inst.name:6s} scale={inst.scale:.6g}")

    dialog.hide()


if __name__ == "__main__":
    main()
