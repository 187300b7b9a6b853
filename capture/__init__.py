"""Closure-capture interpreter.

For reference:
- "frame": one scope of named, mutable bindings, linked to its enclosing frame
- "closure": a function paired with the frame it was defined in, held by reference

Basic program flow:
    1. Program: built directly from statement nodes (see capture/lang/statements.py), there is no parser
    2. Session: executes statements against frames, the global frame being the program's storage
    3. Calls: invoking a closure runs its body in a new child of the captured frame (see capture/pure/closure.py),
       so every closure over one frame reads and writes the same bindings

"""
