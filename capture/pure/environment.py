"""Lexical environments: frames of named, mutable bindings chained to their enclosing frame.

Name resolution walks outward from a frame through its parents:

```
<script>            globalSet, globalGet, main
   ^
main                a, set, get     <-- captured by both set and get
   ^
set | get           (parameters)
```

Frames are shared by reference. A closure keeps its defining frame alive after the call that created it has
returned, and every closure over the same frame sees the same bindings.
"""

from capture.lang.error import RedeclarationError, UnboundNameError


class Binding:
    """Mutable slot for one value. Assignments change value, never the slot itself."""

    def __init__(self, name, value=None):
        self.name = name
        self.value = value

    def __repr__(self):
        return f"Binding({self.name}={self.value!r})"


class Frame:
    """One scope in the chain: a dict of name: Binding plus a link to the enclosing (parent) Frame."""

    def __init__(self, parent=None, name="<script>"):
        self.parent = parent
        self.name = name      # name of the callable that owns this frame, for error messages
        self.bindings = {}
        self._cls = type(self).__name__

    @property
    def is_global(self):
        """Whether or not this frame is the outermost one."""
        return self.parent is None

    def chain(self):
        """Yields self, then each enclosing frame outward."""
        frame = self
        while frame is not None:
            yield frame
            frame = frame.parent

    def define(self, name, value=None):
        """Creates a binding for name in this frame. Redeclaring a name in a function frame raises a
        RedeclarationError; in the global frame the existing binding takes the new value.
        """
        if name in self.bindings:
            if not self.is_global:
                raise RedeclarationError(name)
            self.bindings[name].value = value
        else:
            self.bindings[name] = Binding(name, value)

    def resolve(self, name):
        """Returns the Binding for name in the nearest frame of the chain that defines it."""
        for frame in self.chain():
            if name in frame.bindings:
                return frame.bindings[name]
        raise UnboundNameError(name)

    def get(self, name):
        return self.resolve(name).value

    def set(self, name, value):
        """Assigns value to the nearest binding of name, in place."""
        self.resolve(name).value = value

    def __contains__(self, name):
        return name in self.bindings

    def __repr__(self):
        return f"{self._cls}(name='{self.name}', bindings={list(self.bindings)})"
