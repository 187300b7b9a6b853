"""Closures: code paired with the frame it was defined in.

The frame is captured by reference, not copied. Invoking a closure runs its code in a fresh child of the captured
frame, so reads and writes of outer names land in the shared frame.
"""

from dataclasses import dataclass

from capture.lang.error import ArityError
from capture.pure.environment import Frame


@dataclass(frozen=True)
class Closure:
    """Immutable (code, frame) pair. code must provide name, params and run(frame, session)."""
    code: object
    frame: Frame

    @property
    def name(self):
        return self.code.name

    @property
    def arity(self):
        return len(self.code.params)

    def __str__(self):
        return f"<fn {self.name}>"


def make_closure(code, frame):
    """Returns a Closure of code over frame."""
    return Closure(code, frame)


def invoke(closure, args, session):
    """Calls closure with args: binds the parameters in a new frame whose parent is the captured frame, then runs the
    closure's code against it with session (which runs statements and receives output). Returns whatever the code
    returns.
    """
    if len(args) != closure.arity:
        raise ArityError(closure.name, closure.arity, len(args))

    frame = Frame(parent=closure.frame, name=closure.name)
    for param, arg in zip(closure.code.params, args):
        frame.define(param, arg)

    return closure.code.run(frame, session)
