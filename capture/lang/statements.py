"""Statement and expression nodes for the capture language. There is no parser: programs are built directly from
these nodes. Every node renders back to source-like text (expr), which is used in tracebacks and error diagnoses.

The grammar the nodes cover can be loosely defined as follows:

```
<stmt>  ::= "var" <name> ["=" <expr>] ";"          ; Var
          | <name> "=" <expr> ";"                  ; Assign
          | "print" <expr> ";"                     ; Print
          | <expr> ";"                             ; Expression
          | "fun" <name> "(" <params> ")" <body>   ; Function
          | "return" [<expr>] ";"                  ; Return

<expr>  ::= <literal> | <name> | <expr> "(" <args> ")"
```

Function bodies are flat lists of statements: the first Return reached ends the call.
"""

from abc import ABC, abstractmethod

from capture.lang.error import NotCallableError
from capture.pure.closure import Closure, make_closure


def stringify(value):
    """Renders a runtime value the way print shows it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Node(ABC):
    """Superclass representing any node in a capture program."""

    def __init__(self):
        self._cls = type(self).__name__

    @property
    @abstractmethod
    def expr(self):
        """Source-like rendering of this node."""

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return isinstance(other, type(self)) and other.expr == self.expr

    def __hash__(self):
        return hash(self.expr)


class Expr(Node):
    """Superclass for nodes that produce a value."""

    @abstractmethod
    def evaluate(self, frame, session):
        """Returns this expression's value in frame."""


class Literal(Expr):

    def __init__(self, value):
        super().__init__()
        self.value = value

    @property
    def expr(self):
        if isinstance(self.value, str):
            return f'"{self.value}"'
        return stringify(self.value)

    def evaluate(self, frame, session):
        return self.value


class Name(Expr):

    def __init__(self, name):
        super().__init__()
        self.name = name

    @property
    def expr(self):
        return self.name

    def evaluate(self, frame, session):
        return frame.get(self.name)


class Call(Expr):

    def __init__(self, callee, args=()):
        super().__init__()
        self.callee = Name(callee) if isinstance(callee, str) else callee
        self.args = list(args)

    @property
    def expr(self):
        return f"{self.callee.expr}({', '.join(arg.expr for arg in self.args)})"

    def evaluate(self, frame, session):
        callee = self.callee.evaluate(frame, session)
        if not isinstance(callee, Closure):
            raise NotCallableError(self.callee.expr)
        return session.call(callee, [arg.evaluate(frame, session) for arg in self.args])


class Stmt(Node):
    """Superclass for nodes that are run for their effect."""

    @abstractmethod
    def execute(self, frame, session):
        """Runs this statement in frame. Only Return produces a (meaningful) result."""


class Var(Stmt):

    def __init__(self, name, initializer=None):
        super().__init__()
        self.name = name
        self.initializer = initializer

    @property
    def expr(self):
        if self.initializer is None:
            return f"var {self.name};"
        return f"var {self.name} = {self.initializer.expr};"

    def execute(self, frame, session):
        value = self.initializer.evaluate(frame, session) if self.initializer is not None else None
        frame.define(self.name, value)


class Assign(Stmt):

    def __init__(self, name, value):
        super().__init__()
        self.name = name
        self.value = value

    @property
    def expr(self):
        return f"{self.name} = {self.value.expr};"

    def execute(self, frame, session):
        frame.set(self.name, self.value.evaluate(frame, session))


class Print(Stmt):

    def __init__(self, value):
        super().__init__()
        self.value = value

    @property
    def expr(self):
        return f"print {self.value.expr};"

    def execute(self, frame, session):
        session.write(self.value.evaluate(frame, session))


class Expression(Stmt):
    """Expression evaluated for its side effects, e.g. a call."""

    def __init__(self, value):
        super().__init__()
        self.value = value

    @property
    def expr(self):
        return f"{self.value.expr};"

    def execute(self, frame, session):
        self.value.evaluate(frame, session)


class Return(Stmt):

    def __init__(self, value=None):
        super().__init__()
        self.value = value

    @property
    def expr(self):
        return "return;" if self.value is None else f"return {self.value.expr};"

    def execute(self, frame, session):
        return self.value.evaluate(frame, session) if self.value is not None else None


class Function(Stmt):
    """Function declaration. Executing it binds name to a Closure over the current frame; the Function itself is the
    closure's code.
    """

    def __init__(self, name, params=(), body=()):
        super().__init__()
        self.name = name
        self.params = list(params)
        self.body = list(body)

    @property
    def header(self):
        return f"fun {self.name}({', '.join(self.params)})"

    @property
    def expr(self):
        return f"{self.header} {{ {' '.join(stmt.expr for stmt in self.body)} }}"

    def execute(self, frame, session):
        frame.define(self.name, make_closure(self, frame))

    def run(self, frame, session):
        """Runs the body in frame, the call's own frame. Returns the Return value, if any."""
        return session.execute(self.body, frame)
