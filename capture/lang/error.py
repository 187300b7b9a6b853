"""Error handling for the capture language. Only GenericExceptions should be encountered during running: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import re
import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a capture error. msg is formatted with exprs, and
    exprs[0] should be the offending snippet (used to highlight it in the statement being run).
    """

    def __init__(self, msg, exprs=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.diagnosis = diagnosis
        self.internal = internal
        self.traceback = None  # calls active when raised, copied by Session as the error leaves it

        super().__init__(msg.format(*exprs))


class UnboundNameError(GenericException):
    """Name not defined in any frame of the chain being searched."""

    def __init__(self, name):
        super().__init__("undefined variable '{}'", name)
        self.name = name


class RedeclarationError(GenericException):
    """Name defined twice in the same function frame."""

    def __init__(self, name):
        super().__init__("already a variable named '{}' in this scope", name)
        self.name = name


class ArityError(GenericException):

    def __init__(self, name, expected, got):
        super().__init__(f"expected {expected} arguments but got {got} in call to '{{}}'", name)
        self.name = name
        self.expected = expected
        self.got = got


class NotCallableError(GenericException):

    def __init__(self, expr):
        super().__init__("can only call functions, '{}' is not one", expr)


class StackOverflowError(GenericException):

    def __init__(self, name):
        super().__init__("stack overflow while calling '{}'", name, diagnosis=False)
        self.name = name


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report capture errors with a traceback of the
    calls that were active when they were raised.
    """
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = []  # list of [callable name, statement being run]

    def register_call(self, name):
        """Pushes a call onto the traceback. Should be called prior to running the callable's body."""
        self.traceback.append([name, None])

    def register_stmt(self, stmt):
        """Records the statement currently run by the innermost call."""
        if self.traceback:
            self.traceback[-1][1] = stmt

    def remove_call(self):
        """Pops the innermost call from the traceback. Should be called after the call returns successfully."""
        self.traceback.pop()

    def snapshot(self):
        """Returns a copy of the traceback."""
        return [list(entry) for entry in self.traceback]

    def unwind(self, depth):
        """Drops every call above depth and clears the statement of the call left innermost."""
        del self.traceback[depth:]
        self.register_stmt(None)

    @staticmethod
    def locate(expr, line):
        """Returns the index of expr in line, preferring a whole-word match (so 'a' is not found inside 'var')."""
        match = re.search(rf"(?<!\w){re.escape(expr)}(?!\w)", line)
        return match.start() if match else line.index(expr)

    @staticmethod
    def diagnose(error, line):
        """Returns line with error.expr highlighted and underlined. Assumes error.expr is in line."""
        start = ErrorHandler.locate(error.expr, line)
        end = start + len(error.expr)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Reports error, which must be a GenericException, using the traceback it carries (self.traceback if it carries
        none). Exits if self.fatal.
        """
        traceback = error.traceback if error.traceback is not None else self.traceback

        error_msg = ""
        for name, stmt in traceback:
            error_msg += f"  in {name}"
            error_msg += f", at '{stmt}'\n" if stmt else "\n"

        if error_msg:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=sys.stderr)

        line = traceback[-1][1] if traceback else None
        if not error.internal and error.expr and error.diagnosis and line and error.expr in line:
            print(ErrorHandler.diagnose(error, line), file=sys.stderr)

        if self.fatal:
            sys.exit(1)
        self.unwind(1)  # if error occurred, unwind to the script (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
