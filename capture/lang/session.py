"""Session control for the capture language: runs statements against frames, with control over the global frame,
the call stack and the output stream.
"""

import sys

from capture.lang.error import GenericException, StackOverflowError
from capture.lang.statements import Return, stringify
from capture.pure.closure import invoke
from capture.pure.environment import Frame


class Session:
    """Governs a capture session. The global frame is the process-wide storage: pass one in to share or inspect it."""
    SCRIPT = "<script>"  # name of the top-level frame in tracebacks
    FRAMES_MAX = 64      # maximum depth of nested calls

    def __init__(self, error_handler, globals_frame=None, out=None):
        self.error_handler = error_handler
        self.error_handler.register_call(Session.SCRIPT)

        self.globals = globals_frame if globals_frame is not None else Frame(name=Session.SCRIPT)
        self.out = out              # None means sys.stdout at write time
        self.depth = 0              # number of calls currently in flight
        self.to_exec = []           # statements waiting for run

    def add(self, *stmts):
        """Adds statements to the session. Execution is delayed until run is called."""
        self.to_exec.extend(stmts)

    def run(self):
        """Runs this session's pending statements in the global frame. Will raise any errors that are encountered."""
        stmts, self.to_exec = self.to_exec, []

        depth = len(self.error_handler.traceback)
        try:
            self.execute(stmts, self.globals)
        except GenericException as error:
            self._keep_traceback(error)
            raise
        finally:
            self.error_handler.unwind(depth)

    def evaluate(self, expr):
        """Evaluates expr in the global frame and returns its value."""
        depth = len(self.error_handler.traceback)
        self.error_handler.register_stmt(f"{expr.expr};")
        try:
            return expr.evaluate(self.globals, self)
        except GenericException as error:
            self._keep_traceback(error)
            raise
        finally:
            self.error_handler.unwind(depth)

    def _keep_traceback(self, error):
        """Copies the calls active when error was raised onto it, so the traceback can unwind and still be reported."""
        if error.traceback is None:
            error.traceback = self.error_handler.snapshot()

    def execute(self, stmts, frame):
        """Executes stmts in frame, in order, stopping at the first Return. Returns its value (None if there is none)."""
        for stmt in stmts:
            self.error_handler.register_stmt(stmt.expr)  # in case error is raised
            result = stmt.execute(frame, self)
            if isinstance(stmt, Return):
                return result
        return None

    def call(self, closure, args):
        """Invokes closure with args, keeping track of the call in the traceback."""
        if self.depth >= Session.FRAMES_MAX:
            raise StackOverflowError(closure.name)

        self.error_handler.register_call(f"{closure.name}()")
        self.depth += 1
        try:
            result = invoke(closure, args, self)
        finally:
            self.depth -= 1
        self.error_handler.remove_call()  # error was not raised

        return result

    def write(self, value):
        """Prints value, followed by a newline, to the session's output."""
        print(stringify(value), file=self.out if self.out is not None else sys.stdout)
