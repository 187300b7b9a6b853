import io
import unittest
from contextlib import redirect_stdout

from capture.lang.error import ErrorHandler, StackOverflowError, UnboundNameError
from capture.lang.session import Session
from capture.lang.statements import Call, Expression, Function, Literal, Name, Print, Return, Var
from capture.pure.environment import Frame


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.error_handler = ErrorHandler(fatal=False)
        self.out = io.StringIO()
        self.session = Session(self.error_handler, out=self.out)

    def test_globals(self):
        slots = Frame(name=Session.SCRIPT)
        session = Session(ErrorHandler(), slots)
        session.add(Var("a", Literal(1)))
        session.run()

        self.assertIs(slots, session.globals)
        self.assertEqual(1, slots.get("a"))

    def test_add_is_lazy(self):
        self.session.add(Print(Literal("later")))
        self.assertEqual("", self.out.getvalue())

        self.session.run()
        self.session.run()  # already run statements are not run again
        self.assertEqual("later\n", self.out.getvalue())

    def test_execute(self):
        frame = Frame(self.session.globals, "f")
        stmts = [Var("x", Literal(1)), Return(Name("x")), Var("y")]

        self.assertEqual(1, self.session.execute(stmts, frame))
        self.assertNotIn("y", frame)
        self.assertIsNone(self.session.execute([Var("z")], frame))

    def test_evaluate(self):
        self.session.add(Function("one", body=[Return(Literal(1))]))
        self.session.run()
        self.assertEqual(1, self.session.evaluate(Call("one")))

    def test_write_default(self):
        session = Session(ErrorHandler())
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            session.write("updated")
        self.assertEqual("updated\n", stdout.getvalue())

    def test_traceback(self):
        self.session.add(
            Function("main", body=[Expression(Call("get"))]),
            Function("get", body=[Print(Name("b"))]),
            Expression(Call("main")),
        )
        with self.assertRaises(UnboundNameError) as context:
            self.session.run()

        self.assertEqual([["<script>", "main();"], ["main()", "get();"], ["get()", "print b;"]],
                         context.exception.traceback)
        self.assertEqual([["<script>", None]], self.error_handler.traceback)
        self.assertEqual(0, self.session.depth)

    def test_traceback_after_caught_error(self):
        self.session.add(Function("get", body=[Print(Name("b"))]))
        self.session.run()
        self.assertRaises(UnboundNameError, self.session.evaluate, Call("get"))
        self.assertEqual([["<script>", None]], self.error_handler.traceback)

        self.session.add(Var("b", Literal("bound")), Expression(Call("get")), Expression(Call("missing")))
        with self.assertRaises(UnboundNameError) as context:
            self.session.run()

        self.assertEqual("bound\n", self.out.getvalue())
        self.assertEqual([["<script>", "missing();"]], context.exception.traceback)

    def test_traceback_unwinds(self):
        self.session.add(Function("f", body=[Return(Literal(1))]), Var("r", Call("f")))
        self.session.run()
        self.assertEqual([["<script>", None]], self.error_handler.traceback)

    def test_stack_overflow(self):
        self.session.add(Function("loop", body=[Expression(Call("loop"))]), Expression(Call("loop")))
        with self.assertRaises(StackOverflowError) as context:
            self.session.run()

        self.assertEqual("loop", context.exception.name)
        self.assertEqual(Session.FRAMES_MAX + 1, len(context.exception.traceback))

    def test_depth_limit(self):
        def nest(depth):
            body = [Return(Literal(depth))] if depth == 1 else [Return(Call(f"f{depth - 1}"))]
            return Function(f"f{depth}", body=body)

        self.session.add(*(nest(depth) for depth in range(1, Session.FRAMES_MAX + 1)))
        self.session.run()
        self.assertEqual(1, self.session.evaluate(Call(f"f{Session.FRAMES_MAX}")))


if __name__ == '__main__':
    unittest.main()
