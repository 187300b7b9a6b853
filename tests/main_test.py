import io
import sys
import unittest
from contextlib import redirect_stdout
from unittest import mock

from capture.main import main


class MainTestCase(unittest.TestCase):

    def test_main(self):
        stdout = io.StringIO()
        with mock.patch.object(sys, "argv", ["capture"]), redirect_stdout(stdout):
            main()
        self.assertEqual("updated\n", stdout.getvalue())

    def test_unknown_argument(self):
        with mock.patch.object(sys, "argv", ["capture", "file.lc"]), redirect_stdout(io.StringIO()):
            with mock.patch("sys.stderr", io.StringIO()):
                with self.assertRaises(SystemExit) as context:
                    main()
        self.assertEqual(2, context.exception.code)


if __name__ == '__main__':
    unittest.main()
