"""Runs the closure-capture program: main defines set and get over one shared frame, the driver stores them in
global slots and calls set, then get. Also uses error handling context manager. Called from the capture script.
"""

import argparse
import sys

from capture.lang.error import ErrorHandler
from capture.lang.program import drive
from capture.lang.session import Session
from capture.pure.environment import Frame


def main():
    """Runs the capture program. Called from the capture executable script."""
    assert sys.version_info >= (3, 7), "capture cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(description="Shows two closures sharing one captured variable: prints the "
                                                     "value get reads after set has assigned it.")
        parser.parse_args()

        slots = Frame(name=Session.SCRIPT)  # globalSet and globalGet live here
        drive(Session(error_handler, slots, sys.stdout))
