"""Runs the register calculator on a file, or on stdin in command-line mode. Also uses the error handling context
manager, so I/O failures end the process with a message on stderr and exit status 1. Called from the regcalc
executable script.
"""

import argparse
import os

from regcalc.lang import numerical
from regcalc.lang.config import Config
from regcalc.lang.error import ErrorHandler
from regcalc.lang.session import Session
from regcalc.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="regcalc", description="Calculator with lazily evaluated registers.")
    parser.add_argument("file", help="file to run (if empty, reads stdin in command-line mode)", nargs="?")
    parser.add_argument("--width", type=int, choices=numerical.WIDTHS, default=numerical.WIDTH,
                        help="bits per register value (default: %(default)s)")
    parser.add_argument("--no-echo", action="store_true", help="do not echo tokenized input lines")
    parser.add_argument("--trace", action="store_true", help="print every evaluation step")
    parser.add_argument("--verbose", action="store_true", help="print tracebacks and diagnoses with errors")
    parser.add_argument("--no-color", action="store_true", help="never color output")
    return parser


def main(argv=None):
    """Runs regcalc. Returns 0 on end of input or 'quit'; fatal errors exit with status 1."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        config = Config.from_args(args)

        error_handler.verbose = config.verbose
        error_handler.trace = config.trace
        if not config.color:
            os.environ["NO_COLOR"] = "1"  # read by termcolor

        if args.file is not None:
            Session(error_handler, args.file, config).run_file()
        else:
            Shell(Session(error_handler, Session.SH_FILE, config)).cmdloop()

    return 0
