"""Runs the sril interpreter on a .sril file, or in command-line mode. Also uses the error handling context manager.
Called from the sril console script.
"""

import argparse
import logging
import sys

from sril.lang.error import ErrorHandler
from sril.lang.session import Session
from sril.lang.shell import Shell


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def main(argv=None):
    """Runs sril interpreter. Called from sril console script."""
    parser = argparse.ArgumentParser(prog="sril")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--log-level", help="level of interpreter debug logging", choices=LOG_LEVELS,
                        default="WARNING", type=str.upper)
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(name)s: %(levelname)s: %(message)s")

    with ErrorHandler() as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)

            for result in sess.run_file():
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    sys.exit(main())
