"""
irl - command line entry point

Runs a script file, evaluates inline code, or dumps the parse tree.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from irl import __version__
from irl.config import get_log_level
from irl.errors import IrlError
from irl.interpreter import Interpreter


def create_arg_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog='irl',
        description='irl - a small Lisp-family scripting language',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s script.irl               # Run a script
  %(prog)s -e '(print "hi\\n")'      # Evaluate inline code
  %(prog)s --debug script.irl       # Run without the optimizer
  %(prog)s --dump-ast script.irl    # Show the parse tree
        """
    )

    parser.add_argument(
        'script',
        nargs='?',
        help='irl script file to execute'
    )

    parser.add_argument(
        '-e', '--eval',
        dest='code',
        metavar='CODE',
        help='Evaluate CODE instead of a script file'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Debug mode: skip the optimizing rewrite pass'
    )

    parser.add_argument(
        '--dump-ast',
        action='store_true',
        help='Parse and print the syntax tree without executing'
    )

    parser.add_argument(
        '--log-level',
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (default: $IRL_LOG_LEVEL or WARNING)'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'irl {__version__}'
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for irl; returns the process exit status."""
    arg_parser = create_arg_parser()
    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level or get_log_level(),
        format='%(levelname)s: %(message)s',
    )

    interp = Interpreter(mode='debug' if args.debug else 'release')

    if args.code is not None:
        interp.load_code(args.code)
    elif args.script:
        path = Path(args.script)
        try:
            interp.load_code(path.read_text(encoding='utf-8'))
        except OSError as e:
            print(f"Error: cannot read script '{args.script}': {e}", file=sys.stderr)
            return 1
        interp.set_file(str(path))
    else:
        arg_parser.print_help()
        return 1

    if args.dump_ast:
        try:
            print(interp.dump_ast(), end='')
        except IrlError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    return interp.execute()
