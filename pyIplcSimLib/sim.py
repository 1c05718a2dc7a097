# File: pyIplcSimLib/sim.py
# --------------------------------------------------------------------
# Command line driver: simulate a trace and print the report.
#
# Date  \ 19 Oct 2026

import argparse
import logging
import sys

from pyIplcSimLib.errors import ConfigError, MalformedInput
from pyIplcSimLib.report import format_config, format_report
from pyIplcSimLib.system import BasicSystem


def build_parser():
    parser = argparse.ArgumentParser(
        prog="iplc-sim",
        description="Instruction pipeline / cache timing simulator"
    )
    parser.add_argument("trace", type=str,
                        help="Trace file, one '<hex pc> <instruction>' per line")
    parser.add_argument("--index", "-i", type=int, default=10,
                        help="Cache index bits (default 10)")
    parser.add_argument("--blocksize", "-b", type=int, default=1,
                        help="Block size in words (default 1)")
    parser.add_argument("--assoc", "-a", type=int, default=1,
                        help="Associativity (default 1)")
    parser.add_argument("--predict-taken", "-t", action="store_true",
                        help="Predict branches taken (default not taken)")
    parser.add_argument("--linetrace", "-l", action="store_true",
                        help="Dump the pipeline after every instruction")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="-v for configuration info, -vv for every access")
    return parser


def error(msg):
    print('', file=sys.stderr)
    print(f'  Error! {msg}', file=sys.stderr)
    print('', file=sys.stderr)
    return 1


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')

    try:
        system = BasicSystem(
            doLinetrace   = args.linetrace,
            index_bits    = args.index,
            block_words   = args.blocksize,
            assoc         = args.assoc,
            predict_taken = args.predict_taken
        )
        print(format_config(system.proc.cache, system.proc.bp))
        stats = system.run(args.trace)
    except (ConfigError, MalformedInput) as e:
        return error(e)
    except OSError as e:
        return error(f"Cannot read trace {args.trace}: {e.strerror}")

    print(format_report(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())
