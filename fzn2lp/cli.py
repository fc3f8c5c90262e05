"""
fzn2lp command line.

    fzn2lp [FILE] [-o OUTPUT] [--summary] [--strict-order]
           [--lenient-annotations] [--no-comments] [-v | -q]

Reads FlatZinc from FILE (stdin when omitted) and writes facts to stdout.
Exit code 0 on success, 1 on any fatal error.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .audit.report import TranslationReport
from .core.errors import TranslationError
from .core.logging import get_logger, set_level
from .factory import translate_file
from .runtime import FactStream, TranslatorConfig, TranslationResult

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fzn2lp",
        description="Convert FlatZinc to AnsProlog facts",
    )
    parser.add_argument("file", metavar="FILE", nargs="?", help="Input file in flatzinc format (default: stdin)")
    parser.add_argument("-o", "--output", help="Write facts to this file instead of stdout")
    parser.add_argument("--summary", action="store_true", help="Print a run summary to stderr")
    parser.add_argument("--strict-order", action="store_true", help="Fail on statements in wrong order")
    parser.add_argument(
        "--lenient-annotations",
        action="store_true",
        help="Skip malformed output_array annotations instead of failing",
    )
    parser.add_argument("--no-comments", action="store_true", help="Do not copy comment lines to the output")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="count", default=0, help="More diagnostics (-vv for debug)")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only report fatal errors")
    return parser


def config_from_args(args: argparse.Namespace) -> TranslatorConfig:
    return TranslatorConfig(
        ordering_violation_behavior="fail" if args.strict_order else "warn",
        malformed_annotation_behavior="warn" if args.lenient_annotations else "fail",
        echo_comments=not args.no_comments,
    )


def _apply_verbosity(args: argparse.Namespace) -> None:
    if args.quiet:
        set_level(logging.ERROR)
    elif args.verbose == 1:
        set_level(logging.INFO)
    elif args.verbose >= 2:
        set_level(logging.DEBUG)


def _run(args: argparse.Namespace, out) -> TranslationResult:
    config = config_from_args(args)
    if args.file:
        return translate_file(args.file, out, config)
    return FactStream(config).run(sys.stdin, out)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _apply_verbosity(args)

    try:
        out = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
    except OSError as e:
        logger.error("%s", e)
        return 1

    try:
        result = _run(args, out)
    except TranslationError as e:
        logger.error("%s", e)
        if args.summary and e.result is not None:
            TranslationReport().render(e.result, error=str(e))
        return 1
    except OSError as e:
        logger.error("%s", e)
        return 1
    finally:
        if out is not sys.stdout:
            out.close()

    logger.info("Translated %d statement(s) into %d fact(s)", result.statements, result.facts)
    if args.summary:
        TranslationReport().render(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
