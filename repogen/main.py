"""Command-line entry point: ``efr list`` and ``efr generate``."""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from repogen import __version__
from repogen.build.project import build_and_load
from repogen.core.config import settings
from repogen.core.errors import CommandError
from repogen.core.logging import configure_logging
from repogen.core.reporting import Reporter
from repogen.generators.repository_gen.generator import generate_repositories
from repogen.generators.repository_gen.types import GenerationOptions
from repogen.metadata.catalog import load_catalog
from repogen.metadata.discovery import list_context_candidates
from repogen.metadata.naming import render_name
from repogen.metadata.types import TypeDescriptor

log = logging.getLogger(__name__)

EXIT_NO_COMMAND = 0
EXIT_COMMAND_RAN = 1
EXIT_FAILURE = 2

USAGE_EXAMPLE = "Usage: efr generate -c ContosoUniversityContext -v -o Models"


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-p", "--project",
        help="The project to use. Defaults to the project in the current working directory.",
    )
    source.add_argument(
        "--catalog",
        help="Read types from an exported type catalog (JSON or YAML) instead of building a project.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="efr",
        description="Generate repository-pattern classes for an Entity Framework DbContext.",
        epilog=USAGE_EXAMPLE,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="Lists available DbContext types.")
    _add_source_options(list_parser)

    generate_parser = subparsers.add_parser("generate", help="Generates repository classes for a DbContext.")
    generate_parser.add_argument(
        "-o", "--output-dir",
        help="The directory to put files in. Paths are relative to the current working directory.",
    )
    _add_source_options(generate_parser)
    generate_parser.add_argument("-c", "--context", help="The DbContext class to use.")
    generate_parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output.")

    return parser


def _load_context_candidates(args: argparse.Namespace, reporter: Reporter) -> List[TypeDescriptor]:
    if args.catalog:
        catalog = load_catalog(Path(args.catalog))
    else:
        catalog = build_and_load(args.project, reporter)
    return list_context_candidates(catalog.types, settings.context_base_types)


def run_list(args: argparse.Namespace, reporter: Reporter) -> int:
    candidates = _load_context_candidates(args, reporter)
    reporter.write_data("".join(f"{render_name(c)}\n" for c in candidates))
    return EXIT_COMMAND_RAN


def run_generate(args: argparse.Namespace, reporter: Reporter) -> int:
    output_dir = Path.cwd() / args.output_dir if args.output_dir else Path.cwd()
    options = GenerationOptions(
        output_dir=output_dir,
        context_name=args.context,
        verbose=args.verbose,
    )
    candidates = _load_context_candidates(args, reporter)
    generate_repositories(candidates, options, reporter)
    return EXIT_COMMAND_RAN


COMMANDS = {
    "list": run_list,
    "generate": run_generate,
}


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging(settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_NO_COMMAND

    reporter = Reporter(verbose=getattr(args, "verbose", False))
    log.debug("Running command %s", args.command)
    try:
        return COMMANDS[args.command](args, reporter)
    except CommandError as e:
        reporter.write_error(str(e))
        return EXIT_FAILURE
    except Exception as e:
        log.error("Unhandled exception: %s", e, exc_info=True)
        reporter.write_error("An unexpected error occurred. See the log output for details.")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
