"""Command-line interface for glide-compat."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from glide_compat.errors import GlideCompatError
from glide_compat.ingestion.pipeline import DEFAULT_INGEST_COUNT, MAX_INGEST_COUNT
from glide_compat.surface_validator import UNVALIDATED_REPORT_LIMIT
from glide_compat.tools import call_tool

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _add_source_options(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--source",
        "-s",
        action="append",
        default=[],
        help="Local GLIDE source or declaration file (repeatable)",
    )
    parser.add_argument(
        "--url",
        action="append",
        default=[],
        help="GLIDE source URL (repeatable, default: GLIDE Node sources on GitHub)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="glide-compat",
        description="Map ioredis and node-redis APIs onto Valkey GLIDE and keep the mappings honest",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract and categorize GLIDE method declarations",
    )
    _add_source_options(extract_parser)
    extract_parser.add_argument(
        "--output",
        "-o",
        help="Write the inventory JSON to this path",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate mapping datasets against the current GLIDE surface",
    )
    _add_source_options(validate_parser)
    validate_parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for validation reports (default: .)",
    )
    validate_parser.add_argument(
        "--no-report",
        action="store_true",
        help="Do not write report files",
    )
    validate_parser.add_argument(
        "--limit",
        type=int,
        default=UNVALIDATED_REPORT_LIMIT,
        help=f"Unvalidated entries listed in the summary (default: {UNVALIDATED_REPORT_LIMIT})",
    )

    ingest_parser = subparsers.add_parser(
        "ingest",
        help="Ingest a window of documented commands into the catalog",
    )
    ingest_parser.add_argument("--start", type=int, default=0, help="First command index (default: 0)")
    ingest_parser.add_argument(
        "--count",
        type=int,
        default=DEFAULT_INGEST_COUNT,
        help=f"Commands to process, at most {MAX_INGEST_COUNT} (default: {DEFAULT_INGEST_COUNT})",
    )
    ingest_parser.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore the stored catalog instead of merging into it",
    )
    ingest_parser.add_argument("--output-dir", default=".", help="Catalog directory (default: .)")
    ingest_parser.add_argument("--md", help="Local copy of the commands wiki markdown")
    ingest_parser.add_argument("--ts-base", help="Local BaseClient.ts")
    ingest_parser.add_argument("--ts-client", help="Local GlideClient.ts")
    ingest_parser.add_argument("--ts-cluster", help="Local GlideClusterClient.ts")
    ingest_parser.add_argument("--ts-json", help="Local GlideJson.ts")

    families_parser = subparsers.add_parser("families", help="List cataloged command families")
    families_parser.add_argument("--output-dir", default=".", help="Catalog directory (default: .)")

    family_parser = subparsers.add_parser("family", help="Show cataloged commands of a family")
    family_parser.add_argument("family", help="Family name, e.g. streams")
    family_parser.add_argument("--output-dir", default=".", help="Catalog directory (default: .)")

    equivalent_parser = subparsers.add_parser(
        "equivalent",
        help="Find the GLIDE equivalent of a source-client symbol",
    )
    equivalent_parser.add_argument("client", help="ioredis or node-redis")
    equivalent_parser.add_argument("symbol", help='Symbol as curated, e.g. "get(key)"')

    diff_parser = subparsers.add_parser(
        "diff",
        help="Compare a source-client symbol's arity with its GLIDE declarations",
    )
    diff_parser.add_argument("client", help="ioredis or node-redis")
    diff_parser.add_argument("symbol", help='Symbol as curated, e.g. "get(key)"')
    _add_source_options(diff_parser)

    search_parser = subparsers.add_parser("search", help="Search all mapping datasets")
    search_parser.add_argument("keyword", help="Text to look for")

    return parser


def parse_args(args: list[str]) -> argparse.Namespace:
    """Parse command-line arguments."""
    return create_parser().parse_args(args)


def _source_arguments(parsed: argparse.Namespace) -> dict:
    urls = [Path(path).resolve().as_uri() for path in parsed.source] + parsed.url
    return {"urls": urls} if urls else {}


def _read_ingest_sources(parsed: argparse.Namespace) -> dict:
    options = {
        "md": parsed.md,
        "tsBase": parsed.ts_base,
        "tsClient": parsed.ts_client,
        "tsCluster": parsed.ts_cluster,
        "tsJson": parsed.ts_json,
    }
    return {key: Path(path).read_text() for key, path in options.items() if path}


def build_tool_call(parsed: argparse.Namespace) -> tuple[str, dict]:
    """Translate parsed arguments into a tool name and its arguments."""
    if parsed.command == "extract":
        arguments = _source_arguments(parsed)
        if parsed.output:
            arguments["outputPath"] = parsed.output
        return "api.extract", arguments
    if parsed.command == "validate":
        arguments = _source_arguments(parsed)
        arguments.update(
            writeReport=not parsed.no_report,
            outputDir=parsed.output_dir,
            limit=parsed.limit,
        )
        return "validate.glideSurface", arguments
    if parsed.command == "ingest":
        arguments = {
            "start": parsed.start,
            "count": parsed.count,
            "refresh": parsed.refresh,
            "outputDir": parsed.output_dir,
        }
        sources = _read_ingest_sources(parsed)
        if sources:
            arguments["sources"] = sources
        return "commands.ingest", arguments
    if parsed.command == "families":
        return "commands.listFamilies", {"outputDir": parsed.output_dir}
    if parsed.command == "family":
        return "commands.getByFamily", {"family": parsed.family, "outputDir": parsed.output_dir}
    if parsed.command == "equivalent":
        return "api.findEquivalent", {"sourceClient": parsed.client, "symbol": parsed.symbol}
    if parsed.command == "diff":
        arguments = _source_arguments(parsed)
        arguments.update(sourceClient=parsed.client, symbol=parsed.symbol)
        return "api.diff", arguments
    return "api.search", {"keyword": parsed.keyword}


async def run_cli(args: list[str]) -> int:
    """Run the CLI with the given arguments.

    Structured results go to stdout as JSON; summaries and errors go to stderr.

    Args:
        args: Command-line arguments (without program name)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        parsed = parse_args(args)
    except SystemExit as e:
        return e.code if e.code else 1

    setup_logging(parsed.verbose)

    if parsed.command is None:
        create_parser().print_help(sys.stderr)
        return 1

    try:
        name, arguments = build_tool_call(parsed)
        logger.info(f"Running {name}")
        response = await call_tool(name, arguments)
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except GlideCompatError as e:
        logger.error(f"{parsed.command} failed: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    for text in response.content:
        print(text, file=sys.stderr)
    if response.is_error:
        return 1

    print(json.dumps(response.structured_content, indent=2))
    return 0


def main():
    """Entry point for the CLI."""
    exit_code = asyncio.run(run_cli(sys.argv[1:]))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
