"""Cross-check mapping datasets against a GLIDE surface extracted from raw source."""

import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from glide_compat.models import ApiDataset, ApiMappingEntry, EntryValidation, ValidationReport

logger = logging.getLogger(__name__)

# Any identifier directly followed by a call/declaration parenthesis
CALL_PATTERN = re.compile(r"\b([a-zA-Z][a-zA-Z0-9_]*)\s*\(")

# Identifiers referenced by a mapping entry's GLIDE text
REFERENCE_PATTERN = re.compile(r"\b([a-z][A-Za-z0-9]*)\s*\(")

# Likely method names are lowerCamelCase
METHOD_NAME_PATTERN = re.compile(r"^[a-z][A-Za-z0-9]*$")

# Keywords that precede "(" in ordinary code
EXCLUDED_KEYWORDS = frozenset(
    {
        "if",
        "for",
        "while",
        "switch",
        "catch",
        "function",
        "constructor",
        "class",
        "return",
        "await",
        "async",
        "typeof",
        "new",
    }
)

REPORT_JSON_NAME = "VALIDATION_REPORT.json"
REPORT_MD_NAME = "VALIDATION_REPORT.md"
METHOD_LIST_PATH = Path("validation") / "validated.list.json"
UNVALIDATED_REPORT_LIMIT = 500


def extract_method_candidates(source: str) -> set[str]:
    """Extract likely method names from raw source text.

    This is a regex heuristic, not a parse: it accepts any text, including
    syntactically invalid source.

    Args:
        source: Raw TypeScript/JavaScript text

    Returns:
        Set of lowerCamelCase identifiers that appear before "("
    """
    methods = set()
    for match in CALL_PATTERN.finditer(source):
        name = match.group(1)
        if name in EXCLUDED_KEYWORDS:
            continue
        if METHOD_NAME_PATTERN.match(name):
            methods.add(name)
    return methods


def extract_surface(sources: Iterable[str]) -> set[str]:
    """Union of method candidates across several source texts."""
    surface: set[str] = set()
    for text in sources:
        surface |= extract_method_candidates(text)
    logger.info(f"Extracted {len(surface)} method candidates")
    return surface


def extract_referenced_method_names(entry: ApiMappingEntry) -> list[str]:
    """List the GLIDE method names a mapping entry claims exist.

    Names are returned in order of first appearance without duplicates.
    """
    return referenced_method_names(entry.glide)


def referenced_method_names(glide_text: str) -> list[str]:
    """Ordered, de-duplicated method names called in a GLIDE code snippet."""
    names: dict[str, None] = {}
    for match in REFERENCE_PATTERN.finditer(glide_text):
        names.setdefault(match.group(1), None)
    return list(names)


def validate(datasets: Iterable[ApiDataset], surface: set[str]) -> ValidationReport:
    """Check every mapping entry against an extracted surface.

    An entry is validated when it references at least one method and every
    referenced method is in the surface. Names are compared case-sensitively.

    Args:
        datasets: Mapping datasets to check
        surface: Method names extracted from the current client source

    Returns:
        ValidationReport with one result per entry
    """
    results = []
    for dataset in datasets:
        for entry in dataset.entries:
            referenced = extract_referenced_method_names(entry)
            missing = [name for name in referenced if name not in surface]
            validated = bool(referenced) and not missing
            results.append(
                EntryValidation(
                    symbol=entry.symbol,
                    glide_methods=referenced,
                    validated=validated,
                    missing=missing,
                )
            )
            if missing:
                logger.debug(f"{dataset.client} {entry.symbol!r} missing: {missing}")

    report = ValidationReport(extracted_methods=set(surface), results=results)
    logger.info(
        f"Validated {report.validated_count}/{report.total_entries} entries "
        f"against {report.extracted_method_count} methods"
    )
    return report


def render_summary(report: ValidationReport, limit: int = UNVALIDATED_REPORT_LIMIT) -> str:
    """Render the human-readable validation summary.

    At most `limit` unvalidated entries are listed.
    """
    lines = [
        "# Glide API Validation Report",
        "",
        f"- Extracted method candidates: {report.extracted_method_count}",
        f"- Entries validated: {report.validated_count}/{report.total_entries}",
        "",
        "## Missing/Unvalidated Entries",
        "",
    ]
    unvalidated = report.unvalidated
    for result in unvalidated[:limit]:
        missing = ", ".join(result.missing) or "-"
        lines.append(f"- {result.symbol} -> {', '.join(result.glide_methods)} (missing: {missing})")
    if len(unvalidated) > limit:
        lines.append(f"- ... and {len(unvalidated) - limit} more")
    return "\n".join(lines) + "\n"


def write_validation_artifacts(
    report: ValidationReport,
    output_dir: Path,
    limit: int = UNVALIDATED_REPORT_LIMIT,
) -> list[Path]:
    """Persist the JSON report, the summary and the extracted method list.

    Everything is rendered before the first file is written. Re-running with
    the same report overwrites the same paths with the same content.

    Returns:
        Paths written
    """
    report_json = report.to_json()
    summary = render_summary(report, limit)
    method_list = json.dumps({"methods": sorted(report.extracted_methods)}, indent=2)

    json_path = output_dir / REPORT_JSON_NAME
    md_path = output_dir / REPORT_MD_NAME
    list_path = output_dir / METHOD_LIST_PATH

    list_path.parent.mkdir(parents=True, exist_ok=True)
    json_path.write_text(report_json)
    md_path.write_text(summary)
    list_path.write_text(method_list)

    logger.info(f"Validation artifacts written to {output_dir}")
    return [json_path, md_path, list_path]
