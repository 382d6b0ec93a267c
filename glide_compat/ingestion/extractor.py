"""Pull command names out of wiki pages and public methods out of client source."""

import logging
import re

from glide_compat.models import ParsedMethod

logger = logging.getLogger(__name__)

# Command tokens in rendered HTML (<code>X</code>) or markdown (`X`)
CODE_TOKEN_PATTERNS = [
    re.compile(r"<code>([A-Z][A-Z0-9_\s]{1,})</code>"),
    re.compile(r"`([A-Z][A-Z0-9_\s]{1,})`"),
]
COMMAND_TOKEN_PATTERN = re.compile(r"^[A-Z][A-Z0-9_\s]{1,}$")
MAX_TOKEN_LENGTH = 40

TABLE_ROW_PATTERN = re.compile(r"^\|\s*([^|]+?)\s*\|")
SEPARATOR_CELL_PATTERN = re.compile(r"^[-:\s]+$")
SKIPPED_CELL_MARKERS = ("n/a", "api not required", "deprecated", "not needed")
HEADER_CELL = "cmd type"

PUBLIC_METHOD_PATTERN = re.compile(
    r"(?:public\s+)?(?:static\s+)?async\s+([a-zA-Z0-9_]+)\s*\(([^)]*)\)\s*:\s*Promise<([^>]+)>"
)


def extract_command_tokens(doc_text: str) -> set[str]:
    """Find upper-case command tokens in code spans.

    Args:
        doc_text: HTML or markdown documentation

    Returns:
        Set of tokens such as "GET" or "XGROUP CREATE"
    """
    commands = set()
    for pattern in CODE_TOKEN_PATTERNS:
        for match in pattern.finditer(doc_text):
            token = match.group(1).strip()
            if COMMAND_TOKEN_PATTERN.match(token) and len(token) <= MAX_TOKEN_LENGTH:
                commands.add(token)
    return commands


def extract_markdown_table_commands(md: str) -> list[str]:
    """Read the first cell of every markdown table row as a command.

    Header, separator and not-applicable rows are skipped. Whitespace is
    collapsed and names are upper-cased; order of first appearance is kept.
    """
    commands: dict[str, None] = {}
    for line in md.splitlines():
        match = TABLE_ROW_PATTERN.match(line)
        if not match:
            continue
        cell = match.group(1).strip()
        if not cell:
            continue
        lowered = cell.lower()
        if lowered == HEADER_CELL or any(marker in lowered for marker in SKIPPED_CELL_MARKERS):
            continue
        if SEPARATOR_CELL_PATTERN.match(cell):
            continue
        commands.setdefault(" ".join(cell.split()).upper(), None)

    logger.debug(f"Found {len(commands)} commands in markdown tables")
    return list(commands)


def extract_public_methods(source: str, owner: str) -> list[ParsedMethod]:
    """Find `async name(...): Promise<T>` methods in raw client source.

    Parameter lists containing ")" and nested generics in the return type are
    truncated at the first closing bracket.
    """
    methods = [
        ParsedMethod(
            name=match.group(1),
            params_signature=match.group(2).strip(),
            return_type=match.group(3).strip(),
            owner=owner,
        )
        for match in PUBLIC_METHOD_PATTERN.finditer(source)
    ]
    logger.info(f"{owner}: found {len(methods)} public async methods")
    return methods
