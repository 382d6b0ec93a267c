"""Ingest documented commands, validate them against GLIDE source, and catalog them."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from glide_compat.errors import InvalidSliceError
from glide_compat.fetcher import (
    BASE_CLIENT_URL,
    COMMANDS_WIKI_HTML_URL,
    COMMANDS_WIKI_MD_URL,
    GLIDE_CLIENT_URL,
    GLIDE_CLUSTER_CLIENT_URL,
    GLIDE_JSON_URL,
    SourceFetcher,
)
from glide_compat.ingestion.catalog import Catalog, CommandCatalogStore, merge_catalog
from glide_compat.ingestion.command_mapper import map_command_to_method, pick_family
from glide_compat.ingestion.extractor import (
    extract_command_tokens,
    extract_markdown_table_commands,
    extract_public_methods,
)
from glide_compat.models import CommandEntry, ParsedMethod

logger = logging.getLogger(__name__)

MAX_INGEST_COUNT = 20
DEFAULT_INGEST_COUNT = 10
BASE_OWNER = "BaseClient"
MISSING_METHOD_NOTE = "No matching method found in BaseClient"

# Source key -> (owner, default URL)
CLIENT_SOURCES = {
    "tsBase": (BASE_OWNER, BASE_CLIENT_URL),
    "tsClient": ("GlideClient", GLIDE_CLIENT_URL),
    "tsCluster": ("GlideClusterClient", GLIDE_CLUSTER_CLIENT_URL),
    "tsJson": ("GlideJson", GLIDE_JSON_URL),
}


@dataclass
class IngestionResult:
    """Outcome of one ingestion slice."""

    start: int
    entries: list[CommandEntry]
    catalog: Catalog
    written: list[Path] = field(default_factory=list)

    @property
    def processed_count(self) -> int:
        return len(self.entries)

    @property
    def validated_count(self) -> int:
        return sum(1 for e in self.entries if e.validated)

    def to_dict(self) -> dict:
        return {
            "processedCount": self.processed_count,
            "startIndex": self.start,
            "validatedCount": self.validated_count,
            "totalProcessed": self.processed_count,
            "commands": [e.to_dict() for e in self.entries],
        }


def check_slice(total: int, start: int, count: int) -> None:
    """Validate an ingestion window over `total` commands.

    Raises:
        InvalidSliceError: If start or count is out of bounds
    """
    if not 0 <= start <= total:
        raise InvalidSliceError(f"start must be between 0 and {total}, got {start}")
    if not 1 <= count <= MAX_INGEST_COUNT:
        raise InvalidSliceError(f"count must be between 1 and {MAX_INGEST_COUNT}, got {count}")


def build_command_entries(
    commands: Sequence[str],
    methods: Sequence[ParsedMethod],
    start: int = 0,
    count: int = DEFAULT_INGEST_COUNT,
) -> list[CommandEntry]:
    """Map a window of commands to GLIDE methods.

    Method names are matched case-insensitively; when several owners declare
    the same name the last one wins.

    Args:
        commands: Documented commands, in catalog order
        methods: Public methods extracted from GLIDE sources
        start: Index of the first command to process
        count: Maximum number of commands to process

    Returns:
        One entry per processed command

    Raises:
        InvalidSliceError: If the window is out of bounds
    """
    check_slice(len(commands), start, count)
    by_name = {m.name.lower(): m for m in methods}

    entries = []
    for command in commands[start : start + count]:
        method_name = map_command_to_method(command)
        method = by_name.get(method_name.lower()) if method_name else None
        if method is None:
            logger.debug(f"No GLIDE method for {command} (tried {method_name})")
            entries.append(
                CommandEntry(
                    command=command,
                    family=pick_family(command),
                    notes=MISSING_METHOD_NOTE,
                )
            )
            continue
        qualified = method.name if method.owner == BASE_OWNER else f"{method.owner}.{method.name}"
        entries.append(
            CommandEntry(
                command=command,
                family=pick_family(command),
                method=qualified,
                owner=method.owner,
                params_signature=method.params_signature,
                return_type=method.return_type,
                validated=True,
            )
        )
    return entries


def ingest_commands(
    commands: Sequence[str],
    methods: Sequence[ParsedMethod],
    existing: Catalog,
    start: int = 0,
    count: int = DEFAULT_INGEST_COUNT,
) -> IngestionResult:
    """Build entries for a window and merge them into an existing catalog."""
    entries = build_command_entries(commands, methods, start, count)
    catalog = merge_catalog(existing, entries)
    logger.info(
        f"Processed {len(entries)} commands starting at {start}, "
        f"validated {sum(1 for e in entries if e.validated)}"
    )
    return IngestionResult(start=start, entries=entries, catalog=catalog)


async def run_ingestion(
    store: CommandCatalogStore,
    start: int = 0,
    count: int = DEFAULT_INGEST_COUNT,
    refresh: bool = False,
    sources: Mapping[str, str] | None = None,
    fetcher: SourceFetcher | None = None,
) -> IngestionResult:
    """Fetch missing sources, ingest one window and persist the catalog.

    Args:
        store: Where the catalog is read from and written to
        start: Index of the first command to process
        count: Number of commands to process (1 to MAX_INGEST_COUNT)
        refresh: Ignore the stored catalog instead of merging into it
        sources: Pre-supplied texts keyed by "md", "tsBase", "tsClient",
            "tsCluster" or "tsJson"; anything missing is fetched
        fetcher: Fetcher to use; one is created when omitted

    Raises:
        FetchError: If a required source cannot be fetched
        InvalidSliceError: If the window is out of bounds
        CatalogError: If the stored catalog cannot be read
    """
    # Validate count before any network access
    if not 1 <= count <= MAX_INGEST_COUNT:
        raise InvalidSliceError(f"count must be between 1 and {MAX_INGEST_COUNT}, got {count}")

    sources = dict(sources or {})
    if fetcher is None:
        async with SourceFetcher() as owned:
            return await run_ingestion(store, start, count, refresh, sources, owned)

    md = sources.get("md")
    if md is None:
        md = await fetcher.fetch_text(COMMANDS_WIKI_MD_URL)
    commands = sorted(extract_markdown_table_commands(md))
    if not commands:
        logger.warning("No commands found in markdown tables, falling back to the wiki page")
        html = await fetcher.fetch_text(COMMANDS_WIKI_HTML_URL)
        commands = sorted(extract_command_tokens(html))

    methods = []
    for key, (owner, url) in CLIENT_SOURCES.items():
        text = sources.get(key)
        if text is None:
            text = await fetcher.fetch_text(url)
        methods.extend(extract_public_methods(text, owner))

    existing = Catalog() if refresh else store.load()
    result = ingest_commands(commands, methods, existing, start, count)
    result.written = store.save(result.catalog)
    return result
