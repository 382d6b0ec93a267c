"""Named tools over the extraction, mapping, validation and ingestion operations.

Each tool takes a JSON-like argument mapping, validates it with a pydantic
model, and returns a ToolResponse carrying both structured content and a
short human-readable text.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from glide_compat.equivalence import diff
from glide_compat.errors import InvalidSliceError, UnknownClientError, UnknownToolError
from glide_compat.fetcher import GLIDE_SOURCE_URLS, SourceFetcher
from glide_compat.ingestion.catalog import CommandCatalogStore
from glide_compat.ingestion.pipeline import DEFAULT_INGEST_COUNT, MAX_INGEST_COUNT, run_ingestion
from glide_compat.inventory import ApiInventory, build_inventory, write_inventory
from glide_compat.mappings import all_datasets, find_equivalent, search_all
from glide_compat.surface_validator import (
    UNVALIDATED_REPORT_LIMIT,
    extract_surface,
    validate,
    write_validation_artifacts,
)

logger = logging.getLogger(__name__)

FAMILY_PREVIEW_LIMIT = 20


@dataclass
class ToolResponse:
    """Result of a tool invocation."""

    structured_content: dict
    content: list[str] = field(default_factory=list)
    is_error: bool = False

    def to_dict(self) -> dict:
        result = {
            "structuredContent": self.structured_content,
            "content": [{"type": "text", "text": text} for text in self.content],
        }
        if self.is_error:
            result["isError"] = True
        return result

    @classmethod
    def error(cls, message: str) -> "ToolResponse":
        return cls(structured_content={"error": message}, content=[message], is_error=True)


class ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class SourceArgs(ToolArgs):
    """Where GLIDE source text comes from: pre-supplied texts, else URLs."""

    urls: list[str] = Field(default_factory=lambda: list(GLIDE_SOURCE_URLS))
    texts: dict[str, str] | None = None


class ExtractArgs(SourceArgs):
    output_path: str | None = Field(default=None, alias="outputPath")


class FindEquivalentArgs(ToolArgs):
    source_client: str = Field(alias="sourceClient")
    symbol: str


class SearchArgs(ToolArgs):
    keyword: str = Field(min_length=1)


class DiffArgs(SourceArgs):
    source_client: str = Field(alias="sourceClient")
    symbol: str


class ValidateArgs(SourceArgs):
    write_report: bool = Field(default=True, alias="writeReport")
    output_dir: str = Field(default=".", alias="outputDir")
    limit: int = Field(default=UNVALIDATED_REPORT_LIMIT, ge=0)


class IngestSources(ToolArgs):
    md: str | None = None
    ts_base: str | None = Field(default=None, alias="tsBase")
    ts_client: str | None = Field(default=None, alias="tsClient")
    ts_cluster: str | None = Field(default=None, alias="tsCluster")
    ts_json: str | None = Field(default=None, alias="tsJson")


class IngestArgs(ToolArgs):
    start: int = Field(default=0, ge=0)
    count: int = Field(default=DEFAULT_INGEST_COUNT, ge=1, le=MAX_INGEST_COUNT)
    refresh: bool = False
    sources: IngestSources | None = None
    output_dir: str = Field(default=".", alias="outputDir")


class ListFamiliesArgs(ToolArgs):
    output_dir: str = Field(default=".", alias="outputDir")


class GetByFamilyArgs(ToolArgs):
    family: str
    output_dir: str = Field(default=".", alias="outputDir")


Handler = Callable[[BaseModel, SourceFetcher], Awaitable[ToolResponse]]


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    args_model: type[BaseModel]
    handler: Handler


TOOLS: dict[str, Tool] = {}


def tool(name: str, args_model: type[BaseModel], description: str):
    """Register an async handler under a tool name."""

    def register(handler: Handler) -> Handler:
        TOOLS[name] = Tool(name, description, args_model, handler)
        return handler

    return register


def list_tools() -> list[dict]:
    """Describe every registered tool with its JSON argument schema."""
    return [
        {
            "name": t.name,
            "description": t.description,
            "inputSchema": t.args_model.model_json_schema(by_alias=True),
        }
        for t in TOOLS.values()
    ]


async def call_tool(
    name: str,
    arguments: Mapping | None = None,
    fetcher: SourceFetcher | None = None,
) -> ToolResponse:
    """Validate arguments and run a tool.

    Invalid arguments, unknown clients, out-of-bounds slices and unknown tool
    names produce an error response instead of raising.

    Raises:
        FetchError: If a source needed by the tool cannot be fetched
    """
    try:
        registered = TOOLS.get(name)
        if registered is None:
            raise UnknownToolError(f"Unknown tool: {name}")
        args = registered.args_model.model_validate(dict(arguments or {}))

        if fetcher is None:
            async with SourceFetcher() as owned:
                return await registered.handler(args, owned)
        return await registered.handler(args, fetcher)
    except ValidationError as e:
        logger.warning(f"Invalid arguments for {name}: {e}")
        return ToolResponse.error(f"Invalid arguments for {name}: {e}")
    except (InvalidSliceError, UnknownClientError, UnknownToolError) as e:
        logger.warning(e.message)
        return ToolResponse.error(e.message)


async def _load_inventory(args: SourceArgs, fetcher: SourceFetcher) -> ApiInventory:
    texts = args.texts if args.texts is not None else await fetcher.fetch_all(args.urls)
    return build_inventory(texts)


@tool("api.extract", ExtractArgs, "Extract and categorize every GLIDE method declaration")
async def extract_tool(args: ExtractArgs, fetcher: SourceFetcher) -> ToolResponse:
    inventory = await _load_inventory(args, fetcher)
    if args.output_path:
        write_inventory(inventory, Path(args.output_path))

    lines = [f"Extracted {inventory.total} methods from {len(inventory.files)} files"]
    lines.extend(f"{category}: {n}" for category, n in inventory.category_counts().items())
    return ToolResponse(structured_content=inventory.to_dict(), content=["\n".join(lines)])


@tool(
    "api.findEquivalent",
    FindEquivalentArgs,
    "Find the GLIDE equivalent of an ioredis or node-redis symbol",
)
async def find_equivalent_tool(args: FindEquivalentArgs, fetcher: SourceFetcher) -> ToolResponse:
    entries = find_equivalent(args.source_client, args.symbol)
    if not entries:
        text = f"No mapping found for {args.source_client} {args.symbol}"
    else:
        text = "\n\n".join(f"{e.symbol} -> {e.glide}\n{e.description}" for e in entries)
    return ToolResponse(
        structured_content={
            "sourceClient": args.source_client,
            "symbol": args.symbol,
            "results": [e.to_dict() for e in entries],
        },
        content=[text],
    )


@tool("api.search", SearchArgs, "Search all mapping datasets by keyword")
async def search_tool(args: SearchArgs, fetcher: SourceFetcher) -> ToolResponse:
    entries = search_all(args.keyword)
    lines = [f"{len(entries)} results for '{args.keyword}'"]
    lines.extend(f"[{e.category}] {e.symbol}" for e in entries)
    return ToolResponse(
        structured_content={"keyword": args.keyword, "results": [e.to_dict() for e in entries]},
        content=["\n".join(lines)],
    )


@tool("api.diff", DiffArgs, "Compare a source-client symbol's arity with its GLIDE declarations")
async def diff_tool(args: DiffArgs, fetcher: SourceFetcher) -> ToolResponse:
    # Reject unknown clients before fetching anything
    find_equivalent(args.source_client, args.symbol)
    inventory = await _load_inventory(args, fetcher)
    reports = diff(args.source_client, args.symbol, inventory)

    if not reports:
        text = f"No mapping found for {args.source_client} {args.symbol}"
    else:
        lines = []
        for report in reports:
            status = "arity mismatch" if report.arity_mismatch else "compatible"
            if not report.found:
                status = f"{report.primary_method} not found in GLIDE declarations"
            elif not report.source_arity_known:
                status = "source arity unknown"
            lines.append(f"{report.symbol} -> {report.glide}: {status}")
        text = "\n".join(lines)
    return ToolResponse(
        structured_content={
            "sourceClient": args.source_client,
            "symbol": args.symbol,
            "reports": [r.to_dict() for r in reports],
        },
        content=[text],
    )


@tool(
    "validate.glideSurface",
    ValidateArgs,
    "Check that GLIDE methods referenced by the mappings exist in current source",
)
async def validate_tool(args: ValidateArgs, fetcher: SourceFetcher) -> ToolResponse:
    texts = args.texts if args.texts is not None else await fetcher.fetch_all(args.urls)
    report = validate(all_datasets(), extract_surface(texts.values()))

    structured = report.to_dict()
    if args.write_report:
        written = write_validation_artifacts(report, Path(args.output_dir), args.limit)
        structured["written"] = [str(p) for p in written]

    text = (
        f"Validated {report.validated_count}/{report.total_entries} entries "
        f"against {report.extracted_method_count} extracted methods"
    )
    return ToolResponse(structured_content=structured, content=[text])


@tool("commands.ingest", IngestArgs, "Ingest and validate Valkey commands from documentation")
async def ingest_tool(args: IngestArgs, fetcher: SourceFetcher) -> ToolResponse:
    sources = {}
    if args.sources is not None:
        sources = args.sources.model_dump(by_alias=True, exclude_none=True)

    result = await run_ingestion(
        CommandCatalogStore(Path(args.output_dir)),
        start=args.start,
        count=args.count,
        refresh=args.refresh,
        sources=sources,
        fetcher=fetcher,
    )
    text = (
        f"Processed {result.processed_count} commands starting at {args.start}. "
        f"Validated {result.validated_count}/{result.processed_count}. "
        f"Written {', '.join(p.name for p in result.written)}."
    )
    return ToolResponse(structured_content=result.to_dict(), content=[text])


@tool("commands.listFamilies", ListFamiliesArgs, "Get all available command families")
async def list_families_tool(args: ListFamiliesArgs, fetcher: SourceFetcher) -> ToolResponse:
    families = sorted(CommandCatalogStore(Path(args.output_dir)).load_families())
    return ToolResponse(structured_content={"families": families}, content=[json.dumps(families)])


@tool("commands.getByFamily", GetByFamilyArgs, "Get all commands in a specific family")
async def get_by_family_tool(args: GetByFamilyArgs, fetcher: SourceFetcher) -> ToolResponse:
    entries = CommandCatalogStore(Path(args.output_dir)).load_families().get(args.family, [])
    preview = [e.to_dict() for e in entries[:FAMILY_PREVIEW_LIMIT]]
    return ToolResponse(
        structured_content={
            "family": args.family,
            "entries": [e.to_dict() for e in entries],
            "totalCount": len(entries),
        },
        content=[json.dumps(preview, indent=2)],
    )
