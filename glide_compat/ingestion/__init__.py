"""Command ingestion from the GLIDE commands wiki."""

from glide_compat.ingestion.catalog import (
    Catalog,
    CommandCatalogStore,
    group_by_family,
    merge_catalog,
)
from glide_compat.ingestion.command_mapper import map_command_to_method, pick_family
from glide_compat.ingestion.extractor import (
    extract_command_tokens,
    extract_markdown_table_commands,
    extract_public_methods,
)
from glide_compat.ingestion.pipeline import (
    MAX_INGEST_COUNT,
    IngestionResult,
    build_command_entries,
    ingest_commands,
    run_ingestion,
)

__all__ = [
    # Catalog
    "Catalog",
    "CommandCatalogStore",
    "merge_catalog",
    "group_by_family",
    # Mapping
    "map_command_to_method",
    "pick_family",
    # Extraction
    "extract_command_tokens",
    "extract_markdown_table_commands",
    "extract_public_methods",
    # Pipeline
    "MAX_INGEST_COUNT",
    "IngestionResult",
    "build_command_entries",
    "ingest_commands",
    "run_ingestion",
]
