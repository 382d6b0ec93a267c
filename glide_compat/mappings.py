"""Lookups over the curated mapping datasets."""

import logging

from glide_compat.errors import UnknownClientError
from glide_compat.mapping_data import GLIDE_SURFACE, IOREDIS_DATASET, NODE_REDIS_DATASET
from glide_compat.models import ApiDataset, ApiMappingEntry

logger = logging.getLogger(__name__)

DATASETS: dict[str, ApiDataset] = {
    IOREDIS_DATASET.client: IOREDIS_DATASET,
    NODE_REDIS_DATASET.client: NODE_REDIS_DATASET,
    GLIDE_SURFACE.client: GLIDE_SURFACE,
}

SOURCE_CLIENTS = ("ioredis", "node-redis")


def all_datasets() -> list[ApiDataset]:
    """Return every dataset, source clients first."""
    return [IOREDIS_DATASET, NODE_REDIS_DATASET, GLIDE_SURFACE]


def get_dataset(client: str) -> ApiDataset:
    """Return the dataset for a client.

    Raises:
        UnknownClientError: If no dataset exists for the client
    """
    try:
        return DATASETS[client]
    except KeyError:
        known = ", ".join(sorted(DATASETS))
        raise UnknownClientError(f"Unknown client '{client}' (expected one of: {known})") from None


def find_equivalent(source_client: str, symbol: str) -> list[ApiMappingEntry]:
    """Find GLIDE equivalents for a source-client symbol.

    Matching is exact and case-sensitive. An empty list means there is no
    known mapping, which is not an error.

    Args:
        source_client: "ioredis" or "node-redis"
        symbol: The symbol exactly as curated, e.g. "get(key)"

    Returns:
        Matching mapping entries

    Raises:
        UnknownClientError: If source_client is not a source client
    """
    if source_client not in SOURCE_CLIENTS:
        raise UnknownClientError(
            f"Unknown source client '{source_client}' "
            f"(expected one of: {', '.join(SOURCE_CLIENTS)})"
        )
    dataset = get_dataset(source_client)
    results = [e for e in dataset.entries if e.symbol == symbol]
    logger.info(f"Found {len(results)} {source_client} mappings for {symbol!r}")
    return results


def search_all(keyword: str) -> list[ApiMappingEntry]:
    """Search every dataset by symbol, category or description.

    The search is case-insensitive. Entries sharing a symbol across datasets
    are reported once (first dataset wins).
    """
    kw = keyword.lower()
    seen: set[str] = set()
    results = []

    for dataset in all_datasets():
        for entry in dataset.entries:
            if entry.symbol in seen:
                continue
            seen.add(entry.symbol)
            if (
                kw in entry.symbol.lower()
                or kw in entry.category.lower()
                or kw in entry.description.lower()
            ):
                results.append(entry)

    logger.info(f"Search {keyword!r}: {len(results)} results")
    return results
