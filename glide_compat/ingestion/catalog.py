"""Persisted command catalog with a pure, idempotent merge."""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from glide_compat.errors import CatalogError
from glide_compat.models import CommandEntry

logger = logging.getLogger(__name__)

INDEX_FILE_NAME = "COMMANDS_INDEX.json"
FAMILIES_FILE_NAME = "COMMANDS_BY_FAMILY.json"


@dataclass
class Catalog:
    """Command entries, unique by command and sorted by it."""

    entries: list[CommandEntry] = field(default_factory=list)

    def __post_init__(self):
        self.entries = sorted(self.entries, key=lambda e: e.command)

    def by_family(self) -> dict[str, list[CommandEntry]]:
        return group_by_family(self.entries)

    def to_dict(self) -> dict:
        return {"entries": [e.to_dict() for e in self.entries]}


def merge_catalog(catalog: Catalog, entries: Iterable[CommandEntry]) -> Catalog:
    """Return a new catalog with entries upserted by command.

    Later entries replace earlier ones with the same command. Merging the
    same entries twice gives the same catalog.
    """
    by_command = {e.command: e for e in catalog.entries}
    for entry in entries:
        by_command[entry.command] = entry
    return Catalog(entries=list(by_command.values()))


def group_by_family(entries: Iterable[CommandEntry]) -> dict[str, list[CommandEntry]]:
    """Group entries by family, keeping their order within each family."""
    families: dict[str, list[CommandEntry]] = {}
    for entry in entries:
        families.setdefault(entry.family, []).append(entry)
    return families


class CommandCatalogStore:
    """Reads and writes the catalog artifacts in one directory."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    @property
    def index_path(self) -> Path:
        return self.output_dir / INDEX_FILE_NAME

    @property
    def families_path(self) -> Path:
        return self.output_dir / FAMILIES_FILE_NAME

    def load(self) -> Catalog:
        """Load the stored catalog.

        Returns:
            The stored catalog, or an empty one when no file exists

        Raises:
            CatalogError: If the file exists but cannot be parsed
        """
        data = self._read_json(self.index_path)
        if data is None:
            return Catalog()
        try:
            entries = [CommandEntry.from_dict(item) for item in data["entries"]]
        except (KeyError, TypeError) as e:
            raise CatalogError(f"Malformed catalog {self.index_path}: {e}") from e
        logger.info(f"Loaded {len(entries)} catalog entries from {self.index_path}")
        return Catalog(entries=entries)

    def load_families(self) -> dict[str, list[CommandEntry]]:
        """Load the family grouping; empty when nothing was ingested yet."""
        data = self._read_json(self.families_path)
        if data is None:
            return {}
        try:
            return {
                family: [CommandEntry.from_dict(item) for item in items]
                for family, items in data.items()
            }
        except (AttributeError, KeyError, TypeError) as e:
            raise CatalogError(f"Malformed family index {self.families_path}: {e}") from e

    def save(self, catalog: Catalog) -> list[Path]:
        """Write the index and the family grouping.

        Both documents are rendered before either file is written.
        """
        index_json = json.dumps(catalog.to_dict(), indent=2)
        families_json = json.dumps(
            {
                family: [e.to_dict() for e in entries]
                for family, entries in catalog.by_family().items()
            },
            indent=2,
        )

        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.index_path.write_text(index_json)
        self.families_path.write_text(families_json)
        logger.info(f"Wrote {len(catalog.entries)} catalog entries to {self.index_path}")
        return [self.index_path, self.families_path]

    def _read_json(self, path: Path):
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read {path}: {e}") from e
