"""Build a categorized API inventory from GLIDE declaration sources."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from glide_compat.categorizer import categorize_methods
from glide_compat.declaration_parser import declaration_label, parse_declaration_content
from glide_compat.models import MethodSignature

logger = logging.getLogger(__name__)


@dataclass
class ApiInventory:
    """Categorized method signatures grouped by declaring file."""

    files: dict[str, list[MethodSignature]] = field(default_factory=dict)

    @property
    def methods(self) -> list[MethodSignature]:
        return [m for methods in self.files.values() for m in methods]

    @property
    def total(self) -> int:
        return sum(len(methods) for methods in self.files.values())

    def category_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for method in self.methods:
            counts[method.category] = counts.get(method.category, 0) + 1
        return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))

    def index(self) -> dict[str, list[MethodSignature]]:
        """Map each method name to all its declarations (overloads included)."""
        by_name: dict[str, list[MethodSignature]] = {}
        for method in self.methods:
            by_name.setdefault(method.name, []).append(method)
        return by_name

    def to_dict(self) -> dict:
        return {
            "files": {
                label: [m.to_dict() for m in methods] for label, methods in self.files.items()
            },
            "total": self.total,
            "categories": self.category_counts(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def build_inventory(declarations: Mapping[str, str]) -> ApiInventory:
    """Parse and categorize every declaration source.

    Args:
        declarations: Source id (file name, path or URL) to declaration text

    Returns:
        ApiInventory keyed by declaring-file label
    """
    inventory = ApiInventory()

    for source_id, content in declarations.items():
        label = declaration_label(source_id)
        methods = categorize_methods(parse_declaration_content(content, declaring_file=label))
        inventory.files.setdefault(label, []).extend(methods)
        logger.info(f"{label}: found {len(methods)} methods")

    logger.info(f"Total GLIDE API methods extracted: {inventory.total}")
    return inventory


def write_inventory(inventory: ApiInventory, path: Path) -> Path:
    """Write the inventory JSON to path."""
    content = inventory.to_json()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    logger.info(f"API inventory saved to {path}")
    return path
