"""Data models for API surface extraction, mapping and validation output."""

import json
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Parameter:
    """A single declared method parameter."""

    name: str
    optional: bool = False
    rest: bool = False
    type_text: str = "any"


@dataclass(frozen=True)
class MethodSignature:
    """A method signature parsed from declaration text."""

    name: str
    declaring_file: str  # e.g. "BaseClient", "GlideJson"
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None
    is_async: bool = False
    category: str | None = None

    @property
    def has_rest(self) -> bool:
        return any(p.rest for p in self.parameters)

    @property
    def min_arity(self) -> int:
        """Number of parameters that are neither optional nor rest."""
        return sum(1 for p in self.parameters if not (p.optional or p.rest))

    @property
    def max_arity(self) -> int | None:
        """Total parameter count, or None when a rest parameter is present."""
        if self.has_rest:
            return None
        return len(self.parameters)

    def accepts(self, arg_count: int) -> bool:
        """Check whether a call with arg_count arguments fits this signature."""
        if arg_count < self.min_arity:
            return False
        return self.max_arity is None or arg_count <= self.max_arity

    def to_dict(self) -> dict:
        """Convert to the inventory JSON shape."""
        return {
            "name": self.name,
            "file": self.declaring_file,
            "category": self.category,
            "parameters": [p.name for p in self.parameters],
            "paramsDetailed": [
                {"name": p.name, "optional": p.optional, "rest": p.rest}
                for p in self.parameters
            ],
            "paramTypes": [p.type_text for p in self.parameters],
            "minArity": self.min_arity,
            "maxArity": self.max_arity,
            "returnType": self.return_type,
            "isAsync": self.is_async,
        }


@dataclass(frozen=True)
class ApiMappingEntry:
    """A curated mapping from a source-client symbol to GLIDE usage."""

    category: str
    symbol: str
    glide: str  # GLIDE call text, e.g. "xadd(key, [id, entries])"
    description: str
    params_diff: str | None = None
    return_diff: str | None = None
    quirks: str | None = None
    source_example: str | None = None
    glide_example: str | None = None

    def to_dict(self) -> dict:
        result = {
            "category": self.category,
            "symbol": self.symbol,
            "equivalent": {"glide": self.glide},
            "description": self.description,
        }
        for key, value in (
            ("paramsDiff", self.params_diff),
            ("returnDiff", self.return_diff),
            ("quirks", self.quirks),
        ):
            if value is not None:
                result[key] = value
        examples = {
            k: v
            for k, v in (("source", self.source_example), ("glide", self.glide_example))
            if v is not None
        }
        if examples:
            result["examples"] = examples
        return result


@dataclass(frozen=True)
class ApiDataset:
    """All mapping entries curated for one client."""

    client: str  # "ioredis", "node-redis" or "glide"
    entries: tuple[ApiMappingEntry, ...]
    version: str | None = None

    def __post_init__(self):
        seen = set()
        for entry in self.entries:
            if entry.symbol in seen:
                raise ValueError(
                    f"Duplicate symbol {entry.symbol!r} in {self.client} dataset"
                )
            seen.add(entry.symbol)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class ParsedMethod:
    """A public async method found in raw client source."""

    name: str
    params_signature: str
    return_type: str | None
    owner: str  # BaseClient | GlideClient | GlideClusterClient | GlideJson


@dataclass
class CommandEntry:
    """One row of the persisted command catalog."""

    command: str
    family: str
    method: str | None = None
    owner: str | None = None
    params_signature: str | None = None
    return_type: str | None = None
    validated: bool = False
    source: str = "wiki"
    notes: str | None = None

    def to_dict(self) -> dict:
        result = {
            "command": self.command,
            "family": self.family,
            "method": self.method,
            "owner": self.owner,
            "paramsSignature": self.params_signature,
            "returnType": self.return_type,
            "source": self.source,
            "validated": self.validated,
        }
        if self.notes is not None:
            result["notes"] = self.notes
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "CommandEntry":
        return cls(
            command=data["command"],
            family=data.get("family", "other"),
            method=data.get("method"),
            owner=data.get("owner"),
            params_signature=data.get("paramsSignature"),
            return_type=data.get("returnType"),
            validated=bool(data.get("validated", False)),
            source=data.get("source", "wiki"),
            notes=data.get("notes"),
        )


@dataclass
class EntryValidation:
    """Validation outcome for a single mapping entry."""

    symbol: str
    glide_methods: list[str]
    validated: bool
    missing: list[str]

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "glideMethods": self.glide_methods,
            "validated": self.validated,
            "missing": self.missing,
        }


@dataclass
class ValidationReport:
    """Result of checking mapping entries against an extracted surface."""

    extracted_methods: set[str]
    results: list[EntryValidation] = field(default_factory=list)

    @property
    def extracted_method_count(self) -> int:
        return len(self.extracted_methods)

    @property
    def validated_count(self) -> int:
        return sum(1 for r in self.results if r.validated)

    @property
    def total_entries(self) -> int:
        return len(self.results)

    @property
    def unvalidated(self) -> list[EntryValidation]:
        return [r for r in self.results if not r.validated]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "extractedMethodCount": self.extracted_method_count,
            "validatedCount": self.validated_count,
            "totalEntries": self.total_entries,
            "results": [r.to_dict() for r in self.results],
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
