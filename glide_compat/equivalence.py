"""Compare source-client call shapes with GLIDE method declarations."""

import logging
import re
from dataclasses import dataclass, field

from glide_compat.inventory import ApiInventory
from glide_compat.mappings import find_equivalent
from glide_compat.models import MethodSignature
from glide_compat.surface_validator import referenced_method_names

logger = logging.getLogger(__name__)

# First call in a symbol: name(args), allowing one level of nested parens
CALL_SHAPE_PATTERN = re.compile(
    r"([A-Za-z_$][\w$.]*)\s*\(([^()]*(?:\([^()]*\)[^()]*)*)\)"
)


@dataclass(frozen=True)
class CallShape:
    """Argument count range declared by a source-client symbol."""

    name: str
    min_args: int
    max_args: int | None  # None when variadic

    def overlaps(self, method: MethodSignature) -> bool:
        """Check whether any argument count fits both this shape and method."""
        upper = method.max_arity
        if upper is not None and self.min_args > upper:
            return False
        if self.max_args is not None and method.min_arity > self.max_args:
            return False
        return True


@dataclass
class EquivalenceReport:
    """Structural comparison of one mapping entry with the GLIDE inventory.

    arity_mismatch is only ever True when the source shape is known and the
    primary referenced method was found; False does not imply the calls are
    semantically equivalent.
    """

    source_client: str
    symbol: str
    glide: str
    referenced_methods: list[str]
    source_shape: CallShape | None = None
    primary_method: str | None = None
    found: bool = False
    target_arities: list[tuple[int, int | None]] = field(default_factory=list)
    arity_mismatch: bool = False

    @property
    def source_arity_known(self) -> bool:
        return self.source_shape is not None

    def to_dict(self) -> dict:
        shape = None
        if self.source_shape is not None:
            shape = {
                "name": self.source_shape.name,
                "minArgs": self.source_shape.min_args,
                "maxArgs": self.source_shape.max_args,
            }
        return {
            "sourceClient": self.source_client,
            "symbol": self.symbol,
            "glide": self.glide,
            "glideMethods": self.referenced_methods,
            "sourceShape": shape,
            "sourceArityKnown": self.source_arity_known,
            "primaryMethod": self.primary_method,
            "found": self.found,
            "targetArities": [
                {"minArity": low, "maxArity": high} for low, high in self.target_arities
            ],
            "arityMismatch": self.arity_mismatch,
        }


def parse_call_shape(symbol: str) -> CallShape | None:
    """Read the argument range of the first call in a symbol.

    "xadd(key, id, field value ...)" is variadic with at least two
    arguments; "bitcount(key, start?, end?)" takes one to three. Symbols
    without a call, like "incr | decr", return None.
    """
    match = CALL_SHAPE_PATTERN.search(symbol)
    if not match:
        return None

    name = match.group(1)
    arguments = _split_arguments(match.group(2))
    required = 0
    variadic = False
    for arg in arguments:
        if arg.startswith("...") or arg.endswith("..."):
            variadic = True
        elif arg.endswith("?") or (arg.startswith("[") and arg.endswith("]")):
            continue
        else:
            required += 1

    return CallShape(
        name=name,
        min_args=required,
        max_args=None if variadic else len(arguments),
    )


def _split_arguments(args_str: str) -> list[str]:
    """Split an argument string on top-level commas."""
    if not args_str.strip():
        return []

    arguments = []
    current = ""
    depth = 0

    for char in args_str:
        if char in "([{":
            depth += 1
            current += char
        elif char in ")]}":
            depth -= 1
            current += char
        elif char == "," and depth == 0:
            if current.strip():
                arguments.append(current.strip())
            current = ""
        else:
            current += char

    if current.strip():
        arguments.append(current.strip())

    return arguments


def compare_entry(
    source_client: str,
    symbol: str,
    glide: str,
    index: dict[str, list[MethodSignature]],
) -> EquivalenceReport:
    """Compare one symbol/GLIDE text pair against an inventory index.

    The first method referenced by the GLIDE text is the primary method. The
    source shape mismatches when it overlaps none of that method's
    declarations.
    """
    referenced = referenced_method_names(glide)
    report = EquivalenceReport(
        source_client=source_client,
        symbol=symbol,
        glide=glide,
        referenced_methods=referenced,
        source_shape=parse_call_shape(symbol),
    )
    if not referenced:
        return report

    report.primary_method = referenced[0]
    declarations = index.get(report.primary_method, [])
    report.found = bool(declarations)
    report.target_arities = [(m.min_arity, m.max_arity) for m in declarations]

    if report.source_shape is not None and declarations:
        report.arity_mismatch = not any(report.source_shape.overlaps(m) for m in declarations)
        if report.arity_mismatch:
            logger.info(
                f"Arity mismatch: {source_client} {symbol!r} vs "
                f"{report.primary_method} {report.target_arities}"
            )
    return report


def diff(source_client: str, symbol: str, inventory: ApiInventory) -> list[EquivalenceReport]:
    """Diff a source-client symbol against the GLIDE inventory.

    Args:
        source_client: "ioredis" or "node-redis"
        symbol: Symbol exactly as curated in the dataset
        inventory: GLIDE inventory built from declaration sources

    Returns:
        One report per matching mapping entry; empty when no mapping exists
    """
    index = inventory.index()
    reports = [
        compare_entry(source_client, entry.symbol, entry.glide, index)
        for entry in find_equivalent(source_client, symbol)
    ]
    logger.info(
        f"Diffed {source_client} {symbol!r}: {len(reports)} entries, "
        f"{sum(1 for r in reports if r.arity_mismatch)} arity mismatches"
    )
    return reports
