"""Parse TypeScript declaration text to extract class and interface method signatures.

This is a best-effort structural scanner, not a TypeScript parser. It finds
member headers with a regex and then reads parameter lists and return types
with a small bracket-balancing scanner, so multi-line parameter lists and
nested generic types are handled. Anything it cannot make sense of is skipped.
"""

import logging
import re
from pathlib import Path

from glide_compat.models import MethodSignature, Parameter

logger = logging.getLogger(__name__)

# Member header at line start or after "{", ";" or "}": [modifiers] name[?][<generics>](
METHOD_HEADER_PATTERN = re.compile(
    r"(?:^|(?<=[{;}]))[ \t]*"
    r"((?:(?:public|private|protected|static|async|abstract|readonly|override|declare)\s+)*)"
    r"([A-Za-z_$][\w$]*)"  # member name
    r"[ \t]*(\?)?"  # optional member marker
    r"[ \t]*(?:<[^()\n;]*?>)?"  # single-line generic params without parentheses
    r"[ \t]*\(",
    re.MULTILINE,
)

# Words that look like "name(" but never start a method declaration
NON_METHOD_NAMES = frozenset(
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
        "super",
        "with",
        "do",
        "else",
        "try",
        "throw",
        "delete",
        "void",
        "yield",
        "import",
        "export",
    }
)

ACCESS_MODIFIER_PATTERN = re.compile(r"^(?:public|private|protected|readonly|override)\s+")
PROMISE_PATTERN = re.compile(r"Promise\s*<(.*)>", re.DOTALL)
LINE_BREAK_PATTERN = re.compile(r"\s*\n\s*")

OPENERS = "([{<"
CLOSERS = ")]}>"
QUOTES = "\"'`"


def parse_declaration_file(path: Path) -> list[MethodSignature]:
    """Parse a declaration file and extract method signatures.

    Args:
        path: Path to a .d.ts or .ts file

    Returns:
        List of MethodSignature objects in document order
    """
    logger.info(f"Parsing declarations from {path}")
    content = path.read_text()
    return parse_declaration_content(content, declaring_file=declaration_label(path.name))


def declaration_label(source_id: str) -> str:
    """Derive the declaring-file label from a file name, path or URL.

    "node/src/BaseClient.d.ts" and "https://.../BaseClient.ts" both become
    "BaseClient".
    """
    name = source_id.rstrip("/").rsplit("/", 1)[-1]
    for suffix in (".d.ts", ".ts", ".js"):
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def parse_declaration_content(
    content: str, declaring_file: str = ""
) -> list[MethodSignature]:
    """Parse declaration text and extract every class/interface method.

    Methods are returned in document order without deduplication, so
    overloads appear once per declaration. Input that does not look like a
    method declaration is skipped; this function does not raise on
    malformed text.

    Args:
        content: Declaration or source text
        declaring_file: Label recorded on every signature

    Returns:
        List of MethodSignature objects
    """
    text = _blank_comments(content)
    closing = _match_parentheses(text)
    signatures = []

    for match in METHOD_HEADER_PATTERN.finditer(text):
        modifiers = match.group(1).split()
        name = match.group(2)
        optional_member = match.group(3) is not None

        if name in NON_METHOD_NAMES:
            continue

        open_index = match.end() - 1
        close_index = closing.get(open_index)
        if close_index is None:
            logger.debug(f"Unterminated parameter list for {name}, skipping")
            continue

        params_text = text[open_index + 1 : close_index]
        pos = _skip_whitespace(text, close_index + 1)

        raw_return = None
        if pos < len(text) and text[pos] == ":":
            raw_return, pos = _read_return_type(text, pos + 1)
            pos = _skip_whitespace(text, pos)

        has_body = pos < len(text) and text[pos] == "{"
        if raw_return is None and not modifiers and not optional_member and not has_body:
            # "name(args);" inside a body is a call, not a declaration
            continue

        parameters = _parse_parameters(params_text, name)
        is_async = raw_return is not None and "Promise" in raw_return

        sig = MethodSignature(
            name=name,
            declaring_file=declaring_file,
            parameters=tuple(parameters),
            return_type=_unwrap_promise(raw_return) if raw_return else None,
            is_async=is_async,
        )
        signatures.append(sig)
        logger.debug(f"Parsed method: {name}({params_text.strip()}) -> {raw_return}")

    logger.info(f"Found {len(signatures)} method signatures in {declaring_file or 'input'}")
    return signatures


def _parse_parameters(params_text: str, method_name: str) -> list[Parameter]:
    """Split a parameter list and parse each parameter.

    Parameters after a rest parameter are dropped so that only the trailing
    parameter can be rest.
    """
    parameters = []
    segments = _split_top_level(params_text)
    for index, segment in enumerate(segments):
        param = _parse_parameter(segment)
        if param is None:
            continue
        parameters.append(param)
        if param.rest:
            if index < len(segments) - 1:
                logger.debug(f"Dropped parameters after rest in {method_name}")
            break
    return parameters


def _parse_parameter(segment: str) -> Parameter | None:
    """Parse one parameter like "...keys?: string[] = []"."""
    text = segment.strip()
    while True:
        stripped = ACCESS_MODIFIER_PATTERN.sub("", text, count=1)
        if stripped == text:
            break
        text = stripped

    rest = text.startswith("...")
    if rest:
        text = text[3:].lstrip()

    has_default = False
    default_index = _find_top_level(text, "=")
    if default_index >= 0:
        has_default = True
        text = text[:default_index]

    type_text = None
    colon_index = _find_top_level(text, ":")
    if colon_index >= 0:
        type_text = LINE_BREAK_PATTERN.sub(" ", text[colon_index + 1 :].strip())
        text = text[:colon_index]

    name = text.strip()
    optional_marker = name.endswith("?")
    if optional_marker:
        name = name[:-1].rstrip()
    if not name:
        return None

    return Parameter(
        name=name,
        optional=optional_marker or has_default,
        rest=rest,
        type_text=type_text or "any",
    )


def _read_return_type(text: str, start: int) -> tuple[str | None, int]:
    """Read a return type annotation starting after the colon.

    Stops at a top-level ";" or ",", at the "{" opening a method body, or at
    a line break once a complete type has been read.

    Returns:
        Tuple of (type text or None, index where reading stopped)
    """
    depth = 0
    pos = start
    chunks = []
    last = ""  # last non-whitespace character read

    while pos < len(text):
        ch = text[pos]

        if ch in QUOTES:
            end = _skip_string(text, pos)
            chunks.append(text[pos:end])
            last = text[end - 1]
            pos = end
            continue

        if depth == 0:
            if ch in ";,)}":
                break
            if ch == "{" and last:
                break
            if ch == "\n" and last and not _continues(last, text, pos):
                break

        if ch in "([{<":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif ch == ">" and text[pos - 1] != "=":
            depth -= 1
        if depth < 0:
            break

        chunks.append(ch)
        if not ch.isspace():
            last = ch
        pos += 1

    result = LINE_BREAK_PATTERN.sub(" ", "".join(chunks).strip())
    return (result or None), pos


def _continues(last: str, text: str, pos: int) -> bool:
    """Check whether a type annotation continues past a line break."""
    if last in "|&:=,":
        return True
    next_pos = _skip_whitespace(text, pos)
    return next_pos < len(text) and text[next_pos] in "|&"


def _unwrap_promise(raw: str) -> str:
    """Return the inner type of a single outer Promise<...>, else the raw text."""
    match = PROMISE_PATTERN.fullmatch(raw.strip())
    if match and _is_balanced(match.group(1)):
        return match.group(1).strip()
    return raw


def _is_balanced(text: str) -> bool:
    depth = 0
    for i, ch in enumerate(text):
        if ch in "([{<":
            depth += 1
        elif ch in ")]}" or (ch == ">" and (i == 0 or text[i - 1] != "=")):
            depth -= 1
        if depth < 0:
            return False
    return depth == 0


def _split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split text on separator characters that are not nested in brackets or strings."""
    parts = []
    depth = 0
    current = []
    pos = 0

    while pos < len(text):
        ch = text[pos]
        if ch in QUOTES:
            end = _skip_string(text, pos)
            current.append(text[pos:end])
            pos = end
            continue
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS and not (ch == ">" and pos > 0 and text[pos - 1] == "="):
            depth = max(depth - 1, 0)
        elif ch == separator and depth == 0:
            parts.append("".join(current))
            current = []
            pos += 1
            continue
        current.append(ch)
        pos += 1

    if "".join(current).strip():
        parts.append("".join(current))
    return parts


def _find_top_level(text: str, target: str) -> int:
    """Find the first target character outside brackets and strings.

    For "=" the arrow "=>" and comparison operators are ignored.
    """
    depth = 0
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch in QUOTES:
            pos = _skip_string(text, pos)
            continue
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS and not (ch == ">" and pos > 0 and text[pos - 1] == "="):
            depth = max(depth - 1, 0)
        elif ch == target and depth == 0:
            if target != "=":
                return pos
            following = text[pos + 1 : pos + 2]
            preceding = text[pos - 1 : pos] if pos > 0 else ""
            if following not in (">", "=") and preceding not in ("=", "!", "<", ">"):
                return pos
        pos += 1
    return -1


def _match_parentheses(text: str) -> dict[int, int]:
    """Map the index of every closed "(" to the index of its ")".

    Unclosed parentheses have no entry; stray ")" are ignored. One pass over
    the text, so unterminated headers cost nothing extra.
    """
    pairs = {}
    stack = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch in QUOTES:
            pos = _skip_string(text, pos)
            continue
        if ch == "(":
            stack.append(pos)
        elif ch == ")" and stack:
            pairs[stack.pop()] = pos
        pos += 1
    return pairs


def _skip_string(text: str, start: int) -> int:
    """Return the index just past the string literal starting at start.

    Single- and double-quoted strings end at a line break if unterminated.
    """
    quote = text[start]
    pos = start + 1
    while pos < len(text):
        ch = text[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == quote:
            return pos + 1
        if ch == "\n" and quote != "`":
            return pos
        pos += 1
    return pos


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _blank_comments(text: str) -> str:
    """Replace // and /* */ comments with spaces, keeping offsets and line breaks."""
    out = list(text)
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch in QUOTES:
            pos = _skip_string(text, pos)
            continue
        if text.startswith("//", pos):
            end = text.find("\n", pos)
            end = len(text) if end < 0 else end
        elif text.startswith("/*", pos):
            end = text.find("*/", pos + 2)
            end = len(text) if end < 0 else end + 2
        else:
            pos += 1
            continue
        for i in range(pos, end):
            if out[i] != "\n":
                out[i] = " "
        pos = end
    return "".join(out)
