"""
Configuration script parsing and rendering.

A configuration script is a flat sequence of assignments to a root object:

    /* Configuration script to run a pretty good item-item recommender. */
    rec.name = "ItemItem"
    rec.module = org.grouplens.lenskit.knn.item.ItemRecommenderModule
    rec.module.knn.similarityDamping = 50

Values are quoted strings, numbers, ``true``/``false`` or bare dotted names,
which become ComponentReference values. ``//`` and ``/* */`` comments are
ignored and statements may end with ``;``.
"""

import ast
import json
import math
import re
from typing import Iterator, List, Optional, Tuple

from utils.common_utils import get_logger
from recconfig.core.errors import InvalidPathError, ScriptSyntaxError
from recconfig.core.reference import ComponentReference
from recconfig.core.record import ConfigurationRecord, is_valid_path

logger = get_logger(__name__)

DEFAULT_ROOT = "rec"

_ASSIGNMENT = re.compile(r"^(?P<target>[^=]+?)\s*=\s*(?P<value>.*)$", re.DOTALL)
_INT = re.compile(r"^[+-]?\d+$")
_FLOAT = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")
_STRING = re.compile(r"""^("(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')$""")


def strip_comments(text: str, source=None) -> str:
    """
    Remove ``//`` and ``/* */`` comments outside string literals.

    Newlines inside block comments are kept so line numbers stay accurate.
    """
    out = []
    i = 0
    n = len(text)
    quote = None
    line = 1
    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if quote:
            out.append(ch)
            if ch == "\\" and nxt:
                out.append(nxt)
                if nxt == "\n":
                    line += 1
                i += 2
                continue
            if ch == quote or ch == "\n":
                quote = None
        elif ch in ("'", '"'):
            quote = ch
            out.append(ch)
        elif ch == "/" and nxt == "/":
            while i < n and text[i] != "\n":
                i += 1
            continue
        elif ch == "/" and nxt == "*":
            start_line = line
            end = text.find("*/", i + 2)
            if end < 0:
                raise ScriptSyntaxError(
                    "Unterminated block comment", source, start_line, text[i : i + 20]
                )
            comment = text[i : end + 2]
            newlines = comment.count("\n")
            out.append("\n" * newlines)
            line += newlines
            i = end + 2
            continue
        else:
            out.append(ch)
        if ch == "\n":
            line += 1
        i += 1
    return "".join(out)


def _split_statements(line: str) -> List[str]:
    """Split a line on ``;`` outside string literals."""
    statements = []
    current = []
    quote = None
    escaped = False
    for ch in line:
        if quote:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in ("'", '"'):
            quote = ch
            current.append(ch)
        elif ch == ";":
            statements.append("".join(current))
            current = []
        else:
            current.append(ch)
    statements.append("".join(current))
    return [s.strip() for s in statements if s.strip()]


def parse_value(text: str, source=None, line: int = 0):
    """
    Parse the right-hand side of an assignment.

    Returns:
        str, int, float, bool or ComponentReference
    """
    text = text.strip()
    if not text:
        raise ScriptSyntaxError("Missing value", source, line, text)
    if _STRING.match(text):
        try:
            return ast.literal_eval(text)
        except (ValueError, SyntaxError):
            raise ScriptSyntaxError("Invalid string literal", source, line, text) from None
    if text == "true":
        return True
    if text == "false":
        return False
    if _INT.match(text):
        return int(text)
    if _FLOAT.match(text):
        value = float(text)
        if not math.isfinite(value):
            raise ScriptSyntaxError("Number out of range", source, line, text)
        return value
    if ComponentReference.is_valid_name(text):
        return ComponentReference(text)
    raise ScriptSyntaxError("Invalid value", source, line, text)


def iter_assignments(
    text: str, source=None, root: str = DEFAULT_ROOT
) -> Iterator[Tuple[int, str, object]]:
    """
    Yield ``(line, path, value)`` for every assignment in a script.

    Args:
        text: Script source
        source: File name or label for error messages
        root: Root object name assignments must start with
    """
    lead = root + "."
    for lineno, raw in enumerate(strip_comments(text, source).splitlines(), start=1):
        for statement in _split_statements(raw):
            match = _ASSIGNMENT.match(statement)
            if not match:
                raise ScriptSyntaxError("Expected an assignment", source, lineno, statement)
            target = match.group("target").strip()
            if not target.startswith(lead):
                raise ScriptSyntaxError(
                    f"Assignment target must start with {lead!r}", source, lineno, statement
                )
            path = target[len(lead):]
            if not is_valid_path(path):
                raise ScriptSyntaxError(
                    str(InvalidPathError(path)), source, lineno, statement
                )
            value = parse_value(match.group("value"), source, lineno)
            yield lineno, path, value


def parse_script(
    text: str,
    source=None,
    root: str = DEFAULT_ROOT,
    record: Optional[ConfigurationRecord] = None,
) -> ConfigurationRecord:
    """
    Parse a configuration script into a ConfigurationRecord.

    Args:
        text: Script source
        source: File name or label for error messages
        root: Root object name (``rec`` unless configured otherwise)
        record: Existing record to apply the assignments to

    Returns:
        ConfigurationRecord: the populated record
    """
    record = record if record is not None else ConfigurationRecord()
    count = 0
    for lineno, path, value in iter_assignments(text, source, root):
        if path in record:
            logger.debug(f"{source or '<script>'}:{lineno}: {path} reassigned")
        record.set(path, value)
        count += 1
    logger.debug(f"Parsed {count} assignments from {source or '<script>'}")
    return record


def format_value(value) -> str:
    """Render a record value in script syntax."""
    if isinstance(value, ComponentReference):
        return value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value)
    raise TypeError(f"Cannot render value of type {type(value).__name__}")


def render_script(
    record: ConfigurationRecord, root: str = DEFAULT_ROOT, header: Optional[str] = None
) -> str:
    """
    Write a record back as a configuration script.

    Args:
        record: Record to render
        root: Root object name
        header: Optional comment placed at the top of the script

    Returns:
        Script text ending with a newline
    """
    lines = []
    if header:
        lines.extend(f"// {h}".rstrip() for h in header.splitlines())
    for path, value in record.items():
        lines.append(f"{root}.{path} = {format_value(value)}")
    return "\n".join(lines) + "\n"
