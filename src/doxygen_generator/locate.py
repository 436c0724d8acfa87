"""Find the declaration at a cursor line and produce the comment to apply."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .config import StyleOptions
from .extractors import (
    extract_doc,
    extract_function,
    extract_function_pointer_typedef,
    extract_macro,
)
from .generators import render_snippet, render_whole_comment
from .merge import merge_declarations
from .models import Declaration

log = logging.getLogger(__name__)

# First statement separator after the cursor ends the declaration
_STATEMENT_END_RE = re.compile(r";|#|\)\s*[{;]")

# `type name(...)` or `type (*name)(...)` ending the text
_DECLARATION_HEAD_RE = re.compile(
    r"(?:(?:\w+[*\s]+)+\(\s*\*+(?:\w+[*\s]+)*\w+\s*\)|(?:\w+[*\s]+)+\w+)"
    r"\s*\([^;]*?\)\Z"
)

# Doc comment directly above the declaration (at most one line break)
_TRAILING_COMMENT_RE = re.compile(
    r"([ \t]*)(/\*\*(?:(?!\*/).)*\*/)[ \t]*\n?[ \t]*\Z", re.DOTALL
)

_MACRO_LINE_RE = re.compile(r"[ \t]*#[ \t]*define\b")


@dataclass
class Anchor:
    """Where the snippet goes: an insertion point or a span to replace.

    Offsets index the document with ``\\r\\n`` normalized to ``\\n``;
    ``line``/``character`` is the start position.
    """

    kind: str  # "insert" | "replace"
    start: int
    end: int
    line: int
    character: int


@dataclass
class Generation:
    """Result of generating a comment at a cursor line."""

    snippet: str
    anchor: Anchor
    declaration: Declaration | None = None


def _line_offset(document: str, line: int) -> int:
    """Offset of the start of ``line``, clamped to the document end."""
    offset = 0
    for _ in range(line):
        newline = document.find("\n", offset)
        if newline < 0:
            return len(document)
        offset = newline + 1
    return offset


def _make_anchor(document: str, kind: str, start: int, end: int) -> Anchor:
    line = document.count("\n", 0, start)
    character = start - (document.rfind("\n", 0, start) + 1)
    return Anchor(kind=kind, start=start, end=end, line=line, character=character)


def _mask_comments(text: str) -> str:
    """Blank out block and line comments, keeping offsets and line breaks."""
    return re.sub(
        r"/\*.*?\*/|//[^\n]*",
        lambda m: re.sub(r"[^\n]", " ", m.group()),
        text,
        flags=re.DOTALL,
    )


def _after_last_delimiter(text: str) -> str:
    """Cut ``text`` at the last ``{``, ``}``, ``;`` or ``#`` outside comments."""
    masked = _mask_comments(text)
    cut = max(masked.rfind(char) for char in "{};#")
    return text[cut:] if cut >= 0 else text


def _strip_non_code(text: str) -> str:
    text = re.sub(r"/\*.*?\*/", "", text, flags=re.DOTALL)
    text = re.sub(r"//[^\n]*", "", text)
    # A preprocessor line (with continuations) left at the window start
    return re.sub(r"\A#.*?(?<!\\)\n", "", text, flags=re.DOTALL)


def _leading_whitespace(text: str) -> str:
    return re.match(r"[ \t]*", text).group()


def generate_from_document(
    document: str, line: int, style: StyleOptions | None = None
) -> Generation:
    """Generate the doc comment for the declaration at ``line`` (zero-based).

    Looks for a function, function-pointer typedef or (on a ``#define``
    line) a macro starting at or just before the cursor line. An existing
    ``/** */`` block directly above it is merged and replaced; otherwise a
    new block is inserted above the declaration. Without a declaration the
    result is a bare comment block (or the existing comment as one field).
    """
    if style is None:
        style = StyleOptions()
    infer = style.infer_parameter_direction

    document = document.replace("\r\n", "\n")
    cursor = _line_offset(document, line)
    window_start = _line_offset(document, max(0, line - style.lookbehind_lines))
    window_end = _line_offset(document, line + style.lookahead_lines)

    before = document[window_start:cursor]
    after = document[cursor:window_end]
    this_line = after.split("\n", 1)[0]

    stop = _STATEMENT_END_RE.search(_mask_comments(after))
    if stop:
        # Keep the closing parenthesis, drop the separator
        end = stop.start() + 1 if stop.group().startswith(")") else stop.start()
        after = after[:end]

    clean_before = _after_last_delimiter(before)
    full_text = before + after

    func: Declaration | None = None
    if _MACRO_LINE_RE.match(this_line):
        # Macro names and arguments must be on a single line
        func = extract_macro(this_line, infer)
        text = clean_before + _leading_whitespace(this_line)
    else:
        text = clean_before + after
        head = _DECLARATION_HEAD_RE.search(_strip_non_code(text).rstrip())
        if head:
            text = text[: text.rfind(head.group())]
            func = extract_function(head.group(), infer) or extract_function_pointer_typedef(
                head.group(), infer
            )
        else:
            text = clean_before + _leading_whitespace(this_line)

    if func:
        log.debug(f"Found declaration {func.name} ({len(func.parameters)} parameters)")

    comment = _TRAILING_COMMENT_RE.search(text)
    if comment:
        line_indent, full_comment = comment.groups()
        start = window_start + full_text.rfind(full_comment)
        anchor = _make_anchor(document, "replace", start, start + len(full_comment))
        log.debug(f"Found existing comment at line {anchor.line}")

        if func:
            doc = extract_doc(full_comment, infer)
            merged = merge_declarations(func, doc, adopt_direction=True)
            snippet = render_snippet(merged, style, indent=line_indent)
            return Generation(snippet=snippet, anchor=anchor, declaration=merged)

        snippet = render_whole_comment(full_comment, line_indent)
        return Generation(snippet=snippet, anchor=anchor)

    log.debug("No existing comment found")

    if func:
        position = full_text.rfind(func.full_signature)
        offset = window_start + position if position >= 0 else cursor
        line_start = document.rfind("\n", 0, offset) + 1
        indent = _leading_whitespace(document[line_start:])
        snippet = render_snippet(func, style, indent=indent, prefix=indent) + "\n"
        anchor = _make_anchor(document, "insert", line_start, line_start)
        return Generation(snippet=snippet, anchor=anchor, declaration=func)

    indent = _leading_whitespace(this_line)
    snippet = render_whole_comment("", indent, prefix=indent) + "\n"
    return Generation(snippet=snippet, anchor=_make_anchor(document, "insert", cursor, cursor))
