"""Snippet generators for doxygen comment blocks.

Output uses VS Code snippet syntax: ``$1`` is an empty fill-in field and
``${2:text}`` a pre-filled one. Fields are numbered in emission order.
"""

from __future__ import annotations

import re

from .config import StyleOptions
from .models import Declaration, Parameter


def escape_snippet(text: str) -> str:
    """Escape characters that have a meaning in snippet syntax."""
    return re.sub(r"([$}\\])", r"\\\1", text)


class SnippetBuilder:
    """Accumulates literal text and numbered fields."""

    def __init__(self, text: str = ""):
        self._parts = [escape_snippet(text)]
        self._next_field = 1

    def text(self, text: str) -> SnippetBuilder:
        self._parts.append(escape_snippet(text))
        return self

    def tabstop(self) -> SnippetBuilder:
        self._parts.append(f"${self._next_field}")
        self._next_field += 1
        return self

    def placeholder(self, value: str) -> SnippetBuilder:
        """Emit a pre-filled field, or an empty one when ``value`` is empty."""
        if not value:
            return self.tabstop()
        self._parts.append(f"${{{self._next_field}:{escape_snippet(value)}}}")
        self._next_field += 1
        return self

    def build(self) -> str:
        return "".join(self._parts)


def _clean_description(description: str) -> list[str]:
    """Drop stale @def/@brief markers and surrounding blank lines."""
    description = re.sub(r"^\s*@def\s*\S+\s*", "", description)
    description = re.sub(r"@brief\s*", "", description)
    lines = [line.rstrip() for line in description.splitlines()]
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _continue_block(lines: list[str], line_start: str, space: str) -> str:
    """Join lines, re-prefixing all but the first with the comment decoration."""
    head, *rest = lines
    return head + "".join(
        f"\n{line_start}{space}{line}" if line else f"\n{line_start}" for line in rest
    )


def _append_description(
    snippet: SnippetBuilder, func: Declaration, line_start: str, space: str
) -> None:
    lines = _clean_description(func.description)
    if not lines:
        snippet.tabstop()
        return

    if func.has_doxyblock and "" in lines:
        # Brief paragraph on one line, the rest as its own field
        blank = lines.index("")
        first = " ".join(line.strip() for line in lines[:blank])
        rest = lines[blank + 1 :]
        while rest and not rest[0]:
            rest.pop(0)
        snippet.placeholder(first)
        snippet.text(f"\n{line_start}\n{line_start}{space}")
        snippet.placeholder(_continue_block(rest, line_start, space))
        return

    snippet.placeholder(_continue_block(lines, line_start, space))


def _append_parameter(
    snippet: SnippetBuilder,
    param: Parameter,
    line_start: str,
    space: str,
    name_width: int,
) -> None:
    snippet.text(f"{line_start}{space}@param")
    if param.direction:
        snippet.text(f"[{param.direction}]")
    snippet.text(f" {param.name} ")
    snippet.text(" " * (name_width - len(param.name)))
    snippet.placeholder(param.description.strip())
    snippet.text("\n")


def _append_returns(
    snippet: SnippetBuilder,
    func: Declaration,
    style: StyleOptions,
    line_start: str,
    space: str,
) -> None:
    if not func.return_descriptions:
        snippet.text(f"{line_start}{space}@{style.default_return_tag_keyword} ")
        snippet.tabstop()
        snippet.text("\n")
        return

    for raw in func.return_descriptions:
        match = re.match(r"(\S+)(\s*)(.*)", raw, re.DOTALL)
        if not match:
            continue
        tag, gap, body = match.groups()
        snippet.text(f"{line_start}{space}@{tag}")
        if body:
            snippet.text(gap)
            snippet.placeholder(body)
        else:
            snippet.text(" ")
            snippet.tabstop()
        snippet.text("\n")


def render_snippet(
    func: Declaration,
    style: StyleOptions | None = None,
    indent: str | None = None,
    prefix: str = "",
) -> str:
    """Render a doxygen comment block for a declaration.

    Args:
        func: Declaration, usually already merged with its old comment
        style: Rendering options (defaults when omitted)
        indent: Whitespace put before every line after the first; defaults
            to the declaration's own indent
        prefix: Text emitted before the opening ``/**``

    Returns:
        Snippet text ending with `` */`` (no trailing newline)
    """
    if style is None:
        style = StyleOptions()
    if indent is None:
        indent = func.indent

    line_start = f"{indent} *"
    space = "  " if style.first_line_inline else " "
    separator = f"{line_start}\n"

    snippet = SnippetBuilder(f"{prefix}/**")
    if style.first_line_inline:
        snippet.text(" ")
    else:
        snippet.text(f"\n{line_start}{space}")

    if func.is_macro and style.emit_macro_def_tag:
        snippet.text(f"@def {func.name}\n{separator}{line_start}{space}")

    if style.include_brief:
        snippet.text("@brief ")

    _append_description(snippet, func, line_start, space)
    snippet.text("\n")

    if func.parameters:
        snippet.text(separator)
        name_width = 0
        if style.align_parameter_names:
            name_width = max(len(p.name) for p in func.parameters)
        for param in func.parameters:
            _append_parameter(snippet, param, line_start, space, name_width)

    if func.returns:
        snippet.text(separator)
        _append_returns(snippet, func, style, line_start, space)

    snippet.text(f"{indent} */")
    return snippet.build()


def render_whole_comment(comment: str, indent: str = "", prefix: str = "") -> str:
    """Offer the body of a comment as one field.

    Used when there is no declaration to document, including the bare
    ``/** $1 */`` block when ``comment`` is empty.
    """
    match = re.search(r"/\*\*\s*(.*?)\*/", comment, re.DOTALL)
    contents = match.group(1).strip() if match else ""
    contents = re.sub(r"\n\s*\*", f"\n{indent} *", contents)
    contents = re.sub(r"^\s*\*\s*", f"\n{indent} * ", contents)

    snippet = SnippetBuilder(f"{prefix}/** ")
    snippet.placeholder(contents)
    if "\n" in contents:
        snippet.text(f"\n{indent}")
    snippet.text(" */")
    return snippet.build()
