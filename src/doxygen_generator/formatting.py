"""Editing helpers used inside doc comments: tag completion and reflow."""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass

# (tag, parameter placeholder) for doxygen commands offered on completion
TAGS: tuple[tuple[str, str | None], ...] = (
    ("{", None),
    ("}", None),
    ("msc", None),
    ("endmsc", None),
    ("note", None),
    ("file", None),
    ("details", None),
    ("short", None),
    ("since", None),
    ("test", None),
    ("brief", None),
    ("return", None),
    ("returns", None),
    ("warning", None),
    ("todo", None),
    ("dir", None),
    ("static", None),
    ("author", None),
    ("authors", None),
    ("attention", None),
    ("bug", None),
    ("copyright", None),
    ("date", None),
    ("deprecated", None),
    ("invariant", None),
    ("par", None),
    ("parblock", None),
    ("endparblock", None),
    ("remarks", None),
    ("result", None),
    ("version", None),
    ("secreflist", None),
    ("endsecreflist", None),
    ("tableofcontents", None),
    ("arg", None),
    ("manonly", None),
    ("htmlonly", None),
    ("endhtmlonly", None),
    ("rtfonly", None),
    ("endrtfonly", None),
    ("latexonly", None),
    ("endlatexonly", None),
    ("xml", None),
    ("xmlonly", None),
    ("n", None),
    ("internal", None),
    ("defgroup", "name"),
    ("addtogroup", "name"),
    ("ingroup", "name"),
    ("weakgroup", "name"),
    ("sa", "name"),
    ("see", "name"),
    ("ref", "name"),
    ("class", "name"),
    ("enum", "name"),
    ("union", "name"),
    ("struct", "name"),
    ("retval", "value"),
    ("subpage", "pagename"),
    ("subsection", "subsection-name"),
    ("section", "section-name"),
    ("subsubsection", "subsubsection-name"),
    ("var", "name"),
    ("fn", "name"),
    ("property", "name"),
    ("typedef", "name"),
    ("def", "name"),
    ("exception", "exception-object"),
    ("throw", "exception-object"),
    ("throws", "exception-object"),
    ("anchor", "word"),
    ("cite", "label"),
    ("link", "link-object"),
    ("endlink", None),
    ("refitem", "name"),
    ("include", "file-name"),
    ("dontinclude", "file-name"),
    ("includelineno", "file-name"),
    ("includedoc", "file-name"),
    ("line", "pattern"),
    ("skip", "pattern"),
    ("skipline", "pattern"),
    ("snippet", "file-name"),
    ("snippetlineno", "file-name"),
    ("snippetdoc", "file-name"),
    ("until", "pattern"),
    ("verbinclude", "file-name"),
    ("htmlinclude", "file-name"),
    ("latexinclude", "file-name"),
    ("copydoc", "link-object"),
    ("copybrief", "link-object"),
    ("copydetails", "link-object"),
    ("emoji", "name"),
    ("dotfile", "file"),
    ("mscfile", "file"),
    ("diafile", "file"),
    ("li", "item-description"),
    ("cond", "condition"),
    ("endcond", None),
)


@dataclass
class CompletionItem:
    label: str
    insert_text: str  # Snippet syntax


def in_doxyblock(document: str, offset: int, max_lines: int = 100) -> bool:
    """Check whether ``offset`` lies inside an open ``/**`` block.

    Only the ``max_lines`` lines before the offset are considered.
    """
    lines = document[:offset].split("\n")
    text = "\n".join(lines[-(max_lines + 1) :])
    return text.rfind("/**") > text.rfind("*/")


def completion_items(document: str, offset: int) -> list[CompletionItem]:
    """Doxygen tags to offer at ``offset``; empty outside a doc block."""
    if not in_doxyblock(document, offset):
        return []

    items = []
    for label, parameter in TAGS:
        if parameter:
            insert_text = f"{label} ${{1:{parameter}}} "
        else:
            insert_text = f"{label} "
        items.append(CompletionItem(label=label, insert_text=insert_text))
    return items


def _paragraphs(lines: list[str]) -> list[tuple[bool, list[str]]]:
    """Group comment lines into (blank_line_before, words) paragraphs.

    Blank ``*`` lines separate paragraphs; a line starting with a tag
    starts a new one.
    """
    paragraphs: list[tuple[bool, list[str]]] = []
    blank = False
    for line in lines:
        content = re.sub(r"^[ \t]*\*?", "", line).strip()
        if not content:
            blank = bool(paragraphs)
            continue
        if blank or not paragraphs or re.match(r"[@\\]\w", content):
            paragraphs.append((blank, []))
            blank = False
        paragraphs[-1][1].extend(content.split())
    return paragraphs


def reflow_comment(text: str, width: int = 80) -> str:
    """Re-wrap the body lines of a doc comment to ``width`` columns of text.

    Opening ``/**`` and closing ``*/`` lines, if included, are kept as-is.
    Each output line is ``<indent>* <words>`` where indent is the leading
    whitespace of the first body line.
    """
    trailing_newline = text.endswith("\n")
    lines = text[:-1].split("\n") if trailing_newline else text.split("\n")

    head = [lines.pop(0)] if lines and lines[0].lstrip().startswith("/**") else []
    tail = [lines.pop()] if lines and lines[-1].strip().endswith("*/") else []
    if not any(line.strip(" \t*") for line in lines):
        return text

    indent = re.match(r"[ \t]*", lines[0]).group()
    body = []
    for blank_before, words in _paragraphs(lines):
        if blank_before:
            body.append(f"{indent}*")
        wrapped = textwrap.wrap(
            " ".join(words), width=width, break_long_words=False, break_on_hyphens=False
        )
        body.extend(f"{indent}* {line}" for line in wrapped)

    result = "\n".join(head + body + tail)
    return result + "\n" if trailing_newline else result
