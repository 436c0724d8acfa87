"""Declaration and documentation extractors for C/C++ source text.

These are best-effort structural matches over a small text window, not a
conforming C parser. Every extractor returns ``None`` (or an empty model)
when nothing matches instead of raising.
"""

from __future__ import annotations

import re

from .models import Declaration, Parameter

# Return type: whole words and single stars, each taking its trailing space
_RETURN_TOKENS = r"(?:[A-Za-z_]\w*\b\s*|\*\s*)+"

_FUNCTION_RE = re.compile(
    r"(\s*)"  # indent
    rf"(({_RETURN_TOKENS})(\w+)\s*\(([^()]*)\))"  # head: return, name, params
    r"\s*(?:;|\{|\Z)"
)

_FUNCTION_POINTER_RE = re.compile(
    r"(\s*)"
    rf"((?:typedef\s+)?({_RETURN_TOKENS})"
    r"\(\s*\*\s*(?:\w+\s+|\*\s*)*(\w+)\s*\)"  # (*name), qualifiers allowed
    r"\s*\(([^()]*)\))"
    r"[\s;]*\Z"
)

_MACRO_RE = re.compile(
    r"^([ \t]*)(#[ \t]*define[ \t]+(\w+)\(([^()]*)\))", re.MULTILINE
)

_PARAM_RE = re.compile(
    r"(?P<type>.*?[^\s*])(?P<sep>[\s*]+)(?P<name>[A-Za-z_]\w*)"
    r"(?P<array>(?:\s*\[[^\]]*\])*)",
    re.DOTALL,
)

# Words that look like a call head but never name a declaration
_KEYWORDS = frozenset({"if", "for", "while", "switch", "return", "sizeof"})

# Statement words that can precede a call but are not part of a return type
_STATEMENT_WORDS = frozenset({"return", "else", "case", "goto", "throw", "new", "delete"})

_BRACKETS = {"(": ")", "[": "]", "{": "}", "<": ">"}

# Tags that end a @param or @return segment in a doc comment
_TAG_END = r"(?=@param|@ret|@note|@warning|@info|\*/\s*\Z|\Z)"

_DOC_DESCRIPTION_RE = re.compile(r"\s*/\*\*(.*?)(?=@param|@ret|\*/\s*\Z|\Z)", re.DOTALL)
_DOC_PARAM_SEGMENT_RE = re.compile(r"@param.+?" + _TAG_END, re.DOTALL)
_DOC_PARAM_RE = re.compile(r"@param(?:\[([^\]]*)\])?\s*(\w+)(.*)", re.DOTALL)
_DOC_RETURN_RE = re.compile(r"@(returns|return|retval)\b(.*?)" + _TAG_END, re.DOTALL)


def _last_line(whitespace: str) -> str:
    """Keep only what follows the last line break."""
    return re.split(r"\r\n|\r|\n", whitespace)[-1]


def _returns_value(return_tokens: str) -> bool:
    """A return type yields a value unless it is a plain void."""
    return not re.search(r"\bvoid\b", return_tokens) or "*" in return_tokens


def _split_top_level(text: str) -> list[str]:
    """Split on commas that are not nested inside brackets."""
    parts = []
    depth: list[str] = []
    current = []
    for char in text:
        if char in _BRACKETS:
            depth.append(_BRACKETS[char])
        elif depth and char == depth[-1]:
            depth.pop()
        elif char == "," and not depth:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def _parse_parameter(segment: str, index: int, infer_direction: bool) -> Parameter | None:
    # C++ default arguments are not part of the type
    segment = segment.split("=", 1)[0].strip()
    match = _PARAM_RE.fullmatch(segment)
    if not match:
        return None

    type_text = " ".join(match.group("type").split())
    stars = re.sub(r"\s+", "", match.group("sep"))
    if stars:
        type_text = f"{type_text} {stars}"
    if match.group("array"):
        type_text += re.sub(r"\s+", "", match.group("array"))

    return Parameter.from_source(
        match.group("name"), type_text, index=index, infer_direction=infer_direction
    )


def parse_parameters(text: str, infer_direction: bool = True) -> list[Parameter]:
    """Parse a C parameter list (the text between the parentheses).

    Segments that do not end in an identifier (``...``, unnamed
    parameters) are skipped; ``index`` still counts them.
    """
    if text.strip() == "void":
        return []

    params = []
    for index, segment in enumerate(_split_top_level(text)):
        param = _parse_parameter(segment, index, infer_direction)
        if param:
            params.append(param)
    return params


def extract_function(text: str, infer_direction: bool = True) -> Declaration | None:
    """Extract the last function declaration or definition head in ``text``.

    Only text after the last ``*/`` is searched, so an earlier comment is
    never read as part of the signature.
    """
    comment_end = text.rfind("*/")
    if comment_end >= 0:
        text = text[comment_end + 2 :]

    match = None
    for candidate in _FUNCTION_RE.finditer(text):
        first_word = candidate.group(3).split()[0].strip("*")
        if candidate.group(4) in _KEYWORDS or first_word in _STATEMENT_WORDS:
            continue
        match = candidate
    if not match:
        return None

    return Declaration(
        name=match.group(4),
        returns=_returns_value(match.group(3)),
        parameters=parse_parameters(match.group(5), infer_direction),
        full_signature=match.group(2),
        indent=_last_line(match.group(1)),
    )


def extract_function_pointer_typedef(
    text: str, infer_direction: bool = True
) -> Declaration | None:
    """Extract a ``typedef ret (*name)(params);`` that ends ``text``."""
    match = _FUNCTION_POINTER_RE.search(text)
    if not match:
        return None

    return Declaration(
        name=match.group(4),
        returns=_returns_value(match.group(3)),
        parameters=parse_parameters(match.group(5), infer_direction),
        full_signature=match.group(2),
        indent=_last_line(match.group(1)),
    )


def extract_macro(text: str, infer_direction: bool = True) -> Declaration | None:
    """Extract the last function-like ``#define NAME(args)`` in ``text``.

    Arguments become untyped parameters; a variadic ``...`` is dropped.
    """
    matches = list(_MACRO_RE.finditer(text))
    if not matches:
        return None
    match = matches[-1]

    params = []
    args = [
        arg.replace("\\", "").strip()
        for arg in match.group(4).split(",")
    ]
    for index, name in enumerate(arg for arg in args if arg != "..."):
        if name:
            params.append(
                Parameter.from_source(name, index=index, infer_direction=infer_direction)
            )

    return Declaration(
        name=match.group(3),
        parameters=params,
        full_signature=match.group(2),
        indent=match.group(1),
        is_macro=True,
    )


def _strip_decoration(text: str) -> list[str]:
    """Remove the leading ``*`` comment decoration from every line."""
    lines = []
    for line in re.split(r"\r\n|\r|\n", text):
        line = re.sub(r"^[ \t]*(?:\*+(?!/)[ \t]?)?", "", line)
        lines.append(line.rstrip())
    return lines


def _trim_field(text: str) -> str:
    """Trim trailing run-on ``*`` and whitespace."""
    return re.sub(r"[\s*]+\Z", "", text).strip()


def _join_lines(text: str) -> str:
    """Collapse a tag body spread over several comment lines."""
    return _trim_field(" ".join(line.strip() for line in _strip_decoration(text) if line.strip()))


def _parse_description(text: str) -> str:
    lines = _strip_decoration(text)
    while lines and not lines[0]:
        lines.pop(0)
    if lines:
        lines[0] = re.sub(r"^@brief\s*", "", lines[0])
    return _trim_field("\n".join(lines).strip("\n"))


def extract_doc(text: str, infer_direction: bool = True) -> Declaration:
    """Parse an existing ``/** ... */`` comment into a declaration model.

    The description keeps its line structure (decoration removed) so
    paragraphs survive; parameter and return bodies are joined into one
    line each. Return descriptions keep their tag keyword, e.g.
    ``"retval 0 on success"``.
    """
    doc = Declaration(has_doxyblock=True)

    description = _DOC_DESCRIPTION_RE.match(text)
    if description:
        doc.description = _parse_description(description.group(1))

    for index, segment in enumerate(_DOC_PARAM_SEGMENT_RE.findall(text)):
        match = _DOC_PARAM_RE.match(segment)
        if not match:
            continue
        doc.parameters.append(
            Parameter(
                name=match.group(2),
                direction=match.group(1) if infer_direction else None,
                index=index,
                description=_join_lines(match.group(3)),
            )
        )

    for match in _DOC_RETURN_RE.finditer(text):
        body = _join_lines(match.group(2))
        doc.returns = True
        doc.return_descriptions.append(f"{match.group(1)} {body}" if body else match.group(1))

    return doc
