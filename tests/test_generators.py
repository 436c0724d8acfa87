"""Tests for snippet rendering."""

from doxygen_generator.config import StyleOptions
from doxygen_generator.generators import (
    SnippetBuilder,
    escape_snippet,
    render_snippet,
    render_whole_comment,
)
from doxygen_generator.models import Declaration, Parameter


def _decl(name="funcName", returns=False, params=(), **kwargs):
    return Declaration(name=name, returns=returns, parameters=list(params), **kwargs)


def test_parameters_without_return():
    func = _decl(
        params=[
            Parameter.from_source("a", "const int"),
            Parameter.from_source("b", "const float *"),
        ]
    )
    assert render_snippet(func) == (
        "/**\n"
        " * $1\n"
        " *\n"
        " * @param[in] a $2\n"
        " * @param[in] b $3\n"
        " */"
    )


def test_pointer_parameter_and_default_return():
    func = _decl(returns=True, params=[Parameter.from_source("a", "int *")])
    assert render_snippet(func) == (
        "/**\n"
        " * $1\n"
        " *\n"
        " * @param[in,out] a $2\n"
        " *\n"
        " * @returns $3\n"
        " */"
    )


def test_return_only():
    assert render_snippet(_decl(returns=True)) == "/**\n * $1\n *\n * @returns $2\n */"


def test_empty_declaration_is_a_single_field():
    assert render_snippet(_decl()) == "/**\n * $1\n */"


def test_aligned_parameter_names():
    func = _decl(params=[Parameter.from_source("a", "int"), Parameter.from_source("count", "int")])
    rendered = render_snippet(func)
    assert " * @param[in] a     $2\n" in rendered
    assert " * @param[in] count $3\n" in rendered

    rendered = render_snippet(func, StyleOptions(align_parameter_names=False))
    assert " * @param[in] a $2\n" in rendered


def test_parameter_without_direction():
    func = _decl(params=[Parameter(name="x", description="The input.")])
    assert " * @param x ${2:The input.}\n" in render_snippet(func)


def test_brief_on_first_line():
    style = StyleOptions(include_brief=True, first_line_inline=True)
    assert render_snippet(_decl(), style) == "/** @brief $1\n */"

    func = _decl(returns=True)
    assert render_snippet(func, style) == "/** @brief $1\n *\n *  @returns $2\n */"


def test_macro_def_tag():
    func = _decl(
        name="MAX",
        params=[Parameter.from_source("a"), Parameter.from_source("b")],
        is_macro=True,
    )
    assert render_snippet(func) == (
        "/**\n"
        " * @def MAX\n"
        " *\n"
        " * $1\n"
        " *\n"
        " * @param[in] a $2\n"
        " * @param[in] b $3\n"
        " */"
    )
    assert "@def" not in render_snippet(func, StyleOptions(emit_macro_def_tag=False))


def test_return_descriptions_keep_tags():
    func = _decl(returns=True, return_descriptions=["retval 0 on success", "return"])
    assert render_snippet(func) == (
        "/**\n"
        " * $1\n"
        " *\n"
        " * @retval ${2:0 on success}\n"
        " * @return $3\n"
        " */"
    )


def test_default_return_keyword():
    style = StyleOptions(default_return_tag_keyword="return")
    assert " * @return $2\n" in render_snippet(_decl(returns=True), style)


def test_existing_description_prefilled():
    func = _decl(description="@brief Does it.", has_doxyblock=True)
    assert render_snippet(func) == "/**\n * ${1:Does it.}\n */"


def test_multi_paragraph_description():
    func = _decl(description="Brief line.\n\nMore detail\nhere.", has_doxyblock=True)
    assert render_snippet(func) == (
        "/**\n"
        " * ${1:Brief line.}\n"
        " *\n"
        " * ${2:More detail\n"
        " * here.}\n"
        " */"
    )


def test_indent_and_prefix():
    func = _decl(indent="    ")
    assert render_snippet(func) == "/**\n     * $1\n     */"
    assert render_snippet(func, prefix="\n    ") == "\n    /**\n     * $1\n     */"
    assert render_snippet(func, indent="") == "/**\n * $1\n */"


def test_snippet_syntax_escaped():
    func = _decl(description="costs $5 {x}")
    assert render_snippet(func) == "/**\n * ${1:costs \\$5 {x\\}}\n */"
    assert escape_snippet("a\\b") == "a\\\\b"


def test_builder_numbers_fields_in_order():
    snippet = SnippetBuilder("<").tabstop().text(" ").placeholder("x").placeholder("")
    assert snippet.build() == "<$1 ${2:x}$3"


class TestWholeComment:
    def test_bare_block(self):
        assert render_whole_comment("") == "/** $1 */"

    def test_existing_body(self):
        assert render_whole_comment("/**\n * Old text\n * more\n */") == (
            "/** ${1:\n * Old text\n * more}\n */"
        )

    def test_single_line_body(self):
        assert render_whole_comment("/** Note. */", prefix="  ") == "  /** ${1:Note.} */"
