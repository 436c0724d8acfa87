from doxygen_generator.config import StyleOptions, load_style
from doxygen_generator.errors import ConfigError, DoxygenGeneratorError
from doxygen_generator.extractors import (
    extract_doc,
    extract_function,
    extract_function_pointer_typedef,
    extract_macro,
    parse_parameters,
)
from doxygen_generator.generators import render_snippet, render_whole_comment
from doxygen_generator.locate import Anchor, Generation, generate_from_document
from doxygen_generator.merge import merge_declarations
from doxygen_generator.models import Declaration, Parameter, direction_from_type

__all__ = [
    "Anchor",
    "ConfigError",
    "Declaration",
    "DoxygenGeneratorError",
    "Generation",
    "Parameter",
    "StyleOptions",
    "direction_from_type",
    "extract_doc",
    "extract_function",
    "extract_function_pointer_typedef",
    "extract_macro",
    "generate_from_document",
    "load_style",
    "merge_declarations",
    "parse_parameters",
    "render_snippet",
    "render_whole_comment",
]
