"""Data models for declaration and documentation extraction."""

from __future__ import annotations

from dataclasses import dataclass, field


def direction_from_type(type_text: str | None) -> str:
    """Infer a doxygen parameter direction from its C type.

    Non-const pointers may be written through, so they are ``in,out``.
    """
    if type_text and "*" in type_text and "const" not in type_text:
        return "in,out"
    return "in"


@dataclass
class Parameter:
    """One formal parameter or macro argument."""

    name: str
    type: str | None = None  # None for macro arguments
    direction: str | None = None  # "in" | "out" | "in,out"
    index: int | None = None  # Position in the parameter list
    description: str = ""

    @classmethod
    def from_source(
        cls,
        name: str,
        type_text: str | None = None,
        index: int | None = None,
        infer_direction: bool = True,
    ) -> Parameter:
        """Build a parameter extracted from a declaration."""
        direction = direction_from_type(type_text) if infer_direction else None
        return cls(name=name, type=type_text, direction=direction, index=index)


@dataclass
class Declaration:
    """A function, function-pointer typedef or macro definition.

    Also used for the model extracted from an existing doc comment, where
    ``name`` is empty and ``has_doxyblock`` is set.
    """

    name: str = ""
    returns: bool = False
    parameters: list[Parameter] = field(default_factory=list)
    description: str = ""
    return_descriptions: list[str] = field(default_factory=list)  # "retval 0 ok"
    full_signature: str = ""  # Matched source text, used to locate the head
    indent: str = ""
    has_doxyblock: bool = False
    is_macro: bool = False

    def parameter(self, name: str) -> Parameter | None:
        """Return the first parameter called ``name``."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None
