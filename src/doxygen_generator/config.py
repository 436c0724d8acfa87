"""Style options consulted when rendering and locating declarations."""

from __future__ import annotations

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

ENV_PREFIX = "DOXYGEN_GENERATOR_"


class StyleOptions(BaseModel):
    """Rendering style for generated comment blocks.

    Accepts both the field names and the editor setting keys, e.g.
    ``StyleOptions(include_brief=True)`` or
    ``StyleOptions.model_validate({"brief": True})``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    include_brief: bool = Field(default=False, alias="brief")
    first_line_inline: bool = Field(default=False, alias="first_line")
    align_parameter_names: bool = Field(default=True, alias="align_params")
    infer_parameter_direction: bool = Field(default=True, alias="param_dir")
    emit_macro_def_tag: bool = Field(default=True, alias="macro_def")
    default_return_tag_keyword: str = Field(
        default="returns", alias="default_return", pattern=r"^\w+$"
    )
    # Size of the text window scanned around the cursor
    lookbehind_lines: int = Field(default=100, ge=0)
    lookahead_lines: int = Field(default=20, ge=1)
    wrap_width: int = Field(default=80, ge=10)


# field name -> key accepted on input (alias if the field has one)
_INPUT_KEYS: dict[str, str] = {
    name: info.alias or name for name, info in StyleOptions.model_fields.items()
}


def _normalize_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    """Map field names to their input keys so each option appears once."""
    return {_INPUT_KEYS.get(key, key): value for key, value in values.items()}


def _from_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name, key in _INPUT_KEYS.items():
        for candidate in (key, name):
            raw = environ.get(ENV_PREFIX + candidate.upper())
            if raw is not None:
                values[key] = raw
                break
    return values


def load_style(
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> StyleOptions:
    """Build style options from the environment and explicit overrides.

    Environment variables are named ``DOXYGEN_GENERATOR_<KEY>`` where KEY is
    either the field name or the setting key (``DOXYGEN_GENERATOR_BRIEF=1``).
    Explicit overrides win over the environment.

    Raises:
        ConfigError: If an option is unknown or has an invalid value
    """
    if environ is None:
        environ = os.environ

    values = _from_environ(environ)
    values.update(_normalize_keys(overrides or {}))

    try:
        return StyleOptions.model_validate(values)
    except ValidationError as e:
        first = e.errors(include_context=False)[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigError(f"Invalid style option {field}: {first['msg']}", field) from e
