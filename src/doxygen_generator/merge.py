"""Reconcile a freshly extracted declaration with its existing documentation."""

from __future__ import annotations

import copy

from .models import Declaration, Parameter


def _pair_parameters(
    ours: Declaration, theirs: Declaration
) -> list[tuple[Parameter, Parameter]]:
    """Pair parameters by name, then pair the leftovers by position.

    The position fallback carries a description across a rename. It can
    misattribute descriptions when parameters are renamed and reordered
    at the same time.
    """
    our_names = {p.name for p in ours.parameters}
    their_names = {p.name for p in theirs.parameters}

    pairs = []
    for their_param in theirs.parameters:
        our_param = ours.parameter(their_param.name)
        if our_param:
            pairs.append((our_param, their_param))

    their_orphans = [p for p in theirs.parameters if p.name not in our_names]
    for our_param in (p for p in ours.parameters if p.name not in their_names):
        their_param = next(
            (p for p in their_orphans if p.index == our_param.index), None
        )
        if their_param:
            pairs.append((our_param, their_param))

    return pairs


def merge_declarations(
    ours: Declaration, theirs: Declaration, adopt_direction: bool = True
) -> Declaration:
    """Fill the gaps in ``ours`` from ``theirs`` and return the result.

    Neither argument is modified. Populated fields of ``ours`` always win,
    except parameter directions, which are copied from ``theirs`` when
    ``adopt_direction`` is set. Documented parameters that no longer exist
    are dropped.
    """
    merged = copy.deepcopy(ours)

    if theirs.description and not merged.description:
        merged.description = theirs.description

    for our_param, their_param in _pair_parameters(merged, theirs):
        if their_param.description and not our_param.description:
            our_param.description = their_param.description
        if adopt_direction:
            our_param.direction = their_param.direction
        if their_param.type and not our_param.type:
            our_param.type = their_param.type

    # Macros have no return type; the comment decides
    if merged.is_macro and theirs.returns:
        merged.returns = True

    if not merged.return_descriptions and merged.returns:
        merged.return_descriptions = list(theirs.return_descriptions)

    merged.has_doxyblock = merged.has_doxyblock or theirs.has_doxyblock
    return merged
