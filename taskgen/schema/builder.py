"""
Schema Builder.

Combines the Field Extractor's output with per-row classification into one
immutable TaskSchema, and gives every ENUM parameter its EnumDef.

Uniqueness rules enforced here:
- Parameter labels are compared by normalize_key, so "Custom-Feed" and
  "customFeed " are the same input. The last row wins and keeps the
  position of the first; a warning is recorded.
- Enum type names come from the type scope of the run's NameRegistry and
  member identifiers from a scope per enum, so neither can collide.
"""

import dataclasses
from typing import Dict, List, Optional, Tuple

from .errors import duplicate_param_warning, warning
from .extractor import ExtractedFields
from .inference import infer_parameter
from .naming import TYPE_SCOPE, Casing, NameRegistry, member_scope, normalize_key
from .schema import Diagnostic, EnumDef, EnumMember, ParamKind, Parameter, TaskSchema


def _param_key(raw_name: str) -> str:
    return normalize_key(raw_name) or raw_name


def build_enum(param: Parameter, names: NameRegistry) -> EnumDef:
    """Synthesize the enumeration type for an ENUM parameter."""
    synthetic_name = names.sanitize(param.raw_name, Casing.PASCAL, TYPE_SCOPE)
    scope = member_scope(synthetic_name)

    members = tuple(
        EnumMember(literal, names.sanitize(literal, Casing.PASCAL, scope))
        for literal in dict.fromkeys(param.literals)
    )

    return EnumDef(synthetic_name=synthetic_name, members=members, owner=param.raw_name)


def build_schema(
    fields: ExtractedFields,
    source_url: str = "",
    names: Optional[NameRegistry] = None,
) -> TaskSchema:
    """
    Build the TaskSchema for one page.

    Args:
        fields: Output of extract_fields
        source_url: Originating page address, passed through unchanged
        names: The run's NameRegistry (a fresh one if omitted)

    Returns:
        The immutable TaskSchema. A page whose table has no rows yields a
        schema with zero parameters and a warning.
    """
    if names is None:
        names = NameRegistry()

    diagnostics: List[Diagnostic] = list(fields.diagnostics)
    hints = {_param_key(name): doc for name, doc in fields.hints.items()}

    # Diagnostics are kept per input so that a replaced row takes its own with it
    by_key: Dict[str, Tuple[Parameter, List[Diagnostic]]] = {}
    for row in fields.rows:
        key = _param_key(row.label.strip())
        row_diagnostics: List[Diagnostic] = []
        param = infer_parameter(row, hints.get(key, ""), row_diagnostics)

        if key in by_key:
            row_diagnostics.insert(0, duplicate_param_warning(param.raw_name, by_key[key][0].raw_name))
        by_key[key] = (param, row_diagnostics)

    if not by_key:
        diagnostics.append(warning("The parameter table has no rows; the task model will have no properties"))

    parameters = []
    for param, row_diagnostics in by_key.values():
        if param.kind == ParamKind.ENUM:
            param = dataclasses.replace(param, enum_ref=build_enum(param, names))
        parameters.append(param)
        diagnostics.extend(row_diagnostics)

    return TaskSchema(
        name=fields.name,
        version=fields.version,
        title=fields.title,
        description=fields.description,
        source_url=source_url,
        parameters=tuple(parameters),
        diagnostics=tuple(diagnostics),
    )
