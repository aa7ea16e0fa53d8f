"""
C# Task Model Generator.

Renders a TaskSchema as a C# source file for Sharpliner: one enum per ENUM
parameter, then a record class deriving from the configured base class with
one property per parameter.

Layout of the generated file:

    // <auto-generated> banner (header metadata, verbatim)
    using ...;
    namespace ...;          (only when configured)
    enums                   (order of their owning parameters)
    record class            (properties in schema order)

emit is a pure function of its inputs: the same schema, header and options
always produce the same text.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..naming import (
    PROPERTY_SCOPE,
    RECORD_MEMBERS,
    TYPE_SCOPE,
    Casing,
    NameRegistry,
    to_identifier,
)
from ..schema import EnumDef, ParamKind, Parameter, TaskSchema


INDENT = "    "

DEFAULT_USINGS = ("Sharpliner.AzureDevOps.Tasks", "YamlDotNet.Serialization")

# Members a Sharpliner task model inherits from AzureDevOpsTask / Step
INHERITED_MEMBERS = (
    "Task", "Inputs", "DisplayName", "Name", "Condition", "ContinueOnError",
    "Enabled", "Env", "Target", "TimeoutInMinutes", "RetryCountOnTaskFailure",
    "GetString", "GetBool", "GetInt", "GetEnum", "SetProperty",
)

# Types the generated file refers to by simple name
REFERENCED_TYPES = ("YamlMember", "YamlMemberAttribute", "YamlIgnore", "YamlIgnoreAttribute")


@dataclass(frozen=True)
class HeaderMetadata:
    """Caller-supplied banner information, embedded verbatim."""
    tool_name: str
    tool_version: str
    timestamp: str
    source_url: str


@dataclass(frozen=True)
class EmitOptions:
    """
    Rendering choices for the task model.

    Attributes:
        base_class: Class the task model derives from
        class_name: Task model name; "<TaskName>Task" when None
        namespace: File-scoped namespace, omitted when None
        usings: Namespaces imported at the top of the file
        property_casing: Casing of property names
    """
    base_class: str = "AzureDevOpsTask"
    class_name: Optional[str] = None
    namespace: Optional[str] = None
    usings: Tuple[str, ...] = DEFAULT_USINGS
    property_casing: Casing = Casing.PASCAL


def xml_escape(text: str) -> str:
    """Escape characters that would break an XML documentation comment."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def csharp_string(text: str) -> str:
    """Render text as a C# regular string literal."""
    escaped = (text.replace("\\", "\\\\").replace('"', '\\"')
                   .replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t"))
    return f'"{escaped}"'


def _doc_comment(text: str, indent: str = "") -> List[str]:
    lines = [f"{indent}/// <summary>"]
    for line in text.splitlines() or [""]:
        lines.append(f"{indent}/// {xml_escape(line)}".rstrip())
    lines.append(f"{indent}/// </summary>")
    return lines


def _header_lines(schema: TaskSchema, header: HeaderMetadata) -> List[str]:
    return [
        "// <auto-generated>",
        f"//     Generated by {header.tool_name} v{header.tool_version} on {header.timestamp}",
        f"//     Source: {header.source_url}",
        f"//     Source Task: {schema.name} v{schema.version}",
        "// </auto-generated>",
    ]


def _enum_lines(enum: EnumDef, type_name: str) -> List[str]:
    lines = _doc_comment(f"Defines options for the {enum.owner} parameter.")
    lines.append(f"public enum {type_name}")
    lines.append("{")
    for idx, member in enumerate(enum.members):
        if idx > 0:
            lines.append("")
        lines.append(f"{INDENT}[YamlMember(Alias = {csharp_string(member.literal_value)})]")
        lines.append(f"{INDENT}{member.identifier},")
    lines.append("}")
    return lines


def _property_type_and_getter(param: Parameter, type_names: Dict[str, str]) -> Tuple[str, str]:
    """C# type and getter expression for a parameter, honoring its default."""
    key = csharp_string(param.raw_name)

    if param.kind == ParamKind.BOOLEAN:
        default = "true" if param.default_value is True else "false"
        return "bool", f"GetBool({key}, {default})"

    if param.kind == ParamKind.ENUM:
        enum_name = type_names[param.enum_ref.synthetic_name]
        member = param.enum_ref.member_for(param.default_value) if param.has_default else None
        if member is not None:
            return enum_name, f"GetEnum({key}, {enum_name}.{member.identifier})"
        return f"{enum_name}?", f"GetEnum<{enum_name}>({key}, null)"

    if param.has_default:
        return "string", f"GetString({key}, {csharp_string(str(param.default_value))})!"
    return "string?", f"GetString({key})"


def _property_lines(param: Parameter, property_name: str, type_names: Dict[str, str]) -> List[str]:
    prop_type, getter = _property_type_and_getter(param, type_names)
    key = csharp_string(param.raw_name)

    lines = _doc_comment(param.description, INDENT)
    lines += [
        f"{INDENT}[YamlIgnore]",
        f"{INDENT}public {prop_type} {property_name}",
        f"{INDENT}{{",
        f"{INDENT}{INDENT}get => {getter};",
        f"{INDENT}{INDENT}init => SetProperty({key}, value);",
        f"{INDENT}}}",
    ]
    return lines


def _class_summary(schema: TaskSchema) -> str:
    lines = [f"Generated C# model for the Azure DevOps task: {schema.name} v{schema.version}."]
    for text in (schema.title, schema.description):
        if text and text not in lines:
            lines.append(text)
    return "\n".join(lines)


def _class_lines(
    schema: TaskSchema,
    options: EmitOptions,
    names: NameRegistry,
    type_names: Dict[str, str],
) -> List[str]:
    stem = options.class_name or f"{to_identifier(schema.name)}Task"
    class_name = names.sanitize(stem, Casing.PASCAL, TYPE_SCOPE)

    names.reserve((class_name,) + RECORD_MEMBERS + INHERITED_MEMBERS, PROPERTY_SCOPE)

    lines = _doc_comment(_class_summary(schema))
    lines += [
        f"public record class {class_name} : {options.base_class}",
        "{",
        f"{INDENT}public {class_name}() : base({csharp_string(schema.reference)})",
        f"{INDENT}{{",
        f"{INDENT}}}",
    ]

    for param in schema.parameters:
        property_name = names.sanitize(param.raw_name, options.property_casing, PROPERTY_SCOPE)
        lines.append("")
        lines += _property_lines(param, property_name, type_names)

    lines.append("}")
    return lines


def _enum_type_names(schema: TaskSchema, options: EmitOptions, names: NameRegistry) -> Dict[str, str]:
    """
    Settle the enum type names used in the file.

    The base class and the attribute types the file refers to are taken
    first, so an enum can never shadow them; an enum whose name clashes is
    rendered with a numeric suffix.
    """
    base_name = options.base_class.rsplit(".", 1)[-1]
    names.reserve((base_name,) + REFERENCED_TYPES, TYPE_SCOPE)

    return {enum.synthetic_name: names.claim(enum.synthetic_name, TYPE_SCOPE) for enum in schema.enums}


def emit(schema: TaskSchema, header: HeaderMetadata, options: Optional[EmitOptions] = None) -> str:
    """
    Render a TaskSchema as C# source text.

    Args:
        schema: Schema accepted by the schema builder
        header: Banner metadata supplied by the caller
        options: Rendering choices (defaults when omitted)

    Returns:
        The complete source file, ending with a newline.
    """
    if options is None:
        options = EmitOptions()

    # Emission has its own registry so that rendering twice gives the same text
    names = NameRegistry()
    type_names = _enum_type_names(schema, options, names)

    blocks: List[List[str]] = [_header_lines(schema, header)]

    if options.usings:
        blocks.append([f"using {using};" for using in options.usings])

    if options.namespace:
        blocks.append([f"namespace {options.namespace};"])

    for enum in schema.enums:
        blocks.append(_enum_lines(enum, type_names[enum.synthetic_name]))

    blocks.append(_class_lines(schema, options, names, type_names))

    return "\n\n".join("\n".join(block) for block in blocks) + "\n"
