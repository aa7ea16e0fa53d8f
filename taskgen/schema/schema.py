"""
Task Schema Definitions.

This module defines the dataclasses describing one task reference page:
- TaskSchema: the root artifact (task name, version, parameters, ...)
- Parameter: one input row of the task's parameter table
- EnumDef / EnumMember: an enumeration inferred from a parameter description
- Diagnostic: a non-fatal irregularity recorded while building the schema

Every class here is frozen. A TaskSchema is built once by the schema builder
and is never modified afterwards; sequences are stored as tuples so that
iteration order is exactly documentation order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class ParamKind(Enum):
    """
    Data types a task input can be classified as.

    - STRING: free text (also the fallback for anything ambiguous)
    - BOOLEAN: a true/false toggle
    - ENUM: one of a discrete set of literal tokens
    """
    STRING = "string"
    BOOLEAN = "boolean"
    ENUM = "enum"


class DiagnosticLevel(Enum):
    """Severity of a Diagnostic. Neither level aborts generation."""
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """
    A recoverable irregularity found while extracting or building a schema.

    Attributes:
        level: INFO for fallback decisions, WARNING for things a user should review
        message: Human-readable description
        parameter: Raw name of the parameter concerned, if any
    """
    level: DiagnosticLevel
    message: str
    parameter: Optional[str] = None


@dataclass(frozen=True)
class EnumMember:
    """
    One member of an inferred enumeration.

    Attributes:
        literal_value: The exact wire-level token (e.g., "useFeed")
        identifier: Sanitized identifier, unique within the owning EnumDef
    """
    literal_value: str
    identifier: str


@dataclass(frozen=True)
class EnumDef:
    """
    An enumeration type synthesized for one ENUM parameter.

    Attributes:
        synthetic_name: PascalCase type name, unique across the TaskSchema
        members: Members in the order their literals were encountered
        owner: Raw name of the parameter this enum was derived from
    """
    synthetic_name: str
    members: Tuple[EnumMember, ...]
    owner: str = ""

    def member_for(self, literal_value: str) -> Optional[EnumMember]:
        """Return the member whose literal is literal_value, if any."""
        for member in self.members:
            if member.literal_value == literal_value:
                return member
        return None


@dataclass(frozen=True)
class Parameter:
    """
    Definition of a single task input.

    Attributes:
        raw_name: Original documentation label (e.g., "workingDir")
        description: Free text, kept verbatim including any "Use when ..." clause
        kind: Inferred data type
        required: True only when the documentation marks the input as required
        default_value: bool for BOOLEAN, str for STRING and ENUM, or None
        literals: Enumerated literal tokens in encountered order (ENUM only)
        enum_ref: The synthesized enumeration; set by the builder iff kind is ENUM
    """
    raw_name: str
    description: str = ""
    kind: ParamKind = ParamKind.STRING
    required: bool = False
    default_value: Optional[Union[str, bool]] = None
    literals: Tuple[str, ...] = ()
    enum_ref: Optional[EnumDef] = None

    @property
    def has_default(self) -> bool:
        """Parameter carries a documented default value."""
        return self.default_value is not None


@dataclass(frozen=True)
class TaskSchema:
    """
    Structured, typed description of one task reference page.

    Attributes:
        name: Task name from the Name@Version reference token (e.g., "Npm")
        version: Task version from the same token (e.g., "1")
        title: Page title, may be empty
        description: Short task description, may be empty
        source_url: Originating page address, passed through unchanged
        parameters: Parameters in documentation table order
        diagnostics: Non-fatal irregularities found along the way
    """
    name: str
    version: str
    title: str = ""
    description: str = ""
    source_url: str = ""
    parameters: Tuple[Parameter, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = field(default=(), compare=False)

    def __post_init__(self):
        if not self.name or not self.version:
            raise ValueError("TaskSchema needs a non-empty name and version")

    @property
    def reference(self) -> str:
        """The task reference token as used in pipeline YAML (e.g., "Npm@1")."""
        return f"{self.name}@{self.version}"

    @property
    def enums(self) -> Tuple[EnumDef, ...]:
        """Distinct enum definitions, in the order their owners appear."""
        return tuple(p.enum_ref for p in self.parameters if p.enum_ref is not None)
