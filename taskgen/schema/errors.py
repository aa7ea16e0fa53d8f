"""
Extraction Errors and Consistent Diagnostic Formatting.

Fatal errors
------------
ExtractionError and its subclasses are raised when a page does not expose the
structural anchors generation depends on. No partial schema is ever returned
alongside them.

- MissingTaskReference: no Name@Version token in any code-like text
- MissingParameterTable: no table whose header has a name and a description column

Diagnostic messages
-------------------
Everything else is recoverable. Messages follow the same structure:
- Parameter name in single quotes: 'param_name'
- Clear description of what was decided

Examples:
- "'customFeed' is documented more than once; keeping the last row"
- "'verbose' default 'maybe' is not a boolean; ignoring it"
"""

from typing import Iterable, List, Optional

from ..common import TaskgenException
from .schema import Diagnostic, DiagnosticLevel


class ExtractionError(TaskgenException):
    """Raised when a page lacks a structural anchor needed for extraction."""

    anchor = "structural anchor"

    def __init__(self, detail: Optional[str] = None):
        message = f"Could not find the {self.anchor} on the documentation page"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MissingTaskReference(ExtractionError):
    """No Name@Version task reference token was found."""

    anchor = "task reference (Name@Version)"


class MissingParameterTable(ExtractionError):
    """No table with an argument-name and a description column was found."""

    anchor = "parameter table"


def format_param(name: str) -> str:
    """Format a parameter name for diagnostic messages."""
    return f"'{name}'"


def warning(message: str, parameter: Optional[str] = None) -> Diagnostic:
    return Diagnostic(DiagnosticLevel.WARNING, message, parameter)


def info(message: str, parameter: Optional[str] = None) -> Diagnostic:
    return Diagnostic(DiagnosticLevel.INFO, message, parameter)


def duplicate_param_warning(name: str, previous: str) -> Diagnostic:
    """
    Create the diagnostic recorded when two rows normalize to the same name.

    Args:
        name: Raw name of the later (kept) row
        previous: Raw name of the earlier (discarded) row

    Returns:
        Warning diagnostic naming both spellings.
    """
    if name == previous:
        return warning(f"{format_param(name)} is documented more than once; keeping the last row", name)
    return warning(
        f"{format_param(previous)} and {format_param(name)} name the same input; keeping {format_param(name)}",
        name,
    )


def format_diagnostics(
    diagnostics: Iterable[Diagnostic],
    use_rich: bool = True,
    include_info: bool = False,
) -> str:
    """
    Format diagnostics for display.

    Args:
        diagnostics: Diagnostics recorded on a TaskSchema
        use_rich: Whether to use Rich markup for colors
        include_info: Also list INFO-level diagnostics

    Returns:
        Formatted string, empty when there is nothing to show.
    """
    warnings: List[str] = []
    notes: List[str] = []
    for diag in diagnostics:
        if diag.level == DiagnosticLevel.WARNING:
            warnings.append(diag.message)
        elif include_info:
            notes.append(diag.message)

    lines = []

    if warnings:
        if use_rich:
            lines.append("[yellow]Warnings:[/yellow]")
            for warn in warnings:
                lines.append(f"  [yellow]![/yellow] {warn}")
        else:
            lines.append("Warnings:")
            for warn in warnings:
                lines.append(f"  ! {warn}")

    if notes:
        if lines:
            lines.append("")
        if use_rich:
            lines.append("[dim]Notes:[/dim]")
            for note in notes:
                lines.append(f"  [dim]-[/dim] {note}")
        else:
            lines.append("Notes:")
            for note in notes:
                lines.append(f"  - {note}")

    return "\n".join(lines)
