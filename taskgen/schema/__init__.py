"""
Task Schema Package.

Turns one parsed task reference page into a typed TaskSchema and renders it
as source code:

    Document Model -> extract_fields -> build_schema -> TaskSchema -> emit

Each run gets its own NameRegistry; nothing here keeps state between runs,
reads the network or the filesystem, or prints.
"""

from typing import Optional, Tuple

from bs4 import BeautifulSoup

from .builder import build_schema
from .errors import ExtractionError, MissingParameterTable, MissingTaskReference
from .extractor import extract_fields
from .generators import EmitOptions, HeaderMetadata, emit
from .naming import NameRegistry
from .schema import Diagnostic, DiagnosticLevel, EnumDef, EnumMember, ParamKind, Parameter, TaskSchema


def extract_schema(doc: BeautifulSoup, source_url: str = "") -> TaskSchema:
    """Extract and build the TaskSchema of one page with a fresh NameRegistry."""
    return build_schema(extract_fields(doc), source_url, NameRegistry())


def generate(
    doc: BeautifulSoup,
    header: HeaderMetadata,
    options: Optional[EmitOptions] = None,
) -> Tuple[str, TaskSchema]:
    """
    Run the whole pipeline over one page.

    Args:
        doc: Document Model of the page
        header: Banner metadata; its source_url is also the schema's source_url
        options: Rendering choices

    Returns:
        (source text, schema). Nothing is rendered when extraction fails.

    Raises:
        ExtractionError: The page lacks the task reference or the parameter table.
    """
    schema = extract_schema(doc, header.source_url)
    return emit(schema, header, options), schema


__all__ = [
    'Diagnostic', 'DiagnosticLevel', 'EnumDef', 'EnumMember', 'ParamKind', 'Parameter', 'TaskSchema',
    'ExtractionError', 'MissingParameterTable', 'MissingTaskReference',
    'EmitOptions', 'HeaderMetadata', 'NameRegistry',
    'build_schema', 'emit', 'extract_fields', 'extract_schema', 'generate',
]
