"""
Field Extractor.

Walks a parsed task reference page (a BeautifulSoup tree) and pulls out the
pieces the schema is built from:

- the task title (first <h1>) and its short description
- the Name@Version task reference token
- the rows of the parameter table, as raw (label, description) pairs
- per-input hints from the page's YAML snippet (the doc comment after each
  input, e.g. "'ci' | 'install'. Required. Default: install.")

Structural anchors are located by content, not by position. A page without
a task reference token or without a parameter table raises the matching
ExtractionError; everything else degrades to empty values plus a diagnostic.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from ..common import isspace
from .errors import MissingParameterTable, MissingTaskReference, warning
from .schema import Diagnostic


# Name@Version inside code-like text, e.g. "Npm@1" or "DotNetCoreCLI@2"; versions start with a digit
TASK_REFERENCE_RE = re.compile(r"(?<![\w@.])(?P<name>[A-Za-z_]\w*)@(?P<version>\d\w*)")

# "- task: Npm@1" line of a YAML snippet
TASK_LINE_RE = re.compile(r"^\s*-\s*task:\s*(?P<name>[A-Za-z_]\w*)@(?P<version>\d\w*)\s*$", re.MULTILINE)

# Input line of a YAML snippet: indented, optionally commented out, with a doc comment
#     command: 'install' # 'ci' | 'install' | 'publish' | 'custom'. Required. Default: install.
#     #workingDir: # string. Working folder that contains package.json.
INPUT_LINE_RE = re.compile(r"^ {3,}(?:#\s*)?(?P<name>\w+):[^#\n]*#\s*(?P<doc>.*)$")

NAME_HEADER_RE = re.compile(r"\b(argument|input|parameter|option|name)s?\b", re.IGNORECASE)
DESCRIPTION_HEADER_RE = re.compile(r"\bdescription\b", re.IGNORECASE)

YAML_SELECTORS = "code.lang-yaml, code.language-yaml, pre.lang-yaml, pre.language-yaml"

_BLOCK_TAGS = {"p", "div", "li", "ul", "ol", "pre", "blockquote"}
_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


@dataclass(frozen=True)
class RawRow:
    """
    One parameter table row before classification.

    Attributes:
        label: Input name (the code-formatted name when the cell has one)
        description: Text of the description cell, code spans in backticks
        notes: Full text of the label cell (display name, required flags)
    """
    label: str
    description: str
    notes: str = ""


@dataclass(frozen=True)
class ExtractedFields:
    """Everything the Field Extractor pulls out of one page."""
    name: str
    version: str
    title: str = ""
    description: str = ""
    rows: Tuple[RawRow, ...] = ()
    summary: str = ""
    hints: Dict[str, str] = field(default_factory=dict)
    diagnostics: Tuple[Diagnostic, ...] = ()


def _squash(text: str) -> str:
    """Collapse whitespace runs within each line and drop blank lines."""
    lines = (" ".join(line.split()) for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def _render(node) -> str:
    """Render a node's text, keeping code spans in backticks and <br> as newlines."""
    if isinstance(node, Comment):
        return ""
    if isinstance(node, NavigableString):
        return str(node)
    if node.name == "br":
        return "\n"
    if node.name in ("code", "kbd"):
        return f"`{node.get_text()}`"

    inner = "".join(_render(child) for child in node.children)
    if node.name in _BLOCK_TAGS:
        return f"\n{inner}\n"
    return inner


def cell_text(cell: Tag) -> str:
    """Text of a table cell as it reads on the page."""
    return _squash(_render(cell))


def extract_title(doc: BeautifulSoup) -> Optional[Tag]:
    """Return the title heading, falling back to the document <title>."""
    return doc.find("h1") or doc.find("title")


def extract_short_description(title: Optional[Tag]) -> str:
    """First paragraph following the title heading, before any other section."""
    if title is None or title.name != "h1":
        return ""

    for element in title.find_all_next(["p", "table", "pre"] + _HEADING_TAGS):
        if element.name != "p":
            return ""
        text = _squash(element.get_text())
        if text:
            return text
    return ""


def _yaml_regions(doc: BeautifulSoup) -> List[Tag]:
    """Code elements that hold the task's YAML snippet, in document order."""
    regions = doc.select(YAML_SELECTORS)
    candidates = doc.select("pre code") + [pre for pre in doc.find_all("pre") if pre.find("code") is None]
    for code in candidates:
        if any(code is region for region in regions):
            continue
        if TASK_LINE_RE.search(code.get_text()):
            regions.append(code)
    return regions


def _code_like(doc: BeautifulSoup) -> Iterable[Tag]:
    return doc.find_all(["code", "pre", "kbd"])


def extract_task_reference(doc: BeautifulSoup) -> Tuple[str, str]:
    """
    Locate the Name@Version reference token.

    The "- task:" line of the YAML snippet wins, then any token inside the
    snippet, then the first token in any other code-like text.

    Raises:
        MissingTaskReference: No candidate anywhere on the page.
    """
    regions = _yaml_regions(doc)

    for region in regions:
        match = TASK_LINE_RE.search(region.get_text())
        if match:
            return match.group("name"), match.group("version")

    for element in list(regions) + list(_code_like(doc)):
        match = TASK_REFERENCE_RE.search(element.get_text())
        if match:
            return match.group("name"), match.group("version")

    raise MissingTaskReference("no Name@Version token in any code snippet")


def extract_snippet_hints(doc: BeautifulSoup) -> Tuple[str, Dict[str, str]]:
    """
    Read the YAML snippet's summary comment and per-input doc comments.

    Returns:
        (summary, hints) where hints maps input name to its doc comment.
        Both are empty when the page has no snippet.
    """
    regions = _yaml_regions(doc)
    if not regions:
        return "", {}

    lines = regions[0].get_text().splitlines()

    comments = []
    for line in lines:
        if TASK_LINE_RE.match(line):
            break
        if line.strip().startswith("#"):
            comments.append(line.strip().lstrip("#").strip())
    # "# npm v1" then "# Install and publish npm packages..."
    summary = comments[1] if len(comments) >= 2 else ""

    hints: Dict[str, str] = {}
    for line in lines:
        match = INPUT_LINE_RE.match(line)
        if match and not isspace(match.group("doc")):
            hints.setdefault(match.group("name"), match.group("doc").strip())

    return summary, hints


def _header_cells(table: Tag) -> Tuple[Optional[Tag], List[Tag]]:
    """Return the header row of a table and its cells."""
    head = table.find("thead")
    row = head.find("tr") if head is not None else table.find("tr")
    if row is None:
        return None, []
    return row, row.find_all(["th", "td"], recursive=False)


def _column_indices(cells: List[Tag]) -> Optional[Tuple[int, int]]:
    """Indices of the (name, description) columns, or None if not a parameter table."""
    name_idx, desc_idx = None, None
    for idx, cell in enumerate(cells):
        text = _squash(cell.get_text())
        if desc_idx is None and DESCRIPTION_HEADER_RE.search(text):
            desc_idx = idx
        elif name_idx is None and NAME_HEADER_RE.search(text):
            name_idx = idx

    if name_idx is None or desc_idx is None:
        return None
    return name_idx, desc_idx


def _row_label(cell: Tag) -> str:
    code = cell.find("code")
    if code is not None and not isspace(code.get_text()):
        return code.get_text().strip()
    return " ".join(cell.get_text().split())


def extract_parameter_rows(doc: BeautifulSoup) -> Tuple[RawRow, ...]:
    """
    Locate the parameter table and return its rows in table order.

    The table is the first one whose header row names an argument/input/
    parameter column and a description column (case-insensitive). Rows with
    an empty label, or too few cells, are section separators and are skipped.

    Raises:
        MissingParameterTable: No table on the page has such a header.
    """
    for table in doc.find_all("table"):
        header_row, header = _header_cells(table)
        indices = _column_indices(header)
        if indices is None:
            continue

        name_idx, desc_idx = indices
        rows = []
        for tr in table.find_all("tr"):
            if tr is header_row or tr.find_parent("table") is not table:
                continue

            cells = tr.find_all(["td", "th"], recursive=False)
            if len(cells) <= max(name_idx, desc_idx):
                continue

            label = _row_label(cells[name_idx])
            if isspace(label):
                continue

            rows.append(RawRow(
                label=label,
                description=cell_text(cells[desc_idx]),
                notes=cell_text(cells[name_idx]),
            ))

        return tuple(rows)

    raise MissingParameterTable("no table with an argument name and a description column")


def extract_fields(doc: BeautifulSoup) -> ExtractedFields:
    """
    Run every extraction step over a parsed page.

    Args:
        doc: Document Model of one task reference page

    Returns:
        ExtractedFields for the schema builder.

    Raises:
        MissingTaskReference, MissingParameterTable: A mandatory anchor is absent.
    """
    diagnostics = []

    name, version = extract_task_reference(doc)
    rows = extract_parameter_rows(doc)
    summary, hints = extract_snippet_hints(doc)

    title_tag = extract_title(doc)
    title = _squash(title_tag.get_text()) if title_tag is not None else ""
    if title_tag is None or title_tag.name != "h1":
        diagnostics.append(warning("No title heading (<h1>) found on the page"))

    description = extract_short_description(title_tag) or summary

    return ExtractedFields(
        name=name,
        version=version,
        title=title,
        description=description,
        rows=rows,
        summary=summary,
        hints=hints,
        diagnostics=tuple(diagnostics),
    )
