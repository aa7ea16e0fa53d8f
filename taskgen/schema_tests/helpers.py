"""
Shared fixtures for schema tests.
"""

from pathlib import Path

from bs4 import BeautifulSoup

from ..fetch import parse_document
from ..schema.generators import HeaderMetadata

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

NPM_URL = "https://learn.microsoft.com/azure/devops/pipelines/tasks/reference/npm-v1"

HEADER = HeaderMetadata(
    tool_name="taskgen",
    tool_version="0.1.0",
    timestamp="Sun, 18 Oct 2026 12:00:00 +0000",
    source_url=NPM_URL,
)


def load_fixture(name: str = "npm_v1.html") -> BeautifulSoup:
    """Parse one of the saved reference pages."""
    return parse_document((FIXTURES_DIR / name).read_text(encoding="utf-8"))


def make_page(rows, reference: str = "Demo@2", title: str = "Demo@2 - demo task") -> BeautifulSoup:
    """
    Build a minimal reference page.

    Args:
        rows: (label, description) pairs for the parameter table, or None
              to leave the table out
        reference: Name@Version token placed in the YAML snippet, or None
        title: Text of the <h1>, or None
    """
    parts = ["<html><body>"]
    if title is not None:
        parts.append(f"<h1>{title}</h1><p>A demo task.</p>")
    if reference is not None:
        parts.append(f'<pre><code class="lang-yaml"># demo\n# A demo task.\n- task: {reference}\n  inputs:\n</code></pre>')
    if rows is not None:
        parts.append("<table><thead><tr><th>Argument</th><th>Description</th></tr></thead><tbody>")
        for label, description in rows:
            parts.append(f"<tr><td><code>{label}</code></td><td>{description}</td></tr>")
        parts.append("</tbody></table>")
    parts.append("</body></html>")
    return parse_document("".join(parts))
