"""
Fetching and parsing task reference pages.

The schema package only ever sees an already-parsed Document Model; turning a
URL or a saved file into one happens here.
"""

import requests
from bs4 import BeautifulSoup

from .common  import TaskgenException, file_read
from .printer import cons


def fetch_html(url: str, user_agent: str, timeout: float = 30.0) -> str:
    """
    Download a documentation page.

    Raises:
        TaskgenException: The request failed or returned an error status.
    """
    cons.print(f"Fetching documentation from [bold]{url}[/bold]")

    try:
        response = requests.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise TaskgenException(f'Failed to fetch "{url}": {exc}') from exc

    return response.text


def parse_document(html: str) -> BeautifulSoup:
    """Build the Document Model for a page's markup."""
    return BeautifulSoup(html, "html.parser")


def load_document(url: str, user_agent: str, timeout: float = 30.0, html_path: str = None) -> BeautifulSoup:
    """Parse the page at url, or the saved copy at html_path when given."""
    if html_path is not None:
        cons.print(f"Reading documentation from [bold]{html_path}[/bold]")
        return parse_document(file_read(html_path))

    return parse_document(fetch_html(url, user_agent, timeout))
