"""BeautifulSoup wrapper used by the extractors."""

from bs4 import BeautifulSoup, Tag

_BS4_PARSER = "lxml"


def parse_document(markup: str) -> BeautifulSoup:
    """Parse a response body into a searchable document tree."""
    return BeautifulSoup(markup, _BS4_PARSER)


def inner_html(element: Tag) -> str:
    """Markup of *element*'s children, without the element's own tags."""
    return element.decode_contents()
