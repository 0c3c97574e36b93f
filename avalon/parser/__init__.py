"""
Content parsing module.

Turns mbasic HTML pages into Group records and PostHandle selections.
"""

from avalon.parser.document import inner_html, parse_document
from avalon.parser.groups import extract_groups, find_group_tables
from avalon.parser.posts import extract_posts

__all__ = [
    "extract_groups",
    "extract_posts",
    "find_group_tables",
    "inner_html",
    "parse_document",
]
