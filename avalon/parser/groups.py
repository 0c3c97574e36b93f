"""
avalon.parser.groups
====================
Extracts group memberships from the ``/groups/?seemore`` page.

Each membership is rendered as its own layout table::

    <table role="presentation"><tbody><tr>
      <td><a href="/groups/123456?refid=27">Group name</a></td>
      <td><span class="bv">5</span></td>      ← unread badge, may be empty
    </tr></tbody></table>

Tables that do not fit this shape are skipped and logged at DEBUG level;
they are never reported as errors.
"""

import re

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution

from ..config import GROUP_CREATE_LINK_MARKER, GROUP_LINK_MARKER
from ..logging_setup import get_logger
from ..models import Group
from .document import inner_html

log = get_logger(__name__)

# lxml does not synthesise <tbody>, so accept rows directly under <table> too
_CELL_SELECTOR = ":scope > tbody > tr > td, :scope > tr > td"
_BADGE_RE = re.compile(r"[0-9]+")


def find_group_tables(soup: BeautifulSoup) -> list[Tag]:
    """Presentation tables linking to a group, excluding the "create group" one."""
    tables = []
    for table in soup.select('table[role="presentation"]'):
        markup = inner_html(table)
        if GROUP_LINK_MARKER in markup and GROUP_CREATE_LINK_MARKER not in markup:
            tables.append(table)
    return tables


def parse_link_cell(cell: Tag) -> tuple[str, str] | None:
    """
    Return ``(url, name)`` from the first cell, or None if it has no link.

    Both come back as they appear in the page markup: entities such as
    ``&amp;`` in the link's query string or in the name stay escaped.
    """
    anchor = cell.find("a", href=True)
    if anchor is not None:
        url = EntitySubstitution.substitute_xml(anchor["href"])
        return url, inner_html(anchor).strip()

    # Link markup the parser did not recognise as an anchor
    markup = inner_html(cell).replace('<a href="', "").replace("</a>", "")
    url, sep, name = markup.partition('">')
    if not sep:
        return None
    return url, name.strip()


def parse_badge_cell(cell: Tag) -> int | None:
    """
    Unread count from the second cell.

    An empty cell means no unread posts (0).  Otherwise the badge text must
    be a plain non-negative integer; anything else yields None.
    """
    if not inner_html(cell):
        return 0
    token = cell.get_text().strip()
    if _BADGE_RE.fullmatch(token) is None:
        return None
    return int(token)


def extract_groups(soup: BeautifulSoup) -> list[Group]:
    """Return the groups listed in *soup*, in document order."""
    groups: list[Group] = []

    for table in find_group_tables(soup):
        cells = table.select(_CELL_SELECTOR)
        if len(cells) != 2:
            log.debug("Skipping group table with %d cell(s)", len(cells))
            continue

        link = parse_link_cell(cells[0])
        if link is None:
            log.debug("Skipping group row without a link: %r", inner_html(cells[0])[:80])
            continue
        url, name = link

        notifications = parse_badge_cell(cells[1])
        if notifications is None:
            log.debug("Dropping group %r: unreadable badge %r", name, cells[1].get_text()[:40])
            continue

        groups.append(Group(url=url, name=name, notifications=notifications))

    return groups
