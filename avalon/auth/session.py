"""
Session-cookie inspection.

Decides whether a cookie jar holds a logged-in session by asking the jar
which cookies it would send to the platform's root domain, so domain, path,
secure-flag and expiry rules are the jar's own cookie policy.
"""

import requests
from requests.cookies import get_cookie_header

from ..config import COOKIE_SCOPE_URL, SESSION_COOKIE


def cookie_names_for_url(jar: requests.cookies.RequestsCookieJar, url: str) -> list[str]:
    """
    Names of the cookies *jar* would attach to a GET of *url*.

    Building the header also drops expired cookies from the jar.
    """
    header = get_cookie_header(jar, requests.Request("GET", url).prepare())
    if not header:
        return []
    return [pair.partition("=")[0].strip() for pair in header.split(";")]


def has_session_cookie(
    jar: requests.cookies.RequestsCookieJar,
    scope_url: str = COOKIE_SCOPE_URL,
    name: str = SESSION_COOKIE,
) -> bool:
    """True when a cookie called *name* applies to *scope_url*."""
    return name in cookie_names_for_url(jar, scope_url)
