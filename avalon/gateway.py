"""
Gateway – authenticated access to one account on the mbasic interface.

    gateway = Gateway("me@example.com", "secret")
    gateway.authenticate()
    for group in gateway.fetch_groups():
        print(group.name, group.notifications)
"""

import requests
from bs4 import BeautifulSoup

from .auth import login
from .config import GROUPS_URL, PROFILE_URL
from .errors import (
    InvalidCredentialsError,
    SessionNotAuthenticatedError,
    UnexpectedResponseError,
)
from .logging_setup import get_logger
from .models import Credentials, Group, PostHandle
from .network import CancellationToken, SessionClient, TransportConfig
from .parser import extract_groups, extract_posts, parse_document

log = get_logger(__name__)


class Gateway:
    """
    Authentication wrapper around one account.

    Every operation is a single blocking request/parse/extract pass and takes
    an optional CancellationToken.  Use one Gateway per account and do not
    call into the same instance from several threads at once.
    """

    def __init__(
        self,
        mail_address: str,
        password: str,
        transport: TransportConfig | None = None,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._credentials = Credentials(mail_address, password)
        self.client = SessionClient(transport, user_agent=user_agent, session=session)
        self._authenticated = False

    def __repr__(self) -> str:
        return f"Gateway(mail_address={self.mail_address!r}, authenticated={self._authenticated})"

    @property
    def mail_address(self) -> str:
        return self._credentials.mail_address

    @property
    def user_agent(self) -> str:
        return self.client.user_agent

    @property
    def cookies(self) -> requests.cookies.RequestsCookieJar:
        return self.client.cookies

    @property
    def is_authenticated(self) -> bool:
        """True once the latest completed login attempt succeeded."""
        return self._authenticated

    def authenticate(self, cancel: CancellationToken | None = None) -> None:
        """
        Log in, seeding cookies from the landing page first if the jar is empty.

        Raises InvalidCredentialsError, UnexpectedResponseError or
        NetworkError.  A cancelled or failed-in-transit attempt leaves the
        authentication state untouched.
        """
        try:
            login(self.client, self._credentials, cancel=cancel)
        except (InvalidCredentialsError, UnexpectedResponseError):
            self._authenticated = False
            raise
        self._authenticated = True

    def fetch_groups(self, cancel: CancellationToken | None = None) -> list[Group]:
        """Groups the account belongs to, with their unread counts."""
        soup = self._get_document(GROUPS_URL, cancel)
        groups = extract_groups(soup)
        log.info("Found %d group(s)", len(groups))
        return groups

    def list_own_posts(self, cancel: CancellationToken | None = None) -> list[PostHandle]:
        """Post elements currently shown on the account's own profile page."""
        soup = self._get_document(PROFILE_URL, cancel)
        posts = extract_posts(soup)
        log.info("Found %d post(s) on the profile page", len(posts))
        return posts

    def remove_post(self, post: PostHandle, cancel: CancellationToken | None = None) -> None:
        """Deletion hook for a post returned by list_own_posts()."""
        raise NotImplementedError("no removal flow is defined for profile posts yet")

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "Gateway":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_document(self, url: str, cancel: CancellationToken | None) -> BeautifulSoup:
        if not self._authenticated:
            raise SessionNotAuthenticatedError("authenticate() must succeed before scraping")
        resp = self.client.send(
            "GET", url, headers=self.client.build_headers(with_referer=True), cancel=cancel,
        )
        if not resp.ok:
            raise UnexpectedResponseError(resp.status_code, resp.url)
        return parse_document(resp.text)
