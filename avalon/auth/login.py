"""Login handshake against the mbasic host."""

from ..config import LANDING_URL, LOGIN_BUTTON_VALUE, LOGIN_URL
from ..errors import InvalidCredentialsError, UnexpectedResponseError
from ..logging_setup import get_logger
from ..models import Credentials
from ..network.client import CancellationToken, SessionClient
from .session import has_session_cookie

log = get_logger(__name__)


def seed_cookies(client: SessionClient, cancel: CancellationToken | None = None) -> None:
    """
    GET the landing page so the server hands out its anti-bot cookies before
    the credentials are posted.
    """
    log.debug("No cookies found, refreshing from %s", LANDING_URL)
    resp = client.send("GET", LANDING_URL, headers=client.build_headers(), cancel=cancel)
    if not resp.ok:
        raise UnexpectedResponseError(resp.status_code, resp.url)
    log.debug("Seed cookies: %s", list(client.cookies.keys()))


def login(
    client: SessionClient,
    credentials: Credentials,
    cancel: CancellationToken | None = None,
) -> None:
    """
    Authenticate *client* with *credentials*.

      1. GET /  (only when the jar is empty) to collect seed cookies
      2. POST the login form:  email / pass / login=Entrar
      3. Require a ``c_user`` cookie on the root domain

    Every call posts the form again, even on an already logged-in session.

    Raises UnexpectedResponseError on a non-2xx status,
    InvalidCredentialsError when no session cookie was issued, and
    NetworkError / OperationCancelled from the transport.  A cancelled call
    leaves the cookie jar as it found it.
    """
    with client.transaction():
        if len(client.cookies) == 0:
            seed_cookies(client, cancel=cancel)

        payload = {
            "email": credentials.mail_address,
            "pass": credentials.password,
            "login": LOGIN_BUTTON_VALUE,
        }
        resp = client.send(
            "POST",
            LOGIN_URL,
            headers=client.build_headers(with_referer=True),
            data=payload,
            cancel=cancel,
        )
        if not resp.ok:
            raise UnexpectedResponseError(resp.status_code, resp.url)

    if not has_session_cookie(client.cookies):
        log.error("Login failed – no session cookie was issued. Check your credentials.")
        raise InvalidCredentialsError("Invalid account credentials!")

    log.info(
        "Login successful (HTTP %s). Active cookies: %s",
        resp.status_code,
        list(client.cookies.keys()),
    )
