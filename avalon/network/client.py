"""
HTTP client for the mbasic host.

Wraps a requests.Session so that cookies set by the server only reach the
committed jar once the response body has been read to the end.  Anything
that interrupts a request (transport failure, cancellation) leaves the jar
exactly as it was.
"""

import contextlib
import logging
import random
import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    ACCEPT_LANGUAGE,
    DEBUG_CLIENT_CERT,
    DEBUG_PROXY,
    LANDING_URL,
    READ_CHUNK_SIZE,
    REQUEST_TIMEOUT,
    USER_AGENTS,
)
from ..errors import NetworkError, OperationCancelled
from ..logging_setup import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class TransportConfig:
    """
    Transport options applied to the underlying requests.Session.

    verify      : TLS verification flag, or a CA bundle path.
    proxy       : Forward proxy URL used for both http and https.
    client_cert : Client certificate path, or a ``(cert, key)`` pair.
    timeout     : Seconds per request; ``None`` waits forever.
    debug       : Turn on urllib3 wire-level debug logging.
    """

    verify: bool | str = True
    proxy: str | None = None
    client_cert: str | tuple[str, str] | None = None
    timeout: float | None = REQUEST_TIMEOUT
    debug: bool = False

    @classmethod
    def intercepting(cls, proxy: str = DEBUG_PROXY, cert_dir: str | Path | None = None) -> "TransportConfig":
        """
        Preset for inspecting traffic through a local intercepting proxy:
        proxy on 127.0.0.1:8080, TLS verification off, the proxy's
        ``cacert.der`` from *cert_dir* (default: working directory) and
        debug tracing on.
        """
        cert_dir = Path.cwd() if cert_dir is None else Path(cert_dir)
        return cls(
            verify=False,
            proxy=proxy,
            client_cert=str(cert_dir / DEBUG_CLIENT_CERT),
            debug=True,
        )


class CancellationToken:
    """
    Thread-safe flag that aborts the operation it was passed to.

    Callbacks registered with add_callback() run once, in the thread that
    calls cancel(); a callback added after cancellation runs immediately.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or *timeout* elapses; True if cancelled."""
        return self._event.wait(timeout)

    def add_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("Operation cancelled")


class FetchResult(NamedTuple):
    """Status, decoded body and final URL (after redirects) of one request."""

    status_code: int
    text: str
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def build_session(config: TransportConfig | None = None) -> requests.Session:
    """Return a requests.Session configured from *config*, with retries disabled."""
    config = config or TransportConfig()
    session = requests.Session()
    # Retry policy belongs to the caller
    adapter = HTTPAdapter(max_retries=Retry(total=0, read=False))
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = config.verify
    if config.proxy:
        session.proxies.update({"http": config.proxy, "https": config.proxy})
    if config.client_cert:
        session.cert = config.client_cert
    session.headers.update({"Connection": "keep-alive"})

    if config.verify is False:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED")
    if config.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
    return session


class SessionClient:
    """
    One cookie-carrying session against the mbasic host.

    The user agent is picked from USER_AGENTS once, at construction, unless
    one is injected.  Calls on a single instance must be serialised by the
    caller; separate instances share nothing.

    ``http`` holds the transport settings and connection pools.  Every
    request runs on a short-lived fork of it that carries its own copy of
    the cookie jar, so a request abandoned through cancellation can never
    write into the committed jar.
    """

    def __init__(
        self,
        config: TransportConfig | None = None,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or TransportConfig()
        self._user_agent = user_agent or random.choice(USER_AGENTS)
        self.http = session if session is not None else build_session(self.config)
        self._cookies = self.http.cookies
        log.debug('Current user agent is "%s"', self._user_agent)

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def cookies(self) -> requests.cookies.RequestsCookieJar:
        """The committed cookie jar."""
        return self._cookies

    def build_headers(self, with_referer: bool = False) -> dict[str, str]:
        headers = {
            "User-Agent": self._user_agent,
            "Accept-Language": ACCEPT_LANGUAGE,
        }
        if with_referer:
            headers["Referer"] = LANDING_URL
        return headers

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
        cancel: CancellationToken | None = None,
    ) -> FetchResult:
        """
        Issue one request, following redirects, and return the full response.

        Non-2xx statuses are returned, not raised.  Raises NetworkError on
        transport failure.  With a *cancel* token the request runs on a
        worker thread and OperationCancelled is raised as soon as the token
        fires, whether the request is still connecting, waiting for headers
        or reading the body; the worker's cookies are discarded.
        """
        if cancel is not None:
            cancel.raise_if_cancelled()

        working = self._cookies.copy()
        fork = self._fork(working)
        request_kwargs = {"headers": headers, "data": data}

        try:
            if cancel is None:
                result = _fetch(fork, method, url, request_kwargs, self.config.timeout, None)
            else:
                result = self._fetch_cancellable(fork, method, url, request_kwargs, cancel)
        except requests.RequestException as exc:
            log.debug("%s %s failed: %s", method, url, exc)
            raise NetworkError(f"{method} {url} failed: {exc}") from exc

        self._cookies = working
        self.http.cookies = working
        log.debug("%s %s → HTTP %s (%d chars)", method, result.url, result.status_code, len(result.text))
        return result

    @contextlib.contextmanager
    def transaction(self):
        """
        Restore the committed jar if the block is cancelled part-way, so a
        multi-request operation never leaves half of its cookies behind.
        """
        snapshot = self._cookies.copy()
        try:
            yield self
        except OperationCancelled:
            log.debug("Operation cancelled, restoring %d cookie(s)", len(snapshot))
            self._cookies = snapshot
            self.http.cookies = snapshot
            raise

    def close(self) -> None:
        self.http.close()

    def _fork(self, jar: requests.cookies.RequestsCookieJar) -> requests.Session:
        """A session sharing ``http``'s settings and adapters but writing to *jar*."""
        fork = requests.Session()
        fork.headers = self.http.headers
        fork.auth = self.http.auth
        fork.proxies = self.http.proxies
        fork.verify = self.http.verify
        fork.cert = self.http.cert
        fork.trust_env = self.http.trust_env
        fork.max_redirects = self.http.max_redirects
        fork.adapters = self.http.adapters
        fork.cookies = jar
        return fork

    def _fetch_cancellable(
        self,
        fork: requests.Session,
        method: str,
        url: str,
        request_kwargs: dict,
        cancel: CancellationToken,
    ) -> FetchResult:
        future: Future = Future()

        def worker() -> None:
            try:
                future.set_result(_fetch(fork, method, url, request_kwargs, self.config.timeout, cancel))
            except BaseException as exc:
                future.set_exception(exc)

        finished = threading.Event()
        future.add_done_callback(lambda _: finished.set())
        cancel.add_callback(finished.set)
        try:
            threading.Thread(target=worker, daemon=True, name="avalon-request").start()
            finished.wait()
        finally:
            cancel.remove_callback(finished.set)

        # The worker notices the token at its next checkpoint and closes the response
        cancel.raise_if_cancelled()
        return future.result()


def _fetch(
    session: requests.Session,
    method: str,
    url: str,
    request_kwargs: dict,
    timeout: float | None,
    cancel: CancellationToken | None,
) -> FetchResult:
    resp = session.request(
        method,
        url,
        timeout=timeout,
        stream=True,
        allow_redirects=True,
        **request_kwargs,
    )
    try:
        text = _read_body(resp, cancel)
    finally:
        resp.close()
    return FetchResult(resp.status_code, text, resp.url)


def _read_body(resp: requests.Response, cancel: CancellationToken | None) -> str:
    chunks = []
    for chunk in resp.iter_content(chunk_size=READ_CHUNK_SIZE):
        if cancel is not None:
            cancel.raise_if_cancelled()
        chunks.append(chunk)
    if cancel is not None:
        cancel.raise_if_cancelled()

    body = b"".join(chunks)
    try:
        return body.decode(resp.encoding or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")
