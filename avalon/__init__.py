"""
avalon
======
Session client for the mbasic (mobile-lite) Facebook web interface: logs in
with an e-mail/password pair, keeps the session cookies and scrapes group
memberships and profile posts.

Package structure
-----------------
avalon/
├── __init__.py       – package init and public API
├── config.py         – endpoints, headers, user-agent pool
├── logging_setup.py  – colorlog handler for the "avalon" logger
├── errors.py         – exception hierarchy
├── models.py         – Credentials, Group, PostHandle
├── gateway.py        – Gateway façade (authenticate / fetch_groups / list_own_posts)
├── cli.py            – argparse CLI (``python -m avalon``)
├── network/          – TransportConfig, CancellationToken, SessionClient
├── auth/             – login handshake, session-cookie check
└── parser/           – BeautifulSoup document wrapper and extractors

Quick start
-----------
    from avalon import Gateway

    with Gateway("me@example.com", "secret") as gateway:
        gateway.authenticate()
        groups = gateway.fetch_groups()
"""

from .errors  import (
    AvalonError,
    InvalidCredentialsError,
    NetworkError,
    OperationCancelled,
    SessionNotAuthenticatedError,
    UnexpectedResponseError,
)
from .gateway import Gateway
from .models  import Credentials, Group, PostHandle
from .network import CancellationToken, SessionClient, TransportConfig

__all__ = [
    "Gateway",
    "Credentials",
    "Group",
    "PostHandle",
    "CancellationToken",
    "SessionClient",
    "TransportConfig",
    "AvalonError",
    "NetworkError",
    "OperationCancelled",
    "UnexpectedResponseError",
    "InvalidCredentialsError",
    "SessionNotAuthenticatedError",
]
