"""
Network operations module: transport configuration, cancellation and the
cookie-committing session client.
"""

from avalon.network.client import (
    CancellationToken,
    FetchResult,
    SessionClient,
    TransportConfig,
    build_session,
)

__all__ = [
    "CancellationToken",
    "FetchResult",
    "SessionClient",
    "TransportConfig",
    "build_session",
]
