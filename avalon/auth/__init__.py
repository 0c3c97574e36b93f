"""Authentication submodule – login handshake and session-cookie checks."""

from avalon.auth.login import login, seed_cookies
from avalon.auth.session import cookie_names_for_url, has_session_cookie

__all__ = [
    "login",
    "seed_cookies",
    "cookie_names_for_url",
    "has_session_cookie",
]
