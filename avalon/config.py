"""Configuration constants for the mbasic gateway."""

import os

# Credentials can also be supplied via AVALON_MAIL / AVALON_PASSWORD env vars
DEFAULT_MAIL = os.environ.get("AVALON_MAIL", "")
DEFAULT_PASSWORD = os.environ.get("AVALON_PASSWORD", "")

BASE_URL     = "https://mbasic.facebook.com"
LANDING_URL  = BASE_URL + "/"
LOGIN_URL    = BASE_URL + "/login/device-based/regular/login/?refsrc=" + BASE_URL
GROUPS_URL   = BASE_URL + "/groups/?seemore"
PROFILE_URL  = BASE_URL + "/profile.php"

# Cookies scoped to this URL are inspected after the login POST
COOKIE_SCOPE_URL = "https://facebook.com/"
SESSION_COOKIE   = "c_user"

ACCEPT_LANGUAGE    = "pt-BR,pt;q=0.8,en-US;q=0.5,en;q=0.3"
LOGIN_BUTTON_VALUE = "Entrar"

# None = wait forever, same as the platform's own client
REQUEST_TIMEOUT = None
READ_CHUNK_SIZE = 8192

# Intercepting-proxy preset used while debugging the login flow
DEBUG_PROXY       = "http://127.0.0.1:8080"
DEBUG_CLIENT_CERT = "cacert.der"

# One of these is picked per session and kept for its whole lifetime
USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/74.0.3729.157 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/60.0.3112.113 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/70.0.3538.110 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_14_4) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/76.0.3782.0 Safari/537.36 Edg/76.0.152.0",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/76.0.3794.0 Safari/537.36 Edg/76.0.162.0",
    "Mozilla/5.0 (Windows NT 10.0) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/42.0.2311.135 Safari/537.36 Edge/19.10136",
)

# Markup markers used by the group extractor
GROUP_LINK_MARKER        = "/groups/"
GROUP_CREATE_LINK_MARKER = "/groups/create/"
