"""requestable.config.defaults
===========================

Central place for the small, stable default values used by the request
layers. They can be overridden through environment variables or an external
config file (see ``requestable.config``), but provide sensible fallbacks for
local development and tests.

This module intentionally avoids importing from other packages to prevent
circular dependencies; only plain constants live here. Durations are seconds.
"""

from __future__ import annotations

# ---- Retry ----
RETRY_DEFAULT_MAX_ATTEMPTS = 3
RETRY_DEFAULT_INITIAL_DELAY = 0.3
RETRY_DEFAULT_BACKOFF_FACTOR = 2.0
RETRY_DEFAULT_MAX_DELAY = 3.0
# ErrorKind values, kept as strings so this module stays import-free.
RETRY_DEFAULT_KINDS = ("NETWORK_FAILURE", "TIMEOUT", "HTTP_ERROR")

# ---- Fallback ----
FALLBACK_DEFAULT_KINDS = ("NETWORK_FAILURE", "TIMEOUT", "HTTP_ERROR")

# ---- Cache ----
# None means entries never expire.
CACHE_DEFAULT_TTL = None
CACHE_DEFAULT_METHODS = ("GET",)

# ---- Authentication ----
AUTH_DEFAULT_HEADER = "Authorization"
AUTH_BEARER_PREFIX = "Bearer "

# ---- Transport ----
TRANSPORT_DEFAULT_HTTP_TIMEOUT = 30.0
TRANSPORT_DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}
