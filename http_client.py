"""
HTTP client for the image source and image downloads.
Every call is bounded by the shared timeout; failures are raised, never retried.
"""

import requests
from config import APP_NAME, APP_VERSION, APP_CONTACT, APP_URL, HTTP_TIMEOUT


def default_headers():
    """Generate request headers with a descriptive user-agent."""
    name = (APP_NAME or "wallpaper-updater").strip()
    ver  = (APP_VERSION or "1.0").strip()
    ua_core = f"{name}/{ver}" if ver else name

    extras = []
    if APP_URL:       # optional
        extras.append(f"+{APP_URL}")
    if APP_CONTACT:   # optional
        extras.append(f"contact: {APP_CONTACT}")

    ua = ua_core if not extras else f"{ua_core} ({'; '.join(extras)})"
    return {"User-Agent": ua}


def http_get(url, *, params=None, headers=None, timeout=None, context=None):
    """
    HTTP GET that only accepts a 200 response.
    context: Optional string to include in error messages (e.g., "market fr-FR")
    """
    if headers is None:
        headers = default_headers()
    r = requests.get(url, params=params, headers=headers,
                     timeout=timeout if timeout is not None else HTTP_TIMEOUT)
    if r.status_code != 200:
        context_str = f" [{context}]" if context else ""
        raise requests.HTTPError(f"GET {url} returned {r.status_code}{context_str}", response=r)
    return r


def fetch_image_bytes(url, timeout=None):
    """Download an image into memory."""
    return http_get(url, timeout=timeout, context="image").content
