"""
Bing image-of-the-day client module.
Lists the current wallpapers published for one market.
"""

import requests
from http_client import http_get
from config import BING_URL, BING_IMAGE_COUNT


class DiscoveryError(RuntimeError):
    pass


class BingImageSource:
    """Image source backed by https://www.bing.com/HPImageArchive.aspx."""

    def __init__(self, base_url=BING_URL, count=BING_IMAGE_COUNT, timeout=None):
        self.base_url = base_url.rstrip("/")
        self.count = count
        self.timeout = timeout

    def list(self, market: str):
        """
        Return the raw image entries for market, in Bing's order.
        Raises DiscoveryError on transport errors or malformed responses.
        """
        params = {"format": "js", "n": self.count, "mbl": 1, "mkt": market}
        try:
            r = http_get(f"{self.base_url}/HPImageArchive.aspx",
                         params=params, timeout=self.timeout, context=f"market {market}")
            js = r.json()
        except (requests.RequestException, ValueError) as e:
            raise DiscoveryError(f"Failed to list images for {market}: {e}") from e

        if not isinstance(js, dict) or not isinstance(js.get("images"), list):
            raise DiscoveryError(f"Malformed response for {market}: no images list")

        served = ((js.get("market") or {}).get("mkt") or "")
        if served and served.lower() != market.lower():
            print(f"Warning: market mismatch: requested {market}, got {served}")

        images = js["images"]
        if not all(isinstance(img, dict) for img in images):
            raise DiscoveryError(f"Malformed response for {market}: non-object image entry")
        return images
