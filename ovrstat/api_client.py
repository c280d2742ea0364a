from __future__ import annotations

import json
import logging
import time
from http.client import HTTPException
from typing import Any, List, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from ovrstat.errors import UpstreamUnavailableError
from ovrstat.models import AccountCandidate

logger = logging.getLogger(__name__)


class BlizzardAPIClient:
    """Plain HTTP access to the career pages and the account search endpoint."""

    SEARCH_URL = "https://overwatch.blizzard.com/en-us/search/account-by-name"
    HEADERS = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        "Accept-Language": "en-US,en;q=0.9",
    }

    def __init__(
        self,
        timeout_seconds: float = 20,
        retry_sleep_seconds: float = 10.0,
        search_url: Optional[str] = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.retry_sleep_seconds = retry_sleep_seconds
        self.search_url = (search_url or self.SEARCH_URL).rstrip("/")

    def _get(self, url: str, accept: str, retry_429: bool = True, keep_404: bool = False) -> bytes:
        headers = dict(self.HEADERS)
        headers["Accept"] = accept
        req = Request(url, headers=headers, method="GET")
        try:
            with urlopen(req, timeout=self.timeout_seconds) as resp:
                return resp.read()
        except HTTPError as exc:
            if exc.code == 429 and retry_429:
                logger.warning("Rate limited on %s, retrying once in %ss", url, self.retry_sleep_seconds)
                time.sleep(self.retry_sleep_seconds)
                return self._get(url, accept, retry_429=False, keep_404=keep_404)
            if exc.code == 404 and keep_404:
                # career pages render their own not-found document
                return exc.read() or b""
            raise UpstreamUnavailableError(f"GET {url} returned HTTP {exc.code}") from exc
        except (URLError, OSError, HTTPException) as exc:
            raise UpstreamUnavailableError(f"GET {url} failed: {exc}") from exc

    def fetch_document(self, url: str) -> str:
        """Fetch an HTML page and return its decoded text."""
        body = self._get(url, accept="text/html,application/xhtml+xml", keep_404=True)
        return body.decode("utf-8", errors="replace")

    def _get_json(self, url: str) -> Any:
        body = self._get(url, accept="application/json, text/plain, */*")
        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise UpstreamUnavailableError(f"GET {url} returned invalid JSON") from exc

    def search_accounts(self, tag: str) -> List[AccountCandidate]:
        """Look up accounts by BattleTag; an unknown tag gives an empty list."""
        url = f"{self.search_url}/{quote(tag, safe='')}/"
        payload = self._get_json(url)
        if not isinstance(payload, list):
            raise UpstreamUnavailableError(f"Account search for '{tag}' did not return a list")
        return [AccountCandidate.from_payload(item) for item in payload if isinstance(item, dict)]
