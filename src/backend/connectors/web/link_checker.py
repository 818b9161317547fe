from __future__ import annotations

import logging
from dataclasses import dataclass
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.parse import urlsplit
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

# Returned when no HTTP response was received at all.
NO_RESPONSE = 0

USER_AGENT = "Mozilla/5.0 (compatible; GrantsComplianceAgent/1.0)"

ALLOWED_SCHEMES = ("http", "https")


def fetch_status(url: str, *, timeout_seconds: float = 30) -> int:
    """
    Fetch `url` once and return its HTTP status code.

    HTTP errors come back as their status code and transport failures as
    NO_RESPONSE; nothing is raised and nothing is retried. Redirects are followed.
    Only http and https URLs are requested; anything else is NO_RESPONSE.
    """
    try:
        if urlsplit(url).scheme.lower() not in ALLOWED_SCHEMES:
            logger.warning("Link check %s skipped: not an http(s) URL", url)
            return NO_RESPONSE
        req = Request(url, method="GET", headers={"User-Agent": USER_AGENT})
        with urlopen(req, timeout=timeout_seconds) as resp:
            if resp.status is None:
                return NO_RESPONSE
            return int(resp.status)
    except HTTPError as exc:
        logger.warning("Link check %s returned HTTP %s", url, exc.code)
        return int(exc.code)
    except (URLError, HTTPException, OSError, ValueError) as exc:
        logger.warning("Link check %s failed: %s", url, exc)
        return NO_RESPONSE


@dataclass(frozen=True)
class UrlLinkTransport:
    timeout_seconds: float = 30

    def fetch_status(self, url: str) -> int:
        return fetch_status(url, timeout_seconds=self.timeout_seconds)
