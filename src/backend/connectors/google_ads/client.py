from __future__ import annotations

import logging
from typing import Any, Iterator

from google.ads.googleads.client import GoogleAdsClient
from google.ads.googleads.errors import GoogleAdsException

from .config import GoogleAdsConfig

logger = logging.getLogger(__name__)


class GoogleAdsQueryError(RuntimeError):
    def __init__(self, message: str, query: str, request_id: str | None = None):
        super().__init__(message)
        self.query = query
        self.request_id = request_id


def build_client(config: GoogleAdsConfig) -> GoogleAdsClient:
    return GoogleAdsClient.load_from_dict(config.sdk_settings())


def gaql_search(client: GoogleAdsClient, customer_id: str, query: str) -> Iterator[Any]:
    """
    Run a read-only GAQL query and yield result rows.

    Failures are not retried: any SDK error aborts the audit run.
    """
    logger.debug("GAQL [%s]: %s", customer_id, query)
    service = client.get_service("GoogleAdsService")
    try:
        for row in service.search(customer_id=customer_id, query=query):
            yield row
    except GoogleAdsException as exc:
        messages = "; ".join(err.message for err in exc.failure.errors)
        raise GoogleAdsQueryError(
            f"Google Ads query failed ({exc.error.code().name}): {messages}",
            query,
            exc.request_id,
        ) from exc
