"""Google Ads connector (SDK client, GAQL, auth). Row adapters live in src/backend/adapters/google_ads."""

from .config import GoogleAdsConfig, get_google_ads_config

__all__ = ["GoogleAdsConfig", "get_google_ads_config"]
