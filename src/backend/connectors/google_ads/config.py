from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .token_store import load_tokens, token_store_path


load_dotenv()


@dataclass(frozen=True)
class GoogleAdsConfig:
    developer_token: str
    client_id: str
    client_secret: str
    refresh_token: str
    customer_id: str
    login_customer_id: str = ""

    def sdk_settings(self) -> dict[str, object]:
        settings: dict[str, object] = {
            "developer_token": self.developer_token,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": self.refresh_token,
            "use_proto_plus": True,
        }
        if self.login_customer_id:
            settings["login_customer_id"] = self.login_customer_id
        return settings


def get_google_ads_config() -> GoogleAdsConfig:
    """
    Load Google Ads connector configuration from environment variables.

    Reads GOOGLE_ADS_DEVELOPER_TOKEN, GOOGLE_ADS_CLIENT_ID, GOOGLE_ADS_CLIENT_SECRET,
    GOOGLE_ADS_REFRESH_TOKEN, GOOGLE_ADS_CUSTOMER_ID and the optional GOOGLE_ADS_LOGIN_CUSTOMER_ID.
    A refresh token saved by the OAuth callback takes precedence over the environment.
    """
    stored = load_tokens(token_store_path())

    return GoogleAdsConfig(
        developer_token=_require_env("GOOGLE_ADS_DEVELOPER_TOKEN"),
        client_id=_require_env("GOOGLE_ADS_CLIENT_ID"),
        client_secret=_require_env("GOOGLE_ADS_CLIENT_SECRET"),
        refresh_token=_require_env("GOOGLE_ADS_REFRESH_TOKEN", stored),
        customer_id=normalize_customer_id(_require_env("GOOGLE_ADS_CUSTOMER_ID")),
        login_customer_id=normalize_customer_id(os.getenv("GOOGLE_ADS_LOGIN_CUSTOMER_ID", "")),
    )


def normalize_customer_id(value: str) -> str:
    digits = "".join(ch for ch in (value or "") if ch.isdigit())
    if digits and len(digits) != 10:
        raise ValueError(f"Google Ads customer id must have 10 digits, got '{value}'.")
    return digits


def _require_env(name: str, stored: dict[str, str] | None = None) -> str:
    if stored and name in stored and stored[name]:
        return stored[name]
    value = os.getenv(name, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value
