import json

import pytest

from connectors.google_ads.config import get_google_ads_config, normalize_customer_id
from connectors.google_ads.token_store import load_tokens, save_tokens


REQUIRED = {
    "GOOGLE_ADS_DEVELOPER_TOKEN": "dev",
    "GOOGLE_ADS_CLIENT_ID": "cid",
    "GOOGLE_ADS_CLIENT_SECRET": "secret",
    "GOOGLE_ADS_REFRESH_TOKEN": "env-refresh",
    "GOOGLE_ADS_CUSTOMER_ID": "123-456-7890",
}


@pytest.fixture
def google_ads_env(monkeypatch, tmp_path):
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("GOOGLE_ADS_LOGIN_CUSTOMER_ID", raising=False)
    store = tmp_path / "tokens.json"
    monkeypatch.setenv("GOOGLE_ADS_TOKEN_STORE_PATH", str(store))
    return store


def test_config_from_env_normalizes_customer_id(google_ads_env):
    cfg = get_google_ads_config()
    assert cfg.customer_id == "1234567890"
    assert cfg.refresh_token == "env-refresh"
    assert "login_customer_id" not in cfg.sdk_settings()


def test_stored_refresh_token_wins(google_ads_env):
    save_tokens(str(google_ads_env), refresh_token="stored-refresh")
    assert get_google_ads_config().refresh_token == "stored-refresh"
    assert json.loads(google_ads_env.read_text())["GOOGLE_ADS_REFRESH_TOKEN"] == "stored-refresh"


def test_missing_variable_is_named(google_ads_env, monkeypatch):
    monkeypatch.delenv("GOOGLE_ADS_DEVELOPER_TOKEN")
    with pytest.raises(ValueError, match="GOOGLE_ADS_DEVELOPER_TOKEN"):
        get_google_ads_config()


def test_normalize_customer_id():
    assert normalize_customer_id("123-456-7890") == "1234567890"
    assert normalize_customer_id("") == ""
    with pytest.raises(ValueError):
        normalize_customer_id("12345")


def test_load_tokens_missing_file(tmp_path):
    assert load_tokens(str(tmp_path / "absent.json")) is None
