from __future__ import annotations

import os
import time
import uuid
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import RedirectResponse

from connectors.google_ads.oauth import GoogleAdsAuthError, build_authorization_url, exchange_code_for_tokens
from connectors.google_ads.token_store import persist_env, save_tokens, token_store_path


router = APIRouter(prefix="/google-ads", tags=["google-ads"])

_STATE_TTL_SECONDS = 600
_STATE_STORE: dict[str, dict[str, Any]] = {}


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise HTTPException(status_code=500, detail=f"Missing required environment variable: {name}")
    return value


@router.get("/oauth/start")
def google_ads_oauth_start():
    client_id = _require_env("GOOGLE_ADS_CLIENT_ID")
    redirect_uri = _require_env("GOOGLE_ADS_REDIRECT_URI")

    state = uuid.uuid4().hex
    _STATE_STORE[state] = {
        "created_at": time.time(),
        "redirect_uri": redirect_uri,
    }
    return RedirectResponse(
        url=build_authorization_url(client_id=client_id, redirect_uri=redirect_uri, state=state)
    )


@router.get("/oauth/callback")
def google_ads_oauth_callback(
    code: str = Query(...),
    state: str = Query(...),
):
    record = _STATE_STORE.pop(state, None)
    if record is None:
        raise HTTPException(status_code=400, detail="Invalid or expired state.")
    if time.time() - record["created_at"] > _STATE_TTL_SECONDS:
        raise HTTPException(status_code=400, detail="State expired.")

    try:
        payload = exchange_code_for_tokens(
            client_id=_require_env("GOOGLE_ADS_CLIENT_ID"),
            client_secret=_require_env("GOOGLE_ADS_CLIENT_SECRET"),
            redirect_uri=record["redirect_uri"],
            code=code,
        )
    except GoogleAdsAuthError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    refresh_token = payload.get("refresh_token")
    if not refresh_token:
        raise HTTPException(status_code=502, detail="OAuth token exchange returned no refresh token.")

    save_tokens(token_store_path(), refresh_token=refresh_token)
    persist_env(refresh_token=refresh_token)

    return {
        "status": "ok",
        "token_store": token_store_path(),
    }
