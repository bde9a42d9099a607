import os
from typing import Annotated

from fastapi import Header, HTTPException

# Load once at module import
ADMIN_TOKEN = os.getenv("ADMIN_TOKEN", "")
TRACKER_API_KEY = os.getenv("TRACKER_API_KEY", "")


def require_admin(
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """
    Strict admin-only guard. Requires the X-Admin-Token header to match ADMIN_TOKEN.
    """
    if not ADMIN_TOKEN:
        raise HTTPException(status_code=500, detail="ADMIN_TOKEN not configured on server.")
    if x_admin_token != ADMIN_TOKEN:
        raise HTTPException(status_code=401, detail="Unauthorized.")


def require_client(
    x_api_key: Annotated[str | None, Header(alias="x-api-key")] = None,
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """
    Client/API guard. Accepts either:
      - X-Admin-Token that matches ADMIN_TOKEN (admins always allowed), or
      - X-Api-Key that matches TRACKER_API_KEY.
    """
    if ADMIN_TOKEN and x_admin_token == ADMIN_TOKEN:
        return

    if not TRACKER_API_KEY:
        raise HTTPException(status_code=500, detail="TRACKER_API_KEY not configured on server.")
    if x_api_key != TRACKER_API_KEY:
        raise HTTPException(status_code=401, detail="Unauthorized.")


def current_user(
    x_user_id: Annotated[str | None, Header(alias="x-user-id")] = None,
) -> str:
    """
    Opaque user id forwarded by the upstream auth provider.
    Only used for ownership filters and as hash-key material.
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if len(user_id) > 64:
        raise HTTPException(status_code=400, detail="x-user-id too long (> 64).")
    return user_id
