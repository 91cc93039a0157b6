# design_gallery/services/download_gate.py
"""
Gated download flow.

Every click on "download" opens an interstitial with a native banner and a
countdown. Every other click (1st, 3rd, 5th ... in a visitor session) also
triggers the popunder script. The click counter lives in the signed session
cookie, so it survives page reloads and is shared by all designs; it resets
only when the visitor's session does.
"""
from __future__ import annotations

import time
from math import ceil

from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from design_gallery.errors import ApiError, ValidationError

SESSION_KEY = "download_clicks"
NATIVE_BANNER_SCRIPT_ID = "native-banner-script"
POPUNDER_SCRIPT_ID = "popunder-script-active"


class GateNotReady(ApiError):
    status_code = 425


def _now() -> float:
    return time.time()


def register_click(session) -> bool:
    """Count one download click; True when this click also fires the popunder."""
    clicks = int(session.get(SESSION_KEY, 0) or 0) + 1
    session[SESSION_KEY] = clicks
    return clicks % 2 == 1


def remaining_seconds(opened_at: float, now: float, wait_seconds: int) -> int:
    elapsed = max(0.0, now - opened_at)
    return max(0, ceil(wait_seconds - elapsed))


def _serializer() -> URLSafeTimedSerializer:
    cfg = current_app.config
    return URLSafeTimedSerializer(
        secret_key=cfg["SECRET_KEY"], salt=cfg.get("DOWNLOAD_GATE_SALT", "design-gallery-download")
    )


def _scripts(popunder: bool) -> list[dict]:
    cfg = current_app.config
    scripts = [{
        "id": NATIVE_BANNER_SCRIPT_ID,
        "kind": "native_banner",
        "src": cfg.get("NATIVE_BANNER_SRC"),
        "async": True,
        "attrs": {"data-cfasync": "false"},
        "container_id": cfg.get("NATIVE_BANNER_CONTAINER_ID"),
    }]
    if popunder:
        scripts.append({
            "id": POPUNDER_SCRIPT_ID,
            "kind": "popunder",
            "src": cfg.get("POPUNDER_SRC"),
            "type": "text/javascript",
        })
    return scripts


def open_gate(design, session) -> dict:
    if not design.download_link:
        raise ValidationError("This design has no download link")

    popunder = register_click(session)
    wait = int(current_app.config.get("DOWNLOAD_WAIT_SECONDS", 5))
    token = _serializer().dumps({"d": design.id, "t": _now(), "p": popunder})
    return {
        "design_id": design.id,
        "gate_token": token,
        "wait_seconds": wait,
        "popunder": popunder,
        "scripts": _scripts(popunder),
        "popunder_cleanup_ms": current_app.config.get("POPUNDER_CLEANUP_MS", 1000),
    }


def proceed(design, token: str | None) -> dict:
    """Reveal the download link once the countdown for this gate has run out."""
    if not token:
        raise ValidationError("Missing 'gate_token'")
    cfg = current_app.config
    try:
        data = _serializer().loads(token, max_age=cfg.get("DOWNLOAD_GATE_MAX_AGE", 600))
    except SignatureExpired:
        raise ValidationError("Download gate expired, please start again")
    except BadSignature:
        raise ValidationError("Invalid 'gate_token'")

    if not isinstance(data, dict) or data.get("d") != design.id:
        raise ValidationError("Invalid 'gate_token'")

    left = remaining_seconds(float(data.get("t", 0)), _now(), int(cfg.get("DOWNLOAD_WAIT_SECONDS", 5)))
    if left > 0:
        raise GateNotReady(f"Please wait {left} seconds before continuing", remaining_seconds=left)

    if not design.download_link:
        raise ValidationError("This design has no download link")

    remove = [NATIVE_BANNER_SCRIPT_ID]
    if data.get("p"):
        remove.append(POPUNDER_SCRIPT_ID)
    return {
        "design_id": design.id,
        "download_link": design.download_link,
        "remove_scripts": remove,
        "popunder_cleanup_ms": cfg.get("POPUNDER_CLEANUP_MS", 1000),
    }
