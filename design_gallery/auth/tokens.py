# design_gallery/auth/tokens.py
from __future__ import annotations

from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from design_gallery.extensions import db


class TokenError(Exception):
    pass


def _get_serializer() -> URLSafeTimedSerializer:
    secret = current_app.config.get("SECRET_KEY")
    if not secret:
        raise RuntimeError("SECRET_KEY is not set, cannot issue auth tokens.")
    salt = current_app.config.get("AUTH_TOKEN_SALT", "design-gallery-auth")
    return URLSafeTimedSerializer(secret_key=secret, salt=salt)


def issue_token(user_id: int | str) -> str:
    return _get_serializer().dumps({"uid": str(user_id)})


def load_token(token: str, max_age_seconds: int | None = None) -> str:
    if max_age_seconds is None:
        max_age_seconds = current_app.config.get("AUTH_TOKEN_MAX_AGE", 3600)
    try:
        data = _get_serializer().loads(token, max_age=max_age_seconds)
    except SignatureExpired:
        raise TokenError("Token expired")
    except BadSignature:
        raise TokenError("Invalid token")
    uid = data.get("uid") if isinstance(data, dict) else None
    if not uid:
        raise TokenError("Invalid token")
    return uid


def bearer_token(auth_header: str | None) -> str | None:
    if not auth_header:
        return None
    scheme, _, token = auth_header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def user_from_auth_header(auth_header: str | None):
    """Return the user behind a bearer header, or None."""
    from design_gallery.models.user import User

    token = bearer_token(auth_header)
    if not token:
        return None
    try:
        uid = load_token(token)
    except TokenError:
        return None
    try:
        return db.session.get(User, int(uid))
    except (TypeError, ValueError):
        return None
