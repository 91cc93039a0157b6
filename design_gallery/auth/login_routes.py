# design_gallery/auth/login_routes.py
from flask import Blueprint, jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user

from design_gallery.api.utils.payload import get_payload
from design_gallery.auth.tokens import issue_token
from design_gallery.extensions import db
from design_gallery.models.user import User

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

MIN_PASSWORD_LENGTH = 6


def _credentials() -> tuple[str, str]:
    data = get_payload()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    return email, password


@auth_bp.post("/signup")
def signup():
    email, password = _credentials()
    if not email or "@" not in email:
        return jsonify({"error": "Invalid 'email'"}), 400
    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({"error": f"Password must have at least {MIN_PASSWORD_LENGTH} characters"}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({"error": "An account with this email already exists"}), 409

    user = User(email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info("[AUTH] signup email=%s", email)
    return jsonify(user.to_dict()), 201


@auth_bp.post("/login")
def login():
    """
    Check the credentials, start a session and hand out a bearer token for
    API clients (the signing endpoint only accepts the token).
    """
    email, password = _credentials()
    user = User.query.filter_by(email=email).first() if email else None

    if not user or not user.check_password(password):
        current_app.logger.info("[AUTH] login failed email=%s", email)
        return jsonify({"error": "Invalid login credentials"}), 401

    login_user(user)
    current_app.logger.info("[AUTH] login ok user=%s", user.id)
    return jsonify({
        "access_token": issue_token(user.id),
        "token_type": "bearer",
        "expires_in": current_app.config.get("AUTH_TOKEN_MAX_AGE", 3600),
        "user": user.to_dict(),
    }), 200


@auth_bp.post("/logout")
def logout():
    logout_user()
    return jsonify({"ok": True}), 200


@auth_bp.get("/me")
@login_required
def me():
    return jsonify(current_user.to_dict()), 200
