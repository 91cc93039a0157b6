from __future__ import annotations

from flask import Blueprint, request, jsonify, current_app

from design_gallery.api.utils.cloudinary import sign_params, unix_timestamp
from design_gallery.auth.tokens import user_from_auth_header
from design_gallery.extensions import db

api_sign = Blueprint("api_sign", __name__, url_prefix="/functions/v1")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


class SignError(Exception):
    pass


def _sign_upload() -> dict:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise SignError("No authorization header")

    user = user_from_auth_header(auth_header)
    if user is None:
        raise SignError("User not authenticated")

    cfg = current_app.config
    cloud_name = cfg.get("CLOUDINARY_CLOUD_NAME")
    api_key = cfg.get("CLOUDINARY_API_KEY")
    api_secret = cfg.get("CLOUDINARY_API_SECRET")
    if not (cloud_name and api_key and api_secret):
        raise SignError("Cloudinary credentials not configured")

    timestamp = unix_timestamp()
    folder = cfg.get("CLOUDINARY_FOLDER") or "designs"
    transformation = cfg.get("CLOUDINARY_TRANSFORMATION") or "q_auto,f_webp,w_800"
    params = {"folder": folder, "timestamp": timestamp, "transformation": transformation}

    current_app.logger.info("[SIGN] upload signed for user=%s", user.id)
    return {
        "signature": sign_params(params, api_secret),
        "timestamp": timestamp,
        "cloudName": cloud_name,
        "apiKey": api_key,
        "folder": folder,
        "transformation": transformation,
    }


@api_sign.route("/cloudinary-sign", methods=["OPTIONS", "GET", "POST"], provide_automatic_options=False)
def cloudinary_sign():
    """Hand a logged-in client everything it needs for a signed direct upload."""
    if request.method == "OPTIONS":
        return "ok", 200, CORS_HEADERS

    try:
        payload = _sign_upload()
    except SignError as e:
        current_app.logger.info("[SIGN] rejected: %s", e)
        return jsonify({"error": str(e)}), 401, CORS_HEADERS
    except Exception as e:
        db.session.rollback()
        current_app.logger.warning("[SIGN] failed: %s", e)
        return jsonify({"error": str(e) or "Signing failed"}), 401, CORS_HEADERS
    return jsonify(payload), 200, CORS_HEADERS
