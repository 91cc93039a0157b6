# design_gallery/api/utils/cloudinary.py
"""
Cloudinary helpers: the request signature convention and the image upload
used by the admin cover-image endpoint.
"""
from __future__ import annotations

import hashlib
import io
import logging
import time

import httpx
from flask import current_app
from PIL import Image, UnidentifiedImageError

from design_gallery.errors import ApiError, UploadError, ValidationError

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


class CloudinaryNotConfigured(ApiError):
    status_code = 503


class CloudinaryError(UploadError):
    status_code = 502


def sign_params(params: dict, api_secret: str) -> str:
    """SHA-256 hex of `k1=v1&k2=v2...` (keys sorted) followed by the secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha256((to_sign + api_secret).encode("utf-8")).hexdigest()


def unix_timestamp() -> int:
    return round(time.time())


def optimized_url(secure_url: str, transformation: str) -> str:
    if not transformation:
        return secure_url
    return secure_url.replace("/upload/", f"/upload/{transformation}/", 1)


def _http_client(timeout: float) -> httpx.Client:
    return httpx.Client(timeout=timeout)


def read_image(fs, max_bytes: int) -> bytes:
    """Read an uploaded file and make sure it really is an image within the size limit."""
    if fs is None or not getattr(fs, "filename", None):
        raise ValidationError("Missing 'file'")
    mimetype = (fs.mimetype or "").lower()
    if not mimetype.startswith("image/"):
        raise ValidationError("Please select a valid image file")

    data = fs.read()
    if len(data) > max_bytes:
        raise ValidationError(f"The image must not exceed {max_bytes // (1024 * 1024)}MB")
    if not data:
        raise ValidationError("The image file is empty")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Please select a valid image file")
    return data


def _upload_fields(cfg) -> dict:
    folder = cfg.get("CLOUDINARY_FOLDER") or "designs"
    preset = cfg.get("CLOUDINARY_UPLOAD_PRESET")
    if preset:
        return {"upload_preset": preset, "folder": folder}

    # no preset -> signed upload with the account credentials
    api_key = cfg.get("CLOUDINARY_API_KEY")
    api_secret = cfg.get("CLOUDINARY_API_SECRET")
    if not (api_key and api_secret):
        raise CloudinaryNotConfigured(
            "Cloudinary is not configured (set CLOUDINARY_UPLOAD_PRESET or API key/secret)"
        )
    params = {"folder": folder, "timestamp": str(unix_timestamp())}
    return {**params, "api_key": api_key, "signature": sign_params(params, api_secret)}


def upload_image(fs) -> str:
    """Upload an image file to Cloudinary and return the optimized delivery URL."""
    cfg = current_app.config
    cloud_name = cfg.get("CLOUDINARY_CLOUD_NAME")
    if not cloud_name:
        raise CloudinaryNotConfigured("Cloudinary is not configured (CLOUDINARY_CLOUD_NAME)")
    fields = _upload_fields(cfg)

    data = read_image(fs, cfg.get("UPLOAD_MAX_BYTES", 10 * 1024 * 1024))
    files = {"file": (fs.filename, data, fs.mimetype or "application/octet-stream")}
    url = UPLOAD_URL.format(cloud_name=cloud_name)

    try:
        with _http_client(cfg.get("UPLOAD_TIMEOUT", 30)) as client:
            resp = client.post(url, data=fields, files=files)
    except httpx.HTTPError as e:
        logger.warning("Cloudinary upload request failed: %s", e)
        raise CloudinaryError(f"Error uploading the image: {e}")

    try:
        body = resp.json()
    except ValueError:
        body = {}

    if resp.status_code >= 400:
        err = body.get("error") if isinstance(body, dict) else None
        message = err.get("message") if isinstance(err, dict) else (err if isinstance(err, str) else None)
        logger.warning("Cloudinary upload rejected status=%s message=%s", resp.status_code, message)
        raise CloudinaryError(message or "Error uploading the image")

    secure_url = body.get("secure_url") if isinstance(body, dict) else None
    if not secure_url:
        raise CloudinaryError("Cloudinary response did not include secure_url")

    result = optimized_url(secure_url, cfg.get("CLOUDINARY_TRANSFORMATION") or "")
    logger.info("Cloudinary upload ok public_id=%s", body.get("public_id"))
    return result
