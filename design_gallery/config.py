# design_gallery/config.py
import os
from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(BASE_DIR, ".env"))

INSTANCE_DIR = os.path.join(BASE_DIR, "instance")


def _env(key: str, default=None):
    v = os.getenv(key)
    return v if v not in (None, "", "None") else default


def _env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v in (None, "", "None"):
        return default
    return str(v).strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _env_int(key: str, default: int) -> int:
    try:
        return int(_env(key, default))
    except (TypeError, ValueError):
        return default


def _env_list(key: str, default: str = "") -> list[str]:
    raw = _env(key, default) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]


def _resolve_db_uri(db_url: str | None) -> str:
    if not db_url:
        os.makedirs(INSTANCE_DIR, exist_ok=True)
        db_path = os.path.join(INSTANCE_DIR, "gallery.db")
        return "sqlite:///" + db_path.replace("\\", "/")

    # Hosted Postgres providers still hand out the old scheme
    if db_url.startswith("postgres://"):
        return db_url.replace("postgres://", "postgresql://", 1)

    if db_url.startswith("sqlite:///") and db_url != "sqlite:///:memory:":
        raw_path = db_url.replace("sqlite:///", "", 1)
        if not os.path.isabs(raw_path):
            raw_path = os.path.join(BASE_DIR, raw_path)
        db_path = os.path.normpath(raw_path)
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        return "sqlite:///" + db_path.replace("\\", "/")

    return db_url


class Config:
    SECRET_KEY = _env("SECRET_KEY", "dev-please-change-me")

    SQLALCHEMY_DATABASE_URI = _resolve_db_uri(_env("DATABASE_URL"))
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_AS_ASCII = False

    # session cookie carries the login and the download click counter
    SESSION_COOKIE_SECURE = _env_bool("SESSION_COOKIE_SECURE", False)
    SESSION_COOKIE_SAMESITE = _env("SESSION_COOKIE_SAMESITE", "Lax")

    # Bearer tokens handed out by /api/auth/login
    AUTH_TOKEN_SALT = _env("AUTH_TOKEN_SALT", "design-gallery-auth")
    AUTH_TOKEN_MAX_AGE = _env_int("AUTH_TOKEN_MAX_AGE", 3600)

    # Cloudinary
    CLOUDINARY_CLOUD_NAME = _env("CLOUDINARY_CLOUD_NAME")
    CLOUDINARY_API_KEY = _env("CLOUDINARY_API_KEY")
    CLOUDINARY_API_SECRET = _env("CLOUDINARY_API_SECRET")
    CLOUDINARY_UPLOAD_PRESET = _env("CLOUDINARY_UPLOAD_PRESET")
    CLOUDINARY_FOLDER = _env("CLOUDINARY_FOLDER", "designs")
    CLOUDINARY_TRANSFORMATION = _env("CLOUDINARY_TRANSFORMATION", "q_auto,f_webp,w_800")
    UPLOAD_MAX_BYTES = _env_int("UPLOAD_MAX_BYTES", 10 * 1024 * 1024)
    UPLOAD_TIMEOUT = _env_int("UPLOAD_TIMEOUT", 30)
    MAX_CONTENT_LENGTH = UPLOAD_MAX_BYTES + 1024 * 1024

    # Download gate
    DOWNLOAD_WAIT_SECONDS = _env_int("DOWNLOAD_WAIT_SECONDS", 5)
    DOWNLOAD_GATE_MAX_AGE = _env_int("DOWNLOAD_GATE_MAX_AGE", 600)
    DOWNLOAD_GATE_SALT = _env("DOWNLOAD_GATE_SALT", "design-gallery-download")
    NATIVE_BANNER_SRC = _env(
        "NATIVE_BANNER_SRC",
        "//pl27790913.revenuecpmgate.com/81cb0cb805a777612ec57f2d571fda99/invoke.js",
    )
    NATIVE_BANNER_CONTAINER_ID = _env(
        "NATIVE_BANNER_CONTAINER_ID", "container-81cb0cb805a777612ec57f2d571fda99"
    )
    POPUNDER_SRC = _env(
        "POPUNDER_SRC",
        "//pl27790861.revenuecpmgate.com/b7/28/1d/b7281d1ec569051b2883dffa7f970b09.js",
    )
    POPUNDER_CLEANUP_MS = _env_int("POPUNDER_CLEANUP_MS", 1000)

    CATALOG_PAGE_SIZE = _env_int("CATALOG_PAGE_SIZE", 20)

    CORS_ORIGINS = _env_list(
        "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173,http://localhost:8080"
    )
