# design_gallery/extensions.py
from __future__ import annotations

from flask import jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_cors import CORS

# Keep extension instances in one place to avoid circular imports
db = SQLAlchemy()
login_manager = LoginManager()
bcrypt = Bcrypt()
migrate = Migrate()
cors = CORS()


@login_manager.user_loader
def load_user(user_id):
    # Lazy import to avoid circular dependency when loading the model
    from design_gallery.models.user import User
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


@login_manager.request_loader
def load_user_from_request(request):
    """Resolve `Authorization: Bearer <token>` to a user (API clients without a session)."""
    from design_gallery.auth.tokens import user_from_auth_header
    return user_from_auth_header(request.headers.get("Authorization"))


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"error": "Authentication required"}), 401
