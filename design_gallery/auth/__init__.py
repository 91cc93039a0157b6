# design_gallery/auth/__init__.py
from functools import wraps

from flask import jsonify
from flask_login import current_user, login_required

from .login_routes import auth_bp

__all__ = ["auth_bp", "admin_required"]


def admin_required(view):
    """login_required plus the is_admin flag."""

    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        if not getattr(current_user, "is_admin", False):
            return jsonify({"error": "Admin access required"}), 403
        return view(*args, **kwargs)

    return wrapper
