from flask import request

from design_gallery.errors import ValidationError


def get_payload() -> dict:
    """JSON object body, falling back to form fields."""
    data = request.get_json(silent=True)
    if data is not None and not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data or request.form or {}
