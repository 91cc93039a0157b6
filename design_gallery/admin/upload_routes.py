from flask import request, jsonify

from . import admin_bp
from design_gallery.api.utils.cloudinary import upload_image
from design_gallery.auth import admin_required


@admin_bp.post("/uploads")
@admin_required
def upload_cover():
    url = upload_image(request.files.get("file"))
    return jsonify({"url": url}), 201
