from flask import jsonify, current_app
from flask_login import current_user

from . import admin_bp
from design_gallery.api.utils.payload import get_payload
from design_gallery.auth import admin_required
from design_gallery.extensions import db
from design_gallery.models import Category, Design, Image
from design_gallery.services import designs as design_service


@admin_bp.get("/")
@admin_required
def dashboard():
    return jsonify({
        "design_count": Design.query.count(),
        "category_count": Category.query.filter(Category.parent_id.is_(None)).count(),
        "subcategory_count": Category.query.filter(Category.parent_id.isnot(None)).count(),
        "image_count": Image.query.count(),
        "user": current_user.email,
    }), 200


@admin_bp.get("/designs")
@admin_required
def list_designs():
    items = Design.query.order_by(Design.created_at.desc(), Design.id.desc()).all()
    return jsonify([d.to_dict(with_categories=True, include_link=True) for d in items]), 200


@admin_bp.post("/designs")
@admin_required
def create_design():
    d = design_service.create_design(get_payload())
    return jsonify(d.to_dict(with_categories=True, include_link=True)), 201


@admin_bp.get("/designs/<int:design_id>")
@admin_required
def get_design(design_id: int):
    d = db.session.get(Design, design_id)
    if not d:
        return jsonify({"error": "Design not found"}), 404
    return jsonify(d.to_dict(with_categories=True, include_link=True)), 200


@admin_bp.put("/designs/<int:design_id>")
@admin_required
def update_design(design_id: int):
    d = db.session.get(Design, design_id)
    if not d:
        return jsonify({"error": "Design not found"}), 404
    d = design_service.update_design(d, get_payload())
    return jsonify(d.to_dict(with_categories=True, include_link=True)), 200


@admin_bp.delete("/designs/<int:design_id>")
@admin_required
def delete_design(design_id: int):
    d = db.session.get(Design, design_id)
    if not d:
        return jsonify({"error": "Design not found"}), 404
    db.session.delete(d)
    db.session.commit()
    current_app.logger.info("Design deleted id=%s", design_id)
    return jsonify({"ok": True}), 200


@admin_bp.post("/designs/<int:design_id>/images")
@admin_required
def add_image(design_id: int):
    d = db.session.get(Design, design_id)
    if not d:
        return jsonify({"error": "Design not found"}), 404
    image = design_service.add_image(d, get_payload())
    return jsonify(image.to_dict()), 201


@admin_bp.delete("/images/<int:image_id>")
@admin_required
def delete_image(image_id: int):
    image = db.session.get(Image, image_id)
    if not image:
        return jsonify({"error": "Image not found"}), 404
    db.session.delete(image)
    db.session.commit()
    return jsonify({"ok": True}), 200
