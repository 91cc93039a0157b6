from flask import jsonify, current_app

from . import admin_bp
from design_gallery.api.utils.payload import get_payload
from design_gallery.auth import admin_required
from design_gallery.errors import ValidationError
from design_gallery.extensions import db
from design_gallery.models import Category


def _resolve_parent(raw, category: Category | None = None) -> Category | None:
    """Validate a requested parent; only one level of nesting is allowed."""
    if raw in (None, ""):
        return None
    try:
        parent_id = int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Invalid 'parent_id'")

    if category is not None and category.id == parent_id:
        raise ValidationError("A category cannot be its own parent")
    parent = db.session.get(Category, parent_id)
    if not parent:
        raise ValidationError("Parent category not found")
    if parent.is_subcategory:
        raise ValidationError("Subcategories cannot have subcategories")
    if category is not None and category.children:
        raise ValidationError("A category with subcategories cannot become a subcategory")
    return parent


@admin_bp.post("/categories")
@admin_required
def create_category():
    data = get_payload()
    name = (data.get("name") or "").strip()
    if not name:
        return jsonify({"error": "Missing 'name'"}), 400

    parent = _resolve_parent(data.get("parent_id"))
    c = Category(name=name, parent=parent)
    db.session.add(c)
    db.session.commit()
    current_app.logger.info("Category created id=%s parent=%s", c.id, c.parent_id)
    return jsonify(c.to_dict()), 201


@admin_bp.put("/categories/<int:category_id>")
@admin_required
def update_category(category_id: int):
    c = db.session.get(Category, category_id)
    if not c:
        return jsonify({"error": "Category not found"}), 404
    data = get_payload()

    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            return jsonify({"error": "Invalid 'name'"}), 400
        c.name = name

    if "parent_id" in data:
        c.parent = _resolve_parent(data.get("parent_id"), category=c)

    db.session.commit()
    return jsonify(c.to_dict()), 200


@admin_bp.delete("/categories/<int:category_id>")
@admin_required
def delete_category(category_id: int):
    c = db.session.get(Category, category_id)
    if not c:
        return jsonify({"error": "Category not found"}), 404

    # subcategories and design links go in the same transaction
    removed = [c.id] + [s.id for s in c.children]
    try:
        db.session.delete(c)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info("Category deleted ids=%s", removed)
    return jsonify({"ok": True, "deleted": removed}), 200
