from __future__ import annotations

from flask import Blueprint, request, jsonify
from sqlalchemy.orm import selectinload

from design_gallery.extensions import db
from design_gallery.models import Category, Design
from design_gallery.services.catalog import build_category_tree, count_designs_per_category, category_node

api_categories = Blueprint("api_categories", __name__, url_prefix="/api/categories")


def _truthy(val: str | None) -> bool:
    return (val or "").strip().lower() in ("1", "true", "yes", "on")


@api_categories.get("/")
def list_categories():
    categories = Category.query.order_by(Category.name.asc()).all()
    designs = Design.query.options(selectinload(Design.categories)).all()

    # ?flat=1 keeps the old flat listing (admin selects, FE lookups)
    if _truthy(request.args.get("flat")):
        counts = count_designs_per_category(designs)
        return jsonify([category_node(c, counts) for c in categories]), 200

    return jsonify(build_category_tree(categories, designs)), 200


@api_categories.get("/<int:category_id>")
def get_category(category_id: int):
    c = db.session.get(Category, category_id)
    if not c:
        return jsonify({"error": "Category not found"}), 404

    data = c.to_dict()
    data["subcategories"] = [s.to_dict() for s in c.children]
    data["parent"] = c.parent.to_dict() if c.parent else None
    return jsonify(data), 200
