from __future__ import annotations

from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.orm import selectinload

from design_gallery.errors import ValidationError
from design_gallery.extensions import db
from design_gallery.models import Design
from design_gallery.services.catalog import filter_designs, paginate

api_designs = Blueprint("api_designs", __name__, url_prefix="/api/designs")


def _int_arg(name: str, default: int | None = None) -> int | None:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Invalid '{name}'")


@api_designs.get("/")
def list_designs():
    """
    Public catalog. Search (`q`) matches title or description, category
    filters match the design's category set exactly; newest designs first.
    """
    designs = (
        Design.query.options(selectinload(Design.categories), selectinload(Design.images))
        .order_by(Design.created_at.desc(), Design.id.desc())
        .all()
    )
    matched = filter_designs(
        designs,
        query=request.args.get("q"),
        category_id=_int_arg("category_id"),
        subcategory_id=_int_arg("subcategory_id"),
    )
    page = paginate(
        matched,
        page=_int_arg("page", 1),
        per_page=_int_arg("per_page", current_app.config.get("CATALOG_PAGE_SIZE", 20)),
    )
    page["items"] = [d.to_dict() for d in page["items"]]
    return jsonify(page), 200


@api_designs.get("/<int:design_id>")
def get_design(design_id: int):
    d = db.session.get(Design, design_id)
    if not d:
        return jsonify({"error": "Design not found"}), 404
    return jsonify(d.to_dict(with_categories=True)), 200
