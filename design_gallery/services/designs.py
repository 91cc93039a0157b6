# design_gallery/services/designs.py
from __future__ import annotations

import logging
from urllib.parse import urlparse

from sqlalchemy import func

from design_gallery.errors import ValidationError
from design_gallery.extensions import db
from design_gallery.models import Category, Design, Image

logger = logging.getLogger(__name__)


def _clean(value) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _to_int(value, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid '{field}'")


def validate_download_link(value) -> str:
    link = _clean(value)
    if not link:
        raise ValidationError("Missing 'download_link'")
    parsed = urlparse(link)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("Invalid 'download_link' (expected an http(s) URL)")
    return link


def parse_category_ids(data: dict) -> list[int] | None:
    """
    Read the requested category set. Accepts `category_ids` and the older
    `subcategory_ids` key (both are merged). Returns None when neither key
    was sent, so an update leaves the associations alone.
    """
    if "category_ids" not in data and "subcategory_ids" not in data:
        return None
    raw: list = []
    for key in ("category_ids", "subcategory_ids"):
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, (list, tuple)):
            raise ValidationError(f"'{key}' must be a list")
        raw.extend(value)
    ids: list[int] = []
    for item in raw:
        cid = _to_int(item, "category_ids")
        if cid not in ids:
            ids.append(cid)
    return ids


def load_categories(ids: list[int]) -> list[Category]:
    if not ids:
        return []
    found = Category.query.filter(Category.id.in_(ids)).all()
    missing = sorted(set(ids) - {c.id for c in found})
    if missing:
        raise ValidationError(f"Unknown category ids: {missing}")
    return found


def replace_design_categories(design: Design, categories: list[Category]) -> tuple[set[int], set[int]]:
    """
    Apply only the difference between the current and the requested set.
    Nothing is committed here: the caller commits together with the rest of
    the design change, or rolls everything back.
    """
    current = {c.id: c for c in design.categories}
    wanted = {c.id: c for c in categories}
    removed = set(current) - set(wanted)
    added = set(wanted) - set(current)
    for cid in removed:
        design.categories.remove(current[cid])
    for cid in added:
        design.categories.append(wanted[cid])
    return added, removed


def _image_from_payload(item, index: int) -> Image:
    if not isinstance(item, dict):
        raise ValidationError("Each image must be an object")
    url = _clean(item.get("url"))
    if not url:
        raise ValidationError("Image is missing 'url'")
    order = item.get("display_order")
    return Image(
        url=url,
        alt_text=_clean(item.get("alt_text")),
        display_order=index if order is None else _to_int(order, "display_order"),
    )


def create_design(data: dict) -> Design:
    title = _clean(data.get("title"))
    if not title:
        raise ValidationError("Missing 'title'")
    link = validate_download_link(data.get("download_link"))

    category_ids = parse_category_ids(data) or []
    categories = load_categories(category_ids)

    images_in = data.get("images") or []
    if not isinstance(images_in, list):
        raise ValidationError("'images' must be a list")

    design = Design(
        title=title,
        description=_clean(data.get("description")),
        cover_image_url=_clean(data.get("cover_image_url")),
        download_link=link,
    )
    design.categories = categories
    design.images = [_image_from_payload(item, idx) for idx, item in enumerate(images_in)]

    db.session.add(design)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info("Design created id=%s categories=%s images=%s", design.id, category_ids, len(images_in))
    return design


def update_design(design: Design, data: dict) -> Design:
    added: set[int] = set()
    removed: set[int] = set()
    try:
        if "title" in data:
            title = _clean(data.get("title"))
            if not title:
                raise ValidationError("Invalid 'title'")
            design.title = title
        if "description" in data:
            design.description = _clean(data.get("description"))
        if "cover_image_url" in data:
            design.cover_image_url = _clean(data.get("cover_image_url"))
        if "download_link" in data:
            design.download_link = validate_download_link(data.get("download_link"))

        category_ids = parse_category_ids(data)
        if category_ids is not None:
            added, removed = replace_design_categories(design, load_categories(category_ids))

        # one commit for the field update and the link diff
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info("Design updated id=%s added=%s removed=%s", design.id, sorted(added), sorted(removed))
    return design


def next_display_order(design_id: int) -> int:
    max_idx = (
        db.session.query(func.max(Image.display_order))
        .filter(Image.design_id == design_id)
        .scalar()
    )
    return (max_idx + 1) if max_idx is not None else 0


def add_image(design: Design, data: dict) -> Image:
    url = _clean(data.get("url"))
    if not url:
        raise ValidationError("Missing 'url'")
    order = data.get("display_order")
    image = Image(
        design_id=design.id,
        url=url,
        alt_text=_clean(data.get("alt_text")),
        display_order=next_display_order(design.id) if order is None else _to_int(order, "display_order"),
    )
    db.session.add(image)
    db.session.commit()
    return image
