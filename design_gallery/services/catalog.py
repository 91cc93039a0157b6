# design_gallery/services/catalog.py
"""
Catalog views computed in memory over the fetched rows: the category tree
with per-node design counts, search/category filters and page slicing.
"""
from __future__ import annotations

from collections import Counter
from math import ceil
from typing import Iterable, Sequence

MAX_PER_PAGE = 100


def _name_key(category) -> str:
    return (category.name or "").casefold()


def count_designs_per_category(designs: Iterable) -> Counter:
    counts: Counter = Counter()
    for design in designs:
        for cid in set(design.category_ids):
            counts[cid] += 1
    return counts


def category_node(category, counts: Counter, subcategories: list[dict] | None = None) -> dict:
    node = category.to_dict()
    node["design_count"] = counts.get(category.id, 0)
    if subcategories is not None:
        node["subcategories"] = subcategories
    return node


def build_category_tree(categories: Sequence, designs: Iterable = ()) -> list[dict]:
    """Reorganize a flat category list into parents with their subcategories.

    Parents (no parent_id) and their children are both sorted by name. A child
    whose parent is not in the list is left out, as is anything nested deeper
    than one level.
    """
    counts = count_designs_per_category(designs)
    parents = sorted((c for c in categories if c.parent_id is None), key=_name_key)
    children_by_parent: dict[int, list] = {}
    for c in categories:
        if c.parent_id is not None:
            children_by_parent.setdefault(c.parent_id, []).append(c)

    tree = []
    for parent in parents:
        subs = sorted(children_by_parent.get(parent.id, []), key=_name_key)
        tree.append(category_node(parent, counts, [category_node(s, counts) for s in subs]))
    return tree


def matches_search(design, query: str) -> bool:
    q = (query or "").strip().casefold()
    if not q:
        return True
    title = (design.title or "").casefold()
    description = (design.description or "").casefold()
    return q in title or q in description


def filter_designs(
    designs: Iterable,
    query: str | None = None,
    category_id: int | None = None,
    subcategory_id: int | None = None,
) -> list:
    """Keep designs matching the search text and every given category id.

    A category filter keeps exactly the designs whose association set
    contains that id.
    """
    result = []
    for design in designs:
        if not matches_search(design, query or ""):
            continue
        ids = set(design.category_ids)
        if category_id is not None and category_id not in ids:
            continue
        if subcategory_id is not None and subcategory_id not in ids:
            continue
        result.append(design)
    return result


def paginate(items: Sequence, page: int | None = 1, per_page: int | None = 20) -> dict:
    per_page = max(1, min(int(per_page or 1), MAX_PER_PAGE))
    total = len(items)
    max_pages = max(1, ceil(total / per_page))
    page = max(int(page or 1), 1)
    if page > max_pages:
        page = max_pages
    start = (page - 1) * per_page
    return {
        "items": list(items[start:start + per_page]),
        "page": page,
        "per_page": per_page,
        "total": total,
        "max_pages": max_pages,
        "has_prev": page > 1,
        "has_next": page < max_pages,
    }
