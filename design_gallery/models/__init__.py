# design_gallery/models/__init__.py
from .user import User
from .category import Category
from .design import Design, design_categories
from .image import Image

__all__ = [
    "User",
    "Category",
    "Design",
    "design_categories",
    "Image",
]
