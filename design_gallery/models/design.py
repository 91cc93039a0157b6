# design_gallery/models/design.py
from datetime import datetime

from design_gallery.extensions import db


# Pure link table, no lifecycle of its own
design_categories = db.Table(
    "design_categories",
    db.Column(
        "design_id",
        db.Integer,
        db.ForeignKey("designs.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "category_id",
        db.Integer,
        db.ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Design(db.Model):
    __tablename__ = "designs"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    cover_image_url = db.Column(db.String(1024), nullable=True)
    download_link = db.Column(db.String(1024), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    images = db.relationship(
        "Image",
        back_populates="design",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="Image.display_order",
    )
    categories = db.relationship(
        "Category",
        secondary=design_categories,
        back_populates="designs",
        lazy=True,
        order_by="Category.name",
    )

    @property
    def category_ids(self) -> list[int]:
        return sorted(c.id for c in self.categories)

    @property
    def primary_image_url(self) -> str | None:
        """Cover image first, then the first attached image."""
        if self.cover_image_url:
            return self.cover_image_url
        if self.images:
            return self.images[0].url
        return None

    def to_dict(self, with_categories: bool = False, include_link: bool = False) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "cover_image_url": self.cover_image_url,
            "primary_image_url": self.primary_image_url,
            "has_download": bool(self.download_link),
            "category_ids": self.category_ids,
            "images": [img.to_dict() for img in self.images],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_link:
            # public views never carry the link, it is revealed by the download gate
            data["download_link"] = self.download_link
        if with_categories:
            data["categories"] = [c.to_dict() for c in self.categories]
        return data

    def __repr__(self) -> str:
        return f"<Design {self.title}>"
