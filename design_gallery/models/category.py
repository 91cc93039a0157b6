from datetime import datetime

from design_gallery.extensions import db


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    # one level of nesting: parents have parent_id=None, children point at a parent
    parent_id = db.Column(
        db.Integer, db.ForeignKey("categories.id", ondelete="CASCADE"), nullable=True, index=True
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    parent = db.relationship("Category", remote_side=[id], back_populates="children")
    children = db.relationship(
        "Category",
        back_populates="parent",
        # detaching a child keeps it as a top-level category
        cascade="all, delete",
        order_by="Category.name",
    )
    designs = db.relationship(
        "Design",
        secondary="design_categories",
        back_populates="categories",
        lazy=True,
    )

    @property
    def is_subcategory(self) -> bool:
        return self.parent_id is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "parent_id": self.parent_id,
        }

    def __repr__(self):
        return f"<Category {self.name}>"
