# design_gallery/models/image.py
from design_gallery.extensions import db


class Image(db.Model):
    __tablename__ = "images"

    id = db.Column(db.Integer, primary_key=True)
    design_id = db.Column(
        db.Integer, db.ForeignKey("designs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url = db.Column(db.String(1024), nullable=False)
    alt_text = db.Column(db.String(255), nullable=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)

    design = db.relationship("Design", back_populates="images")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "design_id": self.design_id,
            "url": self.url,
            "alt_text": self.alt_text,
            "display_order": self.display_order,
        }

    def __repr__(self) -> str:
        return f"<Image {self.url}>"
