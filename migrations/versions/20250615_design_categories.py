"""move design/category links into design_categories

Revision ID: 20250615_design_categories
Revises: 20250601_initial_gallery_schema
Create Date: 2025-06-15
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision = "20250615_design_categories"
down_revision = "20250601_initial_gallery_schema"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "design_categories",
        sa.Column(
            "design_id",
            sa.Integer(),
            sa.ForeignKey("designs.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("categories.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    bind = op.get_bind()
    inspector = inspect(bind)
    tables = inspector.get_table_names()
    design_cols = [c["name"] for c in inspector.get_columns("designs")]

    links: set[tuple[int, int]] = set()
    for col in ("category_id", "subcategory_id"):
        if col in design_cols:
            rows = bind.execute(sa.text(f"SELECT id, {col} FROM designs WHERE {col} IS NOT NULL"))
            links.update((row[0], row[1]) for row in rows)
    if "design_subcategories" in tables:
        rows = bind.execute(sa.text("SELECT design_id, subcategory_id FROM design_subcategories"))
        links.update((row[0], row[1]) for row in rows)

    for design_id, category_id in sorted(links):
        bind.execute(
            sa.text("INSERT INTO design_categories (design_id, category_id) VALUES (:d, :c)"),
            {"d": design_id, "c": category_id},
        )

    if "design_subcategories" in tables:
        op.drop_table("design_subcategories")
    # SQLite needs batch mode to drop FK columns
    with op.batch_alter_table("designs", schema=None) as batch_op:
        for col in ("category_id", "subcategory_id"):
            if col in design_cols:
                batch_op.drop_column(col)


def downgrade() -> None:
    with op.batch_alter_table("designs", schema=None) as batch_op:
        batch_op.add_column(sa.Column("category_id", sa.Integer(), nullable=True))
        batch_op.add_column(sa.Column("subcategory_id", sa.Integer(), nullable=True))

    op.create_table(
        "design_subcategories",
        sa.Column("design_id", sa.Integer(), sa.ForeignKey("designs.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("subcategory_id", sa.Integer(), sa.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
    )

    bind = op.get_bind()
    rows = list(bind.execute(sa.text(
        "SELECT dc.design_id, dc.category_id, c.parent_id "
        "FROM design_categories dc JOIN categories c ON c.id = dc.category_id"
    )))
    for design_id, category_id, parent_id in rows:
        if parent_id is None:
            bind.execute(
                sa.text("UPDATE designs SET category_id = :c WHERE id = :d AND category_id IS NULL"),
                {"c": category_id, "d": design_id},
            )
        else:
            bind.execute(
                sa.text("INSERT INTO design_subcategories (design_id, subcategory_id) VALUES (:d, :c)"),
                {"d": design_id, "c": category_id},
            )
            bind.execute(
                sa.text("UPDATE designs SET subcategory_id = :c WHERE id = :d AND subcategory_id IS NULL"),
                {"c": category_id, "d": design_id},
            )

    op.drop_table("design_categories")
