# design_gallery/create_admin.py
import os

import click
from flask.cli import with_appcontext

from design_gallery.extensions import db


@click.command("create-admin")
@click.option("--email", default=lambda: os.environ.get("ADMIN_EMAIL", "admin@example.com"),
              show_default=True, help="Admin e-mail (login name)")
@click.option("--password", default=lambda: os.environ.get("ADMIN_PASSWORD"),
              help="Password (prompted interactively when not given)")
@click.option("--force", is_flag=True, default=False,
              help="Reset password and admin flag when the account already exists")
@with_appcontext
def create_admin(email: str, password: str | None, force: bool):
    """Create or reset an admin account (password hashed with bcrypt)."""
    from design_gallery.models.user import User

    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise click.BadParameter("a valid e-mail is required", param_hint="--email")

    db.create_all()  # in case of an empty DB

    user = User.query.filter_by(email=email).first()
    if user and not force:
        click.echo(f"User '{email}' already exists. Use --force to reset the password.")
        return

    if not password:
        password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

    if not user:
        user = User(email=email)
        db.session.add(user)

    user.is_admin = True
    user.set_password(password)
    db.session.commit()
    click.echo(f"Admin ready: {email}")
