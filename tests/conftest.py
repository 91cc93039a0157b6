"""Shared fixtures: an app on in-memory SQLite, an admin account and factories."""

import pytest
from flask import g

from design_gallery.app import create_app
from design_gallery.auth.tokens import issue_token
from design_gallery.config import Config
from design_gallery.extensions import db
from design_gallery.models import Category, Design, Image, User


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    BCRYPT_LOG_ROUNDS = 4

    CLOUDINARY_CLOUD_NAME = "demo-cloud"
    CLOUDINARY_API_KEY = "123456789"
    CLOUDINARY_API_SECRET = "cloud-secret"
    CLOUDINARY_UPLOAD_PRESET = None
    CLOUDINARY_FOLDER = "designs"
    CLOUDINARY_TRANSFORMATION = "q_auto,f_webp,w_800"

    DOWNLOAD_WAIT_SECONDS = 5


@pytest.fixture
def app():
    app = create_app(TestingConfig)

    @app.teardown_request
    def _forget_user(exc):
        # the test app context outlives requests, so drop the user cached on g
        g.pop("_login_user", None)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(email: str, password: str, is_admin: bool) -> User:
    user = User(email=email, is_admin=is_admin)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin_user(app) -> User:
    return _make_user("admin@example.com", "admin-pass", is_admin=True)


@pytest.fixture
def regular_user(app) -> User:
    return _make_user("reader@example.com", "reader-pass", is_admin=False)


@pytest.fixture
def auth_headers(admin_user) -> dict:
    return {"Authorization": f"Bearer {issue_token(admin_user.id)}"}


@pytest.fixture
def user_headers(regular_user) -> dict:
    return {"Authorization": f"Bearer {issue_token(regular_user.id)}"}


@pytest.fixture
def make_category(app):
    def _make(name: str, parent: Category | None = None) -> Category:
        c = Category(name=name, parent=parent)
        db.session.add(c)
        db.session.commit()
        return c

    return _make


@pytest.fixture
def make_design(app):
    def _make(
        title: str = "Floral pattern",
        description: str | None = None,
        download_link: str | None = "https://drive.example.com/file/1",
        categories: list | None = None,
        image_urls: list[str] | None = None,
    ) -> Design:
        d = Design(title=title, description=description, download_link=download_link)
        d.categories = list(categories or [])
        d.images = [Image(url=url, display_order=idx) for idx, url in enumerate(image_urls or [])]
        db.session.add(d)
        db.session.commit()
        return d

    return _make
