# design_gallery/app.py
import logging

# Show INFO logs even outside the werkzeug access log
logging.basicConfig(level=logging.INFO)

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from design_gallery.config import Config
from design_gallery.errors import ApiError

# Extensions
from design_gallery.extensions import db, login_manager, bcrypt, migrate, cors

# Blueprints
from design_gallery.admin import admin_bp
from design_gallery.auth import auth_bp
from design_gallery.api.routes.category_routes import api_categories
from design_gallery.api.routes.design_routes import api_designs
from design_gallery.api.routes.download_routes import api_downloads
from design_gallery.api.routes.sign_routes import api_sign
from design_gallery.create_admin import create_admin
from design_gallery import models as _models  # noqa: F401


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e: SQLAlchemyError):
        db.session.rollback()
        app.logger.exception("Database error: %s", e)
        return jsonify({"error": str(getattr(e, "orig", None) or e)}), 500


def create_app(config_object=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)

    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": app.config.get("CORS_ORIGINS") or [],
                "supports_credentials": True,
            }
        },
    )

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(api_categories)
    app.register_blueprint(api_designs)
    app.register_blueprint(api_downloads)
    app.register_blueprint(api_sign)

    _register_error_handlers(app)
    app.cli.add_command(create_admin)

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"}), 200

    return app


# For gunicorn
app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
