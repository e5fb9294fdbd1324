import logging
import os

from flask import Flask, jsonify, request
from flask_caching import Cache
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

from config import config

logger = logging.getLogger(__name__)

db = SQLAlchemy()
cache = Cache()
migrate = Migrate()


def get_rate_limit_key():
    """
    Rate limit per member when the identity gateway forwarded one,
    otherwise per client address (honouring X-Forwarded-For).
    """
    from flask import current_app

    member_id = request.headers.get(current_app.config["MEMBER_ID_HEADER"])
    if member_id:
        return f"member:{member_id}"
    if request.headers.get("X-Forwarded-For"):
        return request.headers.get("X-Forwarded-For").split(",")[0].strip()
    return get_remote_address()


limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=["10000 per day", "1000 per hour"],
)


def create_app(config_name=None):
    app = Flask(__name__)

    # Determine configuration
    if config_name is None:
        config_name = os.environ.get("FLASK_CONFIG", "default")

    app.config.from_object(config[config_name]())

    # Initialize extensions
    db.init_app(app)
    cache.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    from firstgoal.routes.api import bp as api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    register_error_handlers(app)

    from firstgoal.utils.logging_config import setup_logging

    setup_logging(app)

    show_config_warnings(app, config_name)

    with app.app_context():
        db.create_all()

    return app


def show_config_warnings(app, config_name):
    """Log configuration warnings and status"""
    import warnings

    app.logger.info(f"First Goal starting with '{config_name}' configuration")

    if config_name == "production" and app.config.get("DEBUG"):
        warnings.warn("DEBUG mode is enabled in production!", UserWarning)

    db_url = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if "sqlite" in db_url:
        app.logger.info(
            "Using SQLite database (%s)", "in-memory" if "memory" in db_url else "file"
        )
    elif "postgresql" in db_url:
        app.logger.info("Using PostgreSQL database")
    else:
        app.logger.info(
            f"Using database: {db_url.split('://')[0] if '://' in db_url else 'Unknown'}"
        )


def register_error_handlers(app):
    """Register global error handlers; every response from this app is JSON"""
    from firstgoal.scoring import InvalidResult, ValidationRejected
    from firstgoal.services import AuthorizationDenied, PicksStillOpen

    @app.after_request
    def after_request(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if not app.config.get("DEBUG"):
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response

    @app.errorhandler(ValidationRejected)
    def handle_validation_rejected(error):
        return jsonify({"error": error.reason}), 422

    @app.errorhandler(InvalidResult)
    def handle_invalid_result(error):
        app.logger.warning(f"Invalid result - Path: {request.path}: {error}")
        return jsonify({"error": str(error)}), 409

    @app.errorhandler(PicksStillOpen)
    def handle_picks_still_open(error):
        return jsonify({"error": str(error)}), 409

    @app.errorhandler(AuthorizationDenied)
    def handle_authorization_denied(error):
        app.logger.warning(f"Authorization denied - Path: {request.path}: {error}")
        return jsonify({"error": str(error)}), 403

    @app.errorhandler(400)
    def bad_request_error(error):
        app.logger.warning(
            f"400 Bad Request: {str(error)} - Path: {request.path} - Method: {request.method}"
        )
        return jsonify({"error": getattr(error, "description", "Bad request")}), 400

    @app.errorhandler(401)
    def unauthorized_error(error):
        return jsonify({"error": "Caller identity required"}), 401

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({"error": "Resource not found"}), 404

    @app.errorhandler(429)
    def too_many_requests_error(error):
        return jsonify({"error": "Too many requests"}), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({"error": "Internal server error"}), 500


from firstgoal import models  # noqa: F401, E402 - imported for model registration
