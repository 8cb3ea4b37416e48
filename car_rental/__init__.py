import logging
import os
import uuid

from flask import Flask, jsonify, render_template, request

from .config import Config
from .controllers.account import bp as account_bp
from .controllers.dashboards import bp as dashboards_bp
from .controllers.home import bp as home_bp
from .controllers.profile import bp as profile_bp
from .models.store import db, init_db
from .utils.filters import fmt_local, fmt_money
from .utils.session import current_identity, enforce_idle_timeout

logger = logging.getLogger(__name__)


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def _wants_json() -> bool:
    return request.is_json or request.accept_mimetypes.best == "application/json"


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(e):
        if _wants_json():
            return jsonify(success=False, message="Not found"), 404
        return render_template("home/error.html", request_id=uuid.uuid4().hex, message="Page not found"), 404

    @app.errorhandler(413)
    def too_large(e):
        return jsonify(success=False, message="File is too large"), 413

    @app.errorhandler(500)
    def server_error(e):
        request_id = uuid.uuid4().hex
        logger.error("Unhandled error (request %s): %s", request_id, getattr(e, "original_exception", e))
        db.session.rollback()
        if _wants_json():
            return jsonify(success=False, message="An unexpected error occurred"), 500
        return render_template("home/error.html", request_id=request_id), 500


def create_app(config_object=Config, **overrides):
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.from_object(config_object)
    app.config.update(overrides)
    configure_logging(app)

    db.init_app(app)
    app.before_request(enforce_idle_timeout)

    app.register_blueprint(account_bp)
    app.register_blueprint(home_bp)
    app.register_blueprint(dashboards_bp)
    app.register_blueprint(profile_bp)
    register_error_handlers(app)

    app.jinja_env.filters["fmt_local"] = fmt_local
    app.jinja_env.filters["money"] = fmt_money
    app.context_processor(lambda: {"current_user": current_identity()})

    os.makedirs(app.config["UPLOAD_ROOT"], exist_ok=True)
    with app.app_context():
        init_db()

    logger.info("Car rental app ready (db=%s)", app.config["SQLALCHEMY_DATABASE_URI"].split(":", 1)[0])
    return app
