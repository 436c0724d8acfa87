import logging

from flask import Flask, jsonify

from ..config import StyleOptions, load_style
from .api import bp as api_bp

log = logging.getLogger(__name__)


def create_app(style: StyleOptions | None = None):
    """HTTP adapter for editor integrations.

    The style defaults to options read from ``DOXYGEN_GENERATOR_*``
    environment variables; requests may override individual options.
    """
    app = Flask(__name__)
    app.config["STYLE"] = style if style is not None else load_style()

    app.register_blueprint(api_bp)  # /api/*

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"error": "bad request"}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(e):
        log.exception("Internal server error")
        return jsonify({"error": "internal server error"}), 500

    return app
