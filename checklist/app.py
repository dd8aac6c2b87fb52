import logging
import os

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS


def create_app(config_overrides=None, store=None):
    # Client bundle is served by the routes below, not Flask's static view
    app = Flask(__name__, static_folder=None)
    app.config.from_object("checklist.config.Config")
    if config_overrides:
        app.config.update(config_overrides)
    app.json.sort_keys = app.config["JSON_SORT_KEYS"]

    # Core extensions
    origins = app.config["CORS_ORIGINS"]
    CORS(app, resources={r"/api/*": {"origins": origins}}, send_wildcard=origins == "*")

    # Task store: file-backed from config unless one is injected
    from checklist.utils.store import init_app as init_store

    init_store(app, store)
    if app.config.get("SERIALIZE_STORE"):
        app.logger.info("Store operations are serialized through a single lock")

    # Register blueprints
    from checklist.routes.task_routes import tasks_bp

    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")

    static_folder = app.config["STATIC_FOLDER"]
    if not os.path.isdir(static_folder):
        app.logger.warning("Static folder %s does not exist; client bundle will not be served.", static_folder)

    # Serve client bundle
    @app.get("/")
    def index():
        if os.path.exists(os.path.join(static_folder, "index.html")):
            return send_from_directory(static_folder, "index.html")
        return jsonify(error="Not Found"), 404

    @app.get("/<path:path>")
    def serve_static(path):
        if os.path.isfile(os.path.join(static_folder, path)):
            return send_from_directory(static_folder, path)
        return jsonify(error="Not Found"), 404

    @app.get("/api/health")
    def health():
        return jsonify(status="ok", service="Checklist API"), 200

    @app.errorhandler(404)
    def not_found(_):
        return jsonify(error="Not Found"), 404

    @app.errorhandler(405)
    def method_not_allowed(_):
        return jsonify(error="Method Not Allowed"), 405

    @app.errorhandler(500)
    def server_error(_):
        return jsonify(error="Internal Server Error"), 500

    return app


if __name__ == "__main__":
    # Direct run support: python -m checklist.app
    logging.basicConfig(level=logging.INFO)
    app = create_app()
    app.logger.info("Checklist app running at http://%s:%s", app.config["HOST"], app.config["PORT"])
    app.run(
        host=app.config["HOST"],
        port=app.config["PORT"],
        debug=app.config["DEBUG"],
    )
