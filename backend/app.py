"""
Flask Application Factory - Partner Hub API

Sample API wired entirely through the request pipeline builder:
- Items (authenticated, validated body/query/params)
- Current user (authenticated)
- External items (proxied upstream service)

Collaborators are injected so tests can swap them out:
    app = create_app(auth_service=StaticAuthenticationService(), item_store=ItemStore())
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from config import Config


logger = logging.getLogger(__name__)


def create_app(auth_service=None, item_store=None, external_items=None):
    from services.auth_service import JwtAuthenticationService
    from services.external_items import ExternalItemsClient
    from services.item_store import ItemStore

    app = Flask(__name__)
    app.config.from_object(Config)

    auth_service = auth_service or JwtAuthenticationService()
    item_store = item_store if item_store is not None else ItemStore()
    external_items = external_items or ExternalItemsClient()

    CORS(app,
         resources={r"/api/*": {"origins": Config.cors_origins()}},
         methods=["GET", "POST", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
         expose_headers=["X-Request-ID"],
         supports_credentials=False)

    # === MIDDLEWARE ===
    from api.middleware import (
        setup_error_handlers,
        setup_request_id_middleware,
        setup_request_logging_middleware,
    )
    setup_request_id_middleware(app)
    setup_request_logging_middleware(app)
    setup_error_handlers(app)

    # === ROUTES ===
    from routes.items import create_items_blueprint
    app.register_blueprint(create_items_blueprint(item_store, auth_service), url_prefix='/api/items')

    from routes.users import create_users_blueprint
    app.register_blueprint(create_users_blueprint(auth_service), url_prefix='/api')

    from routes.external import create_external_blueprint
    app.register_blueprint(create_external_blueprint(external_items), url_prefix='/api/external')

    @app.route("/api/ping", methods=["GET"])
    def ping():
        return jsonify({"status": "ok"})

    return app


def run_app():
    """Run the development server."""
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    Config.validate()

    app = create_app()
    logger.info("Starting Partner Hub API on port 3000")
    app.run(debug=False, host="0.0.0.0", port=3000)


if __name__ == "__main__":
    run_app()
